"""
GLB Compressor
==============
Finds .glb files in a folder and compresses them in place with the
gltf-transform CLI.

Pipeline (per file, strictly sequential):
- ETC1S texture compression into <name>-etc1s.glb, original deleted
- Draco geometry compression back to <name>.glb, intermediate deleted

Usage:
    CLI:
        glb-compress                  # scan current folder, pick files
        glb-compress assets --yes     # compress everything under assets/
        glb-compress --max-depth 2 --continue-on-error

    Python:
        from glb_compress import main
        main()
"""

from importlib.metadata import PackageNotFoundError, version

from glb_compress.cli import main

try:
    __version__ = version("glb-compress")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = ["main"]
