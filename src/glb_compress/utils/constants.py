"""Constants and configuration for GLB compression."""

from __future__ import annotations

import os
from typing import TypedDict

# Remediation shown when the compressor cannot be invoked
INSTALL_HINT: str = 'Please install it by running "npm install -g @gltf-transform/cli".'

GLB_EXTENSION: str = ".glb"

# Environment variables overriding the defaults below
ENV_MAX_DEPTH: str = "GLB_COMPRESS_MAX_DEPTH"
ENV_SUFFIX: str = "GLB_COMPRESS_SUFFIX"
ENV_EXECUTABLE: str = "GLB_COMPRESS_GLTF_TRANSFORM"
ENV_TIMEOUT: str = "GLB_COMPRESS_TIMEOUT"


class CompressConfig(TypedDict):
    """Configuration for a compression run."""

    max_depth: int
    intermediate_suffix: str
    executable: str
    timeout: int
    continue_on_error: bool
    verbose: bool


# Default configuration for compression
DEFAULT_CONFIG: CompressConfig = {
    "max_depth": 4,  # Directories below the root that are still scanned
    "intermediate_suffix": "-etc1s",  # Inserted before the extension
    "executable": "gltf-transform",  # Name or path of the gltf-transform CLI
    "timeout": 300,  # Seconds per external process
    "continue_on_error": False,  # False = first failure aborts the batch
    "verbose": False,  # List discovered/selected files
}


def _env_int(name: str) -> int | None:
    """Read an integer environment variable, None if unset or empty."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_config(
    *,
    max_depth: int | None = None,
    intermediate_suffix: str | None = None,
    executable: str | None = None,
    timeout: int | None = None,
    continue_on_error: bool | None = None,
    verbose: bool | None = None,
) -> CompressConfig:
    """
    Build the effective configuration.

    Precedence (lowest to highest): DEFAULT_CONFIG, environment variables,
    explicit keyword arguments. Arguments left as None are ignored.

    Raises:
        ValueError: if an integer environment variable cannot be parsed,
            or the resulting values are out of range.
    """
    config: CompressConfig = {**DEFAULT_CONFIG}

    env_depth = _env_int(ENV_MAX_DEPTH)
    if env_depth is not None:
        config["max_depth"] = env_depth
    env_timeout = _env_int(ENV_TIMEOUT)
    if env_timeout is not None:
        config["timeout"] = env_timeout
    env_suffix = os.environ.get(ENV_SUFFIX)
    if env_suffix:
        config["intermediate_suffix"] = env_suffix
    env_executable = os.environ.get(ENV_EXECUTABLE)
    if env_executable:
        config["executable"] = env_executable

    if max_depth is not None:
        config["max_depth"] = max_depth
    if intermediate_suffix is not None:
        config["intermediate_suffix"] = intermediate_suffix
    if executable is not None:
        config["executable"] = executable
    if timeout is not None:
        config["timeout"] = timeout
    if continue_on_error is not None:
        config["continue_on_error"] = continue_on_error
    if verbose is not None:
        config["verbose"] = verbose

    if config["max_depth"] < 0:
        raise ValueError(f"max_depth must be >= 0, got {config['max_depth']}")
    if config["timeout"] <= 0:
        raise ValueError(f"timeout must be > 0, got {config['timeout']}")
    if not config["intermediate_suffix"]:
        raise ValueError("intermediate_suffix must not be empty")

    return config
