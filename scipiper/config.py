"""Configuration loading and management for scipiper."""

from pathlib import Path
from typing import Any

from .core.models.config import SyncOptions
from .core.settings import load_settings

# Documented config keys, as they appear in .scipiper/config.toml
CONFIGURABLE_KEYS = {
    "indicator.ext": {
        "type": str,
        "default": "ind",
        "description": "Final file extension that marks indicator files",
    },
    "build.remake_file": {
        "type": str,
        "default": "remake.yml",
        "description": "Build-graph definition file handed to the build engine",
    },
    "build.engine": {
        "type": str,
        "default": None,
        "description": "Name of the registered build engine to use",
    },
    "build.status_dir": {
        "type": str,
        "default": "build/status",
        "description": "Directory of versionable build status records (commit it)",
    },
    "build.db_path": {
        "type": str,
        "default": ".remake/status.db",
        "description": "SQLite file backing the reference status store",
    },
    "sync.new_only": {
        "type": bool,
        "default": True,
        "description": "Skip importing records older than the binary store entry",
    },
    "sync.mangle_pad": {
        "type": bool,
        "default": True,
        "description": "Keep base64 padding in mangled status record names",
    },
    "hash.algorithm": {
        "type": str,
        "default": "md5",
        "description": "Hash algorithm for indicator files (md5, sha256, sha512, blake3)",
    },
    "logging.level": {
        "type": str,
        "default": "warning",
        "description": "Log level (debug, info, warning, error)",
    },
    "logging.console": {
        "type": bool,
        "default": False,
        "description": "Output debug logs to stderr",
    },
    "logging.file": {
        "type": bool,
        "default": False,
        "description": "Output debug logs to ~/.scipiper/scipiper.log",
    },
}


def _get_nested(d: dict, key: str, default=None):
    """Get a nested key like 'indicator.ext'."""
    for part in key.split("."):
        if isinstance(d, dict) and part in d:
            d = d[part]
        else:
            return default
    return d


def load_config(config_path: Path | None = None, start_dir: str | None = None) -> dict:
    """
    Load configuration from file.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from (if config_path not given)

    Returns:
        Configuration dict with defaults applied
    """
    return load_settings(config_path=config_path, start_dir=start_dir).to_dict()


def config_get(key: str, start_dir: str | None = None):
    """Get a config value by dot-notation key."""
    return _get_nested(load_config(start_dir=start_dir), key)


def get_sync_options(
    config_path: Path | None = None, start_dir: str | None = None, **overrides: Any
) -> SyncOptions:
    """
    Resolve the options for one sync operation.

    Args:
        config_path: Explicit path to config file
        start_dir: Directory to start searching from
        **overrides: Per-call values (ind_ext, remake_file, new_only, ...);
            None means "use the configured value"

    Returns:
        SyncOptions with overrides applied
    """
    settings = load_settings(config_path=config_path, start_dir=start_dir)
    return SyncOptions.from_config(settings.to_config(), **overrides)
