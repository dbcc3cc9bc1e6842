"""
Configuration — loads settings from .spekta.yaml, environment variables,
and built-in defaults (in that priority order: CLI args > env > YAML > defaults).
"""

import os

import yaml


_DEFAULTS = {
    "tab_width": 2,
    "max_file_size_mb": 10,
    "restricted_files": [".env", ".gitignore", ".spektaignore"],
    "ignore_file": ".spektaignore",
    "require_git_tracked": True,
    "log_dir": ".spekta/logs",
    "metrics": True,
    "metrics_dir": ".spekta/metrics",
}

# Config file search locations
_CONFIG_FILENAMES = [".spekta.yaml", ".spekta.yml"]


def _find_config_file(explicit_path: str | None = None) -> str | None:
    """Find the config file. Checks explicit path, CWD, then user home."""
    if explicit_path:
        if os.path.isfile(explicit_path):
            return explicit_path
        return None

    search_dirs = [os.getcwd(), os.path.expanduser("~")]
    for d in search_dirs:
        for name in _CONFIG_FILENAMES:
            path = os.path.join(d, name)
            if os.path.isfile(path):
                return path
    return None


def _load_yaml(path: str) -> dict:
    """Load YAML file, returns empty dict on failure."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if isinstance(data, dict) else {}
    except (OSError, yaml.YAMLError):
        return {}


class Config:
    """Application configuration.

    Settings are resolved in priority order:
    1. CLI arguments (handled by caller)
    2. Environment variables
    3. .spekta.yaml config file
    4. Built-in defaults
    """

    def __init__(self, yaml_data: dict | None = None):
        yd = yaml_data or {}

        # Helper: env var > yaml > default
        def _get(env_key: str, yaml_key: str, default, cast=str):
            env_val = os.getenv(env_key)
            if env_val is not None:
                return cast(env_val)
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                return cast(yaml_val)
            return default

        def _get_bool(env_key: str, yaml_key: str, default: bool) -> bool:
            env_val = os.getenv(env_key)
            if env_val is not None:
                return env_val.lower() == "true"
            yaml_val = yd.get(yaml_key)
            if yaml_val is not None:
                return bool(yaml_val)
            return default

        self.TAB_WIDTH = max(1, _get("SPEKTA_TAB_WIDTH", "tab_width",
                                     _DEFAULTS["tab_width"], cast=int))
        self.MAX_FILE_SIZE_MB = _get("SPEKTA_MAX_FILE_SIZE_MB",
                                     "max_file_size_mb",
                                     _DEFAULTS["max_file_size_mb"], cast=float)
        self.REQUIRE_GIT_TRACKED = _get_bool("SPEKTA_REQUIRE_GIT_TRACKED",
                                             "require_git_tracked",
                                             _DEFAULTS["require_git_tracked"])
        self.IGNORE_FILE = _get("SPEKTA_IGNORE_FILE", "ignore_file",
                                _DEFAULTS["ignore_file"])

        # Files that may never be read or edited
        self.RESTRICTED_FILES: list[str] = yd.get(
            "restricted_files", list(_DEFAULTS["restricted_files"]))
        if not isinstance(self.RESTRICTED_FILES, list):
            self.RESTRICTED_FILES = list(_DEFAULTS["restricted_files"])

        # Logging
        self.LOG_DIR = _get("SPEKTA_LOG_DIR", "log_dir", _DEFAULTS["log_dir"])

        # Edit metrics
        self.METRICS_ENABLED = _get_bool("SPEKTA_METRICS", "metrics",
                                         _DEFAULTS["metrics"])
        self.METRICS_DIR = _get("SPEKTA_METRICS_DIR", "metrics_dir",
                                _DEFAULTS["metrics_dir"])

    @property
    def max_file_size_bytes(self) -> int:
        return int(self.MAX_FILE_SIZE_MB * 1024 * 1024)

    @classmethod
    def load(cls, config_path: str | None = None) -> "Config":
        """Load config from YAML file (if found) + env vars + defaults."""
        path = _find_config_file(config_path)
        yaml_data = _load_yaml(path) if path else {}
        return cls(yaml_data)
