"""Configuration system for tokentrim.

All display caps and thresholds can be overridden via environment variables
or a JSON config file at ~/.tokentrim/config.json. The file is only read.
"""

import json
import os

_DEFAULTS = {
    "diff_max_changes": 50,
    "diff_line_width": 80,
    "diff_modified_width": 35,
    "diff_similarity_threshold": 0.5,
    "unified_max_samples": 15,
    "unified_show_samples": 10,
    "unified_line_width": 70,
    "find_max_results": 50,
    "find_dir_width": 50,
    "find_inline_threshold": 3,
    "find_max_extensions": 5,
    "grep_max_line_len": 80,
    "grep_max_results": 50,
    "grep_max_per_file": 10,
    "grep_context_chars": 20,
    "path_compact_threshold": 50,
    "debug": False,
}

ENV_PREFIX = "TOKENTRIM_"

_config: dict | None = None


def _coerce(default, raw: str):
    """Convert an env var string to the type of its default; None if it doesn't parse."""
    # bool first: bool is a subclass of int
    if isinstance(default, bool):
        return raw.strip().lower() in ("1", "true", "yes", "on")
    for kind in (int, float):
        if isinstance(default, kind):
            try:
                return kind(raw)
            except ValueError:
                return None
    return raw


def _read_file(path: str) -> dict:
    """Keys from the JSON config file that name known settings."""
    if not os.path.isfile(path):
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError):
        return {}
    if not isinstance(data, dict):
        return {}
    return {k: v for k, v in data.items() if k in _DEFAULTS}


def _load_config() -> dict:
    from tokentrim import data_dir  # noqa: PLC0415

    loaded = dict(_DEFAULTS)
    loaded.update(_read_file(os.path.join(data_dir(), "config.json")))

    for key, default in _DEFAULTS.items():
        raw = os.environ.get(ENV_PREFIX + key.upper())
        if raw is None:
            continue
        value = _coerce(default, raw)
        if value is not None:
            loaded[key] = value

    return loaded


def get(key: str):
    """Get a config value."""
    global _config  # noqa: PLW0603
    if _config is None:
        _config = _load_config()
    return _config.get(key)


def reload():
    """Drop the cached values; the next get() reads file and environment again."""
    global _config  # noqa: PLW0603
    _config = None
