# src/blood/config.py
"""Process-wide settings for the Blood interpreter.

Values come from environment variables at import time and may be
overridden by the CLI or by inline file flags (see runtime/file_flags.py).
"""

import os

DEFAULT_RECURSION_LIMIT = 100000

_LEVELS = {"debug": 10, "info": 20, "warning": 30, "error": 40}


def _env_flag(name, default=False):
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name):
    raw = os.environ.get(name)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


class Config:
    def __init__(self):
        self.enable_debug_logs = _env_flag("BLOOD_DEBUG")
        self.log_level = os.environ.get("BLOOD_LOG_LEVEL", "debug").lower()
        self.recursion_limit = _env_int("BLOOD_RECURSION_LIMIT") or DEFAULT_RECURSION_LIMIT
        self.show_source_context = True

    def should_log(self, level="debug"):
        if not self.enable_debug_logs:
            return False
        wanted = _LEVELS.get(level, _LEVELS["debug"])
        return wanted >= _LEVELS.get(self.log_level, _LEVELS["debug"])

    def update(self, **values):
        for key, value in values.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown config option: {key}")
            setattr(self, key, value)

    def __repr__(self):
        return (f"Config(enable_debug_logs={self.enable_debug_logs}, "
                f"log_level={self.log_level!r}, recursion_limit={self.recursion_limit}, "
                f"show_source_context={self.show_source_context})")


config = Config()
