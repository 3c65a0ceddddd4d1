"""Parse and apply inline file flags for Blood execution.

Supported directive formats (first 25 lines):
- // @blood: {"debug": true, "recursion_limit": 5000}
- // @blood: debug=true; log_level=info

Values accept booleans, ints, floats, or strings.
"""

from __future__ import annotations

from typing import Any, Dict
import json
import logging
import re

logger = logging.getLogger("blood.runtime")

_MAX_SCAN_LINES = 25

# flag name -> config attribute
_CONFIG_KEYS = {
    "debug": "enable_debug_logs",
    "log_level": "log_level",
    "recursion_limit": "recursion_limit",
    "show_source_context": "show_source_context",
}


def parse_file_flags(source: str) -> Dict[str, Any]:
    flags: Dict[str, Any] = {}
    if not source:
        return flags

    lines = source.splitlines()[:_MAX_SCAN_LINES]
    for line in lines:
        stripped = line.strip()
        if not stripped:
            continue
        if "@blood" not in stripped:
            continue

        # Strip leading comment markers
        directive = stripped
        for prefix in ("//", "/*"):
            if directive.startswith(prefix):
                directive = directive[len(prefix):].strip()
        if directive.endswith("*/"):
            directive = directive[:-2].strip()
        if not directive.lower().startswith("@blood"):
            continue
        directive = directive[len("@blood"):].strip()
        if directive.startswith(":"):
            directive = directive[1:].strip()

        # JSON object form
        if "{" in directive:
            json_part = directive[directive.find("{"):].strip()
            try:
                parsed = json.loads(json_part)
            except json.JSONDecodeError:
                logger.warning("Ignoring malformed @blood directive: %s", json_part)
                continue
            if isinstance(parsed, dict):
                flags.update(parsed)
            continue

        # key=value form (semicolon or comma separated)
        for part in re.split(r"[;,]", directive):
            part = part.strip()
            if not part or "=" not in part:
                continue
            key, raw_val = part.split("=", 1)
            flags[key.strip()] = _parse_value(raw_val.strip())

    return flags


def _parse_value(raw: str) -> Any:
    if not raw:
        return raw
    lowered = raw.lower()
    if lowered in ("true", "yes", "on"):
        return True
    if lowered in ("false", "no", "off"):
        return False
    # numbers
    try:
        if "." in raw:
            return float(raw)
        return int(raw)
    except ValueError:
        pass
    # quoted string
    if (raw.startswith("\"") and raw.endswith("\"")) or (raw.startswith("'") and raw.endswith("'")):
        return raw[1:-1]
    return raw


def apply_file_flags(config, flags: Dict[str, Any]) -> Dict[str, Any]:
    """Copy recognised flags onto ``config``; returns what was applied."""
    applied: Dict[str, Any] = {}
    for key, value in flags.items():
        attr = _CONFIG_KEYS.get(key)
        if attr is None:
            logger.debug("Ignoring unknown file flag: %s", key)
            continue
        if attr == "log_level" and isinstance(value, str):
            value = value.lower()
        if attr == "recursion_limit" and not isinstance(value, int):
            logger.warning("Ignoring non-integer recursion_limit flag: %r", value)
            continue
        setattr(config, attr, value)
        applied[attr] = value
    return applied
