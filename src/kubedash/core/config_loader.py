"""Config file helpers: JSONC parsing, ``{env:VAR}`` substitution, deep merge."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Dict, Mapping

import commentjson


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge ``override`` into a copy of ``base``; nested dicts merge, the rest replace."""
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def substitute_env_vars(text: str, environ: Mapping[str, str] | None = None) -> str:
    """Replace ``{env:VAR}`` patterns with environment values (empty when unset)."""
    env = os.environ if environ is None else environ

    def replacer(match: re.Match[str]) -> str:
        return env.get(match.group(1), "")

    return re.sub(r"\{env:([^}]+)\}", replacer, text)


def load_json_file(filepath: str, environ: Mapping[str, str] | None = None) -> Dict[str, Any]:
    """Load a JSON/JSONC object from ``filepath``.

    Raises ``OSError`` when the file cannot be read and ``ValueError`` when it
    does not hold a JSON object.
    """
    text = Path(filepath).read_text(encoding="utf-8")
    try:
        data = commentjson.loads(substitute_env_vars(text, environ))
    except Exception as e:
        # commentjson reports parse failures with its own exception types.
        raise ValueError(str(e) or type(e).__name__) from e
    if not isinstance(data, dict):
        raise ValueError("top-level value must be an object")
    return data
