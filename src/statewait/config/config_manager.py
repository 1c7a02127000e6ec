"""Config manager — load JSON → apply env overrides → validate → WaiterOptions."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from statewait.core.models.options import WaiterOptions

_log = logging.getLogger(__name__)

_CONFIG_FILE_ENV = "STATEWAIT_CONFIG_FILE"

# Environment variable → (WaiterOptions field, type).
_ENV_OVERRIDES: dict[str, tuple[str, type]] = {
    "STATEWAIT_DEFAULT_TIMEOUT": ("default_timeout", float),
    "STATEWAIT_CLEAR_ON_DESTROY": ("clear_collaborator_on_destroy", bool),
}


def _coerce(value: str, target_type: type) -> object:
    """Coerce a string env-var value to the expected Python type."""
    if target_type is bool:
        return value.strip().lower() in ("1", "true", "yes")
    return target_type(value)


def load_options(config_path: Path | str | None = None, **overrides: Any) -> WaiterOptions:
    """Load, override, and validate waiter options.

    Args:
        config_path: JSON file holding :class:`WaiterOptions` fields.  When
            *None*, falls back to the ``STATEWAIT_CONFIG_FILE`` env-var and
            then to built-in defaults.
        **overrides: Fields applied last, e.g. ``matcher`` which cannot be
            expressed in JSON.

    Returns:
        A validated :class:`WaiterOptions` instance.

    Raises:
        FileNotFoundError: If an explicitly named config file does not exist.
        pydantic.ValidationError: If the merged values are invalid.
    """
    raw: dict[str, Any] = {}
    path = _resolve_config_path(config_path)
    if path is not None:
        _log.info("Loading waiter options from %s", path)
        raw = json.loads(path.read_text(encoding="utf-8"))

    # Apply env overrides ------------------------------------------------
    for env_key, (field, typ) in _ENV_OVERRIDES.items():
        env_val = os.environ.get(env_key)
        if env_val is not None:
            raw[field] = _coerce(env_val, typ)
            _log.debug("Env override: %s → %s = %r", env_key, field, env_val)

    raw.update(overrides)
    return WaiterOptions(**raw)


def _resolve_config_path(config_path: Path | str | None) -> Path | None:
    if config_path is not None:
        p = Path(config_path)
    else:
        env = os.environ.get(_CONFIG_FILE_ENV)
        if not env:
            return None
        p = Path(env)
    if not p.is_file():
        raise FileNotFoundError(
            f"Config file not found: {p}\n"
            f"Pass an existing JSON file or unset {_CONFIG_FILE_ENV}."
        )
    return p
