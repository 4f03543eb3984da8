"""Config loading and environment-derived defaults."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from dlsclient.contracts.config import BootstrapConfig
from dlsclient.contracts.exceptions import ConfigError

_SERVER_SUBPATH = ("dub", "packages", ".bin", "dls-latest")


def default_server_path(environ: Mapping[str, str]) -> Path:
    """Where ``dub run dls:bootstrap`` leaves the server binary.

    Windows hosts expose ``LOCALAPPDATA``; everywhere else dub keeps its
    packages under ``~/.dub``.
    """
    local_app_data = environ.get("LOCALAPPDATA", "").strip()
    if local_app_data:
        return Path(local_app_data).joinpath(*_SERVER_SUBPATH, "dls.exe")
    home = environ.get("HOME", "").strip()
    base = Path(home) if home else Path.home()
    return base.joinpath(".dub", *_SERVER_SUBPATH[1:], "dls")


def default_config(environ: Mapping[str, str]) -> BootstrapConfig:
    return BootstrapConfig(server_path=default_server_path(environ))


def _resolve_path(value: Path | None, *, base_dir: Path) -> Path | None:
    if value is None:
        return None
    value = value.expanduser()
    if value.is_absolute():
        return value
    return (base_dir / value).resolve()


def load_config(path: str | Path, *, environ: Mapping[str, str]) -> BootstrapConfig:
    """Load and validate config from JSON, resolving relative paths against config directory.

    ``server_path`` may be omitted, in which case the environment default is used.
    """
    config_path = Path(path).expanduser().resolve()
    config_dir = config_path.parent

    try:
        raw_payload: Any = json.loads(config_path.read_text(encoding="utf-8"))
        if not isinstance(raw_payload, dict):
            raise ConfigError(f"config root must be a JSON object: {config_path}")
        raw_payload.setdefault("server_path", str(default_server_path(environ)))
        parsed = BootstrapConfig.model_validate(raw_payload)
    except OSError as exc:
        raise ConfigError(f"failed reading config file: {config_path}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid JSON in config file: {config_path}") from exc
    except ValidationError as exc:
        raise ConfigError(f"invalid config: {exc}") from exc

    return parsed.model_copy(
        update={
            "server_path": _resolve_path(parsed.server_path, base_dir=config_dir),
            "lock_path": _resolve_path(parsed.lock_path, base_dir=config_dir),
        }
    )
