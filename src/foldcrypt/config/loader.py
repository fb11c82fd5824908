#!/usr/bin/env python3
# Copyright (C) 2026 Alex Stoyanov
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation; either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License along with this program.
# If not, see <https://www.gnu.org/licenses/>.

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from ..backends.base import ToolPaths
from .installer import resolve_config_path

TAR_PATH_ENV = "FOLDCRYPT_TAR_PATH"
OPENSSL_PATH_ENV = "FOLDCRYPT_OPENSSL_PATH"
SEVENZIP_PATH_ENV = "FOLDCRYPT_7Z_PATH"


@dataclass(frozen=True)
class UiDefaults:
    quiet: bool = False
    no_color: bool = False
    no_animations: bool = False


@dataclass(frozen=True)
class AppConfig:
    path: Path
    tools: ToolPaths = field(default_factory=ToolPaths)
    ui: UiDefaults = field(default_factory=UiDefaults)


def load_app_config(path: str | Path | None = None) -> AppConfig:
    config_path = resolve_config_path(path)
    data = _load_toml(config_path)
    return AppConfig(
        path=config_path,
        tools=_apply_tool_env(_parse_tools(_get_dict(data, "tools"))),
        ui=_parse_ui_defaults(_get_dict(data, "ui")),
    )


def _parse_tools(cfg: dict[str, object]) -> ToolPaths:
    defaults = ToolPaths()
    return ToolPaths(
        tar=_parse_tool(cfg.get("tar"), field="tools.tar", default=defaults.tar),
        openssl=_parse_tool(cfg.get("openssl"), field="tools.openssl", default=defaults.openssl),
        sevenzip=_parse_tool(
            cfg.get("sevenzip"),
            field="tools.sevenzip",
            default=defaults.sevenzip,
        ),
    )


def _apply_tool_env(tools: ToolPaths) -> ToolPaths:
    return ToolPaths(
        tar=os.environ.get(TAR_PATH_ENV) or tools.tar,
        openssl=os.environ.get(OPENSSL_PATH_ENV) or tools.openssl,
        sevenzip=os.environ.get(SEVENZIP_PATH_ENV) or tools.sevenzip,
    )


def _parse_ui_defaults(cfg: dict[str, object]) -> UiDefaults:
    return UiDefaults(
        quiet=_parse_bool(cfg.get("quiet"), field="ui.quiet", default=False),
        no_color=_parse_bool(cfg.get("no_color"), field="ui.no_color", default=False),
        no_animations=_parse_bool(
            cfg.get("no_animations"),
            field="ui.no_animations",
            default=False,
        ),
    )


def _load_toml(path: Path) -> dict[str, object]:
    with path.open("rb") as handle:
        return tomllib.load(handle)


def _get_dict(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return value
    return {}


def _parse_tool(value: object, *, field: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field} must be a non-empty string")
    return os.path.expanduser(value.strip())


def _parse_bool(value: object, *, field: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        if value in (0, 1):
            return bool(value)
        raise ValueError(f"{field} must be a boolean")
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
        raise ValueError(f"{field} must be a boolean")
    raise ValueError(f"{field} must be a boolean")
