# === FILE: shadow_ssr/config.py ===
"""
Loading and validation of the renderer configuration.
Pydantic describes the schema; YAML or JSON files may override the defaults.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

_PACKAGE_DIR = Path(__file__).resolve().parent

ShadowMode = Literal["open", "closed"]


class RenderConfig(BaseModel):
    """Resource locations, recognised attribute names and rendering policies."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    template_dir: Path = Field(_PACKAGE_DIR / "templates", description="Directory of HTML templates.")
    css_dir: Path = Field(_PACKAGE_DIR / "css", description="Directory of component styles.")
    js_dir: Path = Field(_PACKAGE_DIR / "js", description="Directory of component scripts.")

    template_attribute: str = Field("data-els-template", min_length=1)
    css_attribute: str = Field("data-els-css", min_length=1)
    js_attribute: str = Field("data-els-js", min_length=1)
    bind_attribute: str = Field("data-bind", min_length=1)
    slot_attribute: str = Field("slot", min_length=1)

    embed_css: bool = Field(True, description="Inline component styles into the shadow template.")
    shadow_mode: ShadowMode = Field("open", description="Mode of the declarative shadow root.")
    retain_slotted_children: bool = Field(
        False, description="Keep light-DOM children that carry a slot attribute."
    )
    patch_attach_shadow: bool = Field(
        True, description="Make attachShadow() calls reuse SSR-provided shadow roots."
    )
    inject_css_into_script: bool = Field(
        True, description="Prefix client-side render templates with the component style."
    )

    @field_validator("template_dir", "css_dir", "js_dir", mode="after")
    @classmethod
    def _absolute_dir(cls, v: Path) -> Path:
        return v.expanduser().absolute()


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> RenderConfig:
    """
    Read YAML or JSON and return a validated RenderConfig.
    *None* returns the built-in defaults; a missing file raises FileNotFoundError.
    """
    if path is None:
        return RenderConfig()

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    # relative resource directories are taken relative to the config file
    for key in ("template_dir", "css_dir", "js_dir"):
        value = data.get(key)
        if isinstance(value, str) and not Path(value).expanduser().is_absolute():
            data[key] = str(path_obj.parent / value)

    return RenderConfig(**data)


__all__ = ["RenderConfig", "ShadowMode", "ValidationError", "load_config"]
