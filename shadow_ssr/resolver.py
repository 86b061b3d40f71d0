# File: shadow_ssr/resolver.py
"""shadow_ssr.resolver: locate the template, style and script of a custom element.

Resolution order per resource kind (first match wins):

1. data attribute on the element (``data-els-template`` etc.), relative to the
   kind's base directory;
2. explicit path passed by the caller;
3. ``<base_dir>/<tag>.<ext>`` – only if the file exists for templates and
   styles; always for scripts, which are mandatory.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from bs4.element import Tag

from shadow_ssr.config import RenderConfig
from shadow_ssr.logger import logger

__all__ = ["ResourceSet", "resolve_resource_paths"]

PathLike = Union[str, Path]


@dataclass(frozen=True, slots=True)
class ResourceSet:
    """Resolved resource files of one custom element."""

    template_path: Optional[Path]
    css_path: Optional[Path]
    js_path: Path


def _from_attribute(element: Tag, attribute: str, base_dir: Path) -> Optional[Path]:
    value = element.get(attribute)
    if value is None:
        return None
    return base_dir / str(value)


def _by_convention(base_dir: Path, tag_name: str, ext: str) -> Optional[Path]:
    candidate = base_dir / f"{tag_name}.{ext}"
    return candidate if candidate.is_file() else None


def resolve_resource_paths(
    element: Tag,
    tag_name: str,
    config: RenderConfig,
    template_path: Optional[PathLike] = None,
    css_path: Optional[PathLike] = None,
    js_path: Optional[PathLike] = None,
) -> ResourceSet:
    """Build the :class:`ResourceSet` for *element*. Never raises."""
    template = _from_attribute(element, config.template_attribute, config.template_dir)
    if template is None:
        template = Path(template_path) if template_path else _by_convention(
            config.template_dir, tag_name, "html"
        )

    css = _from_attribute(element, config.css_attribute, config.css_dir)
    if css is None:
        css = Path(css_path) if css_path else _by_convention(config.css_dir, tag_name, "css")

    script = _from_attribute(element, config.js_attribute, config.js_dir)
    if script is None:
        script = Path(js_path) if js_path else config.js_dir / f"{tag_name}.js"

    resources = ResourceSet(template_path=template, css_path=css, js_path=script)
    logger.debug("Resolved <%s>: %s", tag_name, resources)
    return resources
