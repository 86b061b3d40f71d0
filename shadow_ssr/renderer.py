# File: shadow_ssr/renderer.py
"""shadow_ssr.renderer: render one custom element into declarative shadow DOM.

Output shape::

    <my-x attr="...">
      <template shadowrootmode="open"><style>...</style>...template...</template>
      ...light DOM...
    </my-x>

(without the whitespace). The component's registration script is not part of
the markup; it is returned separately and collected in a
:class:`~shadow_ssr.scripts.ScriptRegistry`.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Set, Tuple, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from shadow_ssr.binding import apply_bindings
from shadow_ssr.cache import ResourceCache
from shadow_ssr.config import RenderConfig
from shadow_ssr.exceptions import NotACustomElement
from shadow_ssr.logger import logger
from shadow_ssr.parser.html_parser import (
    first_element,
    is_custom_element,
    parse_fragment,
    serialize,
    serialize_all,
)
from shadow_ssr.parser.template_extractor import extract_template
from shadow_ssr.resolver import ResourceSet, resolve_resource_paths
from shadow_ssr.scripts import ScriptRegistry, build_snippet
from shadow_ssr.slots import distribute_slots, group_children_by_slot, normalize_slot_name

__all__ = ["RenderedComponent", "ComponentRenderer"]

PathLike = Union[str, Path]
_SHADOW_MODES = ("open", "closed")


@dataclass(frozen=True, slots=True)
class RenderedComponent:
    """Rendered host markup plus the guarded registration script of its tag."""

    markup: str
    script_snippet: str
    tag_name: str


class ComponentRenderer:
    """Composes resolution, binding, slot distribution and script guarding."""

    def __init__(self, config: RenderConfig, cache: ResourceCache) -> None:
        self.config = config
        self.cache = cache

    # ------------------------------------------------------------------
    # Public API
    def render_markup(
        self,
        element_markup: str,
        registry: ScriptRegistry,
        *,
        template_path: Optional[PathLike] = None,
        js_path: Optional[PathLike] = None,
        css_path: Optional[PathLike] = None,
        embed_css: bool = True,
        shadow_mode: str = "open",
    ) -> RenderedComponent:
        """Parse *element_markup*, treating its first element as the host, and render it."""
        soup = parse_fragment(element_markup)
        element = first_element(soup)
        if element is None or not is_custom_element(element):
            raise NotACustomElement(element.name if element is not None else None)

        resources = resolve_resource_paths(
            element,
            element.name.lower(),
            self.config,
            template_path=template_path,
            css_path=css_path,
            js_path=js_path,
        )
        return self.render(
            element, resources, registry, embed_css=embed_css, shadow_mode=shadow_mode
        )

    def render(
        self,
        element: Tag,
        resources: ResourceSet,
        registry: ScriptRegistry,
        *,
        embed_css: bool = True,
        shadow_mode: str = "open",
    ) -> RenderedComponent:
        if not is_custom_element(element):
            raise NotACustomElement(element.name)
        if shadow_mode not in _SHADOW_MODES:
            raise ValueError(f"shadow_mode must be 'open' or 'closed', got {shadow_mode!r}")

        tag_name = element.name.lower()
        template_source = self._template_source(resources)
        css = self.cache.load(resources.css_path) if embed_css and resources.css_path else None
        script = self.cache.load(resources.js_path)

        processed, filled_slots = self.process_template(template_source, element)
        if css:
            processed = f"<style>{css}</style>{processed}"

        markup = (
            f"<{element.name}{self._attributes(element)}>"
            f'<template shadowrootmode="{shadow_mode}">{processed}</template>'
            f"{self._light_dom(element, filled_slots)}"
            f"</{element.name}>"
        )

        snippet = build_snippet(
            tag_name,
            script,
            shadow_mode=shadow_mode,
            css=css if self.config.inject_css_into_script else None,
            patch_attach_shadow=self.config.patch_attach_shadow,
        )
        if registry.register(tag_name, snippet):
            logger.debug("Registered script for <%s>", tag_name)

        logger.debug("Rendered <%s> (%d characters)", tag_name, len(markup))
        return RenderedComponent(markup=markup, script_snippet=snippet, tag_name=tag_name)

    def process_template(self, template_source: str, host: Tag) -> Tuple[str, Set[str]]:
        """Bind host attributes and distribute host children into the template.

        Returns the shadow content markup and the slot groups it consumed.
        """
        soup = parse_fragment(template_source)
        container: Union[BeautifulSoup, Tag] = soup
        if template_source.lstrip().lower().startswith("<template"):
            wrapper = soup.find("template")
            if isinstance(wrapper, Tag):
                container = wrapper

        apply_bindings(container, host, self.config.bind_attribute)
        filled = distribute_slots(container, group_children_by_slot(host, self.config.slot_attribute))
        return serialize_all(container.contents, shadow_content=True), filled

    # ------------------------------------------------------------------
    # Internal helpers
    def _template_source(self, resources: ResourceSet) -> str:
        if resources.template_path is not None:
            return self.cache.load(resources.template_path)
        script = self.cache.load(resources.js_path)
        return extract_template(script, resources.js_path)

    @staticmethod
    def _attributes(element: Tag) -> str:
        return "".join(
            f' {name}="{html.escape(str(value), quote=True)}"' for name, value in element.attrs.items()
        )

    def _light_dom(self, element: Tag, filled_slots: Set[str]) -> str:
        # children addressed to a slot that received them live in the shadow template only
        slot_attribute = self.config.slot_attribute
        parts = []
        for child in element.contents:
            if (
                not self.config.retain_slotted_children
                and isinstance(child, Tag)
                and child.has_attr(slot_attribute)
                and normalize_slot_name(child.get(slot_attribute)) in filled_slots
            ):
                continue
            parts.append(serialize(child))
        return "".join(parts)
