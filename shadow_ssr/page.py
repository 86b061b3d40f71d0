# File: shadow_ssr/page.py
"""shadow_ssr.page: expand every custom element of a full HTML document.

Components are rendered innermost first (descending tree depth), so when a
parent is serialized for rendering its light DOM already holds the expanded
children. A failure on any component aborts the whole page.
"""

from __future__ import annotations

from typing import List, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from shadow_ssr.logger import logger
from shadow_ssr.parser.html_parser import (
    fragment_nodes,
    is_custom_element,
    parse_document,
    serialize,
)
from shadow_ssr.renderer import ComponentRenderer
from shadow_ssr.scripts import ScriptRegistry

__all__ = ["PageTransformer", "custom_elements_by_depth", "flush_scripts"]


def _depth(tag: Tag) -> int:
    return sum(1 for _ in tag.parents)


def custom_elements_by_depth(soup: BeautifulSoup) -> List[Tag]:
    """All custom elements of *soup*, deepest first; document order among equals."""
    found = soup.find_all(is_custom_element)
    ordered: List[Tuple[int, Tag]] = [(_depth(tag), tag) for tag in found]
    ordered.sort(key=lambda item: item[0], reverse=True)
    return [tag for _, tag in ordered]


def flush_scripts(soup: BeautifulSoup, registry: ScriptRegistry) -> bool:
    """Append the collected snippets as one module script to ``<head>`` or ``<body>``.

    Returns False when there is nothing to flush or no place to put it.
    """
    if not len(registry):
        return False
    target = soup.find("head") or soup.find("body")
    if not isinstance(target, Tag):
        logger.debug("Page has neither <head> nor <body>; %d script(s) dropped", len(registry))
        return False
    script = soup.new_tag("script", attrs={"type": "module"})
    script.string = registry.render_block()
    target.append(script)
    return True


class PageTransformer:
    """One-pass rewrite of a document through a :class:`ComponentRenderer`."""

    def __init__(self, renderer: ComponentRenderer) -> None:
        self.renderer = renderer

    def transform(self, page_markup: str, *, embed_css: bool = True) -> str:
        soup = parse_document(page_markup)
        registry = ScriptRegistry()
        pending = custom_elements_by_depth(soup)
        logger.info("Transforming page with %d custom element(s)", len(pending))

        for node in pending:
            rendered = self.renderer.render_markup(
                serialize(node),
                registry,
                embed_css=embed_css,
                shadow_mode=self.renderer.config.shadow_mode,
            )
            replacement = fragment_nodes(rendered.markup)
            if replacement:
                node.replace_with(*replacement)
            else:
                node.decompose()

        flush_scripts(soup, registry)
        return serialize(soup)
