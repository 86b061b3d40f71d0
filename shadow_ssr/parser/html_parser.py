# === FILE: shadow_ssr/parser/html_parser.py ===
"""HTML tree helpers for shadow_ssr.

Every part of the renderer goes through this module to turn markup into a
BeautifulSoup tree and back, so that parsing rules and serialization stay
identical between the component renderer and the page transformer.

* Parsing uses the stdlib-backed ``"html.parser"`` builder. It never inserts
  ``<html>``/``<body>`` wrappers, which lets a fragment round-trip unchanged.
* Attribute values stay plain strings (``multi_valued_attributes=None``), so a
  ``class="a  b"`` attribute is reproduced verbatim on the rebuilt host tag.
* Warnings BeautifulSoup emits for odd input are suppressed; parsing is
  best-effort, like a browser.
* Serialization follows the "minimal" formatter (``&``, ``<``, ``>``), except
  that text rendered into a shadow root also escapes ``"`` as ``&quot;``.
  Parsing turns ``&quot;`` back into a quote, so the rule is applied again on
  every serialization rather than stored in the tree.
"""
from __future__ import annotations

import warnings
from collections.abc import Sequence
from typing import Iterable, List, Optional, Union

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.element import NavigableString, PageElement, PreformattedString, Tag
from bs4.formatter import HTMLFormatter

__all__: Sequence[str] = (
    "parse_document",
    "parse_fragment",
    "fragment_nodes",
    "first_element",
    "serialize",
    "serialize_all",
    "is_text",
    "is_custom_element",
    "in_shadow_root",
    "ShadowTextFormatter",
)


def in_shadow_root(node: PageElement) -> bool:
    """True when *node* sits inside a declarative ``<template shadowrootmode>``."""
    return any(
        parent.name == "template" and parent.has_attr("shadowrootmode") for parent in node.parents
    )


class ShadowTextFormatter(HTMLFormatter):
    """The "minimal" formatter, plus ``&quot;`` for text inside a shadow root.

    With ``shadow_content=True`` every text node is treated as shadow content;
    the renderer serializes a processed template that way before it is wrapped.
    Attribute values and script/style bodies keep the "minimal" rules.
    """

    def __init__(self, shadow_content: bool = False) -> None:
        super().__init__(entity_substitution=EntitySubstitution.substitute_xml)
        self.shadow_content = shadow_content

    def substitute(self, ns: str) -> str:
        output = super().substitute(ns)
        if not isinstance(ns, NavigableString):
            return output
        if ns.parent is not None and ns.parent.name in self.cdata_containing_tags:
            return output
        if self.shadow_content or in_shadow_root(ns):
            output = output.replace('"', "&quot;")
        return output


_FORMATTER = ShadowTextFormatter()
_SHADOW_CONTENT_FORMATTER = ShadowTextFormatter(shadow_content=True)


def parse_document(markup: str) -> BeautifulSoup:
    """Parse a full page; doctype, comments and unknown tags are preserved."""
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        return BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)


def parse_fragment(markup: str) -> BeautifulSoup:
    """Parse a markup fragment. The returned soup acts as its container."""
    return parse_document(markup)


def fragment_nodes(markup: str) -> List[PageElement]:
    """Parse *markup* and detach its top-level nodes, ready for insertion elsewhere."""
    soup = parse_fragment(markup)
    return [node.extract() for node in list(soup.contents)]


def first_element(container: Union[BeautifulSoup, Tag]) -> Optional[Tag]:
    """Return the first child element of *container*, skipping text and comments."""
    for child in container.contents:
        if isinstance(child, Tag):
            return child
    return None


def is_text(node: PageElement) -> bool:
    """True for character data only (comments, doctypes and CDATA excluded)."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def is_custom_element(tag: Tag) -> bool:
    return tag.name is not None and "-" in tag.name


def serialize(node: PageElement, *, shadow_content: bool = False) -> str:
    """Serialize a node to markup (outer HTML for elements, escaped text otherwise)."""
    formatter = _SHADOW_CONTENT_FORMATTER if shadow_content else _FORMATTER
    if isinstance(node, Tag):
        # BeautifulSoup objects are Tags as well
        return node.decode(formatter=formatter)
    if isinstance(node, NavigableString):
        return node.output_ready(formatter=formatter)
    return str(node)


def serialize_all(nodes: Iterable[PageElement], *, shadow_content: bool = False) -> str:
    return "".join(serialize(node, shadow_content=shadow_content) for node in nodes)
