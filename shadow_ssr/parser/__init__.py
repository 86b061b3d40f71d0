"""shadow_ssr.parser: HTML tree helpers and script template extraction."""

from __future__ import annotations

from shadow_ssr.parser.html_parser import (
    first_element,
    fragment_nodes,
    parse_document,
    parse_fragment,
    serialize,
    serialize_all,
)
from shadow_ssr.parser.template_extractor import extract_template, find_template_literals

__all__ = [
    "extract_template",
    "find_template_literals",
    "first_element",
    "fragment_nodes",
    "parse_document",
    "parse_fragment",
    "serialize",
    "serialize_all",
]
