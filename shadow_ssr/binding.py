# File: shadow_ssr/binding.py
"""shadow_ssr.binding: fill ``data-bind`` placeholders from host attributes."""

from __future__ import annotations

from typing import Union

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__ = ["apply_bindings"]


def apply_bindings(
    fragment: Union[BeautifulSoup, Tag],
    host: Tag,
    bind_attribute: str = "data-bind",
) -> int:
    """Replace the text of every bound node in *fragment* with the host attribute value.

    ``<p data-bind="message"></p>`` on a host with ``message="Hi"`` becomes
    ``<p>Hi</p>``; the marker is consumed. Missing host attributes bind to ``""``.
    The value is stored as plain text and HTML-escaped when the shadow content
    is serialized (``&``, ``<``, ``>`` and ``"``), so it is never escaped twice.
    Returns the number of bound nodes.
    """
    bound = 0
    for node in fragment.find_all(attrs={bind_attribute: True}):
        source_attr = node.get(bind_attribute)
        value = host.get(str(source_attr), "") if source_attr else ""
        node.string = str(value)
        del node[bind_attribute]
        bound += 1
    return bound
