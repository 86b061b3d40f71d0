# File: shadow_ssr/slots.py
"""shadow_ssr.slots: distribute light-DOM children into ``<slot>`` positions.

Slots are replaced by reference (each ``<slot>`` Tag found in the template
tree), never by searching for their serialized markup, so two slots that
happen to serialize identically are still filled independently.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Set, Union

from bs4 import BeautifulSoup
from bs4.element import PageElement, Tag

from shadow_ssr.parser.html_parser import fragment_nodes, is_text, serialize_all

__all__ = ["DEFAULT_SLOT", "SlotGroups", "normalize_slot_name", "group_children_by_slot", "distribute_slots"]

DEFAULT_SLOT = "__default__"

SlotGroups = Dict[str, List[PageElement]]


def normalize_slot_name(name: Optional[str]) -> str:
    """Blank, missing and ``"default"`` names all address the default slot."""
    name = (name or "").strip()
    if not name or name == "default":
        return DEFAULT_SLOT
    return name


def group_children_by_slot(host: Tag, slot_attribute: str = "slot") -> SlotGroups:
    """Group the direct children of *host* by their target slot, in document order.

    Whitespace-only text, comments and other declarations are dropped.
    """
    groups: SlotGroups = {}
    for child in host.contents:
        if isinstance(child, Tag):
            name = normalize_slot_name(child.get(slot_attribute))
        elif is_text(child) and child.strip():
            name = DEFAULT_SLOT
        else:
            continue
        groups.setdefault(name, []).append(child)
    return groups


def distribute_slots(fragment: Union[BeautifulSoup, Tag], groups: SlotGroups) -> Set[str]:
    """Replace every ``<slot>`` in *fragment* with its assigned content or its fallback.

    Assigned children are serialized and re-parsed, so the host's own nodes
    are left in place for the light DOM. Returns the names of the groups that
    were placed into a slot; a tree without slots is left untouched.
    """
    filled: Set[str] = set()
    for slot in fragment.find_all("slot"):
        name = normalize_slot_name(slot.get("name"))
        assigned = groups.get(name)
        if assigned:
            replacement = fragment_nodes(serialize_all(assigned))
            filled.add(name)
        else:
            # fallback content moves out of the slot, nested slots included
            replacement = [node.extract() for node in list(slot.contents)]
        if replacement:
            slot.replace_with(*replacement)
        else:
            slot.decompose()
    return filled
