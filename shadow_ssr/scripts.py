# File: shadow_ssr/scripts.py
"""shadow_ssr.scripts: guarded, de-duplicated component registration scripts.

Every component script is wrapped so it only runs when its tag is not yet
defined::

    if (!customElements.get('my-x')) {
      ...script source...
    }

Client scripts usually call ``this.attachShadow()`` unconditionally. On a
page rendered by shadow_ssr the browser has already attached a declarative
shadow root, so the rewrite below makes such calls reuse a non-empty shadow
root instead of failing. Scripts that manage their own shadow root can turn
this off with ``patch_attach_shadow=False``; they must then detect and reuse
``this.shadowRoot`` themselves.
"""

from __future__ import annotations

import re
from collections.abc import Iterator
from typing import Dict, List, Optional

from shadow_ssr.exceptions import TemplateExtractionFailed
from shadow_ssr.logger import logger
from shadow_ssr.parser.template_extractor import find_template_literals

__all__ = [
    "ScriptRegistry",
    "build_snippet",
    "guard_script",
    "inject_css",
    "safeguard_attach_shadow",
]

_ASSIGNED_ATTACH_RE = re.compile(
    r"\b(let|const|var)\s+(\w+)\s*=\s*this\.attachShadow\s*\(\s*\{\s*mode\s*:\s*['\"](open|closed)['\"]\s*\}\s*\)\s*;"
)
_BARE_ATTACH_RE = re.compile(
    r"^(\s*)this\.attachShadow\s*\(\s*\{\s*mode\s*:\s*['\"](open|closed)['\"]\s*\}\s*\)\s*;?[ \t]*$",
    re.MULTILINE,
)


def safeguard_attach_shadow(script: str, shadow_mode: str = "open") -> str:
    """Rewrite ``attachShadow`` calls to reuse an already populated shadow root."""

    def _assigned(match: re.Match[str]) -> str:
        keyword, name = match.group(1), match.group(2)
        return (
            f"{keyword} {name} = (this.shadowRoot && this.shadowRoot.innerHTML.trim())"
            f" ? this.shadowRoot : this.attachShadow({{ mode: '{shadow_mode}' }});"
        )

    def _bare(match: re.Match[str]) -> str:
        return (
            f"{match.group(1)}if (!this.shadowRoot || !this.shadowRoot.innerHTML.trim())"
            f" {{ this.attachShadow({{ mode: '{shadow_mode}' }}); }}"
        )

    script = _ASSIGNED_ATTACH_RE.sub(_assigned, script)
    return _BARE_ATTACH_RE.sub(_bare, script)


def _escape_template_literal(text: str) -> str:
    return text.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")


def inject_css(script: str, css: str) -> str:
    """Prefix every inline shadow template of *script* with a ``<style>`` block.

    Scripts that already carry a ``<style>`` are returned unchanged.
    """
    if not css or "<style>" in script:
        return script
    style = f"<style>{_escape_template_literal(css)}</style>"
    try:
        starts = [start for start, _ in find_template_literals(script)]
    except TemplateExtractionFailed:
        logger.warning("Unterminated shadow template in script; styles not injected")
        return script
    for start in reversed(starts):
        script = script[:start] + style + script[start:]
    return script


def guard_script(tag_name: str, script: str) -> str:
    return f"if (!customElements.get('{tag_name}')) {{\n  {script}\n}}"


def build_snippet(
    tag_name: str,
    script: str,
    *,
    shadow_mode: str = "open",
    css: Optional[str] = None,
    patch_attach_shadow: bool = True,
) -> str:
    """Turn a raw component script into its guarded registration snippet."""
    if patch_attach_shadow:
        script = safeguard_attach_shadow(script, shadow_mode)
    if css:
        script = inject_css(script, css)
    return guard_script(tag_name, script)


class ScriptRegistry:
    """Registration snippets collected during one page transform, one per tag name."""

    def __init__(self) -> None:
        self._snippets: Dict[str, str] = {}

    def register(self, tag_name: str, snippet: str) -> bool:
        """Store *snippet* unless *tag_name* is already known. True if stored."""
        if tag_name in self._snippets:
            return False
        self._snippets[tag_name] = snippet
        return True

    def snippets(self) -> List[str]:
        return list(self._snippets.values())

    def render_block(self) -> str:
        """Body of the page-level ``<script type="module">``."""
        return "\n" + "\n".join(self._snippets.values()) + "\n"

    def __contains__(self, tag_name: object) -> bool:
        return tag_name in self._snippets

    def __len__(self) -> int:
        return len(self._snippets)

    def __iter__(self) -> Iterator[str]:
        return iter(self._snippets)
