# === FILE: shadow_ssr/parser/template_extractor.py ===
"""Recover the inline shadow template from a component script.

Components without a standalone template file usually render themselves with::

    this.shadowRoot.innerHTML = `<p>...</p>`;

The scanner below walks the script once, skipping comments, string literals,
regex literals and unrelated template literals, and returns the body of the first such
assignment. Template-literal bodies are delimited by balancing backticks and
``${ ... }`` substitutions (which may contain nested braces, strings and
further template literals), so expressions like ``${items.map(i => `<li>${i}</li>`)}``
do not end the capture early. A ``/`` counts as a regex literal only where no
operand precedes it (after an operator, an opening bracket or a keyword such
as ``return``); otherwise it is division.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import Iterator, Optional, Tuple, Union

from shadow_ssr.exceptions import TemplateExtractionFailed

__all__ = ("extract_template", "find_template_literals")

_ASSIGNMENT_RE = re.compile(r"(?<![\w$.])this\s*\.\s*shadowRoot\s*\.\s*innerHTML\s*=\s*`")

_REGEX_PRECEDERS = frozenset("(,=:[!&|?{};+-*%<>~^")
_REGEX_KEYWORD_RE = re.compile(r"(?<![\w$])(?:return|typeof|case|do|else|in|of|void|yield|await|delete)$")

Span = Tuple[int, int]


def _skip_line_comment(source: str, i: int) -> int:
    end = source.find("\n", i)
    return len(source) if end == -1 else end + 1


def _skip_block_comment(source: str, i: int) -> int:
    end = source.find("*/", i + 2)
    return len(source) if end == -1 else end + 2


def _skip_string(source: str, i: int) -> int:
    """*i* points at the opening quote; return the index after the closing one."""
    quote = source[i]
    j = i + 1
    n = len(source)
    while j < n:
        ch = source[j]
        if ch == "\\":
            j += 2
        elif ch == quote:
            return j + 1
        elif ch == "\n":
            # unterminated string, resume on the next line
            return j
        else:
            j += 1
    return n


def _starts_regex(source: str, i: int) -> bool:
    """A ``/`` at *i* opens a regex literal when no operand precedes it."""
    j = i - 1
    while j >= 0 and source[j].isspace():
        j -= 1
    if j < 0 or source[j] in _REGEX_PRECEDERS:
        return True
    return _REGEX_KEYWORD_RE.search(source, max(0, j - 8), j + 1) is not None


def _skip_regex(source: str, i: int) -> int:
    """*i* points at the opening ``/``; return the index after the closing one."""
    j = i + 1
    n = len(source)
    in_class = False
    while j < n:
        ch = source[j]
        if ch == "\\":
            j += 2
        elif ch == "\n":
            # not a regex after all, resume on the next line
            return j
        elif ch == "[":
            in_class = True
            j += 1
        elif ch == "]":
            in_class = False
            j += 1
        elif ch == "/" and not in_class:
            return j + 1
        else:
            j += 1
    return n


def _literal_end(source: str, i: int) -> int:
    """Index of the backtick closing a template literal whose body starts at *i*.

    Returns -1 when the literal is never closed.
    """
    n = len(source)
    while i < n:
        ch = source[i]
        if ch == "\\":
            i += 2
        elif ch == "`":
            return i
        elif ch == "$" and source.startswith("${", i):
            i = _substitution_end(source, i + 2)
            if i == -1:
                return -1
        else:
            i += 1
    return -1


def _substitution_end(source: str, i: int) -> int:
    """Index after the ``}`` closing a ``${`` substitution opened just before *i*."""
    depth = 1
    n = len(source)
    while i < n:
        ch = source[i]
        if source.startswith("//", i):
            i = _skip_line_comment(source, i)
        elif source.startswith("/*", i):
            i = _skip_block_comment(source, i)
        elif ch in "'\"":
            i = _skip_string(source, i)
        elif ch == "/" and _starts_regex(source, i):
            i = _skip_regex(source, i)
        elif ch == "`":
            end = _literal_end(source, i + 1)
            if end == -1:
                return -1
            i = end + 1
        elif ch == "{":
            depth += 1
            i += 1
        elif ch == "}":
            depth -= 1
            i += 1
            if depth == 0:
                return i
        else:
            i += 1
    return -1


def find_template_literals(source: str) -> Iterator[Span]:
    """Yield ``(start, end)`` of every ``this.shadowRoot.innerHTML = `…``` body.

    ``source[start:end]`` is the literal body without the delimiting backticks.
    Raises :class:`TemplateExtractionFailed` when a matched literal is unterminated.
    """
    i = 0
    n = len(source)
    while i < n:
        ch = source[i]
        if source.startswith("//", i):
            i = _skip_line_comment(source, i)
        elif source.startswith("/*", i):
            i = _skip_block_comment(source, i)
        elif ch in "'\"":
            i = _skip_string(source, i)
        elif ch == "/" and _starts_regex(source, i):
            i = _skip_regex(source, i)
        elif ch == "`":
            end = _literal_end(source, i + 1)
            i = n if end == -1 else end + 1
        else:
            match = _ASSIGNMENT_RE.match(source, i)
            if match is None:
                i += 1
                continue
            start = match.end()
            end = _literal_end(source, start)
            if end == -1:
                raise TemplateExtractionFailed()
            yield start, end
            i = end + 1


def extract_template(source: str, origin: Optional[Union[str, Path]] = None) -> str:
    """Return the body of the first inline shadow template in *source*.

    *origin* (usually the script path) only decorates the error message.
    Only the first assignment is used; scripts with several ``render()``
    variants are not supported.
    """
    try:
        start, end = next(find_template_literals(source))
    except (StopIteration, TemplateExtractionFailed):
        raise TemplateExtractionFailed(origin) from None
    return source[start:end]
