"""shadow_ssr exceptions.

Every failure is fatal for the element being rendered; a page transform
aborts on the first one.
"""

from __future__ import annotations

from pathlib import Path
from typing import Union


class ShadowRenderError(Exception):
    """Base exception for all rendering errors."""

    pass


class ResourceNotFound(ShadowRenderError, FileNotFoundError):
    """Raised when a template, style or script file cannot be read."""

    def __init__(self, path: Union[str, Path], reason: str = ""):
        self.path = Path(path)
        message = f"Could not load file: {self.path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class TemplateExtractionFailed(ShadowRenderError, ValueError):
    """Raised when no inline template can be recovered from a script."""

    def __init__(self, source: Union[str, Path, None] = None):
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(f"Template could not be extracted from script{where}")


class NotACustomElement(ShadowRenderError, ValueError):
    """Raised when the root tag of a component render has no hyphen."""

    def __init__(self, tag_name: str | None):
        self.tag_name = tag_name
        if tag_name:
            message = f"<{tag_name}> is not a custom element. No hyphen in name"
        else:
            message = "Markup contains no element to render"
        super().__init__(message)


__all__ = [
    "ShadowRenderError",
    "ResourceNotFound",
    "TemplateExtractionFailed",
    "NotACustomElement",
]
