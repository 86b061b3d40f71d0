"""
shadow_ssr package initializer.
Server-side rendering of web components into declarative shadow DOM.
"""
__version__ = "0.1.0"

from shadow_ssr.config import RenderConfig, load_config
from shadow_ssr.engine import Engine
from shadow_ssr.exceptions import (
    NotACustomElement,
    ResourceNotFound,
    ShadowRenderError,
    TemplateExtractionFailed,
)

__all__ = [
    "Engine",
    "NotACustomElement",
    "RenderConfig",
    "ResourceNotFound",
    "ShadowRenderError",
    "TemplateExtractionFailed",
    "load_config",
]
