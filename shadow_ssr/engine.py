# File: shadow_ssr/engine.py
"""shadow_ssr.engine: facade for hosts, the CLI and tests."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from aiohttp import web

from shadow_ssr.cache import ResourceCache
from shadow_ssr.config import RenderConfig, load_config
from shadow_ssr.exceptions import ShadowRenderError
from shadow_ssr.logger import logger
from shadow_ssr.middleware import ssr_middleware
from shadow_ssr.page import PageTransformer
from shadow_ssr.renderer import ComponentRenderer
from shadow_ssr.scripts import ScriptRegistry

__all__ = ["Engine"]

PathLike = Union[str, Path]


class Engine:
    """Owns the configuration and the resource cache; every call gets its own script registry."""

    @staticmethod
    def load_config(path: Optional[PathLike]) -> RenderConfig:
        """Load a YAML/JSON config or fall back to the defaults."""
        return load_config(path)

    def __init__(
        self,
        config: Optional[RenderConfig] = None,
        cache: Optional[ResourceCache] = None,
    ) -> None:
        self.config = config or RenderConfig()
        self.cache = cache if cache is not None else ResourceCache()
        self.renderer = ComponentRenderer(self.config, self.cache)
        self.transformer = PageTransformer(self.renderer)

    def render_component(
        self,
        element_markup: str,
        template_path: Optional[PathLike] = None,
        js_path: Optional[PathLike] = None,
        css_path: Optional[PathLike] = None,
        embed_css: Optional[bool] = None,
        include_script: bool = True,
        shadow_mode: Optional[str] = None,
    ) -> str:
        """Render a single custom element; the guarded script follows it unless disabled."""
        try:
            rendered = self.renderer.render_markup(
                element_markup,
                ScriptRegistry(),
                template_path=template_path,
                js_path=js_path,
                css_path=css_path,
                embed_css=self.config.embed_css if embed_css is None else embed_css,
                shadow_mode=shadow_mode or self.config.shadow_mode,
            )
        except ShadowRenderError as exc:
            logger.error("Component render failed: %s", exc)
            raise

        if include_script:
            return f"{rendered.markup}<script>{rendered.script_snippet}</script>"
        return rendered.markup

    def render_page(self, page_markup: str, embed_css: Optional[bool] = None) -> str:
        """Expand every custom element in *page_markup* and inject the collected scripts."""
        try:
            return self.transformer.transform(
                page_markup,
                embed_css=self.config.embed_css if embed_css is None else embed_css,
            )
        except ShadowRenderError as exc:
            logger.error("Page transform failed: %s", exc)
            raise

    def init(self, app: web.Application, embed_css: Optional[bool] = None) -> None:
        """Route every HTML response of *app* through :meth:`render_page`."""
        app.middlewares.append(ssr_middleware(self, embed_css=embed_css))

    def clear_cache(self) -> None:
        self.cache.clear()
