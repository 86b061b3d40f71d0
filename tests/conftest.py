# File: tests/conftest.py
from pathlib import Path
from typing import Callable, Dict

import pytest

from shadow_ssr.config import RenderConfig
from shadow_ssr.engine import Engine
from shadow_ssr.logger import configure

MY_COMPONENT_JS = """\
class MyComponent extends HTMLElement {
    constructor() {
        super();
        this.attachShadow({ mode: 'open' });
    }
    connectedCallback() {
        this.render();
    }
    render() {
        this.shadowRoot.innerHTML = `
            <p>${this.getAttribute('message') || 'Default message'}</p>
            <div>
                <button>Click me</button>
            </div>
            <slot></slot>
        `;
    }
}
customElements.define('my-component', MyComponent);
"""


@pytest.fixture(autouse=True)
def reset_logging():
    """CliRunner swaps stderr; give every test a fresh handler."""
    yield
    configure(level="WARNING")


@pytest.fixture()
def resource_dirs(tmp_path) -> Dict[str, Path]:
    """
    Create empty template/css/js directories for a test.
    """
    dirs = {kind: tmp_path / kind for kind in ("templates", "css", "js")}
    for directory in dirs.values():
        directory.mkdir()
    return dirs


@pytest.fixture()
def write_resource(resource_dirs) -> Callable[[str, str, str], Path]:
    """
    Return a helper writing *content* to ``<kind dir>/<name>``.
    """

    def _write(kind: str, name: str, content: str) -> Path:
        path = resource_dirs[kind] / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def config(resource_dirs) -> RenderConfig:
    return RenderConfig(
        template_dir=resource_dirs["templates"],
        css_dir=resource_dirs["css"],
        js_dir=resource_dirs["js"],
    )


@pytest.fixture()
def engine(config) -> Engine:
    return Engine(config)


@pytest.fixture()
def my_component(write_resource) -> None:
    """
    Resources of the reference ``<my-component>``: bound template, style, script.
    """
    write_resource("templates", "my-component.html", '<p data-bind="message"></p><slot></slot>')
    write_resource("css", "my-component.css", "p{color:red}")
    write_resource("js", "my-component.js", MY_COMPONENT_JS)


@pytest.fixture()
def simple_component(write_resource) -> Callable[..., None]:
    """
    Return a helper defining a component with a template and a trivial script.
    """

    def _define(tag: str, template: str, css: str | None = None) -> None:
        write_resource("templates", f"{tag}.html", template)
        write_resource("js", f"{tag}.js", f"customElements.define('{tag}', class extends HTMLElement {{}});")
        if css is not None:
            write_resource("css", f"{tag}.css", css)

    return _define
