"""Tests for single-component rendering (``Engine.render_component``)."""
import pytest

from shadow_ssr.cache import ResourceCache
from shadow_ssr.config import RenderConfig
from shadow_ssr.engine import Engine
from shadow_ssr.exceptions import NotACustomElement, ResourceNotFound, TemplateExtractionFailed
from shadow_ssr.renderer import ComponentRenderer
from shadow_ssr.scripts import ScriptRegistry


def test_reference_component(engine, my_component):
    out = engine.render_component(
        '<my-component message="Hi"><p slot="default">extra</p></my-component>',
        include_script=False,
    )

    assert out == (
        '<my-component message="Hi"><template shadowrootmode="open">'
        "<style>p{color:red}</style><p>Hi</p><p slot=\"default\">extra</p>"
        "</template></my-component>"
    )


def test_script_is_appended_once_and_guarded(engine, my_component):
    out = engine.render_component('<my-component message="Hi"></my-component>')

    assert out.count("<template shadowrootmode=") == 1
    assert out.count("<script>") == 1
    assert out.endswith("</script>")
    assert "if (!customElements.get('my-component')) {" in out
    assert "if (!this.shadowRoot || !this.shadowRoot.innerHTML.trim())" in out
    # the client-side render template receives the component style
    assert "innerHTML = `<style>p{color:red}</style>" in out


def test_host_attributes_are_preserved(engine, my_component):
    out = engine.render_component(
        '<my-component id="c1" class="a  b" message="x &amp; y" hidden></my-component>',
        include_script=False,
    )

    assert out.startswith('<my-component id="c1" class="a  b" message="x &amp; y" hidden="">')
    assert "<p>x &amp; y</p>" in out


def test_unslotted_light_dom_is_retained(engine, simple_component):
    simple_component("my-card", '<div class="card"><slot name="title"></slot><slot></slot></div>')

    out = engine.render_component(
        '<my-card><h2 slot="title">Title</h2>Body <em>text</em></my-card>',
        include_script=False,
    )

    assert out == (
        '<my-card><template shadowrootmode="open">'
        '<div class="card"><h2 slot="title">Title</h2>Body <em>text</em></div>'
        "</template>Body <em>text</em></my-card>"
    )


def test_retain_slotted_children_option(resource_dirs, simple_component):
    simple_component("my-card", '<slot name="title"></slot>')
    config = RenderConfig(
        template_dir=resource_dirs["templates"],
        js_dir=resource_dirs["js"],
        retain_slotted_children=True,
    )

    out = Engine(config).render_component('<my-card><b slot="title">T</b></my-card>', include_script=False)

    assert out.endswith('</template><b slot="title">T</b></my-card>')


def test_fallback_slot_content(engine, simple_component):
    simple_component("my-panel", '<h2><slot name="title">Untitled</slot></h2><slot name="body">Default</slot>')

    out = engine.render_component('<my-panel><span slot="title">T</span></my-panel>', include_script=False)

    assert '<template shadowrootmode="open"><h2><span slot="title">T</span></h2>Default</template>' in out


def test_template_file_with_template_wrapper(engine, simple_component):
    simple_component("my-tag", '  <template id="t"><b data-bind="name"></b></template>')

    out = engine.render_component('<my-tag name="N"></my-tag>', include_script=False)

    assert out == '<my-tag name="N"><template shadowrootmode="open"><b>N</b></template></my-tag>'


def test_template_extracted_from_script(engine, write_resource):
    from conftest import MY_COMPONENT_JS

    write_resource("js", "my-component.js", MY_COMPONENT_JS)

    out = engine.render_component('<my-component message="m"><i>slotted</i></my-component>', include_script=False)

    assert "<button>Click me</button>" in out
    assert "<i>slotted</i>" in out
    assert "<slot>" not in out


def test_closed_shadow_mode_and_no_css(engine, my_component):
    out = engine.render_component(
        "<my-component></my-component>", embed_css=False, shadow_mode="closed"
    )

    assert '<template shadowrootmode="closed"><p></p></template>' in out
    assert "<style>" not in out
    assert "this.attachShadow({ mode: 'closed' })" in out


def test_explicit_paths(engine, tmp_path):
    template = tmp_path / "t.html"
    template.write_text("<p>explicit</p>", encoding="utf-8")
    script = tmp_path / "s.js"
    script.write_text("define();", encoding="utf-8")
    style = tmp_path / "s.css"
    style.write_text("p{}", encoding="utf-8")

    out = engine.render_component(
        "<any-thing></any-thing>", template_path=template, js_path=script, css_path=style
    )

    assert out.startswith('<any-thing><template shadowrootmode="open"><style>p{}</style><p>explicit</p>')
    assert "define();" in out


def test_not_a_custom_element(engine):
    with pytest.raises(NotACustomElement):
        engine.render_component("<div></div>")
    with pytest.raises(NotACustomElement):
        engine.render_component("just text")


def test_missing_script_is_fatal(engine, write_resource):
    write_resource("templates", "no-script.html", "<p></p>")

    with pytest.raises(ResourceNotFound):
        engine.render_component("<no-script></no-script>")


def test_missing_template_source_is_fatal(engine, write_resource):
    write_resource("js", "no-template.js", "customElements.define('no-template', class {});")

    with pytest.raises(TemplateExtractionFailed):
        engine.render_component("<no-template></no-template>")


def test_invalid_shadow_mode(engine, my_component):
    with pytest.raises(ValueError):
        engine.render_component("<my-component></my-component>", shadow_mode="sideways")


def test_registry_records_first_snippet_only(config, my_component):
    renderer = ComponentRenderer(config, ResourceCache())
    registry = ScriptRegistry()

    first = renderer.render_markup("<my-component></my-component>", registry)
    second = renderer.render_markup('<my-component message="again"></my-component>', registry)

    assert first.tag_name == second.tag_name == "my-component"
    assert len(registry) == 1
    assert registry.snippets() == [first.script_snippet]
    assert "<p>again</p>" in second.markup


def test_child_for_missing_slot_stays_in_light_dom(engine, simple_component):
    simple_component("my-s", "<slot></slot>")

    out = engine.render_component('<my-s><b slot="nowhere">B</b></my-s>', include_script=False)

    assert out == '<my-s><template shadowrootmode="open"></template><b slot="nowhere">B</b></my-s>'


def test_default_slot_children_kept_when_template_has_no_default_slot(engine, simple_component):
    simple_component("my-card", '<slot name="title"></slot>')

    out = engine.render_component(
        '<my-card><h2 slot="title">T</h2><p slot="default">D</p></my-card>', include_script=False
    )

    assert out == (
        '<my-card><template shadowrootmode="open"><h2 slot="title">T</h2></template>'
        '<p slot="default">D</p></my-card>'
    )


def test_bound_quotes_are_escaped(engine, simple_component):
    simple_component("my-msg", '<p data-bind="msg"></p>')

    out = engine.render_component("<my-msg msg='say \"hi\" &amp; <b>'></my-msg>", include_script=False)

    assert "<p>say &quot;hi&quot; &amp; &lt;b&gt;</p>" in out
    assert out.startswith('<my-msg msg="say &quot;hi&quot; &amp; &lt;b&gt;">')


def test_clear_cache_reloads_resources(engine, simple_component, write_resource):
    simple_component("my-x", "<b>old</b>")
    assert "<b>old</b>" in engine.render_component("<my-x></my-x>", include_script=False)

    write_resource("templates", "my-x.html", "<b>new</b>")
    assert "<b>old</b>" in engine.render_component("<my-x></my-x>", include_script=False)

    engine.clear_cache()
    assert "<b>new</b>" in engine.render_component("<my-x></my-x>", include_script=False)
