"""Tests rendu — template Jinja2, enveloppe, classes, ids uniques."""
import pytest

from block_loader import BlockHooks, BlockLoader, BlockLoaderConfig
from block_loader.renderer import block_classes, render_template

from conftest import write_block


@pytest.fixture
def hero_theme(tmp_path):
    write_block(
        tmp_path / "blocks", "hero",
        {"Block Name": "Hero"},
        body='<h1>{{ field("title") or block.title }}</h1>\n',
    )
    return tmp_path


def _loader(root, **kwargs):
    return BlockLoader(BlockLoaderConfig(root_dir=root, **kwargs))


# ── render_template ───────────────────────────────────────────────────────

def test_header_comment_not_rendered(hero_theme):
    hero = _loader(hero_theme).get_blocks()["hero"]
    html = render_template(hero.template_file, hero.to_dict())
    assert "Block Name" not in html
    assert "<h1>Hero</h1>" in html


def test_fields_are_escaped(hero_theme):
    hero = _loader(hero_theme).get_blocks()["hero"]
    html = render_template(hero.template_file, hero.to_dict(), {"title": "<script>"})
    assert "&lt;script&gt;" in html


# ── block_classes ─────────────────────────────────────────────────────────

def test_block_classes():
    assert block_classes({"slug": "hero"}) == ["block", "hero"]
    assert block_classes({"slug": "hero", "align": "", "className": None}) == ["block", "hero"]
    assert block_classes({"slug": "hero", "align": "wide", "className": "is-dark"}) == [
        "block", "hero", "alignwide", "is-dark",
    ]


# ── render_block ──────────────────────────────────────────────────────────

class TestRenderBlock:
    def test_default_wrap(self, hero_theme):
        loader = _loader(hero_theme)
        html = loader.render_block(loader.get_blocks()["hero"])
        assert html.startswith('<div id="hero" class="block hero">')
        assert html.endswith("</div>")
        assert "<h1>Hero</h1>" in html

    def test_unique_ids_within_session(self, hero_theme):
        loader = _loader(hero_theme)
        hero = loader.get_blocks()["hero"]
        session = loader.new_session()
        first = loader.render_block(hero, session=session)
        second = loader.render_block(hero, session=session)
        assert 'id="hero"' in first
        assert 'id="hero-2"' in second

    def test_new_session_restarts_ids(self, hero_theme):
        loader = _loader(hero_theme)
        hero = loader.get_blocks()["hero"]
        loader.render_block(hero, session=loader.new_session())
        assert 'id="hero"' in loader.render_block(hero, session=loader.new_session())

    def test_id_from_title_field(self, hero_theme):
        loader = _loader(hero_theme)
        html = loader.render_block(loader.get_blocks()["hero"], fields={"title": "Bonjour à tous"})
        assert 'id="bonjour-a-tous"' in html
        assert "<h1>Bonjour à tous</h1>" in html

    def test_align_and_class_name_attributes(self, hero_theme):
        loader = _loader(hero_theme)
        data = {**loader.get_blocks()["hero"].to_dict(), "align": "full", "className": 'x" onclick="y'}
        html = loader.render_block(data)
        assert 'class="block hero alignfull x&#34; onclick=&#34;y"' in html

    def test_wrap_disabled_returns_inner_content(self, hero_theme):
        loader = _loader(hero_theme, wrap=None, hooks=BlockHooks(block_classes=lambda c, b: ["ignored"]))
        hero = loader.get_blocks()["hero"]
        assert loader.render_block(hero) == render_template(hero.template_file, hero.to_dict())

    def test_wrap_hook_disables(self, hero_theme):
        loader = _loader(hero_theme, hooks=BlockHooks(block_wrap=lambda flag, block: False))
        hero = loader.get_blocks()["hero"]
        assert loader.render_block(hero) == render_template(hero.template_file, hero.to_dict())

    def test_wrap_hook_falsy_but_not_false_keeps_wrap(self, hero_theme):
        loader = _loader(hero_theme, hooks=BlockHooks(block_wrap=lambda flag, block: None))
        html = loader.render_block(loader.get_blocks()["hero"])
        assert html.startswith('<div id="hero" class="block hero">')

    def test_custom_wrap_and_hooks(self, hero_theme):
        hooks = BlockHooks(
            block_classes=lambda classes, block: classes + ["extra"],
            block_wrap_html=lambda wrap, block: "<section data-id='{2}' class='{1}'>{0}</section>",
        )
        loader = _loader(hero_theme, wrap="<div>{0}</div>", hooks=hooks)
        html = loader.render_block(loader.get_blocks()["hero"])
        assert html.startswith("<section data-id='hero' class='block hero extra'>")

    def test_missing_template_renders_empty(self, hero_theme, tmp_path):
        loader = _loader(hero_theme)
        data = {**loader.get_blocks()["hero"].to_dict(), "template_file": str(tmp_path / "gone.html")}
        assert loader.render_block(data) == ""

    def test_no_template_file_key(self, hero_theme):
        assert _loader(hero_theme).render_block({"slug": "hero"}) == ""
