import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from block_loader import BlockLoader, BlockLoaderConfig


def make_template(headers: dict, body: str = "<p>{{ block.title }}</p>\n") -> str:
    """Template avec en-tête `{# Label: valeur #}` + corps Jinja2."""
    lines = ["{#"] + [f"  {label}: {value}" for label, value in headers.items()] + ["#}"]
    return "\n".join(lines) + "\n" + body


def write_block(root: Path, name: str, headers: dict, body: str = "<p>{{ block.title }}</p>\n", nested: bool = False) -> Path:
    """
    Écrit un bloc sous `root`.
    nested=False → root/<name>.html ; nested=True → root/<name>/template.html
    """
    root.mkdir(parents=True, exist_ok=True)
    if nested:
        path = root / name / "template.html"
        path.parent.mkdir(parents=True, exist_ok=True)
    else:
        path = root / f"{name}.html"
    path.write_text(make_template(headers, body), encoding="utf-8")
    return path


# ── Fixtures ──────────────────────────────────────────────────────────────

@pytest.fixture
def theme(tmp_path):
    """Thème minimal : blocks/hero.html + blocks/card/template.html."""
    blocks = tmp_path / "blocks"
    write_block(blocks, "hero", {"Block Name": "Hero", "Keywords": "hero, banner"})
    write_block(blocks, "card", {"Block Name": "Card", "Category": "layout"}, nested=True)
    return tmp_path


@pytest.fixture
def loader(theme):
    return BlockLoader(BlockLoaderConfig(root_dir=theme))
