"""Shared test fixtures for the page-builder editing core.

Documents are built from small node helpers so tests read like the trees
they describe. The registry and key map are built from the packaged
defaults through explicit config dictionaries, which keeps tests
independent of any user configuration directory.
"""

import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pagebuilder_toolkit.core.context import EditorStore
from pagebuilder_toolkit.core.keymap import KeyMap
from pagebuilder_toolkit.core.registry import ComponentRegistry
from pagebuilder_toolkit.core.services.array_component import EditorArrayComponent

# Configure test logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

COMPONENTS = {
    "Wrapper": {
        "container": True,
        "default_style": {
            "horizontalAlign": "left",
            "tabletHorizontalAlign": "left",
            "mobileHorizontalAlign": "left",
        },
    },
    "Cloneable": {"container": True},
    "Form": {"container": True, "style_merge_depth": 3, "content_keys": ["action"]},
    "IconText": {"container": True, "style_merge_depth": 3},
    "ImageGallery": {"container": True, "style_merge_depth": 2},
    "Section": {"container": True, "default_style": {"verticalAlign": "top"}},
    "Column": {"container": True, "default_style": {"verticalAlign": "top"}},
    "RichText": {"content_keys": ["text"]},
    "Button": {"content_keys": ["text"]},
    "Image": {"content_keys": ["imageSrc"]},
}

KEYMAP = {
    "add_column": ["mod+N", "alt+N"],
    "clone": ["mod+D", "alt+D"],
    "copy": ["mod+C", "alt+C"],
    "paste": ["mod+V", "alt+V"],
    "paste_styles": ["mod+shift+V", "alt+shift+V"],
    "align_horizontal_increase": ["mod+right"],
    "align_horizontal_decrease": ["mod+left"],
    "align_vertical_decrease": ["mod+up", "alt+up"],
    "align_vertical_increase": ["mod+down", "alt+down"],
    "remove": ["del", "alt+del", "mod+del", "mod+backspace"],
}


def node(type_, _id=None, items=None, **fields):
    """Build a node dict; ``items`` become ``value["items"]``."""
    value = dict(fields)
    if _id is not None:
        value["_id"] = _id
    if items is not None:
        value["items"] = list(items)
    return {"type": type_, "value": value}


@pytest.fixture
def registry():
    return ComponentRegistry.from_config(COMPONENTS)


@pytest.fixture
def keymap():
    return KeyMap.from_config(KEYMAP)


@pytest.fixture
def make_store():
    def factory(document=None, **kwargs):
        return EditorStore(document, **kwargs)
    return factory


@pytest.fixture
def make_component(registry, keymap):
    """Factory for a component bound to *store* at *path*."""
    def factory(store, path=("items",), **kwargs):
        kwargs.setdefault("registry", registry)
        kwargs.setdefault("keymap", keymap)
        return EditorArrayComponent(store, path, **kwargs)
    return factory


@pytest.fixture
def commits(make_store):
    """Return (store, list of (document, meta)) recording every commit."""
    def factory(document=None, **kwargs):
        store = make_store(document, **kwargs)
        recorded = []
        store.subscribe(lambda doc, meta: recorded.append((doc, meta)))
        return store, recorded
    return factory
