import pytest

from pagebuilder_toolkit.core.exceptions import ConfigError
from pagebuilder_toolkit.core.models import TypeTag
from pagebuilder_toolkit.core.registry import ComponentRegistry, ComponentSpec, first_child_type
from tests.conftest import node


def test_unknown_type_gets_ordinary_spec(registry):
    spec = registry.get("Countdown")
    assert spec == ComponentSpec(type="Countdown")
    assert registry.is_registered("Countdown") is False
    assert registry.is_container("Countdown") is False


def test_type_tag_lookup(registry):
    assert registry.is_container(TypeTag.FORM)
    assert registry.default_style(TypeTag.SECTION) == {"verticalAlign": "top"}


def test_wrapper_family():
    assert ComponentRegistry.is_wrapper_family("Wrapper")
    assert ComponentRegistry.is_wrapper_family(TypeTag.CLONEABLE)
    assert not ComponentRegistry.is_wrapper_family("Form")


@pytest.mark.parametrize(
    "child_type, expected",
    [("Form", 3), ("IconText", 3), ("ImageGallery", 2), ("Button", 1)],
)
def test_style_merge_depth_for_wrappers(registry, child_type, expected):
    copied = node("Wrapper", items=[node(child_type)])
    local = node("Wrapper", items=[node(child_type)])
    assert registry.style_merge_depth(copied, local) == expected


def test_style_merge_depth_mismatched_wrappers(registry):
    copied = node("Wrapper", items=[node("Form")])
    local = node("Wrapper", items=[node("Button")])
    assert registry.style_merge_depth(copied, local) is None


def test_style_merge_depth_non_wrapper(registry):
    assert registry.style_merge_depth(node("Button"), node("Button")) == 0
    assert registry.style_merge_depth(node("Wrapper", items=[node("Form")]), node("Cloneable")) == 0


def test_invalid_config_raises():
    with pytest.raises(ConfigError):
        ComponentRegistry.from_config({"Form": ["not", "a", "mapping"]})
    with pytest.raises(ConfigError):
        ComponentRegistry.from_config({"Form": {"style_merge_depth": -1}})


def test_first_child_type():
    assert first_child_type(node("Wrapper", items=[node("Form"), node("Button")])) == "Form"
    assert first_child_type(node("Wrapper", items=[])) is None
    assert first_child_type(node("Button")) is None
    assert first_child_type(None) is None
