from __future__ import annotations

"""Component type registry.

Maps a type tag to a behaviour descriptor: whether it is a container, its
default style values and which payload fields are content rather than
style. The few types with special paste rules (Wrapper/Cloneable family,
Form, IconText, ImageGallery) are looked up here instead of being branched
on throughout the services.
"""

from dataclasses import dataclass, field
import logging
from typing import Any, Dict, Mapping, Optional, Tuple

from pagebuilder_toolkit.core.exceptions import ConfigError
from pagebuilder_toolkit.core.models import TypeTag

__all__ = ["ComponentSpec", "ComponentRegistry", "first_child_type"]

logger = logging.getLogger(__name__)

_WRAPPER_FAMILY = frozenset({TypeTag.WRAPPER.value, TypeTag.CLONEABLE.value})
_DEFAULT_WRAPPER_DEPTH = 1


@dataclass(frozen=True)
class ComponentSpec:
    """Behaviour descriptor of one node type.

    Attributes
    ----------
    type
        The type tag.
    container
        Whether the type holds nested nodes.
    default_style
        Fallback values for style properties the type declares.
    content_keys
        Payload fields excluded from style-only paste.
    style_merge_depth
        Merge depth used when this type is the first child of two Wrapper
        nodes exchanging styles. None means the default depth.
    """

    type: str
    container: bool = False
    default_style: Dict[str, Any] = field(default_factory=dict)
    content_keys: Tuple[str, ...] = ()
    style_merge_depth: Optional[int] = None


class ComponentRegistry:
    """Lookup table from type tag to :class:`ComponentSpec`."""

    def __init__(self, specs: Optional[Mapping[str, ComponentSpec]] = None) -> None:
        self._specs: Dict[str, ComponentSpec] = dict(specs or {})

    @classmethod
    def from_config(cls, mapping: Mapping[str, Any]) -> "ComponentRegistry":
        """Build a registry from the ``components`` config section."""
        specs: Dict[str, ComponentSpec] = {}
        for type_name, entry in (mapping or {}).items():
            entry = entry or {}
            if not isinstance(entry, Mapping):
                raise ConfigError(f"Component '{type_name}' must be a mapping, got {type(entry).__name__}")
            depth = entry.get("style_merge_depth")
            if depth is not None and (not isinstance(depth, int) or depth < 0):
                raise ConfigError(f"Component '{type_name}' has invalid style_merge_depth {depth!r}")
            specs[str(type_name)] = ComponentSpec(
                type=str(type_name),
                container=bool(entry.get("container", False)),
                default_style=dict(entry.get("default_style") or {}),
                content_keys=tuple(entry.get("content_keys") or ()),
                style_merge_depth=depth,
            )
        logger.debug("Registry: %d component types", len(specs))
        return cls(specs)

    @classmethod
    def default(cls) -> "ComponentRegistry":
        """Registry built from the packaged (and user) configuration."""
        from pagebuilder_toolkit.config import ConfigManager

        return cls.from_config(ConfigManager().get_components())

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def register(self, spec: ComponentSpec) -> None:
        self._specs[spec.type] = spec

    def is_registered(self, type_name: str) -> bool:
        return str(type_name) in self._specs

    def get(self, type_name: str) -> ComponentSpec:
        """Return the spec for *type_name*; unknown types get an ordinary spec."""
        spec = self._specs.get(str(type_name))
        if spec is None:
            return ComponentSpec(type=str(type_name))
        return spec

    def is_container(self, type_name: str) -> bool:
        return self.get(type_name).container

    def default_style(self, type_name: str) -> Dict[str, Any]:
        return self.get(type_name).default_style

    def content_keys(self, type_name: str) -> Tuple[str, ...]:
        return self.get(type_name).content_keys

    @staticmethod
    def is_wrapper_family(type_name: Any) -> bool:
        return str(type_name) in _WRAPPER_FAMILY

    def style_merge_depth(self, copied: Any, local: Any) -> Optional[int]:
        """Return how deep a style-only paste from *copied* into *local* reaches.

        Both arguments are nodes. Returns None when the two nodes are
        Wrappers around different kinds of content, which must not be merged.
        """
        if not (_type_of(copied) == TypeTag.WRAPPER.value and _type_of(local) == TypeTag.WRAPPER.value):
            return 0

        copied_child = first_child_type(copied)
        local_child = first_child_type(local)
        if copied_child != local_child:
            return None
        if copied_child is None:
            return _DEFAULT_WRAPPER_DEPTH

        depth = self.get(copied_child).style_merge_depth
        return _DEFAULT_WRAPPER_DEPTH if depth is None else depth


def _type_of(node: Any) -> Optional[str]:
    if isinstance(node, dict) and node.get("type") is not None:
        return str(node["type"])
    return None


def first_child_type(node: Any) -> Optional[str]:
    """Type tag of the first node in ``value["items"]``, or None."""
    items = (node.get("value") or {}).get("items") if isinstance(node, dict) else None
    if isinstance(items, list) and items:
        return _type_of(items[0])
    return None
