"""Document tree model, locator and editor.

Key Components:
    XMLDocument: Root document container owning one root element
    XMLElement: Element with tag, attributes, text, children and parent link
    NodeSpec: Descriptor used for batch node creation
    NodeQuery: Structural tag/attribute predicate used by the locator
"""

from .nodes import (
    NodeSpec,
    XMLDocument,
    XMLElement,
    normalize_attribute_name,
    validate_attributes,
    validate_tag,
    validate_text,
)
from .locator import (
    NodeQuery,
    find_node,
    find_nodes,
    get_root,
    select,
)
from .editor import (
    add_node,
    add_nodes,
    get_attribute,
    get_attributes,
    get_tag,
    get_text,
    remove_attributes,
    remove_node,
    set_attributes,
    set_text,
)

__all__ = [
    "NodeSpec",
    "XMLDocument",
    "XMLElement",
    "normalize_attribute_name",
    "validate_attributes",
    "validate_tag",
    "validate_text",
    "NodeQuery",
    "find_node",
    "find_nodes",
    "get_root",
    "select",
    "add_node",
    "add_nodes",
    "get_attribute",
    "get_attributes",
    "get_tag",
    "get_text",
    "remove_attributes",
    "remove_node",
    "set_attributes",
    "set_text",
]
