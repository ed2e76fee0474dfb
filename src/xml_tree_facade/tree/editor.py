"""Node editor: creation and in-place mutation of document elements.

All operations mutate the tree immediately. Nothing here suspends or keeps
state outside the document itself.
"""

from typing import Iterable, List, Mapping, Optional, Sequence, Union

from xml_tree_facade.shared import InvalidArgumentError, get_logger

from .nodes import (
    NodeSpec,
    XMLDocument,
    XMLElement,
    normalize_attribute_name,
    validate_attributes,
    validate_tag,
    validate_text,
)

logger = get_logger(__name__, component="node_editor")


def _resolve_parent(document: XMLDocument, parent: Optional[XMLElement]) -> XMLElement:
    """Return the element new nodes attach to, defaulting to the root."""
    if parent is None:
        return document.root
    if not isinstance(parent, XMLElement):
        raise InvalidArgumentError(
            f"Parent must be an XMLElement, got {type(parent).__name__}",
            argument="parent",
        )
    if not document.contains(parent):
        raise InvalidArgumentError(
            f"Parent <{parent.tag}> does not belong to this document",
            argument="parent",
        )
    return parent


def add_node(
    document: XMLDocument,
    tag: str,
    attributes: Optional[Mapping[str, str]] = None,
    text: Optional[str] = None,
    parent: Optional[XMLElement] = None,
) -> XMLElement:
    """Create an element and append it as the last child of ``parent``.

    Args:
        document: Document receiving the element
        tag: Tag of the new element
        attributes: Optional attributes, applied in the given order
        text: Optional text; an empty string is kept as an empty string
        parent: Element to attach to (defaults to the document root)

    Returns:
        The newly created element

    Raises:
        InvalidArgumentError: For a bad tag, attribute or text value, or a
            parent that is not part of ``document``
    """
    validate_tag(tag)
    checked_attributes = validate_attributes(attributes) if attributes is not None else {}
    validate_text(text)
    target = _resolve_parent(document, parent)

    element = XMLElement(tag=tag, attributes=checked_attributes, text=text)
    target.add_child(element)

    if logger.is_debug_enabled():
        logger.debug(
            "Node added",
            extra={
                "tag": tag,
                "parent_path": target.get_path(),
                "attribute_count": len(checked_attributes),
                "has_text": text is not None,
            }
        )

    return element


def add_nodes(
    document: XMLDocument,
    specs: Sequence[Union[NodeSpec, XMLElement]],
    parent: Optional[XMLElement] = None,
) -> List[XMLElement]:
    """Create one element per spec under the same parent, in order.

    Prototype elements are accepted in place of specs; their tag, attributes
    and text are copied, their children are not.

    Not transactional: if one entry fails, the elements created before it
    stay in the document and the error propagates unchanged.

    Returns:
        The created elements, in the order of ``specs``
    """
    created: List[XMLElement] = []
    for spec in specs:
        if isinstance(spec, XMLElement):
            spec = NodeSpec.from_node(spec)
        elif not isinstance(spec, NodeSpec):
            raise InvalidArgumentError(
                f"Expected NodeSpec or XMLElement, got {type(spec).__name__}",
                argument="specs",
            )
        created.append(
            add_node(document, spec.tag, spec.attributes, spec.text, parent)
        )
    return created


def get_tag(node: XMLElement) -> str:
    """Return the tag of ``node``."""
    return node.tag


def get_text(node: XMLElement) -> Optional[str]:
    """Return the text of ``node``; None when no text was ever set."""
    return node.text


def set_text(node: XMLElement, text: Optional[str]) -> None:
    """Replace the text of ``node``; None removes it."""
    node.text = validate_text(text)


def get_attributes(node: XMLElement) -> dict:
    """Return a copy of the attributes of ``node`` in insertion order."""
    return dict(node.attributes)


def get_attribute(
    node: XMLElement, name: str, default: Optional[str] = None
) -> Optional[str]:
    """Return one attribute value, or ``default`` when it is missing."""
    return node.get_attribute(name, default)


def set_attributes(node: XMLElement, attributes: Mapping[str, str]) -> XMLElement:
    """Merge ``attributes`` into the attributes of ``node``.

    Colliding names are overwritten in place, other existing attributes are
    kept, and new names are appended.

    Returns:
        ``node``, for chaining
    """
    checked = validate_attributes(attributes)
    node.attributes.update(checked)

    if logger.is_debug_enabled():
        logger.debug(
            "Attributes set",
            extra={"node_path": node.get_path(), "names": list(checked)}
        )

    return node


def remove_attributes(node: XMLElement, names: Union[str, Iterable[str]]) -> None:
    """Remove the named attributes; names that are not present are ignored.

    A single string is treated as one attribute name. ``xml:``-prefixed names
    are accepted as well as Clark notation.
    """
    if isinstance(names, str):
        names = [names]
    for name in names:
        node.attributes.pop(normalize_attribute_name(name), None)


def remove_node(parent: XMLElement, child: XMLElement) -> None:
    """Detach ``child`` and its subtree from ``parent``.

    Raises:
        InvalidArgumentError: If ``child`` is not currently a child of ``parent``
    """
    if not isinstance(parent, XMLElement) or not isinstance(child, XMLElement):
        raise InvalidArgumentError(
            "remove_node expects two XMLElement instances", argument="child"
        )

    if not parent.remove_child(child):
        raise InvalidArgumentError(
            f"<{child.tag}> is not a child of <{parent.tag}>", argument="child"
        )

    if logger.is_debug_enabled():
        logger.debug(
            "Node removed",
            extra={"parent_path": parent.get_path(), "removed_tag": child.tag}
        )
