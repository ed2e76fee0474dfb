"""In-memory document model for the XML tree facade.

This module defines the element and document containers every facade
operation works on, the ``NodeSpec`` descriptor used for batch creation, and
the name/value checks shared by the editor and the lifecycle layer.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional

from lxml import etree

from xml_tree_facade.shared import InvalidArgumentError

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


def validate_tag(tag: Any) -> str:
    """Check that ``tag`` is a usable element name.

    Plain names and Clark notation (``{uri}local``) are accepted. Anything
    lxml would refuse to serialize is rejected here, so no markup can be
    smuggled in through a tag.

    Raises:
        InvalidArgumentError: If the tag is not a non-empty valid name
    """
    if not isinstance(tag, str):
        raise InvalidArgumentError(
            f"Element tag must be a string, got {type(tag).__name__}", argument="tag"
        )
    if not tag:
        raise InvalidArgumentError("Element tag cannot be empty", argument="tag")
    try:
        etree.QName(tag)
    except ValueError as e:
        raise InvalidArgumentError(
            f"Invalid element tag {tag!r}: {e}", argument="tag"
        ) from e
    return tag


def normalize_attribute_name(name: Any) -> Any:
    """Rewrite the reserved ``xml:`` prefix into Clark notation.

    ``xml`` is the one prefix bound without a declaration, so ``xml:lang`` is
    stored and looked up as ``{http://www.w3.org/XML/1998/namespace}lang``.
    Any other namespaced attribute must be written in Clark notation
    (``{uri}local``); a name such as ``p:k`` is rejected by validation.
    """
    if isinstance(name, str) and name.startswith("xml:"):
        return f"{{{XML_NAMESPACE}}}{name[4:]}"
    return name


def validate_attributes(attributes: Mapping[str, str]) -> Dict[str, str]:
    """Return an insertion-ordered copy of ``attributes`` after checking it.

    Names must be valid XML names and values must already be strings;
    nothing is coerced. Names go through ``normalize_attribute_name``.

    Raises:
        InvalidArgumentError: On a non-mapping, a bad name or a non-string value
    """
    if not isinstance(attributes, Mapping):
        raise InvalidArgumentError(
            f"Attributes must be a mapping, got {type(attributes).__name__}",
            argument="attributes",
        )

    checked: Dict[str, str] = {}
    for name, value in attributes.items():
        name = normalize_attribute_name(name)
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError(
                f"Attribute name must be a non-empty string, got {name!r}",
                argument="attributes",
            )
        try:
            etree.QName(name)
        except ValueError as e:
            raise InvalidArgumentError(
                f"Invalid attribute name {name!r}: {e}", argument="attributes"
            ) from e
        if not isinstance(value, str):
            raise InvalidArgumentError(
                f"Value of attribute {name!r} must be a string, "
                f"got {type(value).__name__}",
                argument="attributes",
            )
        checked[name] = value
    return checked


def validate_text(text: Any) -> Optional[str]:
    """Check that ``text`` is a string or ``None``."""
    if text is not None and not isinstance(text, str):
        raise InvalidArgumentError(
            f"Element text must be a string or None, got {type(text).__name__}",
            argument="text",
        )
    return text


@dataclass(eq=False)
class XMLElement:
    """Represents a single XML element in the document tree.

    Equality is identity: two elements with the same content are still two
    different nodes. ``parent`` is a non-owning back-reference; ownership
    flows strictly from parent to ``children``.
    """

    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    text: Optional[str] = None
    children: List["XMLElement"] = field(default_factory=list)
    parent: Optional["XMLElement"] = field(default=None, repr=False)

    # Content following the closing tag, up to the next sibling
    tail: Optional[str] = None
    # Namespace declarations made on this element (prefix -> uri)
    namespaces: Dict[Optional[str], str] = field(default_factory=dict, repr=False)
    source_line: Optional[int] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        """Validate element values and establish parent-child relationships."""
        if not self.tag:
            raise InvalidArgumentError("Element tag cannot be empty", argument="tag")

        seen = set()
        for child in self.children:
            self._check_attachable(child)
            if id(child) in seen:
                raise InvalidArgumentError(
                    f"Element <{child.tag}> is listed twice among the children "
                    f"of <{self.tag}>",
                    argument="children",
                )
            seen.add(id(child))

        for child in self.children:
            child.parent = self

    @staticmethod
    def _check_attachable(child: "XMLElement") -> None:
        if not isinstance(child, XMLElement):
            raise TypeError("Child must be an XMLElement instance")
        if child.parent is not None:
            raise InvalidArgumentError(
                f"Element <{child.tag}> is already attached to <{child.parent.tag}>",
                argument="child",
            )

    def add_child(self, child: "XMLElement") -> None:
        """Append a child element and establish the parent relationship."""
        self._check_attachable(child)
        if self.get_root() is child:
            raise InvalidArgumentError(
                f"Element <{child.tag}> cannot become a descendant of itself",
                argument="child",
            )

        child.parent = self
        self.children.append(child)

    def remove_child(self, child: "XMLElement") -> bool:
        """Remove a direct child and clear its parent relationship.

        The removed subtree keeps its own links intact.

        Returns:
            True if the child was removed, False if it was not a child
        """
        for index, existing in enumerate(self.children):
            if existing is child:
                del self.children[index]
                child.parent = None
                return True
        return False

    def iter_descendants(self) -> Iterator["XMLElement"]:
        """Iterate over all descendants in document (pre-order) order.

        The element itself is not yielded.
        """
        stack = list(reversed(self.children))
        while stack:
            element = stack.pop()
            yield element
            stack.extend(reversed(element.children))

    def get_attribute(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Get attribute value with optional default."""
        return self.attributes.get(normalize_attribute_name(name), default)

    def has_attribute(self, name: str) -> bool:
        """Check if element has specific attribute."""
        return normalize_attribute_name(name) in self.attributes

    def get_root(self) -> "XMLElement":
        """Walk the parent chain up to the top-most element."""
        element = self
        while element.parent is not None:
            element = element.parent
        return element

    def get_path(self) -> str:
        """Get XPath-like path to this element."""
        if self.parent is None:
            return f"/{self.tag}"

        parent_path = self.parent.get_path()
        siblings = [child for child in self.parent.children if child.tag == self.tag]
        if len(siblings) > 1:
            position = next(
                index for index, sibling in enumerate(siblings, 1) if sibling is self
            )
            return f"{parent_path}/{self.tag}[{position}]"

        return f"{parent_path}/{self.tag}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert element to dictionary representation."""
        result: Dict[str, Any] = {
            "tag": self.tag,
            "attributes": dict(self.attributes),
        }

        if self.text is not None:
            result["text"] = self.text

        if self.children:
            result["children"] = [child.to_dict() for child in self.children]

        return result


@dataclass
class XMLDocument:
    """Root XML document container.

    Owns exactly one root element and, through it, the whole tree.
    """

    root: XMLElement
    version: str = "1.0"
    standalone: Optional[bool] = None
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the root element."""
        if not isinstance(self.root, XMLElement):
            raise TypeError("Document root must be an XMLElement instance")
        if self.root.parent is not None:
            raise InvalidArgumentError(
                "Document root cannot have a parent", argument="root"
            )

    def iter_elements(self) -> Iterator[XMLElement]:
        """Iterate over all elements, root included, in document order."""
        yield self.root
        yield from self.root.iter_descendants()

    @property
    def element_count(self) -> int:
        """Total number of elements in the document."""
        return sum(1 for _ in self.iter_elements())

    def contains(self, element: XMLElement) -> bool:
        """Check whether ``element`` is currently reachable from the root."""
        return element.get_root() is self.root

    def to_dict(self) -> Dict[str, Any]:
        """Convert document to dictionary representation."""
        result: Dict[str, Any] = {
            "version": self.version,
            "element_count": self.element_count,
            "root": self.root.to_dict(),
        }

        if self.standalone is not None:
            result["standalone"] = self.standalone

        return result


@dataclass(frozen=True)
class NodeSpec:
    """Description of a node to create: tag, attributes and optional text."""

    tag: str
    attributes: Mapping[str, str] = field(default_factory=dict)
    text: Optional[str] = None

    @classmethod
    def from_node(cls, node: XMLElement) -> "NodeSpec":
        """Extract a spec from a prototype element (children are not copied)."""
        return cls(tag=node.tag, attributes=dict(node.attributes), text=node.text)
