"""Node locator: predicate-based search over a document tree.

Queries are structural. A ``NodeQuery`` is compared against each element's tag
and attribute mapping directly, so attribute values containing quotes or
brackets are matched literally and never interpreted as query syntax.
"""

from dataclasses import dataclass
from typing import List, Optional, Union

from xml_tree_facade.shared import InvalidArgumentError, get_logger

from .nodes import XMLDocument, XMLElement

SearchRoot = Union[XMLDocument, XMLElement]

logger = get_logger(__name__, component="node_locator")


@dataclass(frozen=True)
class NodeQuery:
    """Tag plus optional attribute predicate.

    - no ``attribute_name``: match on tag alone
    - ``attribute_name`` only: the attribute must be present, any value
    - both: the attribute must equal ``attribute_value`` exactly
    """

    tag: str
    attribute_name: Optional[str] = None
    attribute_value: Optional[str] = None

    def __post_init__(self) -> None:
        """Reject selectors that cannot match anything meaningful."""
        if not isinstance(self.tag, str) or not self.tag:
            raise InvalidArgumentError(
                "Search tag must be a non-empty string", argument="tag"
            )
        if self.attribute_name is not None and (
            not isinstance(self.attribute_name, str) or not self.attribute_name
        ):
            raise InvalidArgumentError(
                "Attribute name must be a non-empty string", argument="attribute_name"
            )
        if self.attribute_value is not None:
            if self.attribute_name is None:
                raise InvalidArgumentError(
                    "Attribute value given without an attribute name",
                    argument="attribute_value",
                )
            if not isinstance(self.attribute_value, str):
                raise InvalidArgumentError(
                    "Attribute value must be a string", argument="attribute_value"
                )

    def matches(self, element: XMLElement) -> bool:
        """Check whether ``element`` satisfies this query."""
        if element.tag != self.tag:
            return False
        if self.attribute_name is None:
            return True
        if not element.has_attribute(self.attribute_name):
            return False
        if self.attribute_value is None:
            return True
        return element.get_attribute(self.attribute_name) == self.attribute_value

    def describe(self) -> str:
        """Human-readable form of the query for log records."""
        if self.attribute_name is None:
            return self.tag
        if self.attribute_value is None:
            return f"{self.tag}[@{self.attribute_name}]"
        return f"{self.tag}[@{self.attribute_name}={self.attribute_value!r}]"


def _search_start(root: SearchRoot) -> XMLElement:
    if isinstance(root, XMLDocument):
        return root.root
    if isinstance(root, XMLElement):
        return root
    raise InvalidArgumentError(
        f"Search root must be an XMLDocument or XMLElement, got {type(root).__name__}",
        argument="root",
    )


def select(root: SearchRoot, query: NodeQuery) -> List[XMLElement]:
    """Return the descendants of ``root`` matching ``query`` in document order.

    For a document the search covers the descendants of its root element.
    The search root itself is never part of the result.
    """
    start = _search_start(root)
    matches = [element for element in start.iter_descendants() if query.matches(element)]

    if logger.is_debug_enabled():
        logger.debug(
            "Node search completed",
            extra={
                "query": query.describe(),
                "search_root": start.get_path(),
                "match_count": len(matches),
            }
        )

    return matches


def find_nodes(
    root: SearchRoot,
    tag: str,
    attribute_name: Optional[str] = None,
    attribute_value: Optional[str] = None,
) -> List[XMLElement]:
    """Find all descendants with ``tag`` satisfying the attribute predicate.

    Args:
        root: Document or element to search under
        tag: Tag the nodes must have
        attribute_name: Optional attribute the nodes must carry
        attribute_value: Optional exact value for ``attribute_name``

    Returns:
        Matching elements in pre-order; empty when nothing matches

    Raises:
        InvalidArgumentError: For an empty tag or a value without a name

    Examples:
        >>> doc = parse_document("<r><x id='5'/></r>")
        >>> len(find_nodes(doc, "x", "id", "5"))
        1
        >>> find_nodes(doc, "x", "id", "6")
        []
    """
    return select(root, NodeQuery(tag, attribute_name, attribute_value))


def find_node(
    root: SearchRoot,
    tag: str,
    attribute_name: Optional[str] = None,
    attribute_value: Optional[str] = None,
) -> Optional[XMLElement]:
    """Find the first matching descendant in document order, or None."""
    query = NodeQuery(tag, attribute_name, attribute_value)
    start = _search_start(root)
    return next(
        (element for element in start.iter_descendants() if query.matches(element)),
        None,
    )


def get_root(document: XMLDocument) -> XMLElement:
    """Return the root element of ``document``."""
    return document.root
