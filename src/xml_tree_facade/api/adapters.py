"""Conversion between facade trees and lxml elements.

lxml does the actual parsing and serialization; this adapter moves content in
both directions without losing attribute order, tail text or namespace
declarations. Comments, processing instructions and unexpanded entity
references are not part of the facade model and are skipped, with any text
that followed them kept in document order.
"""

from typing import Dict, Optional, Union

from lxml import etree

from xml_tree_facade.shared import InvalidArgumentError, get_logger
from xml_tree_facade.tree import XMLDocument, XMLElement


def _append_text(existing: Optional[str], extra: Optional[str]) -> Optional[str]:
    if not extra:
        return existing
    return (existing or "") + extra


class LxmlAdapter:
    """Bidirectional conversion between XMLElement trees and lxml.etree."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "lxml_adapter")

    def to_lxml(self, source: Union[XMLDocument, XMLElement]) -> etree._Element:
        """Convert a document or element (with its subtree) to an lxml element.

        Raises:
            InvalidArgumentError: If the tree holds a name or value lxml
                cannot serialize (for example control characters)
        """
        element = source.root if isinstance(source, XMLDocument) else source
        try:
            return self._convert_element_to_lxml(element, None)
        except (ValueError, TypeError) as e:
            self.logger.error(
                "Tree cannot be represented as XML",
                cause=e,
            )
            raise InvalidArgumentError(f"Tree cannot be represented as XML: {e}") from e

    def _convert_element_to_lxml(
        self,
        element: XMLElement,
        lxml_parent: Optional[etree._Element],
    ) -> etree._Element:
        nsmap = element.namespaces or None
        if lxml_parent is None:
            lxml_element = etree.Element(element.tag, nsmap=nsmap)
        else:
            lxml_element = etree.SubElement(lxml_parent, element.tag, nsmap=nsmap)
            lxml_element.tail = element.tail

        for key, value in element.attributes.items():
            lxml_element.set(key, value)

        lxml_element.text = element.text

        for child in element.children:
            self._convert_element_to_lxml(child, lxml_element)

        return lxml_element

    def from_lxml(self, lxml_element: etree._Element) -> XMLElement:
        """Convert an lxml element and its element descendants to an XMLElement."""
        if not isinstance(lxml_element.tag, str):
            raise InvalidArgumentError(
                "Only element nodes can be converted", argument="lxml_element"
            )
        return self._convert_element_from_lxml(lxml_element, {})

    def _convert_element_from_lxml(
        self,
        lxml_element: etree._Element,
        inherited_nsmap: Dict[Optional[str], str],
    ) -> XMLElement:
        nsmap = dict(lxml_element.nsmap)
        declared = {
            prefix: uri
            for prefix, uri in nsmap.items()
            if inherited_nsmap.get(prefix) != uri
        }

        element = XMLElement(
            tag=lxml_element.tag,
            attributes=dict(lxml_element.attrib),
            text=lxml_element.text,
            namespaces=declared,
            source_line=lxml_element.sourceline,
        )

        for lxml_child in lxml_element:
            if isinstance(lxml_child.tag, str):
                child = self._convert_element_from_lxml(lxml_child, nsmap)
                child.tail = lxml_child.tail
                element.add_child(child)
            elif element.children:
                # Comment/PI/entity: keep its trailing text after the previous element
                previous = element.children[-1]
                previous.tail = _append_text(previous.tail, lxml_child.tail)
            else:
                element.text = _append_text(element.text, lxml_child.tail)

        return element
