"""Configured facade class for repeated document work.

``XMLTreeFacade`` bundles a configuration, an I/O provider and a correlation
ID, and exposes every lifecycle, locator and editor operation as a method.
It also keeps usage statistics across calls.
"""

import time
import uuid
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from xml_tree_facade.fileio import FileIOProvider, LocalFileProvider, PathType
from xml_tree_facade.shared import (
    DocumentIOError,
    DocumentParseError,
    FacadeConfig,
    configure_logging,
    get_logger,
)
from xml_tree_facade.tree import (
    NodeSpec,
    XMLDocument,
    XMLElement,
    editor,
    locator,
)

from . import lifecycle

MS_PER_SECOND = 1000


class XMLTreeFacade:
    """XML document facade with configurable initialization and reuse.

    Attributes:
        config: Facade configuration
        io_provider: Provider used by ``load`` and ``save``
        correlation_id: Correlation ID attached to every log record

    Examples:
        Build and save a document:
        >>> facade = XMLTreeFacade()
        >>> doc = facade.create("catalog")
        >>> facade.add_node(doc, "item", {"id": "1"}, "Widget")
        >>> await facade.save(doc, "catalog.xml")

        Pretty-printed output:
        >>> facade = XMLTreeFacade(FacadeConfig.pretty())
    """

    def __init__(
        self,
        config: Optional[FacadeConfig] = None,
        io_provider: Optional[FileIOProvider] = None,
        correlation_id: Optional[str] = None
    ) -> None:
        """Initialize the facade.

        Args:
            config: Facade configuration (defaults to ``FacadeConfig()``)
            io_provider: File I/O provider (defaults to a ``LocalFileProvider``
                using the configured file encoding)
            correlation_id: Optional correlation ID; generated when tracking
                is enabled and none is given
        """
        self.config = config or FacadeConfig()
        self.io_provider = io_provider or LocalFileProvider(self.config.io.encoding)

        if correlation_id is None and self.config.logging.enable_correlation_tracking:
            correlation_id = uuid.uuid4().hex
        self.correlation_id = correlation_id

        if self.config.logging.level is not None:
            configure_logging(self.config.logging.level)

        self.logger = get_logger(__name__, self.correlation_id, "xml_tree_facade")
        self.reset_statistics()

        # Documents this facade saves are read back by the same facade
        for issue in self.config.validate_compatibility(self.config):
            self.logger.warning(
                "Configuration cannot read back its own output unchanged",
                extra={"issue": issue},
            )

        self.logger.info(
            "XMLTreeFacade initialized",
            extra={
                "config_name": self.config.name,
                "io_provider": type(self.io_provider).__name__,
            }
        )

    # Document lifecycle

    def create(self, root_tag: str) -> XMLDocument:
        """Create a new document with only a root element."""
        document = lifecycle.create_document(root_tag, self.config, self.correlation_id)
        self._documents_created += 1
        return document

    def parse(self, source: Union[str, bytes]) -> XMLDocument:
        """Parse XML text into a document."""
        try:
            document = lifecycle.parse_document(source, self.config, self.correlation_id)
        except DocumentParseError:
            self._parse_failures += 1
            raise
        self._documents_parsed += 1
        return document

    def serialize(self, document: XMLDocument) -> str:
        """Render a document as XML text using the configured options."""
        return lifecycle.serialize_document(document, self.config, self.correlation_id)

    async def load(self, path: PathType) -> XMLDocument:
        """Read and parse a document through the configured I/O provider."""
        start_time = time.time()
        try:
            document = await lifecycle.load_document(
                path, self.io_provider, self.config, self.correlation_id
            )
        except DocumentIOError:
            self._io_failures += 1
            raise
        except DocumentParseError:
            self._parse_failures += 1
            raise
        finally:
            self._io_operations += 1
            self._total_io_time += (time.time() - start_time) * MS_PER_SECOND

        self._documents_loaded += 1
        return document

    async def save(self, document: XMLDocument, path: PathType) -> None:
        """Serialize and write a document through the configured I/O provider."""
        start_time = time.time()
        try:
            await lifecycle.save_document(
                document, path, self.io_provider, self.config, self.correlation_id
            )
        except DocumentIOError:
            self._io_failures += 1
            raise
        finally:
            self._io_operations += 1
            self._total_io_time += (time.time() - start_time) * MS_PER_SECOND

        self._documents_saved += 1

    # Node locator

    def get_root(self, document: XMLDocument) -> XMLElement:
        return locator.get_root(document)

    def find_nodes(
        self,
        root: Union[XMLDocument, XMLElement],
        tag: str,
        attribute_name: Optional[str] = None,
        attribute_value: Optional[str] = None,
    ) -> List[XMLElement]:
        return locator.find_nodes(root, tag, attribute_name, attribute_value)

    def find_node(
        self,
        root: Union[XMLDocument, XMLElement],
        tag: str,
        attribute_name: Optional[str] = None,
        attribute_value: Optional[str] = None,
    ) -> Optional[XMLElement]:
        return locator.find_node(root, tag, attribute_name, attribute_value)

    # Node editor

    def add_node(
        self,
        document: XMLDocument,
        tag: str,
        attributes: Optional[Mapping[str, str]] = None,
        text: Optional[str] = None,
        parent: Optional[XMLElement] = None,
    ) -> XMLElement:
        return editor.add_node(document, tag, attributes, text, parent)

    def add_nodes(
        self,
        document: XMLDocument,
        specs: Sequence[Union[NodeSpec, XMLElement]],
        parent: Optional[XMLElement] = None,
    ) -> List[XMLElement]:
        return editor.add_nodes(document, specs, parent)

    def get_tag(self, node: XMLElement) -> str:
        return editor.get_tag(node)

    def get_text(self, node: XMLElement) -> Optional[str]:
        return editor.get_text(node)

    def set_text(self, node: XMLElement, text: Optional[str]) -> None:
        editor.set_text(node, text)

    def get_attributes(self, node: XMLElement) -> Dict[str, str]:
        return editor.get_attributes(node)

    def get_attribute(
        self, node: XMLElement, name: str, default: Optional[str] = None
    ) -> Optional[str]:
        return editor.get_attribute(node, name, default)

    def set_attributes(
        self, node: XMLElement, attributes: Mapping[str, str]
    ) -> XMLElement:
        return editor.set_attributes(node, attributes)

    def remove_attributes(
        self, node: XMLElement, names: Union[str, Iterable[str]]
    ) -> None:
        editor.remove_attributes(node, names)

    def remove_node(self, parent: XMLElement, child: XMLElement) -> None:
        editor.remove_node(parent, child)

    # Statistics

    @property
    def statistics(self) -> Dict[str, Any]:
        """Get facade usage statistics.

        Returns:
            Dictionary with document counters, failures and I/O timing
        """
        return {
            "documents_created": self._documents_created,
            "documents_parsed": self._documents_parsed,
            "documents_loaded": self._documents_loaded,
            "documents_saved": self._documents_saved,
            "parse_failures": self._parse_failures,
            "io_failures": self._io_failures,
            "total_io_time_ms": self._total_io_time,
            "average_io_time_ms": (
                self._total_io_time / self._io_operations
                if self._io_operations > 0 else 0.0
            ),
            "correlation_id": self.correlation_id,
        }

    def reset_statistics(self) -> None:
        """Reset facade usage statistics."""
        self._documents_created = 0
        self._documents_parsed = 0
        self._documents_loaded = 0
        self._documents_saved = 0
        self._parse_failures = 0
        self._io_failures = 0
        self._io_operations = 0
        self._total_io_time = 0.0
