"""XML Tree Facade.

A small facade over an in-memory XML tree: construct, query, mutate and
persist documents without dealing with parser or serializer APIs directly.

Progressive API Disclosure:
- Level 1: Simple functions - create_document(), parse_document(), find_nodes(),
  add_node(), serialize_document(), load_document(), save_document()
- Level 2: Configured facade - XMLTreeFacade class
"""

__version__ = "0.1.0"
__author__ = "XML Tree Facade Team"

# Level 1: document lifecycle
from .api import (
    LxmlAdapter,
    XMLTreeFacade,
    create_document,
    load_document,
    parse_document,
    save_document,
    serialize_document,
)

# File I/O collaborators
from .fileio import FileIOProvider, LocalFileProvider, join_path

# Configuration and errors
from .shared import (
    ConfigValidationError,
    DocumentIOError,
    DocumentParseError,
    FacadeConfig,
    InvalidArgumentError,
    XMLFacadeError,
)

# Level 1: node locator and editor
from .tree import (
    NodeQuery,
    NodeSpec,
    XMLDocument,
    XMLElement,
    add_node,
    add_nodes,
    find_node,
    find_nodes,
    get_attribute,
    get_attributes,
    get_root,
    get_tag,
    get_text,
    remove_attributes,
    remove_node,
    set_attributes,
    set_text,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Document lifecycle
    "create_document",
    "parse_document",
    "serialize_document",
    "load_document",
    "save_document",

    # Node locator
    "find_nodes",
    "find_node",
    "get_root",
    "NodeQuery",

    # Node editor
    "add_node",
    "add_nodes",
    "get_tag",
    "get_text",
    "set_text",
    "get_attributes",
    "get_attribute",
    "set_attributes",
    "remove_attributes",
    "remove_node",

    # Data model
    "XMLDocument",
    "XMLElement",
    "NodeSpec",

    # Level 2 and collaborators
    "XMLTreeFacade",
    "LxmlAdapter",
    "FileIOProvider",
    "LocalFileProvider",
    "join_path",

    # Configuration and errors
    "FacadeConfig",
    "XMLFacadeError",
    "InvalidArgumentError",
    "DocumentParseError",
    "DocumentIOError",
    "ConfigValidationError",
]
