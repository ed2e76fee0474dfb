"""Public API for the XML tree facade.

Progressive API disclosure:
- Level 1: Module-level functions - create_document(), parse_document(),
  serialize_document(), load_document(), save_document()
- Level 2: Configured facade - XMLTreeFacade class
"""

from .adapters import LxmlAdapter
from .facade import XMLTreeFacade
from .lifecycle import (
    create_document,
    load_document,
    parse_document,
    save_document,
    serialize_document,
)

__all__ = [
    "LxmlAdapter",
    "XMLTreeFacade",
    "create_document",
    "load_document",
    "parse_document",
    "save_document",
    "serialize_document",
]
