"""Document lifecycle: create, parse, load, serialize and save documents.

Parsing and serialization are pure synchronous transforms over in-memory
text. Only ``load_document`` and ``save_document`` touch files, and they do
so as coroutines through a ``FileIOProvider``.
"""

import re
import time
from typing import Optional, Union

from lxml import etree

from xml_tree_facade.fileio import FileIOProvider, LocalFileProvider, PathType
from xml_tree_facade.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    DocumentIOError,
    DocumentParseError,
    FacadeConfig,
    InvalidArgumentError,
    get_logger,
)
from xml_tree_facade.tree import XMLDocument, XMLElement, validate_tag

from .adapters import LxmlAdapter

# Constants for lifecycle operations
PREVIEW_LENGTH = 100  # Max length for content preview in logs
MS_PER_SECOND = 1000  # Milliseconds per second conversion

DEFAULT_CONFIG = FacadeConfig()

_STANDALONE_DECLARATION = re.compile(rb"\A\s*<\?xml[^>]*?\sstandalone\s*=")


def create_document(
    root_tag: str,
    config: Optional[FacadeConfig] = None,
    correlation_id: Optional[str] = None
) -> XMLDocument:
    """Create a new document holding only a root element.

    Args:
        root_tag: Tag of the root element
        config: Facade configuration (defaults to ``FacadeConfig()``)
        correlation_id: Optional correlation ID for request tracking

    Returns:
        Document whose root has no attributes, no text and no children

    Raises:
        InvalidArgumentError: If ``root_tag`` is empty or not a valid element name

    Examples:
        >>> doc = create_document("catalog")
        >>> doc.root.tag
        'catalog'
    """
    logger = get_logger(__name__, correlation_id, "create_document")
    try:
        validate_tag(root_tag)
    except InvalidArgumentError as e:
        logger.error(
            "Rejected root tag",
            extra={"root_tag": repr(root_tag)},
            cause=e,
        )
        raise

    document = XMLDocument(root=XMLElement(tag=root_tag), correlation_id=correlation_id)
    logger.info("Document created", extra={"root_tag": root_tag})
    return document


def _build_parse_error(error: etree.XMLSyntaxError) -> DocumentParseError:
    """Translate an lxml syntax error, keeping every error log entry."""
    diagnostics = []
    for entry in getattr(error, "error_log", None) or []:
        message = (entry.message or "").strip() or "Unknown parser error"
        diagnostics.append(
            DiagnosticEntry(
                severity=DiagnosticSeverity.from_level_name(entry.level_name),
                message=message,
                component="lxml_parser",
                position={"line": entry.line, "column": entry.column},
                details={"domain": entry.domain_name, "type": entry.type_name},
            )
        )

    return DocumentParseError(
        str(error) or "Malformed XML",
        line=getattr(error, "lineno", None),
        column=getattr(error, "offset", None),
        diagnostics=diagnostics,
    )


def parse_document(
    source: Union[str, bytes],
    config: Optional[FacadeConfig] = None,
    correlation_id: Optional[str] = None
) -> XMLDocument:
    """Parse XML text into a document.

    Text carrying an encoding declaration is accepted; a ``str`` is always
    treated as already decoded.

    Args:
        source: XML content as string or bytes
        config: Facade configuration (defaults to ``FacadeConfig()``)
        correlation_id: Optional correlation ID for request tracking

    Returns:
        Parsed document

    Raises:
        DocumentParseError: If ``source`` is not well-formed XML
        InvalidArgumentError: If ``source`` has the wrong type or exceeds the
            configured size limit

    Examples:
        >>> doc = parse_document("<r><x id='5'/></r>")
        >>> doc.root.children[0].attributes
        {'id': '5'}
    """
    config = config or DEFAULT_CONFIG
    start_time = time.time()
    logger = get_logger(__name__, correlation_id, "parse_document")

    if isinstance(source, str):
        data = source.encode("utf-8")
        # The declaration may name another encoding; the bytes are UTF-8 now
        encoding_override: Optional[str] = "utf-8"
    elif isinstance(source, bytes):
        data = source
        encoding_override = None
    else:
        raise InvalidArgumentError(
            f"Source must be str or bytes, got {type(source).__name__}",
            argument="source",
        )

    limit = config.parsing.max_input_size_bytes
    if limit is not None and len(data) > limit:
        logger.error(
            "Input exceeds configured size limit",
            extra={"input_bytes": len(data), "limit_bytes": limit},
        )
        raise InvalidArgumentError(
            f"Input of {len(data)} bytes exceeds the limit of {limit} bytes",
            argument="source",
        )

    logger.info(
        "Starting parse",
        extra={
            "content_length": len(data),
            "preview": (
                data[:PREVIEW_LENGTH].decode("utf-8", errors="replace") + "..."
                if len(data) > PREVIEW_LENGTH
                else data.decode("utf-8", errors="replace")
            ),
        }
    )

    parser = etree.XMLParser(encoding=encoding_override, **config.parsing.parser_options())
    try:
        lxml_root = etree.fromstring(data, parser)
    except etree.XMLSyntaxError as e:
        parse_error = _build_parse_error(e)
        logger.error(
            "Malformed XML",
            extra={
                "error": parse_error.message,
                "line": parse_error.line,
                "column": parse_error.column,
            },
            cause=e,
        )
        raise parse_error from e

    docinfo = lxml_root.getroottree().docinfo
    standalone = docinfo.standalone
    # libxml2 reports False for a declaration without a standalone pseudo-attribute
    if standalone is False and not _STANDALONE_DECLARATION.match(data):
        standalone = None

    document = XMLDocument(
        root=LxmlAdapter(correlation_id).from_lxml(lxml_root),
        version=docinfo.xml_version or "1.0",
        standalone=standalone,
        correlation_id=correlation_id,
    )

    processing_time = (time.time() - start_time) * MS_PER_SECOND
    logger.info(
        "Parse completed",
        extra={
            "root_tag": document.root.tag,
            "processing_time_ms": processing_time,
        }
    )

    return document


def serialize_document(
    document: XMLDocument,
    config: Optional[FacadeConfig] = None,
    correlation_id: Optional[str] = None
) -> str:
    """Render a document as XML text.

    The output starts with the XML declaration (unless disabled in the
    configuration) followed by a newline and the root element. Attribute and
    child order are kept exactly as stored; empty elements self-close.

    Raises:
        InvalidArgumentError: If the tree holds names or values that cannot be
            written as XML

    Examples:
        >>> doc = create_document("catalog")
        >>> serialize_document(doc)
        '<?xml version="1.0" encoding="utf-8"?>\\n<catalog/>'
    """
    config = config or DEFAULT_CONFIG
    settings = config.serialization
    correlation_id = correlation_id or document.correlation_id
    logger = get_logger(__name__, correlation_id, "serialize_document")

    lxml_root = LxmlAdapter(correlation_id).to_lxml(document)
    body = etree.tostring(
        lxml_root, encoding="unicode", pretty_print=settings.pretty_print
    )

    if settings.xml_declaration:
        standalone = ""
        if document.standalone is not None:
            standalone = ' standalone="yes"' if document.standalone else ' standalone="no"'
        declaration = (
            f'<?xml version="{document.version}" '
            f'encoding="{settings.encoding}"{standalone}?>'
        )
        text = f"{declaration}\n{body}"
    else:
        text = body

    logger.debug("Document serialized", extra={"characters": len(text)})
    return text


async def load_document(
    path: PathType,
    io_provider: Optional[FileIOProvider] = None,
    config: Optional[FacadeConfig] = None,
    correlation_id: Optional[str] = None
) -> XMLDocument:
    """Read a file through the I/O provider and parse it.

    Lines returned by the provider are joined with ``"\\n"`` before parsing.

    Raises:
        DocumentIOError: If the file cannot be read
        DocumentParseError: If its content is not well-formed XML
    """
    config = config or DEFAULT_CONFIG
    provider = io_provider or LocalFileProvider(config.io.encoding)
    logger = get_logger(__name__, correlation_id, "load_document")
    start_time = time.time()

    logger.info("Loading document", extra={"file_path": str(path)})

    try:
        lines = await provider.read_all_lines(path)
    except DocumentIOError:
        raise
    except OSError as e:
        logger.error(
            "Document read failed",
            extra={"file_path": str(path)},
            cause=e,
        )
        raise DocumentIOError(
            f"Unable to read {path}: {e}", path=path, operation="read"
        ) from e

    document = parse_document("\n".join(lines), config, correlation_id)

    logger.info(
        "Document loaded",
        extra={
            "file_path": str(path),
            "line_count": len(lines),
            "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
        }
    )
    return document


async def save_document(
    document: XMLDocument,
    path: PathType,
    io_provider: Optional[FileIOProvider] = None,
    config: Optional[FacadeConfig] = None,
    correlation_id: Optional[str] = None
) -> None:
    """Serialize a document and write it through the I/O provider.

    Existing content at ``path`` is overwritten.

    Raises:
        DocumentIOError: If the file cannot be written
    """
    config = config or DEFAULT_CONFIG
    provider = io_provider or LocalFileProvider(config.io.encoding)
    logger = get_logger(__name__, correlation_id, "save_document")
    start_time = time.time()

    text = serialize_document(document, config, correlation_id)

    try:
        await provider.write_all(text, path)
    except DocumentIOError:
        raise
    except OSError as e:
        logger.error(
            "Document write failed",
            extra={"file_path": str(path)},
            cause=e,
        )
        raise DocumentIOError(
            f"Unable to write {path}: {e}", path=path, operation="write"
        ) from e

    logger.info(
        "Document saved",
        extra={
            "file_path": str(path),
            "characters": len(text),
            "processing_time_ms": (time.time() - start_time) * MS_PER_SECOND,
        }
    )
