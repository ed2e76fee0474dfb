"""Configuration classes for the XML tree facade.

This module provides configuration objects for parsing, serialization, file
I/O and logging, enabling fine-tuned control over facade behavior.
"""

import codecs
import json
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from .errors import ConfigValidationError

_COMPONENTS = ["parsing", "serialization", "io", "logging"]
_VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _normalize_encoding(encoding: str) -> str:
    """Return the canonical codec name for an encoding, or raise ValueError."""
    try:
        return codecs.lookup(encoding).name
    except LookupError as e:
        raise ValueError(f"Unknown encoding: {encoding}") from e


@dataclass
class ParsingConfig:
    """Configuration for the lxml parser used to read documents."""

    resolve_entities: bool = False
    no_network: bool = True
    remove_comments: bool = True
    remove_pis: bool = True
    remove_blank_text: bool = False
    huge_tree: bool = False
    max_input_size_bytes: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate parsing configuration."""
        if self.max_input_size_bytes is not None and self.max_input_size_bytes <= 0:
            raise ValueError("max_input_size_bytes must be > 0 or None")

    def parser_options(self) -> Dict[str, Any]:
        """Keyword arguments for ``lxml.etree.XMLParser``."""
        return {
            "resolve_entities": self.resolve_entities,
            "no_network": self.no_network,
            "remove_comments": self.remove_comments,
            "remove_pis": self.remove_pis,
            "remove_blank_text": self.remove_blank_text,
            "huge_tree": self.huge_tree,
        }


@dataclass
class SerializationConfig:
    """Configuration for rendering documents to XML text."""

    encoding: str = "utf-8"
    xml_declaration: bool = True
    pretty_print: bool = False

    def __post_init__(self) -> None:
        """Validate serialization configuration."""
        _normalize_encoding(self.encoding)


@dataclass
class FileIOConfig:
    """Configuration for the default file I/O provider."""

    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Validate file I/O configuration."""
        _normalize_encoding(self.encoding)


@dataclass
class LoggingConfig:
    """Logging settings applied by the facade."""

    level: Optional[str] = None  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    enable_correlation_tracking: bool = True

    def __post_init__(self) -> None:
        """Validate logging configuration."""
        if self.level is not None and self.level not in _VALID_LOGGING_LEVELS:
            raise ValueError(f"level must be one of {_VALID_LOGGING_LEVELS}")


@dataclass(frozen=True)
class FacadeConfig:
    """Complete configuration for the XML tree facade.

    Immutable, so one instance can be shared between facades. Component
    validation errors are re-raised as ``ConfigValidationError``.
    """

    parsing: ParsingConfig = field(default_factory=ParsingConfig)
    serialization: SerializationConfig = field(default_factory=SerializationConfig)
    io: FileIOConfig = field(default_factory=FileIOConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the complete facade configuration."""
        try:
            self.parsing.__post_init__()
            self.serialization.__post_init__()
            self.io.__post_init__()
            self.logging.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

        self._validate_cross_component_dependencies()

    def _validate_cross_component_dependencies(self) -> None:
        # The declaration written by the serializer must match the bytes on disk
        if (
            _normalize_encoding(self.serialization.encoding)
            != _normalize_encoding(self.io.encoding)
        ):
            raise ConfigValidationError(
                f"Serialization encoding ({self.serialization.encoding}) differs "
                f"from file encoding ({self.io.encoding})",
                field_name="io.encoding",
                suggestions=[
                    "Set serialization.encoding and io.encoding to the same value",
                ],
            )

    def override(self, **kwargs: Any) -> "FacadeConfig":
        """Create a new configuration with specific overrides.

        Args:
            **kwargs: Fields to override; nested fields use ``component__field``

        Returns:
            New FacadeConfig instance with overrides applied

        Example:
            >>> config = FacadeConfig()
            >>> new_config = config.override(
            ...     serialization__pretty_print=True,
            ...     logging__level="DEBUG"
            ... )
        """
        nested_overrides: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=[f"Use one of {_COMPONENTS}"],
                    )
                nested_overrides.setdefault(component, {})[field_name] = value
            else:
                nested_overrides[key] = value

        new_fields: Dict[str, Any] = {}
        for component in _COMPONENTS:
            current_config = getattr(self, component)
            overrides = nested_overrides.pop(component, None)
            if isinstance(overrides, dict):
                try:
                    new_fields[component] = replace(current_config, **overrides)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=component) from e
            elif overrides is not None:
                new_fields[component] = overrides
            else:
                new_fields[component] = current_config

        new_fields.update(nested_overrides)
        return replace(self, **new_fields)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {
                    name: _dataclass_to_dict(getattr(obj, name))
                    for name in obj.__dataclass_fields__
                }
            if isinstance(obj, Enum):
                return obj.name
            if isinstance(obj, (list, tuple, set)):
                return [_dataclass_to_dict(item) for item in obj]
            if isinstance(obj, dict):
                return {key: _dataclass_to_dict(value) for key, value in obj.items()}
            return obj

        result = _dataclass_to_dict(self)
        if not isinstance(result, dict):
            raise ConfigValidationError("Configuration serialization failed")
        return result

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FacadeConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected so typos do not silently fall back to defaults.
        """
        component_classes = {
            "parsing": ParsingConfig,
            "serialization": SerializationConfig,
            "io": FileIOConfig,
            "logging": LoggingConfig,
        }

        field_values: Dict[str, Any] = {}
        for key, value in data.items():
            if key in component_classes:
                try:
                    field_values[key] = component_classes[key](**value)
                except (TypeError, ValueError) as e:
                    raise ConfigValidationError(str(e), field_name=key) from e
            elif key in ("name", "description"):
                field_values[key] = value
            else:
                raise ConfigValidationError(
                    f"Unknown configuration field: {key}", field_name=key
                )

        return cls(**field_values)

    @classmethod
    def from_json(cls, json_str: str) -> "FacadeConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    # Preset factory methods
    @classmethod
    def default(cls) -> "FacadeConfig":
        """Create the default configuration (compact output, safe parsing)."""
        return cls(name="default")

    @classmethod
    def pretty(cls) -> "FacadeConfig":
        """Create configuration preset producing indented, human-readable files."""
        return cls(
            parsing=ParsingConfig(remove_blank_text=True),
            serialization=SerializationConfig(pretty_print=True),
            name="pretty",
            description="Indented output; insignificant whitespace dropped on parse",
        )

    @classmethod
    def hardened(cls) -> "FacadeConfig":
        """Create configuration preset for untrusted input."""
        return cls(
            parsing=ParsingConfig(
                resolve_entities=False,
                no_network=True,
                huge_tree=False,
                max_input_size_bytes=10 * 1024 * 1024,
            ),
            name="hardened",
            description="Bounded input size, no entity expansion, no network access",
        )

    def validate_compatibility(self, other: "FacadeConfig") -> List[str]:
        """Check whether documents written with ``self`` read back under ``other``.

        Returns:
            List of compatibility warnings
        """
        warnings = []
        if (
            _normalize_encoding(self.serialization.encoding)
            != _normalize_encoding(other.io.encoding)
        ):
            warnings.append("Written encoding differs from the reader's file encoding")
        if self.serialization.pretty_print and not other.parsing.remove_blank_text:
            warnings.append(
                "Pretty-printed output will be read back with indentation as text"
            )
        return warnings
