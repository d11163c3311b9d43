"""Configuration for shorthand expression parsing.

The parser itself is a pure function of its input; configuration only controls
the synthetic root tag, optional safety limits and how much diagnostic work is
done around a parse call.
"""

import json
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, List, Optional

DEFAULT_ROOT_TAG = "root"
STRICT_MAX_NESTING_DEPTH = 64
VALID_DIAGNOSTIC_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class ParserConfig:
    """Immutable configuration for ``ExpressionParser``.

    Instances are frozen, so one configuration can be shared between threads
    and between parser instances.
    """

    root_tag: str = DEFAULT_ROOT_TAG
    max_nesting_depth: Optional[int] = None
    validate_tree: bool = False
    enable_diagnostics: bool = True
    diagnostic_level: str = "INFO"
    correlation_id: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if not self.root_tag or any(char.isspace() for char in self.root_tag):
            raise ConfigValidationError(
                "root_tag must be a non-empty string without whitespace",
                field_name="root_tag",
            )
        if self.max_nesting_depth is not None and self.max_nesting_depth <= 0:
            raise ConfigValidationError(
                "max_nesting_depth must be > 0 or None",
                field_name="max_nesting_depth",
                suggestions=["Use None to disable the nesting limit"],
            )
        if self.diagnostic_level not in VALID_DIAGNOSTIC_LEVELS:
            raise ConfigValidationError(
                f"diagnostic_level must be one of {VALID_DIAGNOSTIC_LEVELS}",
                field_name="diagnostic_level",
            )

    @classmethod
    def default(cls) -> "ParserConfig":
        """Create the default configuration."""
        return cls()

    @classmethod
    def strict(cls) -> "ParserConfig":
        """Create configuration that validates trees and bounds group nesting."""
        return cls(
            max_nesting_depth=STRICT_MAX_NESTING_DEPTH,
            validate_tree=True,
            diagnostic_level="DEBUG",
        )

    def override(self, **kwargs: Any) -> "ParserConfig":
        """Create a new configuration with specific overrides.

        Example:
            >>> config = ParserConfig().override(max_nesting_depth=8)
            >>> config.max_nesting_depth
            8
        """
        known = {config_field.name for config_field in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        return asdict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ParserConfig":
        """Create configuration from dictionary, ignoring unknown keys."""
        known = {config_field.name for config_field in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def from_json(cls, json_str: str) -> "ParserConfig":
        """Create configuration from JSON string."""
        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration JSON must be an object")
        return cls.from_dict(data)
