"""VMAP parser custom exception hierarchy.

Provides specific exception types for the failure modes of VMAP parsing so
callers can treat any of them as "no ad available for this break" while logs
still carry enough context to locate the problem.

Exception Hierarchy:
    VmapException (base)
    ├── VmapParseError
    │   ├── VmapMissingInputError
    │   ├── VmapXMLError
    │   └── VmapStructureError
    │       └── VmapUnsupportedAdError
    └── VmapConfigError
"""

from typing import Optional


class VmapException(Exception):
    """Base exception for all VMAP parser errors.

    All VMAP-specific exceptions inherit from this class to allow
    catching all parser errors with a single except clause.
    """

    def __init__(self, message: str, context: Optional[dict] = None):
        """Initialize VMAP exception.

        Args:
            message: Error message
            context: Optional context dictionary for debugging
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation with context."""
        if self.context:
            context_str = "; ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# Parsing Errors

class VmapParseError(VmapException):
    """Base exception for VMAP parsing errors."""

    pass


class VmapMissingInputError(VmapParseError):
    """Raised when there is no XML text to parse.

    Neither the parser constructor nor the ``parse`` call received a
    non-empty document.
    """

    pass


class VmapXMLError(VmapParseError):
    """Raised when the input cannot be read as XML.

    This includes malformed XML, encoding issues, and XML syntax errors.

    Attributes:
        xml_preview: Leading characters of the XML that failed to parse
        parser_error: The underlying lxml parser error
    """

    def __init__(
        self,
        message: str,
        xml_preview: Optional[str] = None,
        parser_error: Optional[Exception] = None,
        context: Optional[dict] = None,
    ):
        """Initialize XML error.

        Args:
            message: Error message
            xml_preview: Preview of problematic XML, cut to length by the caller
            parser_error: The underlying parser exception
            context: Additional context
        """
        if context is None:
            context = {}
        if xml_preview:
            context["xml_preview"] = xml_preview
        super().__init__(message, context)
        self.xml_preview = xml_preview
        self.parser_error = parser_error


class VmapStructureError(VmapParseError):
    """Raised when an expected element or attribute is absent.

    Attributes:
        path: Location of the node whose child or attribute is missing
        missing: Name of the missing element or ``@attribute``
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        missing: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        """Initialize structure error.

        Args:
            message: Error message
            path: Path of the parent node
            missing: Missing element tag or ``@attribute`` name
            context: Additional context
        """
        if context is None:
            context = {}
        if path:
            context["path"] = path
        if missing:
            context["missing"] = missing
        super().__init__(message, context)
        self.path = path
        self.missing = missing


class VmapUnsupportedAdError(VmapStructureError):
    """Raised when a VAST ad uses a variant other than InLine (e.g. Wrapper)."""

    pass


# Configuration Errors

class VmapConfigError(VmapException):
    """Raised when parser configuration or settings are invalid.

    Attributes:
        config_key: Configuration key that failed validation
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if config_key:
            context["config_key"] = config_key
        super().__init__(message, context)
        self.config_key = config_key


__all__ = [
    "VmapException",
    "VmapParseError",
    "VmapMissingInputError",
    "VmapXMLError",
    "VmapStructureError",
    "VmapUnsupportedAdError",
    "VmapConfigError",
]
