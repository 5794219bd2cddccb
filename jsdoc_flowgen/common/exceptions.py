"""
jsdoc-flowgen Exception Hierarchy

Standardized exceptions for the conversion pipeline.

Usage guide:
    1. Soft failures (undocumented construct, untranslatable type) → log and continue
    2. Structural failures (unresolvable name, reserved segment) → abort the call
    3. Parser/library failures → wrap in a custom exception

Example:
    try:
        tree = parser.parse(source_bytes)
    except ValueError as e:
        raise ParsingError("tree-sitter failed") from e
"""

from typing import Any


class FlowgenError(Exception):
    """Base exception for all jsdoc-flowgen errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize jsdoc-flowgen error.

        Args:
            message: Human-readable error message
            details: Optional additional details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


# ============================================================
# Parsing Errors
# ============================================================


class ParsingError(FlowgenError):
    """Source could not be parsed (unsupported language, parser failure)."""

    pass


class MalformedDocCommentError(FlowgenError):
    """Comment body produced no tags. Callers treat the construct as undocumented."""

    pass


class TypeExpressionSyntaxError(FlowgenError):
    """A JSDoc type expression could not be parsed."""

    def __init__(self, message: str, text: str, position: int):
        super().__init__(message, details={"text": text, "position": position})
        self.text = text
        self.position = position


# ============================================================
# Conversion Errors (abort the whole call)
# ============================================================


class ConversionError(FlowgenError):
    """Structural failure while building the declaration."""

    pass


class UnresolvableNameError(ConversionError):
    """No dotted name could be derived for a documented construct."""

    pass


class ReservedSegmentError(ConversionError):
    """A name path uses the segment reserved for tree bookkeeping."""

    pass

