"""
Common: exceptions and observability shared by all layers.
"""

from jsdoc_flowgen.common.exceptions import (
    ConversionError,
    FlowgenError,
    MalformedDocCommentError,
    ParsingError,
    ReservedSegmentError,
    TypeExpressionSyntaxError,
    UnresolvableNameError,
)
from jsdoc_flowgen.common.observability import get_logger, reset_logging

__all__ = [
    "FlowgenError",
    "ParsingError",
    "MalformedDocCommentError",
    "TypeExpressionSyntaxError",
    "ConversionError",
    "UnresolvableNameError",
    "ReservedSegmentError",
    "get_logger",
    "reset_logging",
]
