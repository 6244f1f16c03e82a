"""
Exceptions module exports
"""

from .parsing_exceptions import (
    GroceryParserError,
    InvalidURLError,
    FetchError,
    LLMAPIError,
    LLMParsingError,
    LowConfidenceError,
    LowVerificationError
)

__all__ = [
    'GroceryParserError',
    'InvalidURLError',
    'FetchError',
    'LLMAPIError',
    'LLMParsingError',
    'LowConfidenceError',
    'LowVerificationError'
]
