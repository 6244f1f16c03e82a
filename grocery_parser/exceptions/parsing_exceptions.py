"""
Custom exception classes for the recipe ingredient pipeline
"""

from typing import Optional


class GroceryParserError(Exception):
    """Base exception for the grocery parser"""
    pass


class InvalidURLError(GroceryParserError):
    """Raised when a recipe URL cannot be used for fetching"""
    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Invalid recipe URL: '{url}'")


class FetchError(GroceryParserError):
    """Raised when the recipe page cannot be fetched or decoded"""
    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        if status_code is not None:
            super().__init__(f"Failed to fetch {url} (HTTP {status_code}): {reason}")
        else:
            super().__init__(f"Failed to fetch {url}: {reason}")


class LLMAPIError(GroceryParserError):
    """Raised when the LLM relay answers with a non-200 status"""
    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"LLM relay error: HTTP {status_code} {body[:200]}".rstrip())


class LLMParsingError(GroceryParserError):
    """Raised when the LLM relay envelope or content is malformed"""
    def __init__(self, original_error: str):
        self.original_error = original_error
        super().__init__(f"LLM response parsing failed: {original_error}")


class LowConfidenceError(GroceryParserError):
    """Confidence gate rejection for LLM-derived ingredient lists"""
    def __init__(self, score: int):
        self.score = score
        super().__init__(f"Low confidence score ({score}%) - possible parsing errors")


class LowVerificationError(GroceryParserError):
    """Verification gate rejection for LLM-derived ingredient lists"""
    def __init__(self, score: int):
        self.score = score
        super().__init__(
            f"Low verification score ({score}%) - ingredients may be incorrect "
            f"or generated rather than extracted"
        )
