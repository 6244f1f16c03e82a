"""
LLM fallback: prompt building, relay client, response validation and scoring
"""

from .client import LLMFallbackClient
from .prompts import build_parsing_prompt, estimate_token_count, truncate_content
from .response_parser import LLMParseOutcome, parse_llm_response
from .scoring import VerificationReport, calculate_confidence, verify_against_content

__all__ = [
    'LLMFallbackClient',
    'build_parsing_prompt',
    'estimate_token_count',
    'truncate_content',
    'LLMParseOutcome',
    'parse_llm_response',
    'VerificationReport',
    'calculate_confidence',
    'verify_against_content'
]
