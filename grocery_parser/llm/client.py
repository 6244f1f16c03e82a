"""
Client for the completion relay that fronts the LLM.

The relay takes {"prompt": ...} and answers with {"success", "content",
"metrics"?}. One request per call, no retry.
"""

import logging
import time
from typing import Optional

import httpx
import logfire
from pydantic import ValidationError

from ..exceptions import LLMAPIError, LLMParsingError
from ..models.llm_models import RelayEnvelope

logger = logging.getLogger(__name__)


class LLMFallbackClient:
    """Sends parsing prompts to the relay and returns the raw completion text"""

    def __init__(self, relay_url: str, timeout: Optional[httpx.Timeout] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.relay_url = relay_url
        self.timeout = timeout or httpx.Timeout(30.0, connect=5.0)
        self.transport = transport

    async def complete(self, prompt: str) -> str:
        """
        Send a prompt to the relay.

        Args:
            prompt: Full prompt text

        Returns:
            Completion content as returned by the model

        Raises:
            LLMAPIError: Relay answered with a non-200 status or could not be reached
            LLMParsingError: Relay envelope is malformed or reports failure
        """
        start = time.time()
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.relay_url, json={"prompt": prompt})
        except httpx.TimeoutException as e:
            logfire.warn("llm_relay_timeout", relay_url=self.relay_url, error=str(e))
            raise LLMAPIError(504, f"Relay timed out: {e}") from e
        except httpx.HTTPError as e:
            logfire.error("llm_relay_unreachable", relay_url=self.relay_url, error=str(e))
            raise LLMAPIError(503, f"Relay unreachable: {e}") from e

        if response.status_code != 200:
            raise LLMAPIError(response.status_code, response.text)

        try:
            envelope = RelayEnvelope.model_validate_json(response.content)
        except ValidationError as e:
            raise LLMParsingError(f"Invalid relay envelope: {e.error_count()} validation error(s)") from e

        if not envelope.success or not envelope.content:
            raise LLMParsingError(envelope.error or "Relay reported no content")

        elapsed = time.time() - start
        if envelope.metrics:
            logfire.info("llm_relay_metrics",
                         api_call_time=envelope.metrics.get("apiCallTime"),
                         prompt_tokens=envelope.metrics.get("promptTokens"),
                         completion_tokens=envelope.metrics.get("completionTokens"),
                         total_tokens=envelope.metrics.get("totalTokens"),
                         elapsed=elapsed)
        logger.info(f"LLM relay answered in {elapsed:.2f}s ({len(envelope.content)} chars)")
        return envelope.content
