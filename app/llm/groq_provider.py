"""
Groq provider implementation.

Groq serves an OpenAI-compatible chat completions API, so the official
OpenAI SDK is pointed at the Groq base URL.
"""
import logging
from typing import Optional, Dict, Any

import httpx
from openai import OpenAI, APIConnectionError, APIStatusError, APIError

from app.core.config import GROQ_BASE_URL, GROQ_MODEL, AI_TIMEOUT_SECONDS
from app.core.errors import ExternalServiceError
from app.llm.provider import AIClient, is_retryable_status

logger = logging.getLogger(__name__)


class GroqClient(AIClient):
    """Groq provider using `POST {base}/chat/completions`."""

    name = "groq"
    default_model = GROQ_MODEL

    def __init__(
        self,
        api_key: str,
        base_url: str = GROQ_BASE_URL,
        timeout: float = AI_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None,
        **kwargs
    ):
        """Initialize Groq client."""
        super().__init__(**kwargs)
        if not api_key:
            raise ValueError("GROQ_API_KEY not configured")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        # Retries are handled by AIClient.generate, not by the SDK
        self.client = OpenAI(
            api_key=api_key,
            base_url=self.base_url,
            timeout=timeout,
            max_retries=0,
            http_client=http_client,
        )
        logger.info("Groq provider initialized")

    def build_request(self, prompt: str, model: str, temperature: float, json_mode: bool) -> Dict[str, Any]:
        """Request envelope: a single user message."""
        request: Dict[str, Any] = {
            "model": model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
        }
        if json_mode:
            request["response_format"] = {"type": "json_object"}
        return request

    def _generate_once(self, prompt: str, model: str, temperature: float, json_mode: bool) -> str:
        try:
            response = self.client.chat.completions.create(
                **self.build_request(prompt, model, temperature, json_mode)
            )
        except APIStatusError as e:
            error_text = e.response.text
            logger.error(f"Groq API error {e.status_code}: {error_text}")
            raise ExternalServiceError(
                f"Groq API returned {e.status_code}: {error_text}",
                status=e.status_code,
                retryable=is_retryable_status(e.status_code),
            ) from e
        except APIConnectionError as e:
            logger.error(f"Groq API request failed: {e}")
            raise ExternalServiceError(f"Groq API error: {e}", retryable=True) from e
        except (APIError, ValueError) as e:
            logger.error(f"Failed to parse Groq response: {e}")
            raise ExternalServiceError(f"Failed to parse Groq response: {e}") from e

        if isinstance(response, str):
            raise ExternalServiceError("Failed to parse Groq response: unexpected non-JSON body")

        choices = getattr(response, "choices", None)
        if not choices:
            raise ExternalServiceError("No response from Groq")

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not isinstance(content, str):
            raise ExternalServiceError("Failed to parse Groq response: missing message content")
        return content

    def close(self) -> None:
        self.client.close()
