"""
Google Gemini provider implementation (REST generateContent API).
"""
import logging
from typing import Optional, Dict, Any

import httpx

from app.core.config import GEMINI_BASE_URL, GEMINI_MODEL, AI_TIMEOUT_SECONDS
from app.core.errors import ExternalServiceError
from app.core.logging_config import redact_url
from app.llm.provider import AIClient, is_retryable_status

logger = logging.getLogger(__name__)


class GeminiClient(AIClient):
    """Gemini provider using `POST {base}/models/{model}:generateContent`."""

    name = "gemini"
    default_model = GEMINI_MODEL

    def __init__(
        self,
        api_key: str,
        base_url: str = GEMINI_BASE_URL,
        timeout: float = AI_TIMEOUT_SECONDS,
        http_client: Optional[httpx.Client] = None,
        **kwargs
    ):
        """Initialize Gemini client."""
        super().__init__(**kwargs)
        if not api_key:
            raise ValueError("GEMINI_API_KEY not configured")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.client = http_client or httpx.Client(timeout=timeout)
        logger.info("Gemini provider initialized")

    def build_request(self, prompt: str, temperature: float, json_mode: bool) -> Dict[str, Any]:
        """Request envelope: one content holding one text part."""
        generation_config: Dict[str, Any] = {"temperature": temperature}
        if json_mode:
            generation_config["responseMimeType"] = "application/json"
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }

    def _generate_once(self, prompt: str, model: str, temperature: float, json_mode: bool) -> str:
        url = f"{self.base_url}/models/{model}:generateContent"
        body = self.build_request(prompt, temperature, json_mode)

        try:
            response = self.client.post(url, params={"key": self.api_key}, json=body)
        except httpx.HTTPError as e:
            logger.error(f"Gemini API request failed: {redact_url(str(e))}")
            raise ExternalServiceError(f"Gemini API error: {redact_url(str(e))}", retryable=True) from e

        if not response.is_success:
            logger.error(f"Gemini API error {response.status_code}: {response.text}")
            raise ExternalServiceError(
                f"Gemini API returned {response.status_code}: {response.text}",
                status=response.status_code,
                retryable=is_retryable_status(response.status_code),
            )

        try:
            payload = response.json()
            candidates = payload["candidates"]
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Failed to parse Gemini response: {e}")
            raise ExternalServiceError(f"Failed to parse Gemini response: {e}") from e

        try:
            text = candidates[0]["content"]["parts"][0]["text"]
        except (IndexError, KeyError, TypeError):
            raise ExternalServiceError("No response from Gemini")
        if not isinstance(text, str):
            raise ExternalServiceError("Failed to parse Gemini response: text part is not a string")
        return text

    def close(self) -> None:
        self.client.close()
