"""
AI Service layer for CareerBridge.

Routes an ActionRequest to the selected provider client, runs the matching
career operation and wraps the parsed JSON result in an ActionResponse.
Provider and parsing failures are reported inside the envelope; a missing
provider credential and invalid parameters are raised.
"""
import json
import logging
import re
from functools import lru_cache
from typing import Optional, Dict, Any, List

from pydantic import ValidationError as PydanticValidationError

from app.core import config
from app.core.errors import ConfigurationError, ExternalServiceError, ValidationError
from app.llm.gemini_provider import GeminiClient
from app.llm.groq_provider import GroqClient
from app.llm.provider import AIClient
from app.schemas.ai import (
    ActionKind,
    ActionRequest,
    ActionResponse,
    ContentOptions,
    ExtractSkillsOptions,
    Provider,
    QuestionOptions,
    RoadmapOptions,
)

logger = logging.getLogger(__name__)

_OPTIONS_BY_ACTION = {
    ActionKind.EXTRACT_SKILLS: ExtractSkillsOptions,
    ActionKind.GENERATE_ROADMAP: RoadmapOptions,
    ActionKind.ASK_QUESTION: QuestionOptions,
    ActionKind.GENERATE_CONTENT: ContentOptions,
}

_FENCED_JSON = re.compile(r"^\s*```(?:json)?\s*(.*?)\s*```\s*$", re.DOTALL)


def parse_options(action: ActionKind, parameters: Optional[Dict[str, Any]]):
    """
    Convert the open parameters map into the typed options of an action.

    Raises:
        ValidationError: A known parameter has the wrong type or range
    """
    params = dict(parameters or {})
    if action == ActionKind.GENERATE_CONTENT:
        # Content generation shows the whole map to the model
        params = {
            "content_type": params.get("content_type") or "generic",
            "parameters": parameters,
        }
    try:
        return _OPTIONS_BY_ACTION[action].model_validate(params)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ValidationError(f"Invalid parameters for {action.value}: {problems}") from e


def parse_ai_json(text: str) -> Any:
    """
    Parse provider output as JSON.

    A single surrounding Markdown code fence is tolerated.

    Raises:
        ExternalServiceError: Output is not valid JSON
    """
    match = _FENCED_JSON.match(text or "")
    candidate = match.group(1) if match else text
    try:
        return json.loads(candidate)
    except (TypeError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to parse JSON from AI response: {(text or '')[:100]}")
        raise ExternalServiceError(f"Failed to parse AI response: {e}") from e


class AIService:
    """Dispatches AI actions to whichever provider the caller selects."""

    def __init__(self, gemini_client: Optional[AIClient] = None, groq_client: Optional[AIClient] = None):
        self._clients: Dict[Provider, Optional[AIClient]] = {
            Provider.GEMINI: gemini_client,
            Provider.GROQ: groq_client,
        }
        if not self.available_providers():
            logger.warning("No AI API keys configured. AI features will not be available.")

    @classmethod
    def from_config(cls) -> "AIService":
        """Build clients for every provider whose API key is configured."""
        retry_policy = {
            "max_retries": config.AI_MAX_RETRIES,
            "backoff_seconds": config.AI_RETRY_BACKOFF_SECONDS,
        }
        gemini = GeminiClient(config.GEMINI_API_KEY, **retry_policy) if config.GEMINI_API_KEY else None
        groq = GroqClient(config.GROQ_API_KEY, **retry_policy) if config.GROQ_API_KEY else None
        return cls(gemini_client=gemini, groq_client=groq)

    def available_providers(self) -> List[Provider]:
        return [provider for provider, client in self._clients.items() if client is not None]

    def get_client(self, provider: Provider) -> AIClient:
        """
        Resolve a provider to its client.

        Raises:
            ConfigurationError: The provider's API key was not configured
        """
        client = self._clients.get(provider)
        if client is None:
            label = "Gemini" if provider == Provider.GEMINI else "Groq"
            raise ConfigurationError(f"{label} API key not configured")
        return client

    def process_action(self, request: ActionRequest) -> ActionResponse:
        """
        Run one AI action and wrap the outcome.

        Returns:
            ActionResponse with success=True and the parsed JSON, or
            success=False with {"error": message} when the provider call or
            JSON parsing fails

        Raises:
            ConfigurationError: Selected provider is not configured
            ValidationError: Parameters do not fit the action
        """
        logger.info(f"Processing AI action: {request.action.value} with provider: {request.provider.value}")

        client = self.get_client(request.provider)
        options = parse_options(request.action, request.parameters)

        try:
            data = self._execute_action(client, request.action, request.input, options)
        except ExternalServiceError as e:
            logger.warning(f"AI action {request.action.value} failed on {request.provider.value}: {e.message}")
            return ActionResponse(
                success=False,
                data={"error": e.message},
                provider=request.provider,
                message=e.message,
            )

        return ActionResponse(success=True, data=data, provider=request.provider, message=None)

    def _execute_action(self, client: AIClient, action: ActionKind, input_text: str, options) -> Any:
        return parse_ai_json(client.run_action(action, input_text, options))


@lru_cache
def get_ai_service() -> AIService:
    """Process-wide AIService dependency, built from the environment on first use."""
    return AIService.from_config()
