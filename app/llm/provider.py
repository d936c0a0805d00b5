"""
AI client interface shared by every remote provider.

Providers implement `generate`; the four career operations are defined once
here on top of it, so the dispatch layer never depends on a concrete provider.
"""
import logging
import time
from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, Callable, TypeVar

from app.core.errors import ExternalServiceError
from app.llm import prompts
from app.schemas.ai import ActionKind, ContentOptions, QuestionOptions, RoadmapOptions

logger = logging.getLogger(__name__)

T = TypeVar("T")

# HTTP statuses worth another attempt
RETRYABLE_STATUSES = {408, 429, 500, 502, 503, 504}


def is_retryable_status(status: int) -> bool:
    return status in RETRYABLE_STATUSES


def with_retries(
    call: Callable[[], T],
    max_retries: int = 0,
    backoff_seconds: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Run `call`, retrying retryable ExternalServiceErrors with exponential backoff.

    Args:
        call: Zero-argument function performing one remote attempt
        max_retries: Extra attempts after the first (0 = single attempt)
        backoff_seconds: Delay before the first retry, doubled each time
        sleep: Sleep function (injectable for tests)

    Returns:
        Result of the first successful attempt

    Raises:
        ExternalServiceError: Last failure once attempts are exhausted, or any
            non-retryable failure immediately
    """
    attempt = 0
    while True:
        try:
            return call()
        except ExternalServiceError as e:
            if not e.retryable or attempt >= max_retries:
                raise
            delay = backoff_seconds * (2 ** attempt)
            attempt += 1
            logger.warning(f"Retrying AI call ({attempt}/{max_retries}) in {delay:.1f}s: {e}")
            sleep(delay)


class AIClient(ABC):
    """Abstract base class for AI providers."""

    name: str = ""
    default_model: str = ""

    def __init__(self, max_retries: int = 0, backoff_seconds: float = 1.0):
        self.max_retries = max_retries
        self.backoff_seconds = backoff_seconds

    @abstractmethod
    def _generate_once(self, prompt: str, model: str, temperature: float, json_mode: bool) -> str:
        """Issue exactly one request and return the first completion's text."""

    def generate(
        self,
        prompt: str,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        json_mode: bool = False,
    ) -> str:
        """
        Generate a completion for a single user prompt.

        Args:
            prompt: Prompt text
            model: Model identifier (defaults to the provider's default model)
            temperature: Sampling temperature (defaults to 0.7)
            json_mode: Ask the provider to constrain output to valid JSON

        Returns:
            Raw completion text, unparsed

        Raises:
            ExternalServiceError: Transport failure, non-2xx status, empty or
                malformed response
        """
        if not prompt:
            raise ValueError("prompt must not be empty")
        model = model or self.default_model
        temperature = 0.7 if temperature is None else temperature
        return with_retries(
            lambda: self._generate_once(prompt, model, temperature, json_mode),
            max_retries=self.max_retries,
            backoff_seconds=self.backoff_seconds,
        )

    def close(self) -> None:
        """Release pooled connections."""

    # ============================================
    # Career operations
    # ============================================

    def run_action(self, action: ActionKind, input_text: str, options=None) -> str:
        """Render the action's prompt and generate at the action's temperature in JSON mode."""
        prompt = prompts.build_prompt(action, input_text, options)
        return self.generate(prompt, temperature=prompts.ACTION_TEMPERATURES[action], json_mode=True)

    def extract_skills(self, cv_text: str) -> str:
        """Extract skills, roles and background from CV text."""
        return self.run_action(ActionKind.EXTRACT_SKILLS, cv_text)

    def generate_roadmap(
        self,
        tech_stack: str,
        current_skills: Optional[str] = None,
        timeframe_months: Optional[int] = None,
        learning_hours_per_week: Optional[int] = None,
    ) -> str:
        """Generate a phased learning roadmap for a tech stack or role."""
        options = RoadmapOptions(
            current_skills=current_skills,
            timeframe_months=timeframe_months,
            learning_hours_per_week=learning_hours_per_week,
        )
        return self.run_action(ActionKind.GENERATE_ROADMAP, tech_stack, options)

    def answer_question(self, question: str, context: Optional[str] = None) -> str:
        """Answer a career question, optionally with profile context."""
        return self.run_action(ActionKind.ASK_QUESTION, question, QuestionOptions(context=context))

    def generate_content(
        self,
        content_type: str,
        input_text: str,
        parameters: Optional[Dict[str, Any]] = None,
    ) -> str:
        """Generate career content such as summaries or cover letters."""
        options = ContentOptions(content_type=content_type, parameters=parameters)
        return self.run_action(ActionKind.GENERATE_CONTENT, input_text, options)
