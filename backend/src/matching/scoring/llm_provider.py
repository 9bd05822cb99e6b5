"""AI-backed scoring provider."""

from pydantic import ValidationError

from domain.ai.ports import LLMError, LLMProviderPort
from domain.matching.models import BriefProfile, DesignerProfile, MatchResult
from domain.matching.ports import ScoringProviderError, ScoringProviderPort
from observability.logging_config import get_logger
from .prompts import build_messages
from .schemas import AIMatchAnalysis

logger = get_logger(__name__)


class LLMScoringProvider(ScoringProviderPort):
    """Scores a designer by asking a language model for a structured assessment.

    Every failure mode (transport error, empty content, no JSON object,
    schema mismatch) is raised as ScoringProviderError. No field of an
    unvalidated answer is used.
    """

    def __init__(self, llm: LLMProviderPort, temperature: float = 0.2, max_tokens: int = 1500):
        """
        Args:
            llm: Chat-completion adapter
            temperature: Sampling temperature passed to the model
            max_tokens: Completion token limit passed to the model
        """
        self.llm = llm
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.name = llm.name

    async def score(self, designer: DesignerProfile, brief: BriefProfile) -> MatchResult:
        try:
            completion = await self.llm.complete_json(
                build_messages(designer, brief),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except LLMError as e:
            raise ScoringProviderError(f"AI request failed: {str(e)}") from e

        if completion.parsed_json is None:
            raise ScoringProviderError("AI response contained no JSON object")

        try:
            analysis = AIMatchAnalysis.model_validate(completion.parsed_json)
        except ValidationError as e:
            logger.warning(
                f"AI response failed schema validation: {e.error_count()} error(s)",
                extra={"designer_id": designer.id, "provider": self.name},
            )
            raise ScoringProviderError(f"AI response failed schema validation: {str(e)}") from e

        return analysis.to_match_result(provider=self.name)
