"""Unit tests for the AI-backed scoring provider and its response schema."""

from uuid import uuid4

import pytest
from pydantic import ValidationError

from domain.ai.ports import LLMCompletion, LLMProviderPort, LLMServiceError, LLMTimeoutError
from domain.matching.models import BriefProfile, DesignerProfile
from domain.matching.ports import ScoringProviderError
from matching.scoring.llm_provider import LLMScoringProvider
from matching.scoring.schemas import AIMatchAnalysis


class FakeLLM(LLMProviderPort):
    """Returns a preset parsed JSON object, or raises a preset error."""

    name = "fake-llm"

    def __init__(self, parsed_json=None, error=None):
        self.parsed_json = parsed_json
        self.error = error
        self.calls = []

    async def complete_json(self, messages, *, temperature, max_tokens):
        self.calls.append({"messages": messages, "temperature": temperature, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        return LLMCompletion(
            raw_output="{}",
            parsed_json=self.parsed_json,
            provider=self.name,
            model="fake-model",
        )


@pytest.fixture
def designer():
    return DesignerProfile(
        id=uuid4(),
        availability="available",
        fields={"title": "Brand Designer", "email": "secret@example.com"},
    )


@pytest.fixture
def brief():
    return BriefProfile(
        id=uuid4(),
        client_id=uuid4(),
        design_category="brand-identity",
        budget_range="mid",
        timeline_type="standard",
    )


VALID_ANSWER = {
    "score": 87,
    "confidence": "High",
    "reasons": ["Strong fintech portfolio", "Minimal style", "Fast turnaround", "Extra reason"],
    "personalizedReasons": ["Built identities for three payment startups"],
    "uniqueValue": "Deep regulated-industry experience",
    "riskLevel": "low",
    "matchSummary": "Excellent fit",
}


class TestLLMScoringProvider:
    """Valid answers become MatchResults; everything else is an error"""

    @pytest.mark.asyncio
    async def test_valid_answer(self, designer, brief):
        llm = FakeLLM(parsed_json=VALID_ANSWER)
        result = await LLMScoringProvider(llm, temperature=0.2, max_tokens=1500).score(designer, brief)

        assert result.score == 87
        assert result.confidence == "high"
        assert result.provider == "fake-llm"
        assert len(result.reasons) == 3
        assert result.personalized_reasons == ["Built identities for three payment startups"]
        assert result.unique_value == "Deep regulated-industry experience"
        assert llm.calls[0]["temperature"] == 0.2
        assert llm.calls[0]["max_tokens"] == 1500

    @pytest.mark.asyncio
    async def test_prompt_never_contains_email(self, designer, brief):
        llm = FakeLLM(parsed_json=VALID_ANSWER)
        await LLMScoringProvider(llm).score(designer, brief)
        for message in llm.calls[0]["messages"]:
            assert "secret@example.com" not in message.content

    @pytest.mark.asyncio
    async def test_no_json_object_raises(self, designer, brief):
        with pytest.raises(ScoringProviderError):
            await LLMScoringProvider(FakeLLM(parsed_json=None)).score(designer, brief)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("answer", [
        {"reasons": ["no score"]},
        {"score": 140, "reasons": ["too high"]},
        {"score": -3, "reasons": ["negative"]},
        {"score": "high", "reasons": ["not a number"]},
        {"score": 80, "reasons": []},
        {"score": 80, "reasons": ["  ", ""]},
        {"score": 80, "reasons": ["ok"], "confidence": "certain"},
    ])
    async def test_schema_violations_raise(self, designer, brief, answer):
        with pytest.raises(ScoringProviderError):
            await LLMScoringProvider(FakeLLM(parsed_json=answer)).score(designer, brief)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [LLMTimeoutError("slow"), LLMServiceError("down")])
    async def test_transport_errors_raise(self, designer, brief, error):
        with pytest.raises(ScoringProviderError):
            await LLMScoringProvider(FakeLLM(error=error)).score(designer, brief)


class TestAIMatchAnalysis:
    """Schema normalization details"""

    def test_accepts_snake_case_names(self):
        analysis = AIMatchAnalysis.model_validate({
            "score": 70.6,
            "reasons": ["ok"],
            "personalized_reasons": ["personal"],
            "match_summary": "fine",
        })
        result = analysis.to_match_result(provider="x")
        assert result.score == 71
        assert result.personalized_reasons == ["personal"]
        assert result.match_summary == "fine"

    def test_blank_reasons_are_dropped(self):
        analysis = AIMatchAnalysis.model_validate({"score": 60, "reasons": ["  ", "Real reason "]})
        assert analysis.reasons == ["Real reason"]

    def test_only_blank_reasons_rejected(self):
        with pytest.raises(ValidationError):
            AIMatchAnalysis.model_validate({"score": 80, "reasons": ["  ", ""]})

    def test_personalized_defaults_to_reasons_and_strengths(self):
        analysis = AIMatchAnalysis.model_validate({
            "score": 60,
            "reasons": ["a"],
            "strengths": ["b", "c"],
        })
        assert analysis.to_match_result(provider="x").personalized_reasons == ["a", "b", "c"]

    def test_weaknesses_used_when_no_challenges(self):
        analysis = AIMatchAnalysis.model_validate({"score": 60, "reasons": ["a"], "weaknesses": ["slow replies"]})
        assert analysis.to_match_result(provider="x").challenges == ["slow replies"]

    def test_unknown_keys_ignored(self):
        analysis = AIMatchAnalysis.model_validate({"score": 60, "reasons": ["a"], "debug": {"x": 1}})
        assert analysis.score == 60
