"""Prompt construction for AI scoring.

Designer data reaches the prompt only through
``domain.matching.field_capabilities.matching_view``; names, contact details
and administrative flags are never sent to the model.
"""

import json

from domain.ai.ports import LLMMessage
from domain.matching.field_capabilities import get_capability, matching_view
from domain.matching.models import BriefProfile, DesignerProfile

SYSTEM_PROMPT = (
    "You are an expert at matching freelance designers with client projects. "
    "Assess how well one designer fits one project brief. Be specific and ground "
    "every reason in details from the brief and the designer profile. "
    "Answer with a single JSON object and nothing else."
)

RESPONSE_FORMAT = """{
  "score": <integer 0-100>,
  "confidence": "high" | "medium" | "low",
  "reasons": ["<short reason>", "<short reason>", "<short reason>"],
  "personalizedReasons": ["<reason addressed to the client>", "..."],
  "uniqueValue": "<one sentence on what this designer uniquely brings>",
  "challenges": ["<potential concern>"],
  "riskLevel": "low" | "medium" | "high",
  "matchSummary": "<two or three sentences>"
}"""


def _format_value(value) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, sort_keys=True)
    return str(value)


def format_designer(designer: DesignerProfile) -> str:
    lines = []
    for name, value in matching_view(designer.fields).items():
        lines.append(f"- {get_capability(name).label}: {_format_value(value)}")
    return "\n".join(lines)


def format_brief(brief: BriefProfile) -> str:
    return "\n".join([
        f"- Company: {brief.company_name or 'Not specified'}",
        f"- Industry: {brief.industry or 'Not specified'}",
        f"- Design category: {brief.design_category}",
        f"- Budget range: {brief.budget_range}",
        f"- Timeline: {brief.timeline_type}",
        f"- Desired styles: {_format_value(brief.styles) or 'Not specified'}",
        f"- Target audience: {brief.target_audience or 'Not specified'}",
        f"- Brand personality: {brief.brand_personality or 'Not specified'}",
        f"- Description: {brief.description or 'Not specified'}",
    ])


def build_scoring_prompt(designer: DesignerProfile, brief: BriefProfile) -> str:
    return (
        "PROJECT BRIEF:\n"
        f"{format_brief(brief)}\n\n"
        "DESIGNER PROFILE:\n"
        f"{format_designer(designer)}\n\n"
        "Score the fit from 0 to 100, weighing style alignment, industry experience, "
        "capacity for the budget and timeline, and track record.\n\n"
        f"Respond in exactly this JSON format:\n{RESPONSE_FORMAT}"
    )


def build_messages(designer: DesignerProfile, brief: BriefProfile) -> list[LLMMessage]:
    return [
        LLMMessage(role="system", content=SYSTEM_PROMPT),
        LLMMessage(role="user", content=build_scoring_prompt(designer, brief)),
    ]
