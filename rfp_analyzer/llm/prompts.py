"""Prompt and JSON-schema construction for question answering."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from rfp_analyzer.llm.prompt_loader import load_prompt_template

NOT_SPECIFIED = "Not specified in RFP"
ANALYSIS_FAILED = "Analysis failed for this question. Please try again."


@dataclass(frozen=True)
class AnalysisPrompt:
    """Prompt text plus the answer shape the model is asked to honor."""

    text: str
    json_schema: dict[str, Any]


def build_answer_schema(questions: Sequence[str]) -> dict[str, Any]:
    """Object schema with exactly one string property per question."""
    return {
        "type": "object",
        "properties": {question: {"type": "string"} for question in questions},
        "additionalProperties": False,
    }


def build_analysis_prompt(questions: Sequence[str]) -> AnalysisPrompt:
    """Prompt for answering questions against an attached document."""
    return _render("chunk_analysis", questions)


def build_text_only_prompt(questions: Sequence[str]) -> AnalysisPrompt:
    """Fallback prompt used when the document cannot be attached."""
    return _render("text_only_analysis", questions)


def _render(template_name: str, questions: Sequence[str]) -> AnalysisPrompt:
    template = load_prompt_template(template_name)
    text = template.format(
        question_count=len(questions),
        questions="\n".join(questions),
        not_specified=NOT_SPECIFIED,
    )
    return AnalysisPrompt(text=text, json_schema=build_answer_schema(questions))
