"""Summarize consultation notes into a short clinical record entry."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from clinic_ai.flows.base import BaseFlow, CamelModel
from clinic_ai.llm.oracle import GenerativeOracle
from clinic_ai.prompts import CONSULTATION_NOTES_PROMPT_TEMPLATE


class NoteSummaryInput(CamelModel):
    notes_to_summarize: str = Field(
        min_length=1,
        description="The combined clinical notes from the current consultation.",
    )


class NoteSummaryOutput(CamelModel):
    summary: str = Field(
        description="A concise summary of the notes, highlighting key points for the record.",
    )


class ConsultationNotesFlow(BaseFlow):
    name = "consultation_note_summarizer"
    flow_key = "NOTE_SUMMARY"
    input_model = NoteSummaryInput
    output_model = NoteSummaryOutput
    failure_message = "AI failed to generate a summary for the consultation notes."

    def render_prompt(self, flow_input: NoteSummaryInput) -> str:
        return CONSULTATION_NOTES_PROMPT_TEMPLATE.format(
            notes_to_summarize=flow_input.notes_to_summarize,
        )


consultation_notes_flow = ConsultationNotesFlow()


async def summarize_consultation_notes(
    payload: Any, oracle: GenerativeOracle
) -> NoteSummaryOutput:
    return await consultation_notes_flow.invoke(payload, oracle)
