"""Suggest ICD-10-CM / CPT codes for a piece of clinical text."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field

from clinic_ai.flows.base import BaseFlow, CamelModel
from clinic_ai.llm.oracle import GenerativeOracle
from clinic_ai.prompts import MEDICAL_CODES_PROMPT_TEMPLATE

CODING_DISCLAIMER = (
    "AI-generated coding suggestions are for informational purposes only and require "
    "review and verification by a qualified medical coder or clinician. Final coding "
    "decisions are the responsibility of the healthcare provider."
)


class MedicalCodesInput(CamelModel):
    clinical_text: str = Field(
        min_length=1,
        description="Clinical text to analyze, typically diagnosis, assessment and plan.",
    )


class MedicalCodeSuggestion(CamelModel):
    code_type: str = Field(description="The type of code (e.g., 'ICD-10-CM', 'CPT').")
    code: str = Field(description="The code itself (e.g., 'J02.9', '99213').")
    description: str = Field(description="A brief description of the code.")
    reasoning: Optional[str] = Field(default=None, description="Why this code fits the text.")


class MedicalCodesOutput(CamelModel):
    suggested_codes: list[MedicalCodeSuggestion] = Field(description="Suggested medical codes.")
    confidence_notes: Optional[str] = Field(
        default=None, description="Notes on confidence in the suggestions or limitations."
    )
    disclaimer: str = Field(default=CODING_DISCLAIMER, description="Standard coding disclaimer.")


class MedicalCodesFlow(BaseFlow):
    name = "medical_code_suggestion"
    flow_key = "MEDICAL_CODES"
    input_model = MedicalCodesInput
    output_model = MedicalCodesOutput
    failure_message = "AI failed to generate medical coding suggestions."

    def render_prompt(self, flow_input: MedicalCodesInput) -> str:
        return MEDICAL_CODES_PROMPT_TEMPLATE.format(clinical_text=flow_input.clinical_text)

    def post_process(
        self, flow_input: MedicalCodesInput, output: MedicalCodesOutput
    ) -> MedicalCodesOutput:
        if output.disclaimer.strip():
            return output
        return output.model_copy(update={"disclaimer": CODING_DISCLAIMER})


medical_codes_flow = MedicalCodesFlow()


async def suggest_medical_codes(payload: Any, oracle: GenerativeOracle) -> MedicalCodesOutput:
    return await medical_codes_flow.invoke(payload, oracle)
