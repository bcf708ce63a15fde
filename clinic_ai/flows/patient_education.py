"""Patient-facing education material about a condition."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import Field

from clinic_ai.flows.base import BaseFlow, CamelModel
from clinic_ai.llm.oracle import GenerativeOracle
from clinic_ai.prompts import PATIENT_EDUCATION_PROMPT_TEMPLATE

EDUCATION_DISCLAIMER = (
    "This information is for educational purposes only and should not replace advice "
    "from your healthcare provider. Always consult your doctor for any health concerns."
)

LanguageLevel = Literal["Simple", "Standard", "Detailed"]


class PatientEducationInput(CamelModel):
    condition: str = Field(min_length=1, description="The condition or diagnosis to explain.")
    patient_age: Optional[int] = Field(
        default=None, ge=0, description="Approximate age of the patient, to tailor the language."
    )
    language_level: LanguageLevel = Field(
        default="Standard", description="Desired complexity of the language used."
    )


class PatientEducationOutput(CamelModel):
    title: str = Field(description="A suitable title for the material.")
    explanation: str = Field(
        description="What the condition is, common causes, and general outlook."
    )
    symptoms_to_watch: Optional[list[str]] = Field(
        default=None, description="Symptoms to monitor or that indicate worsening."
    )
    care_tips: Optional[list[str]] = Field(
        default=None, description="Self-care tips and lifestyle advice."
    )
    when_to_seek_help: Optional[list[str]] = Field(
        default=None, description="When to contact a doctor or seek emergency care."
    )
    disclaimer: str = Field(default=EDUCATION_DISCLAIMER, description="Standard medical disclaimer.")


def render_age_section(patient_age: Optional[int]) -> str:
    if patient_age is None:
        return ""
    return (
        f"\nTailor the language appropriately for a patient approximately {patient_age} years old. "
        "For younger patients (e.g., under 16), use simpler language and analogies if helpful. "
        "For older patients, maintain clarity and directness.\n"
    )


class PatientEducationFlow(BaseFlow):
    name = "patient_education"
    flow_key = "PATIENT_EDUCATION"
    input_model = PatientEducationInput
    output_model = PatientEducationOutput
    failure_message = "AI failed to generate patient education material."

    def render_prompt(self, flow_input: PatientEducationInput) -> str:
        return PATIENT_EDUCATION_PROMPT_TEMPLATE.format(
            condition=flow_input.condition,
            age_section=render_age_section(flow_input.patient_age),
            language_level=flow_input.language_level,
        )

    def post_process(
        self, flow_input: PatientEducationInput, output: PatientEducationOutput
    ) -> PatientEducationOutput:
        if output.disclaimer.strip():
            return output
        return output.model_copy(update={"disclaimer": EDUCATION_DISCLAIMER})


patient_education_flow = PatientEducationFlow()


async def generate_patient_education(
    payload: Any, oracle: GenerativeOracle
) -> PatientEducationOutput:
    return await patient_education_flow.invoke(payload, oracle)
