"""Suggest possible conditions, next steps and urgency from a patient's record."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import Field

from clinic_ai.flows.base import BaseFlow, CamelModel
from clinic_ai.flows.patient_history import (
    NO_HISTORY_NOTES,
    Medication,
    normalize_patient_history_payload,
    render_list_section,
)
from clinic_ai.llm.oracle import GenerativeOracle
from clinic_ai.prompts import DIAGNOSIS_PROMPT_TEMPLATE

NOT_PROVIDED = "Not provided"
DIAGNOSIS_DISCLAIMER = (
    "This AI-generated information is for suggestive purposes only and not a substitute "
    "for professional medical diagnosis and judgment. Always consult with a qualified "
    "healthcare provider."
)

Level = Literal["High", "Medium", "Low"]


class DiagnosisInput(CamelModel):
    patient_id: str = Field(min_length=1, description="The unique identifier for the patient.")
    current_symptoms: str = Field(
        min_length=1, description="The patient's current symptoms or reason for visit."
    )
    medical_history_notes: Optional[str] = Field(
        default=None, description="Past medical history, conditions, and surgeries."
    )
    allergies: list[str] = Field(default_factory=list, description="Known allergies.")
    current_medications: list[Medication] = Field(
        default_factory=list, description="Current medications with dosage and frequency."
    )
    age: Optional[int] = Field(default=None, ge=0, description="The patient's age in years.")
    gender: Optional[str] = Field(default=None, description="e.g., Male, Female, Other.")


class PossibleCondition(CamelModel):
    name: str = Field(description="The name of the possible medical condition.")
    likelihood: Level = Field(description="The assessed likelihood of this condition.")
    reasoning: str = Field(description="Why the provided data suggests this condition.")


class DiagnosisOutput(CamelModel):
    possible_conditions: list[PossibleCondition] = Field(
        description="Possible conditions with their likelihood and reasoning."
    )
    suggested_next_steps: Optional[list[str]] = Field(
        default=None, description="Further tests, referrals or monitoring for the clinician."
    )
    urgency: Optional[Level] = Field(
        default=None, description="Potential urgency based on symptoms and history."
    )
    disclaimer: str = Field(default=DIAGNOSIS_DISCLAIMER, description="Mandatory disclaimer.")


class DiagnosisFlow(BaseFlow):
    name = "patient_condition_diagnosis"
    flow_key = "DIAGNOSIS"
    input_model = DiagnosisInput
    output_model = DiagnosisOutput
    failure_message = "AI failed to generate diagnostic suggestions."

    def prepare(self, payload: Any) -> Any:
        return normalize_patient_history_payload(payload)

    def render_prompt(self, flow_input: DiagnosisInput) -> str:
        return DIAGNOSIS_PROMPT_TEMPLATE.format(
            patient_id=flow_input.patient_id,
            age=NOT_PROVIDED if flow_input.age is None else flow_input.age,
            gender=flow_input.gender or NOT_PROVIDED,
            current_symptoms=flow_input.current_symptoms,
            history_section=flow_input.medical_history_notes or NO_HISTORY_NOTES,
            allergy_section=render_list_section(flow_input.allergies),
            medication_section=render_list_section(
                [f"{m.name} ({m.dosage}, {m.frequency})" for m in flow_input.current_medications]
            ),
        )

    def post_process(self, flow_input: DiagnosisInput, output: DiagnosisOutput) -> DiagnosisOutput:
        if output.disclaimer.strip():
            return output
        return output.model_copy(update={"disclaimer": DIAGNOSIS_DISCLAIMER})


diagnosis_flow = DiagnosisFlow()


async def diagnose_patient_condition(payload: Any, oracle: GenerativeOracle) -> DiagnosisOutput:
    return await diagnosis_flow.invoke(payload, oracle)
