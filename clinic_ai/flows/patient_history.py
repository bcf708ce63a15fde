"""Summarize a patient's medical history, allergies and medications."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from pydantic import Field

from clinic_ai.flows.base import BaseFlow, CamelModel
from clinic_ai.llm.oracle import GenerativeOracle
from clinic_ai.prompts import PATIENT_HISTORY_PROMPT_TEMPLATE

NONE_REPORTED = "None reported."
NO_HISTORY_NOTES = "No specific history notes provided."
_MEDICATION_KEYS = ("name", "dosage", "frequency")


class Medication(CamelModel):
    name: str
    dosage: str
    frequency: str


class PatientHistoryInput(CamelModel):
    patient_id: str = Field(min_length=1, description="The unique identifier for the patient.")
    medical_history_notes: Optional[str] = Field(
        default=None, description="Past medical history, conditions, and surgeries."
    )
    allergies: list[str] = Field(default_factory=list, description="Known allergies.")
    current_medications: list[Medication] = Field(
        default_factory=list, description="Current medications with dosage and frequency."
    )


class PatientHistoryOutput(CamelModel):
    summary: str = Field(description="A concise summary of the patient's key medical history points.")


def coerce_allergies(raw: Any) -> list[str]:
    if isinstance(raw, str):
        return [item.strip() for item in raw.split(",") if item.strip()]
    if isinstance(raw, list):
        return [item.strip() for item in raw if isinstance(item, str) and item.strip()]
    return []


def coerce_medications(raw: Any) -> list[Any]:
    if isinstance(raw, str):
        medications = []
        for line in raw.splitlines():
            parts = line.split()
            if not parts:
                continue
            medications.append(
                {
                    "name": parts[0],
                    "dosage": parts[1] if len(parts) > 1 else "",
                    "frequency": " ".join(parts[2:]),
                }
            )
        return medications
    if isinstance(raw, list):
        return [
            item
            for item in raw
            if isinstance(item, Medication)
            or (isinstance(item, Mapping) and all(key in item for key in _MEDICATION_KEYS))
        ]
    return []


def normalize_patient_history_payload(payload: Any) -> Any:
    """Accept the loose shapes stored records arrive in (strings for lists)."""
    if not isinstance(payload, Mapping):
        return payload
    result = dict(payload)
    notes_key = "medical_history_notes" if "medical_history_notes" in result else "medicalHistoryNotes"
    if not result.get(notes_key):
        result.pop(notes_key, None)

    allergies_key = "allergies"
    result[allergies_key] = coerce_allergies(result.get(allergies_key))

    meds_key = "current_medications" if "current_medications" in result else "currentMedications"
    result[meds_key] = coerce_medications(result.get(meds_key))
    return result


def render_list_section(items: list[str]) -> str:
    if not items:
        return NONE_REPORTED
    return "\n".join(f"- {item}" for item in items)


class PatientHistoryFlow(BaseFlow):
    name = "patient_history_summary"
    flow_key = "PATIENT_HISTORY"
    input_model = PatientHistoryInput
    output_model = PatientHistoryOutput
    failure_message = "AI failed to generate a patient history summary."

    def prepare(self, payload: Any) -> Any:
        return normalize_patient_history_payload(payload)

    def render_prompt(self, flow_input: PatientHistoryInput) -> str:
        return PATIENT_HISTORY_PROMPT_TEMPLATE.format(
            patient_id=flow_input.patient_id,
            history_section=flow_input.medical_history_notes or NO_HISTORY_NOTES,
            allergy_section=render_list_section(flow_input.allergies),
            medication_section=render_list_section(
                [f"{m.name} ({m.dosage}, {m.frequency})" for m in flow_input.current_medications]
            ),
        )


patient_history_flow = PatientHistoryFlow()


async def summarize_patient_history(
    payload: Any, oracle: GenerativeOracle
) -> PatientHistoryOutput:
    return await patient_history_flow.invoke(payload, oracle)
