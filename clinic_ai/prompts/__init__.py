"""Prompt exports."""

from clinic_ai.prompts.prompts import (
    APPOINTMENT_PARSER_PROMPT_TEMPLATE,
    CONSULTATION_NOTES_PROMPT_TEMPLATE,
    DIAGNOSIS_PROMPT_TEMPLATE,
    MEDICAL_CODES_PROMPT_TEMPLATE,
    PATIENT_EDUCATION_PROMPT_TEMPLATE,
    PATIENT_HISTORY_PROMPT_TEMPLATE,
    SCHEDULE_GENERATION_PROMPT_TEMPLATE,
    SCHEDULE_OPTIMIZATION_PROMPT_TEMPLATE,
    STAFF_PERFORMANCE_PROMPT_TEMPLATE,
)

__all__ = [
    "APPOINTMENT_PARSER_PROMPT_TEMPLATE",
    "CONSULTATION_NOTES_PROMPT_TEMPLATE",
    "DIAGNOSIS_PROMPT_TEMPLATE",
    "MEDICAL_CODES_PROMPT_TEMPLATE",
    "PATIENT_EDUCATION_PROMPT_TEMPLATE",
    "PATIENT_HISTORY_PROMPT_TEMPLATE",
    "SCHEDULE_GENERATION_PROMPT_TEMPLATE",
    "SCHEDULE_OPTIMIZATION_PROMPT_TEMPLATE",
    "STAFF_PERFORMANCE_PROMPT_TEMPLATE",
]
