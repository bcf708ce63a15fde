"""Flow exports and registry."""

from clinic_ai.flows.appointment_parser import appointment_parser_flow, book_appointment_with_ai
from clinic_ai.flows.consultation_notes import consultation_notes_flow, summarize_consultation_notes
from clinic_ai.flows.diagnosis import diagnose_patient_condition, diagnosis_flow
from clinic_ai.flows.medical_codes import medical_codes_flow, suggest_medical_codes
from clinic_ai.flows.patient_education import generate_patient_education, patient_education_flow
from clinic_ai.flows.patient_history import patient_history_flow, summarize_patient_history
from clinic_ai.flows.schedule_generation import generate_schedule, schedule_generation_flow
from clinic_ai.flows.schedule_optimization import optimize_schedule, schedule_optimization_flow
from clinic_ai.flows.staff_performance import analyze_staff_performance, staff_performance_flow

flows = [
    staff_performance_flow,
    appointment_parser_flow,
    consultation_notes_flow,
    schedule_generation_flow,
    patient_history_flow,
    medical_codes_flow,
    diagnosis_flow,
    patient_education_flow,
    schedule_optimization_flow,
]
flows_by_name = {flow.name: flow for flow in flows}

__all__ = [
    "analyze_staff_performance",
    "book_appointment_with_ai",
    "summarize_consultation_notes",
    "generate_schedule",
    "summarize_patient_history",
    "suggest_medical_codes",
    "diagnose_patient_condition",
    "generate_patient_education",
    "optimize_schedule",
    "flows",
    "flows_by_name",
]
