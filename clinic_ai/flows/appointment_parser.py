"""Parse a receptionist's free-text booking instruction into appointment fields."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field

from clinic_ai.flows.base import BaseFlow, CamelModel
from clinic_ai.llm.oracle import GenerativeOracle
from clinic_ai.prompts import APPOINTMENT_PARSER_PROMPT_TEMPLATE

EMPTY_OUTPUT_NOTES = (
    "AI failed to generate a response. The request might be too complex or unclear."
)
EMPTY_OUTPUT_ERROR = "AI processing error."


class AppointmentParseInput(CamelModel):
    instruction: str = Field(
        min_length=1,
        description="The natural language instruction from the receptionist.",
    )
    current_date: str = Field(
        pattern=r"^\d{4}-\d{2}-\d{2}$",
        description="The current date (YYYY-MM-DD), used to resolve relative dates.",
    )


class AppointmentParseOutput(CamelModel):
    patient_name: Optional[str] = Field(default=None, description="The identified name of the patient.")
    provider_name: Optional[str] = Field(
        default=None, description="The identified name of the healthcare provider."
    )
    appointment_date_string: Optional[str] = Field(
        default=None,
        description="The interpreted appointment date, YYYY-MM-DD when possible.",
    )
    time_slot_string: Optional[str] = Field(
        default=None, description="The interpreted time (e.g., '3:00 PM', 'afternoon')."
    )
    appointment_type: Optional[str] = Field(
        default=None,
        description="Check-up, Consultation, Follow-up, Procedure, or the term mentioned.",
    )
    parsed_successfully: bool = Field(
        description="True when patient, provider and some date/time indication were extracted.",
    )
    ai_confidence_notes: Optional[str] = Field(
        default=None, description="Notes on the interpretation, uncertainties, or missing details."
    )
    error_message: Optional[str] = Field(
        default=None, description="Error message if the request could not be processed."
    )


class AppointmentParserFlow(BaseFlow):
    name = "appointment_booking_parser"
    flow_key = "APPOINTMENT_PARSER"
    input_model = AppointmentParseInput
    output_model = AppointmentParseOutput

    def render_prompt(self, flow_input: AppointmentParseInput) -> str:
        return APPOINTMENT_PARSER_PROMPT_TEMPLATE.format(
            current_date=flow_input.current_date,
            instruction=flow_input.instruction,
        )

    def on_empty_output(self, flow_input: AppointmentParseInput) -> AppointmentParseOutput:
        # Never raises on an empty response.
        return AppointmentParseOutput(
            parsed_successfully=False,
            ai_confidence_notes=EMPTY_OUTPUT_NOTES,
            error_message=EMPTY_OUTPUT_ERROR,
        )


appointment_parser_flow = AppointmentParserFlow()


async def book_appointment_with_ai(
    payload: Any, oracle: GenerativeOracle
) -> AppointmentParseOutput:
    return await appointment_parser_flow.invoke(payload, oracle)
