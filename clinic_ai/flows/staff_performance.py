"""Staff performance analysis from shift and attendance records."""

from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import Field

from clinic_ai.flows.base import BaseFlow, CamelModel
from clinic_ai.llm.oracle import GenerativeOracle
from clinic_ai.prompts import STAFF_PERFORMANCE_PROMPT_TEMPLATE

NOT_AVAILABLE = "N/A"
DEFAULT_ATTENDANCE_STATUS = "Scheduled"
NO_SHIFT_DATA_LINE = "No shift data provided for this period."

PunctualityRating = Literal["Excellent", "Good", "Fair", "Poor", "N/A"]


class ShiftAttendanceRecord(CamelModel):
    """One day's scheduled vs. actual work period for a staff member."""

    date: str = Field(description="Date of the shift (YYYY-MM-DD).")
    scheduled_shift_type: str = Field(description="e.g., Day, Night, Day Off")
    scheduled_start_time: Optional[str] = Field(default=None, description="Scheduled start time (HH:mm).")
    scheduled_end_time: Optional[str] = Field(default=None, description="Scheduled end time (HH:mm).")
    actual_start_time: Optional[str] = Field(default=None, description="Actual clock-in time (HH:mm).")
    actual_end_time: Optional[str] = Field(default=None, description="Actual clock-out time (HH:mm).")
    attendance_status: Optional[str] = Field(
        default=None,
        description="e.g., Scheduled, Clocked In, Late, Clocked Out, Absent.",
    )
    notes: Optional[str] = Field(default=None, description="Notes on the shift or attendance.")


class StaffPerformanceInput(CamelModel):
    staff_id: str = Field(min_length=1, description="The unique identifier for the staff member.")
    staff_name: str = Field(min_length=1, description="The name of the staff member.")
    staff_role: str = Field(description="The role of the staff member (e.g., Doctor, Nurse).")
    date_range_start: str = Field(description="Start date of the analysis period (YYYY-MM-DD).")
    date_range_end: str = Field(description="End date of the analysis period (YYYY-MM-DD).")
    shifts: list[ShiftAttendanceRecord] = Field(
        description="The staff member's shifts and attendance records for the period, in order.",
    )


class StaffPerformanceOutput(CamelModel):
    overall_summary: str = Field(
        description="A concise overall summary of the staff member's attendance and schedule adherence.",
    )
    strengths: Optional[list[str]] = Field(default=None, description="Identified strengths.")
    areas_for_improvement: Optional[list[str]] = Field(
        default=None, description="Identified areas needing improvement or concerns."
    )
    punctuality_rating: Optional[PunctualityRating] = Field(
        default=None, description="A rating of their punctuality."
    )
    schedule_adherence_notes: Optional[str] = Field(
        default=None, description="Notes on schedule adherence, absences, or deviations."
    )
    positive_patterns: Optional[list[str]] = Field(
        default=None, description="Observed positive attendance patterns."
    )
    negative_patterns: Optional[list[str]] = Field(
        default=None, description="Observed negative patterns (e.g., frequent lateness on Mondays)."
    )


def display_time(value: Optional[str]) -> str:
    return value or NOT_AVAILABLE


def display_status(value: Optional[str]) -> str:
    return value or DEFAULT_ATTENDANCE_STATUS


def display_actual_range(start: Optional[str], end: Optional[str]) -> str:
    if start and end:
        return f"{start} - {end}"
    if start:
        return f"{start} - {NOT_AVAILABLE}"
    if end:
        return f"{NOT_AVAILABLE} - {end}"
    return NOT_AVAILABLE


def display_field(record: ShiftAttendanceRecord, field: str) -> str:
    """Display string for one optional field of a record, with its fallback."""
    value = getattr(record, field)
    if field == "attendance_status":
        return display_status(value)
    if field.endswith("_time"):
        return display_time(value)
    return value or ""


def render_shift(record: ShiftAttendanceRecord) -> str:
    lines = [
        f"- Date: {record.date}",
        (
            f"  Scheduled: {record.scheduled_shift_type} "
            f"({display_field(record, 'scheduled_start_time')} - "
            f"{display_field(record, 'scheduled_end_time')})"
        ),
        f"  Actual: {display_actual_range(record.actual_start_time, record.actual_end_time)}",
        f"  Status: {display_field(record, 'attendance_status')}",
    ]
    if record.notes:
        lines.append(f"  Notes: {record.notes}")
    return "\n".join(lines)


def render_shift_section(shifts: list[ShiftAttendanceRecord]) -> str:
    if not shifts:
        return NO_SHIFT_DATA_LINE
    return "\n".join(render_shift(record) for record in shifts)


def no_data_output(flow_input: StaffPerformanceInput) -> StaffPerformanceOutput:
    return StaffPerformanceOutput(
        overall_summary=(
            f"No shift or attendance data available for {flow_input.staff_name} "
            f"during the period {flow_input.date_range_start} to {flow_input.date_range_end}. "
            "Unable to perform attendance analysis."
        ),
        punctuality_rating="N/A",
        strengths=[],
        areas_for_improvement=[],
        schedule_adherence_notes="No data to analyze.",
        positive_patterns=[],
        negative_patterns=[],
    )


class StaffPerformanceFlow(BaseFlow):
    name = "staff_performance_analysis"
    flow_key = "STAFF_PERFORMANCE"
    input_model = StaffPerformanceInput
    output_model = StaffPerformanceOutput
    failure_message = "AI failed to generate a performance analysis."

    def short_circuit(self, flow_input: StaffPerformanceInput) -> Optional[StaffPerformanceOutput]:
        if not flow_input.shifts:
            return no_data_output(flow_input)
        return None

    def render_prompt(self, flow_input: StaffPerformanceInput) -> str:
        return STAFF_PERFORMANCE_PROMPT_TEMPLATE.format(
            staff_name=flow_input.staff_name,
            staff_id=flow_input.staff_id,
            staff_role=flow_input.staff_role,
            date_range_start=flow_input.date_range_start,
            date_range_end=flow_input.date_range_end,
            shift_section=render_shift_section(flow_input.shifts),
        )


staff_performance_flow = StaffPerformanceFlow()


async def analyze_staff_performance(
    payload: Any, oracle: GenerativeOracle
) -> StaffPerformanceOutput:
    return await staff_performance_flow.invoke(payload, oracle)
