"""Generate a staff shift schedule grouped by role."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, Optional

from pydantic import Field

from clinic_ai.errors import FlowFailure
from clinic_ai.flows.base import BaseFlow, CamelModel
from clinic_ai.llm.oracle import GenerativeOracle
from clinic_ai.prompts import SCHEDULE_GENERATION_PROMPT_TEMPLATE

DEFAULT_SHIFT_TIMES: dict[str, dict[str, str]] = {
    "Day": {"startTime": "08:00", "endTime": "20:00"},
    "Night": {"startTime": "20:00", "endTime": "08:00"},
}
DAY_OFF = "Day Off"

ShiftType = Literal["Day", "Night", "Day Off"]


class StaffMember(CamelModel):
    id: str
    name: str
    role: str


class ShiftTimes(CamelModel):
    start_time: str
    end_time: str


class DefaultShiftTimes(CamelModel):
    day: ShiftTimes = Field(alias="Day")
    night: ShiftTimes = Field(alias="Night")

    def for_type(self, shift_type: str) -> Optional[ShiftTimes]:
        return {"Day": self.day, "Night": self.night}.get(shift_type)


class GenerateScheduleInput(CamelModel):
    staff_list: list[StaffMember] = Field(description="Staff members available for scheduling.")
    start_date: str = Field(description="Start date of the schedule period (YYYY-MM-DD).")
    number_of_days: int = Field(default=7, ge=1, le=14, description="Days to generate.")
    default_shift_times: DefaultShiftTimes = Field(
        description="Default start and end times for Day and Night shifts.",
    )


class GeneratedShift(CamelModel):
    staff_id: str = Field(description="The ID of the staff member assigned to this shift.")
    staff_name: str = Field(description="The staff member's name, as given in the staff list.")
    date: str = Field(description="The date of the shift in YYYY-MM-DD format.")
    shift_type: ShiftType = Field(description="The type of shift.")
    start_time: Optional[str] = Field(default=None, description="HH:mm; required unless Day Off.")
    end_time: Optional[str] = Field(default=None, description="HH:mm; required unless Day Off.")
    notes: Optional[str] = Field(default=None, description="Brief notes for this assignment.")


class RoleSchedule(CamelModel):
    role: str = Field(description="The role of the staff members in this group.")
    shifts: list[GeneratedShift] = Field(description="Shifts for every staff member with this role.")


class GenerateScheduleOutput(CamelModel):
    schedules_by_role: Optional[list[RoleSchedule]] = Field(
        default=None, description="Schedules grouped by staff role."
    )
    suggestions: Optional[str] = Field(
        default=None, description="Notes about the generated schedule (e.g., coverage concerns)."
    )


_TABLE_KEYS = ("defaultShiftTimes", "default_shift_times")
_TIME_KEYS = {"startTime": "start_time", "endTime": "end_time"}


def _lookup(mapping: Mapping, *keys: str) -> Any:
    """First non-None value under any of ``keys``."""
    for key in keys:
        value = mapping.get(key)
        if value is not None:
            return value
    return None


def merge_default_shift_times(payload: Any) -> Any:
    """Fill the default shift-time table per sub-key before validation.

    Each level accepts its wire alias or the Python field name ("Day" or
    "day", "startTime" or "start_time"). The result always uses aliases.
    """
    if not isinstance(payload, Mapping):
        return payload

    provided = _lookup(payload, *_TABLE_KEYS)
    if provided is None:
        provided = {}
    if not isinstance(provided, Mapping):
        return payload

    merged: dict[str, Any] = {}
    for shift_type, defaults in DEFAULT_SHIFT_TIMES.items():
        times = _lookup(provided, shift_type, shift_type.lower())
        if times is None:
            times = {}
        if not isinstance(times, Mapping):
            merged[shift_type] = times
            continue
        merged[shift_type] = {
            alias: _lookup(times, alias, _TIME_KEYS[alias]) or default
            for alias, default in defaults.items()
        }

    result = {k: v for k, v in payload.items() if k not in _TABLE_KEYS}
    result["defaultShiftTimes"] = merged
    return result


def render_staff_section(staff_list: list[StaffMember]) -> str:
    return "\n".join(
        f"- Name: {member.name}, ID: {member.id}, Role: {member.role}"
        for member in staff_list
    )


class ScheduleGenerationFlow(BaseFlow):
    name = "schedule_generation"
    flow_key = "SCHEDULE_GENERATION"
    input_model = GenerateScheduleInput
    output_model = GenerateScheduleOutput
    failure_message = (
        "AI failed to generate a schedule. The output was empty, malformed, "
        "or did not contain 'schedulesByRole'."
    )

    def prepare(self, payload: Any) -> Any:
        return merge_default_shift_times(payload)

    def render_prompt(self, flow_input: GenerateScheduleInput) -> str:
        times = flow_input.default_shift_times
        return SCHEDULE_GENERATION_PROMPT_TEMPLATE.format(
            number_of_days=flow_input.number_of_days,
            start_date=flow_input.start_date,
            staff_section=render_staff_section(flow_input.staff_list),
            day_start=times.day.start_time,
            day_end=times.day.end_time,
            night_start=times.night.start_time,
            night_end=times.night.end_time,
        )

    def post_process(
        self, flow_input: GenerateScheduleInput, output: GenerateScheduleOutput
    ) -> GenerateScheduleOutput:
        if output.schedules_by_role is None:
            raise FlowFailure(self.name, self.failure_message)

        valid_staff_ids = {member.id for member in flow_input.staff_list}
        schedule = output.model_copy(deep=True)

        for role_schedule in schedule.schedules_by_role:
            for shift in role_schedule.shifts:
                if shift.staff_id not in valid_staff_ids:
                    raise FlowFailure(
                        self.name,
                        f"AI generated a shift for an unknown staffId: {shift.staff_id} "
                        f"(Name: {shift.staff_name}).",
                    )
                if shift.shift_type == DAY_OFF:
                    continue
                defaults = flow_input.default_shift_times.for_type(shift.shift_type)
                if defaults is not None:
                    shift.start_time = shift.start_time or defaults.start_time
                    shift.end_time = shift.end_time or defaults.end_time
                if not shift.start_time or not shift.end_time:
                    raise FlowFailure(
                        self.name,
                        f"Shift type '{shift.shift_type}' for {shift.staff_name} on {shift.date} "
                        "is missing startTime or endTime, and defaults could not be applied.",
                    )
        return schedule


schedule_generation_flow = ScheduleGenerationFlow()


async def generate_schedule(payload: Any, oracle: GenerativeOracle) -> GenerateScheduleOutput:
    return await schedule_generation_flow.invoke(payload, oracle)
