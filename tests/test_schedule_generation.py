"""Tests for the schedule generation flow."""

import asyncio

import pytest

from clinic_ai.errors import FlowFailure, InputValidationError
from clinic_ai.flows.schedule_generation import (
    DefaultShiftTimes,
    generate_schedule,
    merge_default_shift_times,
    schedule_generation_flow,
)

STAFF = [
    {"id": "S001", "name": "Dr. Evelyn Reed", "role": "Doctor"},
    {"id": "S002", "name": "Ben Carter", "role": "Nurse"},
]


def _payload(**overrides) -> dict:
    payload = {"staffList": STAFF, "startDate": "2024-08-01"}
    payload.update(overrides)
    return payload


class TestDefaults:
    def test_whole_table_defaulted(self):
        flow_input = schedule_generation_flow.validate(_payload())
        times = flow_input.default_shift_times
        assert (times.day.start_time, times.day.end_time) == ("08:00", "20:00")
        assert (times.night.start_time, times.night.end_time) == ("20:00", "08:00")
        assert flow_input.number_of_days == 7

    def test_one_sub_key_defaulted(self):
        flow_input = schedule_generation_flow.validate(
            _payload(defaultShiftTimes={"Day": {"startTime": "07:00", "endTime": "19:00"}})
        )
        times = flow_input.default_shift_times
        assert (times.day.start_time, times.day.end_time) == ("07:00", "19:00")
        assert (times.night.start_time, times.night.end_time) == ("20:00", "08:00")

    def test_single_time_defaulted(self):
        merged = merge_default_shift_times(
            _payload(defaultShiftTimes={"Night": {"startTime": "21:00"}})
        )
        assert merged["defaultShiftTimes"]["Night"] == {"startTime": "21:00", "endTime": "08:00"}

    def test_field_names_accepted_alongside_aliases(self):
        flow_input = schedule_generation_flow.validate(
            {
                "staff_list": STAFF,
                "start_date": "2024-08-01",
                "default_shift_times": {
                    "Day": {"start_time": "07:00", "end_time": "19:00"},
                    "night": {"startTime": "22:00"},
                },
            }
        )
        times = flow_input.default_shift_times
        assert (times.day.start_time, times.day.end_time) == ("07:00", "19:00")
        assert (times.night.start_time, times.night.end_time) == ("22:00", "08:00")

    def test_merge_does_not_mutate_caller_payload(self):
        payload = _payload()
        merge_default_shift_times(payload)
        assert "defaultShiftTimes" not in payload

    @pytest.mark.parametrize("days", [0, 15])
    def test_number_of_days_bounds(self, days):
        with pytest.raises(InputValidationError) as exc:
            schedule_generation_flow.validate(_payload(numberOfDays=days))
        assert "numberOfDays" in exc.value.errors


class TestPrompt:
    def test_staff_and_times_rendered(self):
        flow_input = schedule_generation_flow.validate(_payload(numberOfDays=3))
        prompt = schedule_generation_flow.render_prompt(flow_input)
        assert "covering a 3-day period starting on 2024-08-01" in prompt
        assert "- Name: Dr. Evelyn Reed, ID: S001, Role: Doctor" in prompt
        assert "- Day: 08:00 - 20:00" in prompt
        assert "- Night: 20:00 - 08:00" in prompt


class TestPostProcessing:
    def test_missing_times_filled_from_defaults(self, make_oracle):
        oracle, _ = make_oracle(
            {
                "schedulesByRole": [
                    {
                        "role": "Doctor",
                        "shifts": [
                            {"staffId": "S001", "staffName": "Dr. Evelyn Reed", "date": "2024-08-01", "shiftType": "Night"},
                            {"staffId": "S001", "staffName": "Dr. Evelyn Reed", "date": "2024-08-02", "shiftType": "Day", "startTime": "09:00"},
                        ],
                    },
                    {
                        "role": "Nurse",
                        "shifts": [
                            {"staffId": "S002", "staffName": "Ben Carter", "date": "2024-08-01", "shiftType": "Day Off"},
                        ],
                    },
                ],
                "suggestions": "Dr. Reed is sole Doctor.",
            }
        )

        result = asyncio.run(generate_schedule(_payload(numberOfDays=2), oracle))

        doctor, nurse = result.schedules_by_role
        assert (doctor.shifts[0].start_time, doctor.shifts[0].end_time) == ("20:00", "08:00")
        assert (doctor.shifts[1].start_time, doctor.shifts[1].end_time) == ("09:00", "20:00")
        assert nurse.shifts[0].start_time is None
        assert result.suggestions == "Dr. Reed is sole Doctor."

    def test_unknown_staff_id_rejected(self, make_oracle):
        oracle, _ = make_oracle(
            {
                "schedulesByRole": [
                    {
                        "role": "Doctor",
                        "shifts": [
                            {"staffId": "S999", "staffName": "Ghost", "date": "2024-08-01", "shiftType": "Day"},
                        ],
                    }
                ]
            }
        )

        with pytest.raises(FlowFailure, match="unknown staffId: S999"):
            asyncio.run(generate_schedule(_payload(), oracle))

    def test_no_output_raises(self, make_oracle):
        oracle, _ = make_oracle(None)
        with pytest.raises(FlowFailure, match="AI failed to generate a schedule"):
            asyncio.run(generate_schedule(_payload(), oracle))

    def test_missing_schedules_raises_flow_failure(self, make_oracle):
        oracle, _ = make_oracle({"suggestions": "none"})
        with pytest.raises(FlowFailure, match="did not contain 'schedulesByRole'"):
            asyncio.run(generate_schedule(_payload(), oracle))

    def test_shift_without_applicable_defaults_rejected(self, make_oracle, monkeypatch):
        monkeypatch.setattr(DefaultShiftTimes, "for_type", lambda self, shift_type: None)
        oracle, _ = make_oracle(
            {
                "schedulesByRole": [
                    {
                        "role": "Nurse",
                        "shifts": [
                            {"staffId": "S002", "staffName": "Ben Carter", "date": "2024-08-03", "shiftType": "Night"},
                        ],
                    }
                ]
            }
        )

        with pytest.raises(FlowFailure) as exc:
            asyncio.run(generate_schedule(_payload(), oracle))
        assert exc.value.message == (
            "Shift type 'Night' for Ben Carter on 2024-08-03 is missing startTime or endTime, "
            "and defaults could not be applied."
        )
