"""Suggest a conflict-free rearrangement of an existing schedule."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import Field

from clinic_ai.flows.base import BaseFlow, CamelModel
from clinic_ai.llm.oracle import GenerativeOracle
from clinic_ai.prompts import SCHEDULE_OPTIMIZATION_PROMPT_TEMPLATE

NO_CONSTRAINTS = "There are no specific constraints."


class ScheduleOptimizationInput(CamelModel):
    schedule_data: str = Field(
        min_length=1,
        description="JSON text of the current schedule: appointments, staff availability, resources.",
    )
    constraints: Optional[str] = Field(
        default=None,
        description="JSON text of constraints such as staff preferences or room availability.",
    )


class ScheduleOptimizationOutput(CamelModel):
    optimized_schedule: str = Field(
        description="JSON text of the optimized schedule with adjusted times and allocations.",
    )
    rationale: str = Field(description="Human-readable explanation of the changes.")


class ScheduleOptimizationFlow(BaseFlow):
    name = "schedule_optimization"
    flow_key = "SCHEDULE_OPTIMIZATION"
    input_model = ScheduleOptimizationInput
    output_model = ScheduleOptimizationOutput
    failure_message = "AI failed to generate an optimized schedule. The output was empty."

    def render_prompt(self, flow_input: ScheduleOptimizationInput) -> str:
        return SCHEDULE_OPTIMIZATION_PROMPT_TEMPLATE.format(
            schedule_data=flow_input.schedule_data,
            constraints_section=flow_input.constraints or NO_CONSTRAINTS,
        )


schedule_optimization_flow = ScheduleOptimizationFlow()


async def optimize_schedule(
    payload: Any, oracle: GenerativeOracle
) -> ScheduleOptimizationOutput:
    return await schedule_optimization_flow.invoke(payload, oracle)
