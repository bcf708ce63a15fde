"""Shared pieces of every flow: camelCase models, input validation, orchestration."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from clinic_ai.config.logger import get_logger, log_stage
from clinic_ai.errors import FlowFailure, InputValidationError
from clinic_ai.llm.oracle import GenerativeOracle

logger = get_logger(__name__)

_ROOT_PATH = "(root)"


class CamelModel(BaseModel):
    """Snake_case attributes in Python, camelCase keys on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


def _error_path(loc: tuple[Any, ...]) -> str:
    if not loc:
        return _ROOT_PATH
    return ".".join(str(part) for part in loc)


def validation_errors(exc: ValidationError) -> dict[str, str]:
    """Flatten a pydantic error into a field-path -> reason mapping."""
    errors: dict[str, str] = {}
    for item in exc.errors():
        path = _error_path(tuple(item.get("loc", ())))
        reason = str(item.get("msg", "invalid value"))
        errors[path] = f"{errors[path]}; {reason}" if path in errors else reason
    return errors


def validate_input(flow: str, model: type[BaseModel], payload: Any) -> BaseModel:
    """Turn an arbitrary payload into ``model`` or raise InputValidationError."""
    if isinstance(payload, model):
        return payload
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise InputValidationError(flow, validation_errors(exc)) from exc


class BaseFlow(ABC):
    """Request -> validate -> (short-circuit | render -> oracle) -> output.

    Subclasses declare their models and prompt; the optional hooks cover the
    per-flow differences (default merging, degenerate input, empty output).
    """

    name: ClassVar[str] = "flow"
    flow_key: ClassVar[str] = ""
    input_model: ClassVar[type[CamelModel]]
    output_model: ClassVar[type[CamelModel]]
    failure_message: ClassVar[str] = "AI failed to generate a response."

    def prepare(self, payload: Any) -> Any:
        """Hook for explicit default merging/coercion before validation."""
        return payload

    def validate(self, payload: Any) -> CamelModel:
        if not isinstance(payload, self.input_model):
            payload = self.prepare(payload)
        return validate_input(self.name, self.input_model, payload)

    def short_circuit(self, flow_input: Any) -> Optional[CamelModel]:
        return None

    @abstractmethod
    def render_prompt(self, flow_input: Any) -> str:
        """Render the single prompt string handed to the oracle."""

    def on_empty_output(self, flow_input: Any) -> CamelModel:
        raise FlowFailure(self.name, self.failure_message)

    def post_process(self, flow_input: Any, output: Any) -> CamelModel:
        return output

    async def invoke(self, payload: Any, oracle: GenerativeOracle) -> CamelModel:
        flow_input = self.validate(payload)
        logger.info("[%s] start", self.name)

        shortcut = self.short_circuit(flow_input)
        if shortcut is not None:
            logger.info("[%s] short-circuit, oracle not invoked", self.name)
            return shortcut

        prompt = self.render_prompt(flow_input)
        logger.debug("[%s] prompt:\n%s", self.name, prompt)

        output = await oracle.generate(prompt, self.output_model)
        if output is None:
            logger.warning("[%s] oracle returned no output", self.name)
            return self.on_empty_output(flow_input)

        result = self.post_process(flow_input, output)
        log_stage(logger, self.name, result)
        return result
