"""Generative oracle client: one prompt in, one structured value (or nothing) out."""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from clinic_ai.config.logger import get_logger
from clinic_ai.errors import OracleOutputError
from clinic_ai.llm.model_factory import get_chat_model

_logger = get_logger(__name__)

OutputT = TypeVar("OutputT", bound=BaseModel)


class GenerativeOracle:
    """Wraps a LangChain chat model that supports structured output.

    The client never retries, caches or streams. Each ``generate`` call issues
    exactly one request and either returns a value validated against the
    requested schema, returns ``None`` when the model produced nothing, or lets
    the underlying transport error propagate.
    """

    def __init__(self, chat_model: Any, name: str = "oracle"):
        self._chat_model = chat_model
        self.name = name

    @classmethod
    def from_settings(cls, flow_key: str, default_model: str = "") -> "GenerativeOracle":
        """Build an oracle for ``flow_key``; configuration problems raise here."""
        chat_model = get_chat_model(flow_key, default_model=default_model)
        return cls(chat_model, name=flow_key.lower())

    @property
    def chat_model(self) -> Any:
        return self._chat_model

    async def generate(
        self,
        prompt: str,
        output_schema: type[OutputT],
    ) -> Optional[OutputT]:
        structured_llm = self._chat_model.with_structured_output(output_schema)
        result = await structured_llm.ainvoke(prompt)
        if result is None:
            _logger.warning("[%s] no structured output for %s", self.name, output_schema.__name__)
            return None
        if isinstance(result, output_schema):
            return result
        try:
            return output_schema.model_validate(result)
        except ValidationError as exc:
            raise OracleOutputError(self.name, output_schema.__name__, str(exc)) from exc
