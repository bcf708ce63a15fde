"""Shared fakes for flow tests."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from clinic_ai.llm.oracle import GenerativeOracle


class FakeStructuredRunnable:
    def __init__(self, model: "FakeChatModel", schema):
        self._model = model
        self._schema = schema

    async def ainvoke(self, prompt):
        self._model.calls.append((prompt, self._schema))
        if isinstance(self._model.result, Exception):
            raise self._model.result
        return self._model.result


class FakeChatModel:
    """Stands in for a LangChain chat model; returns a canned structured result."""

    def __init__(self, result=None):
        self.result = result
        self.calls: list = []

    def with_structured_output(self, schema):
        return FakeStructuredRunnable(self, schema)


@pytest.fixture
def make_oracle():
    def _make(result=None):
        chat_model = FakeChatModel(result)
        return GenerativeOracle(chat_model, name="fake"), chat_model

    return _make
