"""Tests for the generative oracle client."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from clinic_ai.errors import OracleConfigurationError, OracleOutputError
from clinic_ai.flows.consultation_notes import NoteSummaryOutput
from clinic_ai.llm.oracle import GenerativeOracle


def _mock_chat_model(return_value=None, side_effect=None):
    chat_model = MagicMock()
    structured = chat_model.with_structured_output.return_value
    structured.ainvoke = AsyncMock(return_value=return_value, side_effect=side_effect)
    return chat_model


class TestGenerate:
    def test_returns_model_instance_as_is(self):
        expected = NoteSummaryOutput(summary="Stable.")
        chat_model = _mock_chat_model(expected)
        oracle = GenerativeOracle(chat_model)

        result = asyncio.run(oracle.generate("prompt", NoteSummaryOutput))

        assert result is expected
        chat_model.with_structured_output.assert_called_once_with(NoteSummaryOutput)
        chat_model.with_structured_output.return_value.ainvoke.assert_awaited_once_with("prompt")

    def test_validates_dict_against_schema(self):
        oracle = GenerativeOracle(_mock_chat_model({"summary": "Fever, likely viral."}))

        result = asyncio.run(oracle.generate("prompt", NoteSummaryOutput))

        assert isinstance(result, NoteSummaryOutput)
        assert result.summary == "Fever, likely viral."

    def test_none_means_no_output(self):
        oracle = GenerativeOracle(_mock_chat_model(None))
        assert asyncio.run(oracle.generate("prompt", NoteSummaryOutput)) is None

    def test_shape_mismatch_raises(self):
        oracle = GenerativeOracle(_mock_chat_model({"unexpected": 1}), name="notes")

        with pytest.raises(OracleOutputError) as exc:
            asyncio.run(oracle.generate("prompt", NoteSummaryOutput))

        assert "NoteSummaryOutput" in str(exc.value)
        assert exc.value.oracle == "notes"

    def test_transport_error_propagates_without_retry(self):
        chat_model = _mock_chat_model(side_effect=ConnectionError("quota exceeded"))
        oracle = GenerativeOracle(chat_model)

        with pytest.raises(ConnectionError, match="quota exceeded"):
            asyncio.run(oracle.generate("prompt", NoteSummaryOutput))

        assert chat_model.with_structured_output.return_value.ainvoke.await_count == 1


class TestFromSettings:
    @patch("clinic_ai.llm.oracle.get_chat_model")
    def test_builds_with_flow_key(self, mock_get_chat_model):
        oracle = GenerativeOracle.from_settings("NOTE_SUMMARY")

        mock_get_chat_model.assert_called_once_with("NOTE_SUMMARY", default_model="")
        assert oracle.chat_model is mock_get_chat_model.return_value
        assert oracle.name == "note_summary"

    @patch("clinic_ai.llm.oracle.get_chat_model")
    def test_configuration_error_surfaces_at_construction(self, mock_get_chat_model):
        mock_get_chat_model.side_effect = OracleConfigurationError("missing key")

        with pytest.raises(OracleConfigurationError, match="missing key"):
            GenerativeOracle.from_settings("NOTE_SUMMARY")
