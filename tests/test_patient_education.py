"""Tests for the patient education flow."""

import asyncio

import pytest

from clinic_ai.errors import FlowFailure, InputValidationError
from clinic_ai.flows.patient_education import (
    EDUCATION_DISCLAIMER,
    generate_patient_education,
    patient_education_flow,
)


class TestPrompt:
    def test_defaults_to_standard_without_age_line(self):
        flow_input = patient_education_flow.validate({"condition": "Type 2 Diabetes"})
        prompt = patient_education_flow.render_prompt(flow_input)
        assert 'about the medical condition: "Type 2 Diabetes"' in prompt
        assert 'Use a "Standard" language complexity.' in prompt
        assert "years old" not in prompt

    def test_age_tailoring_line(self):
        flow_input = patient_education_flow.validate(
            {"condition": "Asthma", "patientAge": 9, "languageLevel": "Simple"}
        )
        prompt = patient_education_flow.render_prompt(flow_input)
        assert "approximately 9 years old" in prompt
        assert 'Use a "Simple" language complexity.' in prompt

    def test_unknown_language_level_rejected(self):
        with pytest.raises(InputValidationError) as exc:
            patient_education_flow.validate({"condition": "Asthma", "languageLevel": "Expert"})
        assert "languageLevel" in exc.value.errors


class TestOrchestration:
    def test_disclaimer_defaulted(self, make_oracle):
        oracle, _ = make_oracle(
            {"title": "Understanding Asthma", "explanation": "Asthma narrows the airways.", "careTips": ["Carry your inhaler."]}
        )
        result = asyncio.run(generate_patient_education({"condition": "Asthma"}, oracle))
        assert result.title == "Understanding Asthma"
        assert result.care_tips == ["Carry your inhaler."]
        assert result.disclaimer == EDUCATION_DISCLAIMER

    def test_no_output_raises(self, make_oracle):
        oracle, _ = make_oracle(None)
        with pytest.raises(FlowFailure, match="AI failed to generate patient education material."):
            asyncio.run(generate_patient_education({"condition": "Asthma"}, oracle))
