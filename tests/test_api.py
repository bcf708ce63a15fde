import asyncio

import pytest

import api.main as main
from clinic_ai.errors import OracleConfigurationError
from clinic_ai.llm.oracle import GenerativeOracle
from conftest import FakeChatModel


def _run(coro):
    return asyncio.run(coro)


@pytest.fixture
def oracle_result(monkeypatch):
    chat_model = FakeChatModel()
    monkeypatch.setattr(main, "_ORACLES", {})
    monkeypatch.setattr(main, "build_oracle", lambda flow_key: GenerativeOracle(chat_model, name=flow_key))
    return chat_model


def test_health():
    response = _run(main.health())
    assert response.ok is True
    assert "staff_performance_analysis" in response.flows


def test_summarize_consultation_notes_success(oracle_result):
    oracle_result.result = {"summary": "Viral pharyngitis suspected."}
    body = _run(main.summarize_consultation_notes({"notesToSummarize": "Sore throat."}))
    assert body == {"summary": "Viral pharyngitis suspected."}


def test_bad_input_is_400(oracle_result):
    try:
        _run(main.summarize_consultation_notes({}))
    except Exception as exc:
        assert getattr(exc, "status_code", None) == 400
        assert exc.detail["fields"] == {"notesToSummarize": "Field required"}
        assert exc.detail["flow"] == "consultation_note_summarizer"
    else:
        raise AssertionError("Expected HTTPException 400")
    assert oracle_result.calls == []


def test_flow_failure_is_500(oracle_result):
    oracle_result.result = None
    try:
        _run(main.summarize_consultation_notes({"notesToSummarize": "Sore throat."}))
    except Exception as exc:
        assert getattr(exc, "status_code", None) == 500
        assert "AI failed to generate a summary" in exc.detail["error"]
    else:
        raise AssertionError("Expected HTTPException 500")


def test_appointment_degrades_to_200(oracle_result):
    oracle_result.result = None
    body = _run(main.book_appointment({"instruction": "Book Bob", "currentDate": "2024-06-01"}))
    assert body["parsedSuccessfully"] is False
    assert body["errorMessage"] == "AI processing error."


def test_staff_short_circuit_skips_oracle(oracle_result):
    body = _run(
        main.analyze_staff_performance(
            {
                "staffId": "S1",
                "staffName": "J.Doe",
                "staffRole": "Nurse",
                "dateRangeStart": "2024-01-01",
                "dateRangeEnd": "2024-01-07",
                "shifts": [],
            }
        )
    )
    assert body["punctualityRating"] == "N/A"
    assert oracle_result.calls == []


def test_oracle_configuration_error_is_503(monkeypatch):
    def _broken(_flow_key):
        raise OracleConfigurationError("OPENAI_API_KEY is missing")

    monkeypatch.setattr(main, "_ORACLES", {})
    monkeypatch.setattr(main, "build_oracle", _broken)
    try:
        _run(main.suggest_medical_codes({"clinicalText": "Hypertension follow-up."}))
    except Exception as exc:
        assert getattr(exc, "status_code", None) == 503
        assert "OPENAI_API_KEY" in exc.detail["error"]
    else:
        raise AssertionError("Expected HTTPException 503")


def test_oracle_built_once_per_flow(monkeypatch):
    built = []

    def _build(flow_key):
        built.append(flow_key)
        return GenerativeOracle(FakeChatModel({"summary": "ok"}), name=flow_key)

    monkeypatch.setattr(main, "_ORACLES", {})
    monkeypatch.setattr(main, "build_oracle", _build)
    for _ in range(2):
        _run(main.summarize_patient_history({"patientId": "P1"}))
    assert built == ["PATIENT_HISTORY"]


def test_health_lists_every_flow():
    response = _run(main.health())
    for name in ("patient_condition_diagnosis", "patient_education", "schedule_optimization"):
        assert name in response.flows


def test_optimize_schedule_failure_is_500(oracle_result):
    oracle_result.result = None
    try:
        _run(main.optimize_schedule({"scheduleData": "{}"}))
    except Exception as exc:
        assert getattr(exc, "status_code", None) == 500
        assert exc.detail["error"] == (
            "schedule_optimization: AI failed to generate an optimized schedule. The output was empty."
        )
    else:
        raise AssertionError("Expected HTTPException 500")


def test_missing_schedules_by_role_is_flow_failure_500(oracle_result):
    oracle_result.result = {"suggestions": "none"}
    try:
        _run(
            main.generate_schedule(
                {"staffList": [{"id": "S1", "name": "Ana", "role": "Nurse"}], "startDate": "2024-08-01"}
            )
        )
    except Exception as exc:
        assert getattr(exc, "status_code", None) == 500
        assert exc.detail["flow"] == "schedule_generation"
        assert "did not contain 'schedulesByRole'" in exc.detail["error"]
    else:
        raise AssertionError("Expected HTTPException 500")


def test_diagnosis_and_education_routes(oracle_result):
    oracle_result.result = {"possibleConditions": []}
    body = _run(main.diagnose_patient_condition({"patientId": "P1", "currentSymptoms": "Cough"}))
    assert body["possibleConditions"] == []
    assert body["disclaimer"].startswith("This AI-generated information")

    oracle_result.result = {"title": "Cough", "explanation": "A reflex."}
    body = _run(main.generate_patient_education({"condition": "Cough"}))
    assert body["title"] == "Cough"
    assert body["disclaimer"].startswith("This information is for educational purposes")
