import time
from typing import Any

from dotenv import load_dotenv

load_dotenv()

from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from api.schemas import ErrorDetail, HealthResponse
from clinic_ai.config.logger import configure_logging, get_logger
from clinic_ai.errors import FlowFailure, InputValidationError, OracleConfigurationError
from clinic_ai.flows import (
    appointment_parser_flow,
    consultation_notes_flow,
    diagnosis_flow,
    flows,
    medical_codes_flow,
    patient_education_flow,
    patient_history_flow,
    schedule_generation_flow,
    schedule_optimization_flow,
    staff_performance_flow,
)
from clinic_ai.flows.base import BaseFlow
from clinic_ai.llm.oracle import GenerativeOracle

app = FastAPI(title="Clinic AI Flows")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

configure_logging()
logger = get_logger(__name__)

_ORACLES: dict[str, GenerativeOracle] = {}


def build_oracle(flow_key: str) -> GenerativeOracle:
    return GenerativeOracle.from_settings(flow_key)


def get_oracle(flow: BaseFlow) -> GenerativeOracle:
    oracle = _ORACLES.get(flow.flow_key)
    if oracle is None:
        oracle = build_oracle(flow.flow_key)
        _ORACLES[flow.flow_key] = oracle
    return oracle


def _error(status_code: int, flow: BaseFlow, message: str, fields: dict[str, str] | None = None) -> HTTPException:
    detail = ErrorDetail(error=message, flow=flow.name, fields=fields or {})
    return HTTPException(status_code=status_code, detail=detail.model_dump())


async def _run_flow(flow: BaseFlow, payload: Any) -> dict[str, Any]:
    try:
        flow_input = flow.validate(payload)
    except InputValidationError as exc:
        logger.info("[%s] rejected input: %s", flow.name, exc.errors)
        raise _error(400, flow, str(exc), exc.errors) from exc

    try:
        oracle = get_oracle(flow)
    except OracleConfigurationError as exc:
        logger.error("[%s] oracle unavailable: %s", flow.name, exc)
        raise _error(503, flow, str(exc)) from exc

    try:
        result = await flow.invoke(flow_input, oracle)
    except FlowFailure as exc:
        logger.error("[%s] %s", flow.name, exc.message)
        raise _error(500, flow, str(exc)) from exc
    except Exception as exc:
        logger.exception("[%s] flow failed", flow.name)
        raise _error(500, flow, f"{flow.name}: {exc}") from exc

    return result.to_payload()


@app.middleware("http")
async def log_requests(request, call_next):
    start = time.perf_counter()
    logger.info("[request.start] %s %s", request.method, request.url.path)
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "[request.end] %s %s status=%s elapsed=%.1fms",
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


@app.get("/api/health", response_model=HealthResponse)
async def health():
    return HealthResponse(ok=True, flows=[flow.name for flow in flows])


@app.post("/api/ai/analyze-staff-performance")
async def analyze_staff_performance(payload: Any = Body(...)):
    return await _run_flow(staff_performance_flow, payload)


@app.post("/api/ai/book-appointment")
async def book_appointment(payload: Any = Body(...)):
    return await _run_flow(appointment_parser_flow, payload)


@app.post("/api/ai/summarize-consultation-notes")
async def summarize_consultation_notes(payload: Any = Body(...)):
    return await _run_flow(consultation_notes_flow, payload)


@app.post("/api/ai/generate-schedule")
async def generate_schedule(payload: Any = Body(...)):
    return await _run_flow(schedule_generation_flow, payload)


@app.post("/api/ai/summarize-patient-history")
async def summarize_patient_history(payload: Any = Body(...)):
    return await _run_flow(patient_history_flow, payload)


@app.post("/api/ai/suggest-medical-codes")
async def suggest_medical_codes(payload: Any = Body(...)):
    return await _run_flow(medical_codes_flow, payload)


@app.post("/api/ai/diagnose-patient-condition")
async def diagnose_patient_condition(payload: Any = Body(...)):
    return await _run_flow(diagnosis_flow, payload)


@app.post("/api/ai/generate-patient-education")
async def generate_patient_education(payload: Any = Body(...)):
    return await _run_flow(patient_education_flow, payload)


@app.post("/api/ai/optimize-schedule")
async def optimize_schedule(payload: Any = Body(...)):
    return await _run_flow(schedule_optimization_flow, payload)
