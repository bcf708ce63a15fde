import json
import logging
from typing import Any

from pydantic import BaseModel

from clinic_ai.config.settings import settings

ROOT_LOGGER_NAME = "clinic_ai"


def configure_logging() -> logging.Logger:
    """Attach the console (and optional file) handler to the package logger once."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    level = logging.getLevelName((settings.LOG_LEVEL or "").strip().upper())
    root.setLevel(level if isinstance(level, int) else logging.INFO)
    if root.handlers:
        return root

    formatter = logging.Formatter(settings.LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if settings.LOG_FILE:
        handlers.append(logging.FileHandler(settings.LOG_FILE, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.propagate = False
    return root


def get_logger(name: str | None = None) -> logging.Logger:
    configure_logging()
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if not name.startswith(f"{ROOT_LOGGER_NAME}."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def _truncate(text: str) -> str:
    limit = settings.FLOW_LOG_TRUNCATE
    if len(text) <= limit:
        return text
    return f"{text[:limit]} ...[truncated {len(text) - limit} chars]"


def describe_output(content: Any) -> str:
    """One-line rendering of a flow result: model name, wire fields, wire JSON."""
    if isinstance(content, BaseModel):
        payload = content.model_dump(mode="json", by_alias=True, exclude_none=True)
        fields = ", ".join(payload) or "-"
        body = json.dumps(payload, ensure_ascii=False)
        return f"{type(content).__name__} [{fields}] {_truncate(body)}"
    if content is None:
        return "[EMPTY]"
    return _truncate(str(content))


def log_stage(logger: logging.Logger, flow_name: str, content: Any) -> None:
    logger.info("[%s] output %s", flow_name, describe_output(content))
