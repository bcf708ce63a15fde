"""
Application-wide settings using pydantic-settings.
All runtime env access in clinic_ai/ should go through this module.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]
ENV_PATH = PROJECT_ROOT / ".env"

_DASHSCOPE_COMPAT_DEFAULT_BASE_URL = "https://dashscope.aliyuncs.com/compatible-mode/v1"
_PLACEHOLDER_KEYS = {"YOUR_API_KEY_HERE"}


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    LOG_FILE: str = ""

    # Global LLM settings
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = ""
    DASHSCOPE_API_KEY: str = ""
    DASHSCOPE_BASE_URL: str = _DASHSCOPE_COMPAT_DEFAULT_BASE_URL
    OLLAMA_BASE_URL: str = "http://localhost:11434"
    DEFAULT_MODEL: str = "qwen-plus"
    ORACLE_TEMPERATURE: float = 0.2

    # Runtime
    FLOW_LOG_TRUNCATE: int = 600

    # Flow-specific overrides
    STAFF_PERFORMANCE_PROVIDER: str = ""
    STAFF_PERFORMANCE_MODEL: str = ""

    APPOINTMENT_PARSER_PROVIDER: str = ""
    APPOINTMENT_PARSER_MODEL: str = ""

    NOTE_SUMMARY_PROVIDER: str = ""
    NOTE_SUMMARY_MODEL: str = ""

    SCHEDULE_GENERATION_PROVIDER: str = ""
    SCHEDULE_GENERATION_MODEL: str = ""

    PATIENT_HISTORY_PROVIDER: str = ""
    PATIENT_HISTORY_MODEL: str = ""

    MEDICAL_CODES_PROVIDER: str = ""
    MEDICAL_CODES_MODEL: str = ""

    DIAGNOSIS_PROVIDER: str = ""
    DIAGNOSIS_MODEL: str = ""

    PATIENT_EDUCATION_PROVIDER: str = ""
    PATIENT_EDUCATION_MODEL: str = ""

    SCHEDULE_OPTIMIZATION_PROVIDER: str = ""
    SCHEDULE_OPTIMIZATION_MODEL: str = ""

    model_config = SettingsConfigDict(
        env_file=ENV_PATH,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def _flow_value(self, flow_key: str, suffix: str) -> str:
        key = (flow_key or "").strip().upper()
        if not key:
            return ""
        return str(getattr(self, f"{key}_{suffix}", "") or "").strip()

    def get_flow_model(self, flow_key: str, default_model: str = "") -> str:
        return (
            self._flow_value(flow_key, "MODEL")
            or default_model
            or self.DEFAULT_MODEL
        )

    def get_flow_provider(self, flow_key: str) -> str:
        return self._flow_value(flow_key, "PROVIDER")

    def get_api_key(self) -> str:
        for candidate in (self.OPENAI_API_KEY, self.DASHSCOPE_API_KEY):
            value = (candidate or "").strip()
            if value and value not in _PLACEHOLDER_KEYS:
                return value
        return ""

    def get_base_url(self, provider_hint: str = "") -> str:
        hint = (provider_hint or "").strip().lower()
        if hint == "ollama":
            return self.OLLAMA_BASE_URL
        return (
            self.OPENAI_BASE_URL
            or self.DASHSCOPE_BASE_URL
            or _DASHSCOPE_COMPAT_DEFAULT_BASE_URL
        )

    def has_openai_like_creds(self) -> bool:
        return bool(self.get_api_key())


settings = Settings()
