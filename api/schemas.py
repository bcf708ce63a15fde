from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    ok: bool = True
    flows: list[str] = Field(default_factory=list)


class ErrorDetail(BaseModel):
    error: str
    flow: str = ""
    fields: dict[str, str] = Field(default_factory=dict)
