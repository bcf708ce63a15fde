"""Error taxonomy shared by the flows and the API layer."""

from __future__ import annotations


class ClinicAIError(Exception):
    """Base class for every error raised by clinic_ai."""


class InputValidationError(ClinicAIError):
    """Caller payload does not match the flow's input shape."""

    def __init__(self, flow: str, errors: dict[str, str]):
        self.flow = flow
        self.errors = dict(errors)
        details = "; ".join(f"{path}: {reason}" for path, reason in self.errors.items())
        super().__init__(f"{flow}: invalid input ({details})")


class FlowFailure(ClinicAIError):
    """The oracle produced nothing usable for a flow that does not degrade."""

    def __init__(self, flow: str, message: str):
        self.flow = flow
        self.message = message
        super().__init__(f"{flow}: {message}")


class OracleConfigurationError(ClinicAIError):
    """The oracle client could not be constructed from configuration."""


class OracleOutputError(ClinicAIError):
    """The oracle returned a value that does not match the output shape."""

    def __init__(self, oracle: str, schema: str, reason: str):
        self.oracle = oracle
        self.schema = schema
        super().__init__(f"{oracle}: output does not match {schema}: {reason}")
