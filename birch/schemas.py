from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class ErrorKind(str, Enum):
    PARSE = "parse"
    EXECUTION = "execution"


class RunReport(BaseModel):
    ok: bool
    result: int | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None
    steps: int = Field(default=0, ge=0)
    program: str | None = None

    @model_validator(mode="after")
    def _validate_outcome(self) -> "RunReport":
        if self.ok and self.result is None:
            raise ValueError("successful report requires a result")
        if not self.ok and self.error_kind is None:
            raise ValueError("failed report requires an error_kind")
        return self
