from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class Span(BaseModel):
    """A balanced `{...}` or `[...]` region of the raw model output."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    start: int = Field(..., description="Index of the opening delimiter")
    end: int = Field(..., description="Index one past the closing delimiter")
    kind: Literal["object", "array"] = Field(..., description="Delimiter pair that bounds the span")
    text: str = Field(..., description="The span contents, delimiters included")
    complete: bool = Field(True, description="False when the text ended before the span closed")

    def __len__(self) -> int:
        return self.end - self.start


class ParseOutcome(BaseModel):
    """Result of a strict parse attempt."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    valid: bool
    value: Any = None
    position: Optional[int] = Field(None, description="Parser error offset when invalid")
    message: str = ""

    @classmethod
    def ok(cls, value: Any) -> "ParseOutcome":
        return cls(valid=True, value=value)

    @classmethod
    def failed(cls, message: str, position: Optional[int] = None) -> "ParseOutcome":
        return cls(valid=False, message=message, position=position)


class RepairResult(BaseModel):
    model_config = ConfigDict(extra="forbid")

    text: str = Field(..., description="JSON text accepted by a strict parser")
    kind: Literal["object", "array"] = Field(..., description="Kind of the extracted span")
    recovered: bool = Field(False, description="True when the recoverer truncated the text")
    original_error: Optional[str] = Field(None, description="Validator message that triggered recovery")
    recovered_length: Optional[int] = Field(None, description="Prefix length kept by the recoverer")
