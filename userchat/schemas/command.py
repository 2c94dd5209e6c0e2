"""Command Schema — the database command the model embeds in its reply.

Invariants:
    - action is always "database_operation"
    - operation is a non-empty string (alias resolution happens in dispatch)
    - parameters defaults to an empty object

Design Decisions:
    - operation kept as free str, not Operation enum: unknown names must reach
      dispatch so the user sees "Unknown operation: <name>"
    - extra keys ignored: small models decorate the object with comments/fields
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DatabaseCommand(BaseModel):
    """Structured CRUD request extracted from model text."""
    model_config = ConfigDict(extra="ignore")

    action: Literal["database_operation"]
    operation: str = Field(min_length=1)
    parameters: dict[str, Any] = Field(default_factory=dict)

    @field_validator("operation")
    @classmethod
    def strip_operation(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("operation cannot be empty or whitespace")
        return v

    @field_validator("parameters", mode="before")
    @classmethod
    def default_parameters(cls, v: Any) -> Any:
        return {} if v is None else v
