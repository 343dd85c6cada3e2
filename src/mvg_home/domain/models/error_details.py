"""User-facing summary of a fatal error."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorDetails(BaseModel):
    """What went wrong, as shown on stderr or in JSON output."""

    model_config = ConfigDict(frozen=True)

    status_code: int | None = Field(
        default=None, description="HTTP status of the departure API, if it answered at all"
    )
    reason: str = Field(description="One-line explanation for the user")
