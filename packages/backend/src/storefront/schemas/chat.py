"""Chat wire format.

A chat message is a JSON object with two string fields. Missing fields
decode as empty strings and unknown keys are dropped, so older clients
that send extra metadata keep working. Non-string values are rejected.
"""

from pydantic import BaseModel, ConfigDict


class ChatMessage(BaseModel):
    """One broadcast message. Immutable once decoded."""

    model_config = ConfigDict(frozen=True, extra="ignore", strict=True)

    username: str = ""
    message: str = ""
