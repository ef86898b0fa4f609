"""Pydantic models for stored documents and search results."""

from typing import Literal

from pydantic import BaseModel, ConfigDict

Role = Literal["user", "assistant"]

# The chat UI labels assistant turns "expert"
_ROLE_ALIASES: dict[str, Role] = {
    "user": "user",
    "assistant": "assistant",
    "expert": "assistant",
}


def normalize_role(role: str) -> Role:
    """Map a chat sender label onto a stored role.

    Args:
        role: Sender label ("user", "assistant" or "expert")

    Returns:
        "user" or "assistant"

    Raises:
        ValueError: If the label is not recognised
    """
    try:
        return _ROLE_ALIASES[role]
    except KeyError:
        raise ValueError(f"Unknown message role: {role!r}") from None


class Document(BaseModel):
    """An embedded conversation turn. Immutable once stored."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    vector: tuple[float, ...]
    timestamp: float
    sequence: int  # insertion order, breaks timestamp ties
    role: Role
    source_message_id: str


class SearchResult(BaseModel):
    """A document paired with its similarity to the query."""

    model_config = ConfigDict(frozen=True)

    document: Document
    score: float
