"""Pydantic models for retrieved context."""

from pydantic import BaseModel, Field, field_validator

from recollect.vector.schema import Role, SearchResult, normalize_role


class ConversationMessage(BaseModel):
    """A stored chat message, as supplied for re-hydration."""

    id: str
    text: str
    role: Role

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value: str) -> str:
        return normalize_role(value)


class RetrievedMessage(BaseModel):
    """A past turn selected for the context block."""

    text: str
    role: Role
    score: float
    message_id: str

    @classmethod
    def from_result(cls, result: SearchResult) -> "RetrievedMessage":
        return cls(
            text=result.document.text,
            role=result.document.role,
            score=result.score,
            message_id=result.document.source_message_id,
        )


class Context(BaseModel):
    """Context block assembled for a query.

    Either ``relevant_messages`` is populated, or (when ranked results
    existed but none fit the budget) ``summary`` carries a condensed
    version of the top results instead.
    """

    relevant_messages: list[RetrievedMessage] = Field(default_factory=list)
    summary: str | None = None
    total_tokens: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.relevant_messages and not self.summary

    def to_prompt(self) -> str:
        """Render the context as text to prepend to a model request.

        Returns:
            Context block, or an empty string if nothing was retrieved
        """
        if self.relevant_messages:
            lines = ["Relevant context from earlier in the conversation:"]
            lines.extend(f"[{msg.role}] {msg.text}" for msg in self.relevant_messages)
            return "\n".join(lines)
        if self.summary:
            return self.summary
        return ""
