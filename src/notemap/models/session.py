"""Session metadata model."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator

DEFAULT_PREVIEW = "New diagram"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Session(BaseModel):
    """A named document whose raw text is stored separately."""

    id: str
    name: str
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
    preview: str = DEFAULT_PREVIEW
    collaborators: int = Field(default=1, ge=1)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject blank session names."""

        name = v.strip()
        if not name:
            raise ValueError("session name must not be blank")
        return name


def preview_from_text(text: str, max_chars: int = 60) -> str:
    """Return the first non-blank line of `text`, or the default preview."""

    for line in text.splitlines():
        stripped = line.strip()
        if stripped:
            return stripped[:max_chars]
    return DEFAULT_PREVIEW
