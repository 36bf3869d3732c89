"""Writing sample model."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


def new_id() -> str:
    """Generate a record id."""
    return str(uuid.uuid4())


class WritingSample(BaseModel):
    """A stored piece of prose that can be analyzed and added to profiles."""

    id: str = Field(default_factory=new_id)
    title: str
    content: str
    author: str | None = None
    sample_type: str | None = None  # novel, screenplay, essay
    tags: list[str] = Field(default_factory=list)
    project_id: str | None = None
    excerpt: str = ""
    created_at: datetime = Field(default_factory=datetime.now)
