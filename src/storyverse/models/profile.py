"""Style profile model."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator

from storyverse.models.sample import new_id
from storyverse.style.parameters import StyleParameters, unique_in_order


class RepresentativeSample(BaseModel):
    """Exemplar text attached to a profile without a stored sample behind it."""

    text_content: str
    description: str | None = None


class StyleProfile(BaseModel):
    """A named composite style built from one or more analyzed samples."""

    id: str = Field(default_factory=new_id)
    name: str
    description: str | None = None
    parameters: StyleParameters = Field(default_factory=StyleParameters)
    genre: list[str] = Field(default_factory=list)
    comparable_authors: list[str] = Field(default_factory=list)
    user_comments: str | None = None
    project_id: str | None = None
    sample_ids: list[str] = Field(default_factory=list)
    representative_samples: list[RepresentativeSample] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("parameters", mode="before")
    @classmethod
    def _load_parameters(cls, value: Any) -> Any:
        if value is None or isinstance(value, dict):
            return StyleParameters.from_dict(value)
        return value

    @field_validator("comparable_authors", "sample_ids")
    @classmethod
    def _dedupe(cls, value: list[str]) -> list[str]:
        return unique_in_order(value)

    @field_serializer("parameters")
    def _dump_parameters(self, parameters: StyleParameters) -> dict:
        return parameters.to_dict()
