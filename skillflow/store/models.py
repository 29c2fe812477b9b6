"""Topic file models for the demo profile store."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class SearchResult(BaseModel):
    """A single search hit as listed in a topic file."""

    name: str = Field(..., description="Display name")
    username: str = Field(..., min_length=1, description="Unique handle")
    picture: Optional[str] = Field(default=None, description="Avatar URL")
    location: str = Field(default="", description="Free-text 'City, Country'")
    professional_title: str = Field(default="", description="Headline")
    summary: str = Field(default="", description="Short biography")

    @property
    def country(self) -> str:
        """Last comma-separated part of the location string."""
        return self.location.split(", ")[-1] or "Unknown"

    def matches(self, term: str) -> bool:
        return (
            term in self.professional_title.lower() or term in self.summary.lower()
        )


class TopicFile(BaseModel):
    """Demo search results grouped under one topic keyword."""

    topic: str = Field(..., min_length=1, description="Lower-case topic keyword")
    results: List[SearchResult] = Field(default_factory=list)

    @field_validator("topic")
    @classmethod
    def normalize_topic(cls, v: str) -> str:
        return v.strip().lower()
