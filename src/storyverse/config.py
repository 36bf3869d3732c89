"""Configuration management for StoryVerse."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings, loaded from environment and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="STORYVERSE_",
    )

    # Persistence
    store_backend: Literal["json", "memory", "neo4j"] = Field(
        default="json", description="json, memory or neo4j"
    )
    data_dir: Path = Field(default=Path("data"))

    # Neo4j connection
    neo4j_uri: str = Field(default="bolt://localhost:7687")
    neo4j_user: str = Field(default="neo4j")
    neo4j_password: str = Field(default="storyverse")

    # Example limits
    profile_example_limit: int = Field(default=3, description="Sample excerpts shown with a profile")
    prompt_sample_limit: int = Field(default=2, description="Sample excerpts packaged with a writing prompt")
    prompt_representative_limit: int = Field(default=3, description="Representative samples packaged with a writing prompt")

    log_level: str = Field(default="WARNING")

    @property
    def store_path(self) -> Path:
        return self.data_dir / "storyverse.json"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
