from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Centralized application settings leveraging environment overrides.
    """

    app_name: str = "SkillFlow Analytics"
    environment: str = Field("local", validation_alias="ENVIRONMENT")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")
    allow_origins: List[str] = Field(default_factory=lambda: ["*"])
    max_payload_bytes: int = Field(2 * 1024 * 1024, ge=1024)  # 2 MB soft limit
    max_profiles_per_request: int = Field(500, ge=1)

    # Response shaping
    skill_stats_limit: int = Field(15, ge=1)
    genome_batch_limit: int = Field(15, ge=1)
    search_default_limit: int = Field(30, ge=1)
    search_max_results: int = Field(50, ge=1)
    streaming_chunk_delay_ms: int = Field(100, ge=0)

    # Demo profile store
    profiles_dir: Optional[str] = Field(
        None, description="Directory of topic YAML files; bundled data when unset"
    )
    demo_seed: Optional[int] = Field(
        None, description="Seed for the demo profile generator"
    )
    search_delay_ms: int = Field(0, ge=0)
    profile_delay_ms: int = Field(0, ge=0)
    batch_delay_ms: int = Field(0, ge=0)

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
