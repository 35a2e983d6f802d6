"""
Configuration settings for the study planner.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    state_path: str = "data/state.json"
    plan_output_dir: str = "data/plans"
    default_language: str = "kannada"
    default_elective: str = "computer"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "BOARDPREP_"


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
