"""
Runtime configuration for the analyzer backend.

Values are read from the process environment (optionally seeded from a .env
file next to the backend) into an immutable Settings object. Routes receive
it through FastAPI dependency injection instead of calling os.getenv.
"""
import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

ENV_PATH = Path(__file__).resolve().parents[1] / ".env"

DEFAULT_PORT = 8787
DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_SCORING_MODEL = "llama-3.1-8b-instant"
DEFAULT_COVER_LETTER_MODELS = ["llama-3.1-70b-versatile", "llama-3.1-8b-instant"]
DEFAULT_CORS_ORIGINS = ["http://localhost:5173", "http://localhost:3000"]
SCHEMA_POLICIES = ("passthrough", "repair", "reject")


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    groq_api_key: Optional[str] = None
    port: int = DEFAULT_PORT
    groq_base_url: str = DEFAULT_BASE_URL
    scoring_model: str = DEFAULT_SCORING_MODEL
    cover_letter_models: List[str] = DEFAULT_COVER_LETTER_MODELS
    upstream_timeout: float = 60.0
    schema_policy: str = "passthrough"
    cors_origins: List[str] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"

    @property
    def has_key(self) -> bool:
        return bool(self.groq_api_key)

    @property
    def key_prefix(self) -> str:
        return (self.groq_api_key or "")[:4]


def _split(value: Optional[str]) -> List[str]:
    return [v.strip() for v in (value or "").split(",") if v.strip()]


def load_settings(env_file: Optional[Path] = ENV_PATH) -> Settings:
    """Build Settings from the environment. A .env file never overrides real env vars."""
    if env_file is not None:
        load_dotenv(env_file, override=False)

    policy = (os.getenv("SCHEMA_POLICY") or "passthrough").strip().lower()
    if policy not in SCHEMA_POLICIES:
        raise ValueError(f"SCHEMA_POLICY must be one of {', '.join(SCHEMA_POLICIES)}, got {policy!r}")

    return Settings(
        groq_api_key=os.getenv("GROQ_API_KEY") or None,
        port=int(os.getenv("PORT") or DEFAULT_PORT),
        groq_base_url=(os.getenv("GROQ_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
        scoring_model=os.getenv("SCORING_MODEL") or DEFAULT_SCORING_MODEL,
        cover_letter_models=_split(os.getenv("COVER_LETTER_MODELS")) or DEFAULT_COVER_LETTER_MODELS,
        upstream_timeout=float(os.getenv("UPSTREAM_TIMEOUT") or 60.0),
        schema_policy=policy,
        cors_origins=_split(os.getenv("CORS_ORIGINS")) or DEFAULT_CORS_ORIGINS,
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
