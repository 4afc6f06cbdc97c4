"""Configuration defaults and environment overrides."""

from dataclasses import dataclass
import os

from dotenv import load_dotenv

DEFAULT_ENCODING_TAG = "UTF-8"
DEFAULT_MAX_GENERATIONS = 9
MAX_GENERATIONS_LIMIT = 15
DEFAULT_HTTP_TIMEOUT = 30.0


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    max_generations: int = DEFAULT_MAX_GENERATIONS
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    encoding_tag: str = DEFAULT_ENCODING_TAG


def load_settings() -> Settings:
    """Load settings from the environment (and a .env file, if present)."""
    load_dotenv()

    return Settings(
        log_level=os.getenv("GEDLINEAGE_LOG_LEVEL", "INFO").upper(),
        max_generations=int(os.getenv("GEDLINEAGE_MAX_GENERATIONS", DEFAULT_MAX_GENERATIONS)),
        http_timeout=float(os.getenv("GEDLINEAGE_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)),
        encoding_tag=os.getenv("GEDLINEAGE_ENCODING_TAG", DEFAULT_ENCODING_TAG),
    )
