"""
Main configuration class that composes all configs.
"""

import os

from dotenv import load_dotenv

from labcheck.core.config.cache_config import CacheConfig
from labcheck.core.config.exercise_config import ExerciseConfig
from labcheck.core.config.logging_config import LoggingConfig
from labcheck.core.i18n import SUPPORTED_LANGUAGES

# Load environment variables from a .env file
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Config:
    """Main configuration class."""

    def __init__(self) -> None:
        self.exercises = ExerciseConfig(
            base_path=os.getenv("EXERCISES_PATH", "exercises"),
            default_language=os.getenv("DEFAULT_LANGUAGE", "es"),
        )

        self.cache = CacheConfig(
            maxsize=int(os.getenv("EXERCISE_CACHE_MAXSIZE", "1024")),
            ttl=int(os.getenv("EXERCISE_CACHE_TTL", "60")),
            enable_cache=_env_bool("EXERCISE_CACHE_ENABLE", "true"),
        )

        self.logging = LoggingConfig(
            level=os.getenv("LOG_LEVEL", "INFO"),
            format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            file_path=os.getenv("LOG_FILE_PATH"),
            json=_env_bool("LOG_JSON", "false"),
        )

    def validate(self) -> bool:
        """Validate configuration."""
        errors = []

        if not self.exercises.base_path:
            errors.append("EXERCISES_PATH must not be empty")

        if self.exercises.default_language not in SUPPORTED_LANGUAGES:
            errors.append(
                f"DEFAULT_LANGUAGE must be one of {sorted(SUPPORTED_LANGUAGES)}, got '{self.exercises.default_language}'"
            )

        if self.cache.ttl <= 0:
            errors.append("EXERCISE_CACHE_TTL must be positive")

        if self.cache.maxsize <= 0:
            errors.append("EXERCISE_CACHE_MAXSIZE must be positive")

        if errors:
            raise ValueError(f"Configuration errors: {', '.join(errors)}")

        return True


# Global config instance
config = Config()
