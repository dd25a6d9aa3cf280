"""
Test suite configuration module.

This module defines configuration classes for the environments the suite
runs in (local workstation, CI). Target URLs, timeouts and retry counts
are loaded from environment variables with sensible defaults.
"""

import os
from pathlib import Path

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag such as CI=true or HEADLESS=0 from the environment."""
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    """Base configuration with default settings."""

    # UI targets
    ECOMMERCE_URL: str = os.environ.get("ECOMMERCE_URL", "https://e-commerce-kib.netlify.app/")
    COUNTER_URL: str = os.environ.get("COUNTER_URL", "https://flutter-angular.web.app/")

    # Notes REST API
    API_BASE_URL: str = os.environ.get(
        "API_BASE_URL", "https://practice.expandtesting.com/notes/api"
    )

    # Timeouts (milliseconds for Playwright, seconds for requests)
    DEFAULT_TIMEOUT_MS: int = 30_000
    ACTION_TIMEOUT_MS: int = 15_000
    EXPECT_TIMEOUT_MS: int = 10_000
    HTTP_TIMEOUT_S: float = 30.0

    # Whole-test retries applied to live suites
    RETRY_COUNT: int = 0

    # Browser
    HEADLESS: bool = _env_flag("HEADLESS", True)
    SLOW_MO: int = 0
    VIEWPORT: dict = {"width": 1280, "height": 720}

    # Artifacts
    RESULTS_DIR: Path = BASE_DIR / "test-results"
    SCREENSHOT_DIR: Path = RESULTS_DIR / "screenshots"


class LocalConfig(Config):
    """Developer workstation configuration."""

    RETRY_COUNT: int = 0


class CIConfig(Config):
    """Continuous integration configuration."""

    # Remote targets are shared and unstable, so CI retries whole tests
    RETRY_COUNT: int = 2
    HEADLESS: bool = True


# Configuration mapping for easy access
config = {
    "local": LocalConfig,
    "ci": CIConfig,
    "default": LocalConfig,
}


def get_config(env: str | None = None) -> type[Config]:
    """
    Get the configuration class for the specified environment.

    Args:
        env: Environment name (local, ci).
             If None, uses TEST_ENV, falling back to "ci" when the
             CI environment variable is truthy and "local" otherwise.

    Returns:
        Configuration class for the specified environment.
    """
    if env is None:
        env = os.environ.get("TEST_ENV") or ("ci" if _env_flag("CI", False) else "local")
    return config.get(env, config["default"])
