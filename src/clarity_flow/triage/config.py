"""Configuration constants for task triage functionality."""

import os

# Feature flags
AI_FEATURES_ENABLED = os.getenv("CLARITYFLOW_AI_FEATURES", "true").lower() != "false"

# Provider selection
PROVIDER_GEMINI = "gemini"
PROVIDER_OPENROUTER = "openrouter"
# Preference order used when no primary provider is designated
PROVIDER_PREFERENCE = (PROVIDER_GEMINI, PROVIDER_OPENROUTER)
DEFAULT_PRIMARY_PROVIDER = os.getenv("CLARITYFLOW_PRIMARY_PROVIDER") or None

# Build-time default credentials
PROVIDER_ENV_KEYS = {
    PROVIDER_GEMINI: "GEMINI_API_KEY",
    PROVIDER_OPENROUTER: "OPENROUTER_API_KEY",
}

# Gemini
GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
GEMINI_MODEL = "gemini-2.0-flash"
GEMINI_KEY_PREFIX = "AIza"
GEMINI_KEY_LENGTH = 39

# OpenRouter
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_MODEL = "anthropic/claude-3.5-sonnet"
OPENROUTER_MAX_TOKENS = 1000
OPENROUTER_TEMPERATURE = 0.3
OPENROUTER_REFERER = "https://clarityflow.app"
OPENROUTER_TITLE = "ClarityFlow Task Manager"
OPENROUTER_KEY_PREFIX = "sk-or-"
OPENROUTER_KEY_MIN_LENGTH = 21

# HTTP
DEFAULT_HTTP_TIMEOUT = 30.0  # seconds

# Response normalization
DEFAULT_CONFIDENCE = 0.7
DEFAULT_ESTIMATED_TIME = 60  # minutes
DEFAULT_MANUAL_ESTIMATED_TIME = 30  # minutes
MANUAL_CONFIDENCE = 1.0

# Insight thresholds
URGENT_IMPORTANT_RATIO_THRESHOLD = 0.3
SCHEDULED_IMPORTANT_RATIO_THRESHOLD = 0.2
COMPLETION_RATE_THRESHOLD = 0.7
OPTIMISTIC_ESTIMATE_THRESHOLD = 1.5
CONSERVATIVE_ESTIMATE_THRESHOLD = 0.7

# Storage Configuration
DEFAULT_CONFIG_DATABASE_PATH = os.path.expanduser("~/.clarityflow/providers.db")

# Database Schema Version
SCHEMA_VERSION = 1


def get_default_api_keys() -> dict[str, str]:
    """
    Read build-time default credentials from the environment.

    Returns:
        Mapping of provider id to API key, only for providers with a non-empty key
    """
    keys = {}
    for provider_id, env_name in PROVIDER_ENV_KEYS.items():
        value = os.getenv(env_name, "").strip()
        if value:
            keys[provider_id] = value
    return keys
