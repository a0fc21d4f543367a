import os
from dotenv import load_dotenv
from pathlib import Path
from typing import Optional

# load .env at startup from project root
# Path(__file__) is netlayer/core/config.py, so we go up 2 levels to reach project root
project_root = Path(__file__).parent.parent.parent
load_dotenv(dotenv_path=project_root / ".env")

# Backend API
API_BASE_URL = os.getenv("API_BASE_URL", "https://api.example.com")

# Optional static bearer token (services, scripts)
API_TOKEN = os.getenv("API_TOKEN")

# Transport configuration (seconds)
NETWORK_TIMEOUT = float(os.getenv("NETWORK_TIMEOUT", "30"))

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE: Optional[Path] = Path(os.environ["LOG_FILE"]) if os.getenv("LOG_FILE") else None


def validate_config():
    """Validate configuration values loaded from the environment."""
    errors = []

    if not API_BASE_URL.startswith(("http://", "https://")):
        errors.append(f"API_BASE_URL must be an http(s) URL, got {API_BASE_URL!r}")
    if NETWORK_TIMEOUT <= 0:
        errors.append(f"NETWORK_TIMEOUT must be positive, got {NETWORK_TIMEOUT}")
    if LOG_LEVEL.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        errors.append(f"LOG_LEVEL must be a logging level name, got {LOG_LEVEL!r}")

    if errors:
        raise ValueError(
            "Invalid network configuration:\n" + "\n".join(errors) +
            "\nPlease check your .env file or environment variables."
        )
