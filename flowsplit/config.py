"""Runtime configuration read from the environment (and a .env file)."""

import logging
import os

from dotenv import load_dotenv

load_dotenv()  # load environment variables from .env file


def _parse_features(raw: str) -> list[str]:
    return [feature.strip() for feature in raw.split(",") if feature.strip()]


DEFAULT_OPERAND = os.getenv("FLOWSPLIT_DEFAULT_OPERAND", "@input.text")
DEFAULT_RESULT_NAME = os.getenv("FLOWSPLIT_DEFAULT_RESULT_NAME", "response")
DEFAULT_TIMEOUT_SECONDS = int(os.getenv("FLOWSPLIT_DEFAULT_TIMEOUT_SECONDS", "300"))

# feature flags that unlock gated operators, e.g. "HAS_LOCATIONS"
FEATURES = _parse_features(os.getenv("FLOWSPLIT_FEATURES", ""))

LOG_LEVEL = os.getenv("FLOWSPLIT_LOG_LEVEL", "WARNING")


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for scripts using the flowsplit defaults."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
