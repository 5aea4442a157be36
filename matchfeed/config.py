"""
Runtime settings for the MatchFeed client.

Values come from the environment (optionally seeded from .env by
load_env) and may be overridden by CLI flags.
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_TIMEOUT = 15.0
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_DIR = "logs"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL
    log_dir: Path = Path(DEFAULT_LOG_DIR)

    def with_overrides(self, **overrides) -> "Settings":
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "base_url" in changes:
            changes["base_url"] = changes["base_url"].rstrip("/")
        return replace(self, **changes) if changes else self


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        environ: Mapping to read instead of os.environ (used by tests)

    Returns:
        Settings instance

    Raises:
        SystemExit: If MATCHFEED_TIMEOUT is not a number or
            MATCHFEED_LOG_LEVEL is not a logging level name
    """
    env = os.environ if environ is None else environ

    raw_timeout = env.get("MATCHFEED_TIMEOUT", "").strip()
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError:
        raise SystemExit(f"MATCHFEED_TIMEOUT must be a number, got {raw_timeout!r}")

    log_level = (env.get("MATCHFEED_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
    if log_level not in LOG_LEVELS:
        raise SystemExit(f"MATCHFEED_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    return Settings(
        base_url=(env.get("MATCHFEED_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
        timeout=timeout,
        log_level=log_level,
        log_dir=Path(env.get("MATCHFEED_LOG_DIR") or DEFAULT_LOG_DIR),
    )
