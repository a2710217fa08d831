"""Configuration for prompters."""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class PrompterConfig:
    """Configuration for prompter behaviour."""

    # Readiness
    ready_timeout: Optional[float] = None  # Seconds per readiness wait, None = wait forever

    # Navigation
    wrap_over: bool = False  # Default for select_next/select_previous
    reclamp_on_ready: bool = True  # Pull a stale selection back in range when its source reports

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "PrompterConfig":
        """Load configuration from PROMPTER_* environment variables.

        Args:
            dotenv: Read a ``.env`` file first (existing variables win)
        """
        if dotenv:
            load_dotenv()

        timeout_str = os.getenv("PROMPTER_READY_TIMEOUT", "").strip()
        ready_timeout = float(timeout_str) if timeout_str else None

        return cls(
            ready_timeout=ready_timeout,
            wrap_over=_env_bool("PROMPTER_WRAP_OVER", False),
            reclamp_on_ready=_env_bool("PROMPTER_RECLAMP_ON_READY", True),
            log_level=os.getenv("PROMPTER_LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("PROMPTER_LOG_FILE") or None,
        )
