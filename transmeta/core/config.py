from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024
DEFAULT_JSON_MAX_BYTES = 100 * 1024


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable; blank or invalid gives the default."""

    raw = os.environ.get(name, "").strip()
    if not raw:
        return int(default)
    try:
        return int(raw)
    except ValueError:
        return int(default)


@dataclass(frozen=True, slots=True)
class ServiceConfig:
    """Runtime configuration shared by the CLI and the API.

    Environment:
    - TRANSMETA_MAX_UPLOAD_BYTES: API upload cap
    - TRANSMETA_JSON_MAX_BYTES: prefix of a JSON catalog that is parsed
    - TRANSMETA_LOG_LEVEL: logging level name
    """

    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    json_max_bytes: int = DEFAULT_JSON_MAX_BYTES
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, *, default_log_level: str = "INFO") -> "ServiceConfig":
        return cls(
            max_upload_bytes=_env_int("TRANSMETA_MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES),
            json_max_bytes=_env_int("TRANSMETA_JSON_MAX_BYTES", DEFAULT_JSON_MAX_BYTES),
            log_level=(os.environ.get("TRANSMETA_LOG_LEVEL") or default_log_level).upper(),
        )
