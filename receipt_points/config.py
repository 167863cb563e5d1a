from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

SERVICE_NAME = "receipt-points"


def _env(name: str, default: Any, cast: Callable[[str], Any]):
	raw = os.getenv(name)
	if raw is None:
		return default
	try:
		return cast(raw)
	except Exception as e:
		raise ValueError(
			f"env var {name!r}={raw!r} not valid for {cast.__name__}"
		) from e


# minimal env surface
LOG_LEVEL = _env("LOG_LEVEL", "INFO", str)
OTLP_ENDPOINT = _env("OTLP_ENDPOINT", None, str)
LOKI_URL = _env("LOKI_URL", None, str)  # presence toggles json logs, no direct emission

# http listener
HOST = _env("HOST", "localhost", str).strip()
PORT = _env("PORT", 8080, int)

# browsing pages served next to the api
STATIC_DIR = _env("STATIC_DIR", Path(__file__).parent / "static", Path)


@dataclass(frozen=True)
class Settings:
	service: str = SERVICE_NAME
	log_level: str = LOG_LEVEL
	json_logs: bool = bool(OTLP_ENDPOINT or LOKI_URL)
	otlp_endpoint: str | None = OTLP_ENDPOINT
	host: str = HOST
	port: int = PORT
	static_dir: Path = STATIC_DIR


def load_settings() -> Settings:
	return Settings()
