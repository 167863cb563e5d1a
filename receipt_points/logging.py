from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any

from opentelemetry import trace
from pythonjsonlogger import jsonlogger

from .config import SERVICE_NAME

UVICORN_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")


class ServiceJSONFormatter(jsonlogger.JsonFormatter):
	"""One JSON object per line, shaped for the log collector.

	Adds an ISO timestamp, a lowercase level, the service name and, when a
	span is active, the trace and span ids so logs can be joined to traces.
	"""

	def add_fields(
		self,
		log_record: dict[str, Any],
		record: logging.LogRecord,
		message_dict: dict[str, Any],
	):
		super().add_fields(log_record, record, message_dict)

		log_record["timestamp"] = datetime.fromtimestamp(
			record.created, timezone.utc
		).isoformat(timespec="milliseconds")
		log_record["level"] = record.levelname.lower()
		log_record["service"] = log_record.get("service") or SERVICE_NAME
		log_record["logger"] = record.name

		for key in ("levelname", "color_message", "asctime", "name"):
			log_record.pop(key, None)

		ctx = trace.get_current_span().get_span_context()
		if ctx.is_valid:
			log_record["trace_id"] = f"{ctx.trace_id:032x}"
			log_record["span_id"] = f"{ctx.span_id:016x}"

		return log_record


def configure_logging(
	service: str = SERVICE_NAME, json_mode: bool = False, level: str = "INFO"
) -> logging.Logger:
	root = logging.getLogger()
	if root.handlers:
		return logging.getLogger(service)

	handler = logging.StreamHandler(sys.stdout)
	if json_mode:
		handler.setFormatter(
			ServiceJSONFormatter("%(timestamp)s %(level)s %(name)s %(message)s")
		)
	else:
		handler.setFormatter(
			logging.Formatter(fmt="%(asctime)s %(levelname)s %(name)s: %(message)s")
		)

	root.setLevel(level.upper())
	root.addHandler(handler)

	# uvicorn installs its own handlers; route them through ours
	for name in UVICORN_LOGGERS:
		ul = logging.getLogger(name)
		ul.handlers = [handler]
		ul.propagate = False

	return logging.getLogger(service)
