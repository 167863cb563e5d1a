from __future__ import annotations

import argparse
import logging
import sys

import uvicorn
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from .config import SERVICE_NAME, Settings, load_settings
from .logging import configure_logging
from .service import ReceiptService
from .transport.rest import build_router
from .version import get_version, get_version_info

settings = load_settings()

configure_logging(
	service=SERVICE_NAME, json_mode=settings.json_logs, level=settings.log_level
)
log = logging.getLogger(__name__)


def setup_tracing(app: FastAPI, settings: Settings) -> None:
	if not settings.otlp_endpoint:
		log.info("tracing disabled (no OTLP_ENDPOINT)")
		return

	resource = Resource.create({"service.name": SERVICE_NAME})
	provider = TracerProvider(resource=resource)
	exporter = OTLPSpanExporter(endpoint=settings.otlp_endpoint, insecure=True)
	provider.add_span_processor(BatchSpanProcessor(exporter))
	trace.set_tracer_provider(provider)
	FastAPIInstrumentor.instrument_app(app, tracer_provider=provider)
	log.info("tracing enabled", extra={"otlp_endpoint": settings.otlp_endpoint})


def create_app(
	settings: Settings = settings, svc: ReceiptService | None = None
) -> FastAPI:
	app = FastAPI(title=SERVICE_NAME, version=get_version())
	app.state.receipts = svc if svc is not None else ReceiptService()
	app.include_router(build_router(settings, app.state.receipts))
	setup_tracing(app, settings)
	return app


def serve(host: str, port: int) -> None:
	log.info(
		"Starting receipt-points server",
		extra={"host": host, "port": port, **get_version_info()},
	)
	uvicorn.run(create_app(), host=host, port=port, log_config=None)


def main() -> None:
	parser = argparse.ArgumentParser(
		prog="receipt-points",
		description="Receipt points HTTP service"
	)
	parser.add_argument(
		"--host",
		default=settings.host,
		help=f"address to bind (default: {settings.host})"
	)
	parser.add_argument(
		"--port",
		type=int,
		default=settings.port,
		help=f"HTTP port (default: {settings.port})"
	)
	args = parser.parse_args()

	try:
		serve(host=args.host, port=args.port)
	except Exception as e:
		log.error("Server failed to start", extra={"error": str(e)})
		sys.exit(1)


if __name__ == "__main__":
	main()
