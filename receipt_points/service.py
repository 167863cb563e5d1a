from __future__ import annotations

import logging

from opentelemetry import trace
from pydantic import ValidationError

from .points import calculate_points
from .schemas import Receipt
from .store import ReceiptStore

log = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class ReceiptDecodeError(ValueError):
	"""The submitted text is not a JSON receipt."""


class ReceiptService:
	def __init__(self, store: ReceiptStore | None = None) -> None:
		self.store = store if store is not None else ReceiptStore()

	def submit(self, raw: str) -> str:
		with tracer.start_as_current_span("service.submit") as span:
			span.set_attribute("request.size_bytes", len(raw.encode("utf-8")))
			try:
				receipt = Receipt.model_validate_json(raw)
			except ValidationError as exc:
				log.warning(
					"rejected receipt submission",
					extra={"errors": exc.error_count(), "reason": exc.errors()[0]["msg"]},
				)
				raise ReceiptDecodeError("Failed to decode JSON") from exc

			receipt_id = self.store.insert(receipt)
			span.set_attribute("receipt.id", receipt_id)
			span.set_attribute("receipt.items", len(receipt.items))

		log.info(
			"stored receipt",
			extra={"receipt_id": receipt_id, "items": len(receipt.items)},
		)
		return receipt_id

	def points(self, receipt_id: str) -> int:
		with tracer.start_as_current_span("service.points") as span:
			span.set_attribute("receipt.id", receipt_id)
			receipt = self.store.get(receipt_id)
			points = calculate_points(receipt)
			span.set_attribute("receipt.points", points)
		return points
