from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Form, status
from fastapi.responses import FileResponse, JSONResponse, RedirectResponse

from ..config import Settings
from ..schemas import Health, Points
from ..service import ReceiptDecodeError, ReceiptService

log = logging.getLogger(__name__)

RECEIPT_PAGE = "/receipt-id.html"


def http_error(key: str, message: str, status_code: int) -> JSONResponse:
	return JSONResponse(status_code=status_code, content={key: message})


def build_router(settings: Settings, svc: ReceiptService) -> APIRouter:
	router = APIRouter()

	@router.get("/health", response_model=Health)
	async def health() -> Health:
		return Health()

	@router.get("/", include_in_schema=False)
	async def index() -> FileResponse:
		return FileResponse(settings.static_dir / "index.html")

	@router.get(RECEIPT_PAGE, include_in_schema=False)
	async def receipt_page() -> FileResponse:
		return FileResponse(settings.static_dir / "receipt-id.html")

	# plain defs: each request runs on its own worker thread
	@router.post("/receipts/process")
	def process_receipt(
		json_input: Annotated[str, Form(alias="jsonInput")] = "",
	):
		try:
			receipt_id = svc.submit(json_input)
		except ReceiptDecodeError as e:
			return http_error("error", str(e), status.HTTP_400_BAD_REQUEST)

		return RedirectResponse(
			f"{RECEIPT_PAGE}?id={receipt_id}", status_code=status.HTTP_302_FOUND
		)

	@router.get("/receipts/{receipt_id}/points", response_model=Points)
	def receipt_points(receipt_id: str):
		try:
			return Points(points=svc.points(receipt_id))
		except KeyError:
			log.info("points requested for unknown receipt %s", receipt_id)
			return http_error("Error", "Receipt not found", status.HTTP_404_NOT_FOUND)

	return router
