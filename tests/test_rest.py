"""Tests for the HTTP surface in receipt_points.transport.rest."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import parse_qs, urlsplit

from fastapi.testclient import TestClient

from receipt_points.service import ReceiptService


def process(client: TestClient, body: str) -> Any:
	return client.post(
		"/receipts/process", data={"jsonInput": body}, follow_redirects=False
	)


def receipt_id_from(location: str) -> str:
	parts = urlsplit(location)
	assert parts.path == "/receipt-id.html"
	return parse_qs(parts.query)["id"][0]


class TestProcessReceipt:
	def test_redirects_to_receipt_page(
		self, client: TestClient, service: ReceiptService, target_payload: dict[str, Any]
	) -> None:
		resp = process(client, json.dumps(target_payload))

		assert resp.status_code == 302
		receipt_id = receipt_id_from(resp.headers["location"])
		assert receipt_id in service.store

	def test_invalid_json_is_rejected(
		self, client: TestClient, service: ReceiptService
	) -> None:
		resp = process(client, "{not json")

		assert resp.status_code == 400
		assert resp.json() == {"error": "Failed to decode JSON"}
		assert len(service.store) == 0

	def test_wrong_shape_is_rejected(self, client: TestClient) -> None:
		resp = process(client, json.dumps({"total": 9.0}))

		assert resp.status_code == 400
		assert resp.json() == {"error": "Failed to decode JSON"}

	def test_missing_form_field_is_rejected(
		self, client: TestClient, service: ReceiptService
	) -> None:
		resp = client.post("/receipts/process", data={}, follow_redirects=False)

		assert resp.status_code == 400
		assert resp.json() == {"error": "Failed to decode JSON"}
		assert len(service.store) == 0


class TestReceiptPoints:
	def test_points_for_processed_receipt(
		self, client: TestClient, target_payload: dict[str, Any]
	) -> None:
		receipt_id = receipt_id_from(
			process(client, json.dumps(target_payload)).headers["location"]
		)

		resp = client.get(f"/receipts/{receipt_id}/points")

		assert resp.status_code == 200
		assert resp.json() == {"points": 28}

	def test_round_total_receipt(
		self, client: TestClient, corner_market_payload: dict[str, Any]
	) -> None:
		receipt_id = receipt_id_from(
			process(client, json.dumps(corner_market_payload)).headers["location"]
		)

		assert client.get(f"/receipts/{receipt_id}/points").json() == {"points": 109}

	def test_unknown_receipt(self, client: TestClient) -> None:
		resp = client.get("/receipts/00000000-0000-0000-0000-000000000000/points")

		assert resp.status_code == 404
		assert resp.json() == {"Error": "Receipt not found"}

	def test_malformed_fields_still_score(self, client: TestClient) -> None:
		body = {
			"retailer": "Target",
			"purchaseDate": "not a date",
			"purchaseTime": "25:99",
			"items": [{"shortDescription": "abc", "price": "cheap"}],
			"total": "lots",
		}
		receipt_id = receipt_id_from(process(client, json.dumps(body)).headers["location"])

		assert client.get(f"/receipts/{receipt_id}/points").json() == {"points": 6}


class TestPages:
	def test_health(self, client: TestClient) -> None:
		assert client.get("/health").json() == {"status": "ok"}

	def test_index_page_posts_json_input(self, client: TestClient) -> None:
		resp = client.get("/")

		assert resp.status_code == 200
		assert resp.headers["content-type"].startswith("text/html")
		assert 'name="jsonInput"' in resp.text
		assert 'action="/receipts/process"' in resp.text

	def test_receipt_page(self, client: TestClient) -> None:
		resp = client.get("/receipt-id.html", params={"id": "abc"})

		assert resp.status_code == 200
		assert "/points" in resp.text
