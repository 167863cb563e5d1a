"""Shared test fixtures."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from receipt_points.app import create_app
from receipt_points.config import Settings
from receipt_points.schemas import Receipt
from receipt_points.service import ReceiptService
from receipt_points.store import ReceiptStore


@pytest.fixture
def target_payload() -> dict[str, Any]:
	"""Receipt body as a client would post it; scores 28 points."""
	return {
		"retailer": "Target",
		"purchaseDate": "2022-01-01",
		"purchaseTime": "13:01",
		"items": [
			{"shortDescription": "Mountain Dew 12PK", "price": "6.49"},
			{"shortDescription": "Emils Cheese Pizza", "price": "12.25"},
			{"shortDescription": "Knorr Creamy Chicken", "price": "1.26"},
			{"shortDescription": "Doritos Nacho Cheese", "price": "3.35"},
			{"shortDescription": "   Klarbrunn 12-PK 12 FL OZ  ", "price": "12.00"},
		],
		"total": "35.35",
	}


@pytest.fixture
def corner_market_payload() -> dict[str, Any]:
	"""Round-dollar receipt bought in the afternoon; scores 109 points."""
	return {
		"retailer": "M&M Corner Market",
		"purchaseDate": "2022-03-20",
		"purchaseTime": "14:33",
		"items": [
			{"shortDescription": "Gatorade", "price": "2.25"},
			{"shortDescription": "Gatorade", "price": "2.25"},
			{"shortDescription": "Gatorade", "price": "2.25"},
			{"shortDescription": "Gatorade", "price": "2.25"},
		],
		"total": "9.00",
	}


@pytest.fixture
def target_receipt(target_payload: dict[str, Any]) -> Receipt:
	return Receipt.model_validate(target_payload)


@pytest.fixture
def store() -> ReceiptStore:
	return ReceiptStore()


@pytest.fixture
def service(store: ReceiptStore) -> ReceiptService:
	return ReceiptService(store)


@pytest.fixture
def client(service: ReceiptService) -> TestClient:
	"""HTTP client over a fresh app with an empty store."""
	return TestClient(create_app(Settings(), service))
