"""Loyalty points for a stored receipt; fields that do not parse earn nothing."""

from __future__ import annotations

import math
import re
from datetime import date

from .schemas import Item, Receipt

_ALNUM = re.compile(r"[A-Za-z0-9]")
_DATE = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_TIME = re.compile(r"([0-9]{1,2}):([0-9]{2})")
_FLOAT = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def _parse_float(value: str) -> float | None:
	# ascii digits only, no surrounding whitespace
	if _FLOAT.fullmatch(value) is None:
		return None
	number = float(value)
	return number if math.isfinite(number) else None


def _parse_day(value: str) -> int | None:
	m = _DATE.fullmatch(value)
	if m is None:
		return None
	year, month, day = (int(g) for g in m.groups())
	try:
		# year 0 is valid and a leap year; check it as 2000
		return date(year or 2000, month, day).day
	except ValueError:
		return None


def _parse_hour(value: str) -> int | None:
	m = _TIME.fullmatch(value)
	if m is None:
		return None
	hour, minute = int(m.group(1)), int(m.group(2))
	if hour > 23 or minute > 59:
		return None
	return hour


def retailer_points(receipt: Receipt) -> int:
	return len(_ALNUM.findall(receipt.retailer))


def round_total_points(receipt: Receipt) -> int:
	# literal suffix check; "9.0" does not qualify
	return 50 if receipt.total.endswith(".00") else 0


def quarter_total_points(receipt: Receipt) -> int:
	total = _parse_float(receipt.total)
	if total is None:
		return 0
	return 25 if math.fmod(total, 0.25) == 0 else 0


def item_pair_points(receipt: Receipt) -> int:
	return (len(receipt.items) // 2) * 5


def description_points(item: Item) -> int:
	"""Points for a single item's description rule.

	Length is measured in UTF-8 bytes. An all-whitespace description trims
	to length 0, which counts as a multiple of 3.
	"""
	if len(item.short_description.strip().encode("utf-8")) % 3 != 0:
		return 0
	price = _parse_float(item.price)
	if price is None:
		return 0
	return max(0, math.ceil(price * 0.2))


def odd_day_points(receipt: Receipt) -> int:
	day = _parse_day(receipt.purchase_date)
	return 6 if day is not None and day % 2 == 1 else 0


def afternoon_points(receipt: Receipt) -> int:
	hour = _parse_hour(receipt.purchase_time)
	return 10 if hour is not None and 14 <= hour < 16 else 0


def calculate_points(receipt: Receipt) -> int:
	return (
		retailer_points(receipt)
		+ round_total_points(receipt)
		+ quarter_total_points(receipt)
		+ item_pair_points(receipt)
		+ sum(description_points(item) for item in receipt.items)
		+ odd_day_points(receipt)
		+ afternoon_points(receipt)
	)
