from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Item(BaseModel):
	model_config = ConfigDict(frozen=True, populate_by_name=True)

	short_description: str = Field("", alias="shortDescription")
	price: str = ""

	@field_validator("short_description", "price", mode="before")
	@classmethod
	def _null_text(cls, v):
		return "" if v is None else v


class Receipt(BaseModel):
	"""A submitted receipt, kept exactly as the client sent it.

	Every field stays text; the points rules do their own lenient parsing so
	a bad date or price only costs that rule its points. JSON nulls decode
	to empty values.
	"""

	model_config = ConfigDict(frozen=True, populate_by_name=True)

	retailer: str = ""
	purchase_date: str = Field("", alias="purchaseDate")
	purchase_time: str = Field("", alias="purchaseTime")
	items: tuple[Item, ...] = ()
	total: str = ""

	@field_validator("retailer", "purchase_date", "purchase_time", "total", mode="before")
	@classmethod
	def _null_text(cls, v):
		return "" if v is None else v

	@field_validator("items", mode="before")
	@classmethod
	def _null_items(cls, v):
		if v is None:
			return ()
		if isinstance(v, (list, tuple)):
			return [{} if i is None else i for i in v]
		return v
