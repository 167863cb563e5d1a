from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator

from .schemas import Receipt

log = logging.getLogger(__name__)


class ReadWriteLock:
	"""Many readers or one writer, never both.

	Waiting writers hold off new readers so a steady stream of lookups
	cannot starve an insert.
	"""

	def __init__(self) -> None:
		self._cond = threading.Condition(threading.Lock())
		self._readers = 0
		self._writing = False
		self._writers_waiting = 0

	@contextmanager
	def read(self) -> Iterator[None]:
		with self._cond:
			while self._writing or self._writers_waiting:
				self._cond.wait()
			self._readers += 1
		try:
			yield
		finally:
			with self._cond:
				self._readers -= 1
				if self._readers == 0:
					self._cond.notify_all()

	@contextmanager
	def write(self) -> Iterator[None]:
		with self._cond:
			self._writers_waiting += 1
			try:
				while self._writing or self._readers:
					self._cond.wait()
			finally:
				self._writers_waiting -= 1
			self._writing = True
		try:
			yield
		finally:
			with self._cond:
				self._writing = False
				self._cond.notify_all()


class ReceiptStore:
	"""In-memory receipts keyed by a random id.

	Nothing is persisted; the store starts empty on every process start and
	records are never updated or removed.
	"""

	def __init__(self) -> None:
		self._lock = ReadWriteLock()
		self._receipts: Dict[str, Receipt] = {}

	def insert(self, receipt: Receipt) -> str:
		receipt_id = str(uuid.uuid4())
		with self._lock.write():
			self._receipts[receipt_id] = receipt
		log.debug("inserted receipt %s", receipt_id)
		return receipt_id

	def get(self, receipt_id: str) -> Receipt:
		with self._lock.read():
			if receipt_id not in self._receipts:
				raise KeyError(receipt_id)
			return self._receipts[receipt_id]

	def __contains__(self, receipt_id: object) -> bool:
		with self._lock.read():
			return receipt_id in self._receipts

	def __len__(self) -> int:
		with self._lock.read():
			return len(self._receipts)
