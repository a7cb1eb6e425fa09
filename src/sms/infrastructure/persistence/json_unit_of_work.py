"""JSON-file-backed Unit of Work.

Entering the block takes the data-directory lock; every repository
shares the same set of staged ``JsonFile`` documents. ``commit()``
writes every changed document through one ``CommitJournal``. Anything
left uncommitted is discarded on exit, and the lock is released last.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sms.application.unit_of_work import UnitOfWork
from sms.infrastructure.persistence.json_party_repository import (
    JsonBranchRepository,
    JsonCustomerRepository,
)
from sms.infrastructure.persistence.json_product_repository import JsonProductRepository
from sms.infrastructure.persistence.json_sale_repository import (
    JsonSaleRepository,
    JsonSaleSequenceRepository,
)
from sms.infrastructure.persistence.json_store import CommitJournal, DataDirLock, JsonFile

logger = logging.getLogger(__name__)

DOCUMENTS = ("products", "customers", "branches", "sales", "sale_sequences")


class JsonUnitOfWork(UnitOfWork):

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = data_dir
        self._documents = {name: JsonFile(data_dir / f"{name}.json") for name in DOCUMENTS}
        self.products = JsonProductRepository(self._documents["products"])
        self.customers = JsonCustomerRepository(self._documents["customers"])
        self.branches = JsonBranchRepository(self._documents["branches"])
        self.sales = JsonSaleRepository(self._documents["sales"])
        self.sale_sequences = JsonSaleSequenceRepository(self._documents["sale_sequences"])
        self._journal = CommitJournal(data_dir)
        self._lock: DataDirLock | None = None

    def __enter__(self) -> JsonUnitOfWork:
        self._lock = DataDirLock(self._data_dir)
        self._lock.acquire()
        try:
            self._journal.recover()
        except BaseException:
            self._lock.release()
            self._lock = None
            raise
        # Always start from what is on disk, never from a previous block.
        for document in self._documents.values():
            document.discard()
        return self

    def __exit__(self, *args) -> None:
        try:
            super().__exit__(*args)
        finally:
            if self._lock is not None:
                self._lock.release()
                self._lock = None

    def commit(self) -> None:
        self._journal.commit(self._documents.values())
        logger.debug("Committed unit of work in %s", self._data_dir)

    def rollback(self) -> None:
        for document in self._documents.values():
            document.discard()
