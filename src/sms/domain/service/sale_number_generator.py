"""Domain service: Sale Number Generator.

Produces ``SALE-<YYYYMMDD>-<NNNN>`` numbers, unique per UTC calendar day
and increasing within the day.

The sequence is never derived by "count today's sales, add one": two
concurrent requests would read the same count. Instead a per-day counter
is reserved through ``SaleSequenceRepository.reserve_next``, which must run
inside the same unit of work that later writes the sale. The count of
sales already recorded today is passed as a floor so a fresh or lost
counter cannot hand out a number that already exists.
"""

from __future__ import annotations

import logging
from datetime import datetime, time, timedelta, timezone

from sms.domain.exceptions import DuplicateSaleNumberError
from sms.domain.model.sale import as_utc
from sms.domain.repository.sale_repository import (
    SaleRepository,
    SaleSequenceRepository,
)

logger = logging.getLogger(__name__)

SALE_NUMBER_PREFIX = "SALE"
MAX_NUMBER_ATTEMPTS = 5


def format_sale_number(day: datetime, sequence: int) -> str:
    return f"{SALE_NUMBER_PREFIX}-{day:%Y%m%d}-{sequence:04d}"


def day_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """Return ``[start, end)`` of the UTC day containing ``moment``."""
    day = as_utc(moment).date()
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


class SaleNumberGenerator:

    def __init__(
        self,
        sequence_repo: SaleSequenceRepository,
        sale_repo: SaleRepository,
    ) -> None:
        self._sequence_repo = sequence_repo
        self._sale_repo = sale_repo

    def next_number(self, moment: datetime) -> str:
        """Reserve the next free sale number for the day of ``moment``.

        A reserved number that is already taken (counter reset, restored
        backup) is skipped; after ``MAX_NUMBER_ATTEMPTS`` consecutive
        collisions the store is considered inconsistent.
        """
        start, end = day_bounds(moment)
        floor = self._sale_repo.count_in_range(start, end)

        for _ in range(MAX_NUMBER_ATTEMPTS):
            sequence = self._sequence_repo.reserve_next(start.date(), floor=floor)
            number = format_sale_number(start, sequence)
            if self._sale_repo.get_by_sale_number(number) is None:
                return number
            logger.warning("Sale number %s already taken, reserving another", number)

        raise DuplicateSaleNumberError(
            f"Could not reserve a free sale number for {start:%Y-%m-%d} "
            f"after {MAX_NUMBER_ATTEMPTS} attempts"
        )
