"""Unit tests for day-scoped sale numbering."""

from datetime import date, datetime, timedelta, timezone

import pytest

from sms.domain.exceptions import DuplicateSaleNumberError
from sms.domain.model.sale import Sale
from sms.domain.model.value_objects import BranchSnapshot, CustomerSnapshot
from sms.domain.service.sale_number_generator import (
    SaleNumberGenerator,
    day_bounds,
    format_sale_number,
)
from tests.fakes import FakeSaleRepository, FakeSaleSequenceRepository

MORNING = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def _sale(number: str, when: datetime = MORNING) -> Sale:
    return Sale.create(
        sale_number=number,
        customer=CustomerSnapshot("c1", "Alice Smith", "c1@example.com"),
        branch=BranchSnapshot("b1", "Downtown", "BR-B1"),
        now=when,
    )


def _setup(sales: list[Sale] | None = None):
    sales_repo = FakeSaleRepository(sales)
    seq_repo = FakeSaleSequenceRepository()
    return SaleNumberGenerator(seq_repo, sales_repo), sales_repo, seq_repo


class TestFormat:

    def test_format(self):
        assert format_sale_number(MORNING, 7) == "SALE-20240501-0007"

    def test_day_bounds_are_utc_half_open(self):
        start, end = day_bounds(datetime(2024, 5, 1, 23, 59, tzinfo=timezone.utc))
        assert start == datetime(2024, 5, 1, tzinfo=timezone.utc)
        assert end - start == timedelta(days=1)

    def test_naive_moment_treated_as_utc(self):
        start, _ = day_bounds(datetime(2024, 5, 1, 12, 0))
        assert start.tzinfo is timezone.utc


class TestNextNumber:

    def test_first_sale_of_day(self):
        gen, _, _ = _setup()
        assert gen.next_number(MORNING) == "SALE-20240501-0001"

    def test_numbers_increase_within_day(self):
        gen, _, _ = _setup()
        first = gen.next_number(MORNING)
        second = gen.next_number(MORNING + timedelta(hours=1))
        assert (first, second) == ("SALE-20240501-0001", "SALE-20240501-0002")

    def test_new_day_restarts_at_one(self):
        gen, _, _ = _setup()
        gen.next_number(MORNING)
        assert gen.next_number(MORNING + timedelta(days=1)) == "SALE-20240502-0001"

    def test_existing_sales_act_as_floor(self):
        gen, _, _ = _setup([_sale("SALE-20240501-0001"), _sale("SALE-20240501-0002")])
        assert gen.next_number(MORNING) == "SALE-20240501-0003"

    def test_sales_from_other_days_do_not_count(self):
        gen, _, _ = _setup([_sale("SALE-20240430-0001", MORNING - timedelta(days=1))])
        assert gen.next_number(MORNING) == "SALE-20240501-0001"

    def test_taken_number_is_skipped(self):
        # Only one sale today but it holds number 2, so 2 must be skipped.
        gen, _, _ = _setup([_sale("SALE-20240501-0002")])
        assert gen.next_number(MORNING) == "SALE-20240501-0003"

    def test_gives_up_after_repeated_collisions(self):
        gen, _, seq_repo = _setup([_sale(f"SALE-20240501-{n:04d}") for n in range(2, 8)])
        # A counter that ignores the floor and keeps landing on taken numbers.
        seq_repo.reserve_next = lambda day, floor=0, _n=iter(range(2, 100)): next(_n)
        with pytest.raises(DuplicateSaleNumberError, match="after 5 attempts"):
            gen.next_number(MORNING)

    def test_reserves_on_the_utc_day(self):
        gen, _, seq_repo = _setup()
        gen.next_number(MORNING)
        assert seq_repo.reserve_next(date(2024, 5, 1)) == 2
