"""
Test suite for the list query builder.

Verifies:
- Defaults produce the first page of 20, ordered by dateAdded ASC
- Every invalid parameter is reported, keyed by query parameter name
- Offset/limit math and page count
- Partition and search end up in the query plan
"""

from __future__ import annotations

import pytest

from vehicle_inventory.domain.errors import ValidationError
from vehicle_inventory.domain.pagination import (
    DIRECTION_CHOICE,
    ORDER_CHOICE,
    PaginationRequest,
    VehicleQuery,
    total_pages,
)


def errors_of(request: PaginationRequest) -> dict[str, list[str]]:
    with pytest.raises(ValidationError) as exc_info:
        request.validate()
    return exc_info.value.errors


# ==============================================================================
# Query plan construction
# ==============================================================================


def test_defaults_build_first_page() -> None:
    request = PaginationRequest()
    request.validate()

    assert request.to_query("new") == VehicleQuery(
        partition="new",
        offset=0,
        limit=20,
        order_by="dateAdded",
        direction="ASC",
        search=None,
    )


@pytest.mark.parametrize(
    ("page", "page_size", "offset"),
    [("1", "20", 0), ("2", "20", 20), ("3", "7", 14), ("10", "1", 9)],
)
def test_offset_is_page_size_times_previous_pages(page: str, page_size: str, offset: int) -> None:
    request = PaginationRequest(page=page, page_size=page_size)
    request.validate()

    query = request.to_query("used")

    assert query.offset == offset
    assert query.limit == int(page_size)


def test_direction_is_case_insensitive() -> None:
    request = PaginationRequest(direction="desc")
    request.validate()

    assert request.to_query("new").direction == "DESC"


def test_mixed_case_direction_is_accepted() -> None:
    request = PaginationRequest(direction="Desc")
    request.validate()

    assert request.to_query("new").direction == "DESC"


def test_search_is_carried_into_query() -> None:
    request = PaginationRequest(search="ford")
    request.validate()

    assert request.to_query("new").search == "ford"


def test_empty_search_means_no_search() -> None:
    request = PaginationRequest(search="")
    request.validate()

    assert request.to_query("new").search is None


def test_integer_parameters_are_accepted() -> None:
    request = PaginationRequest(page=2, page_size=5)
    request.validate()

    assert request.to_query("new").offset == 5


@pytest.mark.parametrize(
    "column", ["id", "dateAdded", "msrp", "year", "make", "model", "miles", "vin"]
)
def test_every_orderable_column_is_accepted(column: str) -> None:
    request = PaginationRequest(order_by=column)
    request.validate()

    assert request.to_query("new").order_by == column


# ==============================================================================
# Validation errors
# ==============================================================================


def test_zero_page_is_not_positive() -> None:
    assert errors_of(PaginationRequest(page="0")) == {"page": ["This value should be positive."]}


def test_zero_page_size_is_rejected_before_any_division() -> None:
    assert errors_of(PaginationRequest(page_size="0")) == {
        "max": ["This value should be positive."]
    }


def test_negative_page_is_not_digit_nor_positive() -> None:
    assert errors_of(PaginationRequest(page="-2")) == {
        "page": ["This value should be of type digit.", "This value should be positive."]
    }


def test_oversized_page_is_rejected() -> None:
    assert errors_of(PaginationRequest(page="99999999999999999999")) == {
        "page": ["This value should be less than or equal to 2147483647."]
    }


def test_oversized_page_size_is_rejected() -> None:
    assert errors_of(PaginationRequest(page_size=2_147_483_648)) == {
        "max": ["This value should be less than or equal to 2147483647."]
    }


def test_largest_page_keeps_offset_in_bigint_range() -> None:
    largest = "2147483647"

    query = PaginationRequest(page=largest, page_size=largest).to_query("new")

    assert query.offset < 2**63


def test_non_numeric_page_size() -> None:
    assert errors_of(PaginationRequest(page_size="ten")) == {
        "max": ["This value should be of type digit."]
    }


def test_blank_page_reports_blank_and_digit() -> None:
    assert errors_of(PaginationRequest(page="")) == {
        "page": ["This value should not be blank.", "This value should be of type digit."]
    }


def test_unknown_order_column() -> None:
    assert errors_of(PaginationRequest(order_by="price")) == {"order": [ORDER_CHOICE]}


def test_order_column_is_case_sensitive() -> None:
    assert errors_of(PaginationRequest(order_by="dateadded")) == {"order": [ORDER_CHOICE]}


def test_unknown_direction() -> None:
    assert errors_of(PaginationRequest(direction="UP")) == {"sort": [DIRECTION_CHOICE]}


def test_non_string_search() -> None:
    assert errors_of(PaginationRequest(search=123)) == {
        "search": ["This value should be of type string."]
    }


def test_all_violations_are_reported_together() -> None:
    errors = errors_of(
        PaginationRequest(page="0", page_size="x", order_by="price", direction="sideways")
    )

    assert set(errors) == {"page", "max", "order", "sort"}


# ==============================================================================
# Page count
# ==============================================================================


@pytest.mark.parametrize(
    ("total", "page_size", "pages"),
    [(0, 20, 0), (1, 20, 1), (20, 20, 1), (21, 20, 2), (100, 7, 15)],
)
def test_total_pages_rounds_up(total: int, page_size: int, pages: int) -> None:
    assert total_pages(total, page_size) == pages
