from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from vehicle_inventory.domain.constraints import (
    AT_MOST,
    MAX_INTEGER,
    NOT_BLANK,
    POSITIVE,
    TYPE_DIGIT,
    TYPE_STRING,
    as_int,
    exceeds,
    is_blank,
    is_digit,
)
from vehicle_inventory.domain.errors import FieldErrors, ValidationError

ORDERABLE_COLUMNS = ("id", "dateAdded", "msrp", "year", "make", "model", "miles", "vin")
DIRECTIONS = ("ASC", "DESC")

DEFAULT_PAGE = "1"
DEFAULT_PAGE_SIZE = "20"
DEFAULT_ORDER_BY = "dateAdded"
DEFAULT_DIRECTION = "ASC"

ORDER_CHOICE = "Only id/dateAdded/msrp/year/make/model/miles/vin options are allowed."
DIRECTION_CHOICE = "Only ASC/DESC/asc/desc options are allowed."


@dataclass(frozen=True, slots=True)
class VehicleQuery:
    """Validated query plan for one page of the vehicle list."""

    partition: str
    offset: int = 0
    limit: int = 20
    order_by: str = DEFAULT_ORDER_BY
    direction: str = DEFAULT_DIRECTION
    search: str | None = None


@dataclass(frozen=True, slots=True)
class PaginationRequest:
    """
    Untrusted list parameters, as they arrive from the query string.

    Field names follow the domain; error keys follow the query parameter
    names clients send (page, max, order, sort, search).
    """

    page: Any = DEFAULT_PAGE
    page_size: Any = DEFAULT_PAGE_SIZE
    order_by: Any = DEFAULT_ORDER_BY
    direction: Any = DEFAULT_DIRECTION
    search: Any = None

    def validate(self) -> None:
        """
        Validate every parameter and report all violations at once.

        Raises:
            ValidationError: With a field-error map keyed by query parameter name
        """
        errors: FieldErrors = {}

        for field, value in (("page", self.page), ("max", self.page_size)):
            messages = _positive_integer_errors(value)
            if messages:
                errors[field] = messages

        if is_blank(self.order_by):
            errors.setdefault("order", []).append(NOT_BLANK)
        if self.order_by is not None and self.order_by not in ORDERABLE_COLUMNS:
            errors.setdefault("order", []).append(ORDER_CHOICE)

        direction = self.normalized_direction()
        if is_blank(self.direction):
            errors.setdefault("sort", []).append(NOT_BLANK)
        if self.direction is not None and direction not in DIRECTIONS:
            errors.setdefault("sort", []).append(DIRECTION_CHOICE)

        if self.search is not None and not isinstance(self.search, str):
            errors["search"] = [TYPE_STRING]

        if errors:
            raise ValidationError(errors=errors)

    def normalized_direction(self) -> str | None:
        if isinstance(self.direction, str):
            return self.direction.upper()
        return None

    def to_query(self, partition: str) -> VehicleQuery:
        """
        Build the query plan. Call validate() first.

        Args:
            partition: Vehicle type served by this deployment (configuration, not user input)

        Returns:
            VehicleQuery bounded to one page
        """
        page = int(self.page)
        page_size = int(self.page_size)

        return VehicleQuery(
            partition=partition,
            offset=page_size * (page - 1),
            limit=page_size,
            order_by=self.order_by,
            direction=self.normalized_direction() or DEFAULT_DIRECTION,
            search=self.search or None,
        )


def total_pages(total: int, page_size: int) -> int:
    return math.ceil(total / page_size)


def _positive_integer_errors(value: Any) -> list[str]:
    messages = []
    if is_blank(value):
        messages.append(NOT_BLANK)
    if value is not None and not is_digit(value):
        messages.append(TYPE_DIGIT)
    number = as_int(value)
    if number is not None and number <= 0:
        messages.append(POSITIVE)
    if exceeds(value):
        messages.append(AT_MOST.format(limit=MAX_INTEGER))
    return messages
