"""Field validation for vehicle records.

Create and update share one contract: submitted fields are applied onto a
record (fresh defaults or an existing vehicle), then the whole resulting
record is validated. Validators never stop at the first failure.
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Mapping

from vehicle_inventory.domain.constraints import (
    AT_MOST,
    MAX_INTEGER,
    NOT_BLANK,
    TYPE_DIGIT,
    TYPE_STRING,
    as_int,
    exceeds,
    is_blank,
    is_digit,
    is_one_of,
    matches,
)
from vehicle_inventory.domain.errors import FieldErrors
from vehicle_inventory.domain.vehicle import EDITABLE_FIELDS, MIN_YEAR, VEHICLE_TYPES, Vehicle

TYPE_CHOICE = "Only new/used options are allowed."
MSRP_FORMAT = "MSRP must be decimal(20,2), up to 2 decimal places."
YEAR_RANGE = "The vehicle year should be between {min} and {max}."
VIN_FORMAT = "VIN must contain only letter and numbers"
VIN_TAKEN = "This value is already used."
DELETED_CHOICE = "Only true/false/t/f/0/1 options are allowed."

MSRP_PATTERN = re.compile(r"[0-9]{1,18}(\.[0-9]{1,2})?")
VIN_PATTERN = re.compile(r"[a-z0-9]+", re.IGNORECASE | re.ASCII)

DELETED_TOKENS = ("true", "false", "1", "0", "t", "f", True, False)
TRUE_TOKENS = ("true", "t", "1")

# Returns True when another vehicle already holds the VIN
VinLookup = Callable[[str], bool]

Validator = Callable[[Any], list[str]]


def new_record() -> dict[str, Any]:
    """Defaults a vehicle starts from before submitted fields are applied."""
    record: dict[str, Any] = dict.fromkeys(EDITABLE_FIELDS)
    record["deleted"] = False
    return record


def apply_fields(record: Mapping[str, Any], fields: Mapping[str, Any]) -> dict[str, Any]:
    """Overlay submitted fields on a record. Unknown keys and None values are ignored."""
    merged = dict(record)
    for name in EDITABLE_FIELDS:
        if fields.get(name) is not None:
            merged[name] = fields[name]
    return merged


def validate_type(value: Any) -> list[str]:
    errors = _required(value)
    if value is not None and not is_one_of(value, VEHICLE_TYPES):
        errors.append(TYPE_CHOICE)
    return errors


def validate_msrp(value: Any) -> list[str]:
    errors = _required(value)
    if not is_blank(value) and not matches(MSRP_PATTERN, value):
        errors.append(MSRP_FORMAT)
    return errors


def year_validator(current_year: int) -> Validator:
    max_year = current_year + 1

    def validate_year(value: Any) -> list[str]:
        errors = _required(value)
        if value is not None and not is_digit(value):
            errors.append(TYPE_DIGIT)
        year = as_int(value)
        if year is not None and not MIN_YEAR <= year <= max_year:
            errors.append(YEAR_RANGE.format(min=MIN_YEAR, max=max_year))
        return errors

    return validate_year


def validate_text(value: Any) -> list[str]:
    errors = _required(value)
    if value is not None and value is not False and not isinstance(value, str):
        errors.append(TYPE_STRING)
    return errors


def validate_miles(value: Any) -> list[str]:
    errors = _required(value)
    if value is not None and not is_digit(value):
        errors.append(TYPE_DIGIT)
    if exceeds(value):
        errors.append(AT_MOST.format(limit=MAX_INTEGER))
    return errors


def vin_validator(vin_is_taken: VinLookup) -> Validator:
    def validate_vin(value: Any) -> list[str]:
        errors = _required(value)
        if is_blank(value):
            return errors
        if not isinstance(value, str) or not VIN_PATTERN.fullmatch(value):
            errors.append(VIN_FORMAT)
        elif vin_is_taken(value):
            errors.append(VIN_TAKEN)
        return errors

    return validate_vin


def validate_deleted(value: Any) -> list[str]:
    if value is not None and not is_one_of(value, DELETED_TOKENS):
        return [DELETED_CHOICE]
    return []


def validate_vehicle(
    record: Mapping[str, Any],
    *,
    current_year: int,
    vin_is_taken: VinLookup,
) -> FieldErrors:
    """
    Validate a complete vehicle record.

    Args:
        record: Field values after submitted fields were applied
        current_year: Reference year for the model-year upper bound
        vin_is_taken: Uniqueness lookup (must exclude the vehicle being updated)

    Returns:
        Field-error map; empty when the record is valid
    """
    validators: dict[str, Validator] = {
        "type": validate_type,
        "msrp": validate_msrp,
        "year": year_validator(current_year),
        "make": validate_text,
        "model": validate_text,
        "miles": validate_miles,
        "vin": vin_validator(vin_is_taken),
        "deleted": validate_deleted,
    }

    errors: FieldErrors = {}
    for field, validator in validators.items():
        messages = validator(record.get(field))
        if messages:
            errors[field] = messages
    return errors


def normalize_deleted(value: Any) -> bool:
    """Booleans pass through; string tokens are true only for true/t/1."""
    if isinstance(value, bool):
        return value
    return value in TRUE_TOKENS


def to_vehicle(
    record: Mapping[str, Any],
    *,
    date_added: datetime,
    vehicle_id: int | None = None,
) -> Vehicle:
    """Build a Vehicle from a record that passed validate_vehicle()."""
    msrp = record["msrp"]
    return Vehicle(
        id=vehicle_id,
        date_added=date_added,
        type=record["type"],
        msrp=msrp if isinstance(msrp, Decimal) else Decimal(str(msrp)),
        year=int(record["year"]),
        make=record["make"],
        model=record["model"],
        miles=int(record["miles"]),
        vin=record["vin"],
        deleted=normalize_deleted(record["deleted"]),
    )


def _required(value: Any) -> list[str]:
    return [NOT_BLANK] if is_blank(value) else []
