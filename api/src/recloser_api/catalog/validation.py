"""Check a feature value against its bound component type and limits."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal, DecimalException, InvalidOperation
from typing import Dict, Iterable, Optional

from catalog_models.enums import ComponentKind, LimitKey

from .schemas import LimitEntry, ValidationResult

NUMERIC_KINDS = {ComponentKind.INTEGER, ComponentKind.DECIMAL, ComponentKind.SPINNER}
INTEGRAL_KINDS = {ComponentKind.INTEGER, ComponentKind.SPINNER}
TEXT_KINDS = {ComponentKind.TEXT_FIELD, ComponentKind.COMBO_BOX}
BOOLEAN_VALUES = {"true", "false", "1", "0"}


def _ok() -> ValidationResult:
    return ValidationResult(valid=True)


def _fail(message: str) -> ValidationResult:
    return ValidationResult(valid=False, message=message)


def _parse_decimal(text: str) -> Optional[Decimal]:
    try:
        number = Decimal(text.strip())
    except (InvalidOperation, AttributeError):
        return None
    return number if number.is_finite() else None


def _validate_number(kind: ComponentKind, limits: Dict[str, str], value: str) -> ValidationResult:
    number = _parse_decimal(value)
    if number is None:
        return _fail(f"'{value}' is not a number")
    try:
        integral = number == number.to_integral_value()
    except DecimalException:
        return _fail(f"'{value}' is out of range")
    if kind in INTEGRAL_KINDS and not integral:
        return _fail(f"'{value}' is not an integer")

    bounds: Dict[str, Decimal] = {}
    for key in (LimitKey.MIN_VALUE, LimitKey.MAX_VALUE, LimitKey.STEP):
        if key.value in limits:
            parsed = _parse_decimal(limits[key.value])
            if parsed is None:
                return _fail(f"Invalid {key.value} limit '{limits[key.value]}'")
            bounds[key.value] = parsed

    minimum = bounds.get(LimitKey.MIN_VALUE.value)
    maximum = bounds.get(LimitKey.MAX_VALUE.value)
    step = bounds.get(LimitKey.STEP.value)
    if minimum is not None and number < minimum:
        return _fail(f"Value must be at least {limits[LimitKey.MIN_VALUE.value]}")
    if maximum is not None and number > maximum:
        return _fail(f"Value must be at most {limits[LimitKey.MAX_VALUE.value]}")
    if step is not None and step > 0:
        try:
            remainder = (number - (minimum or Decimal(0))) % step
        except DecimalException:
            # Quotient needs more digits than the context precision
            return _fail(f"Value is out of range for step {limits[LimitKey.STEP.value]}")
        if remainder != 0:
            return _fail(f"Value must be a multiple of {limits[LimitKey.STEP.value]}")
    return _ok()


def _validate_text(limits: Dict[str, str], value: str) -> ValidationResult:
    for key in (LimitKey.MIN_CHAR, LimitKey.MAX_CHAR):
        raw = limits.get(key.value)
        if raw is None:
            continue
        if not raw.strip().isdigit():
            return _fail(f"Invalid {key.value} limit '{raw}'")
        bound = int(raw)
        if key is LimitKey.MIN_CHAR and len(value) < bound:
            return _fail(f"Value must have at least {bound} characters")
        if key is LimitKey.MAX_CHAR and len(value) > bound:
            return _fail(f"Value must have at most {bound} characters")
    return _ok()


def _validate_temporal(kind: ComponentKind, value: str) -> ValidationResult:
    parser = {
        ComponentKind.DATE: date.fromisoformat,
        ComponentKind.TIME: time.fromisoformat,
        ComponentKind.DATE_TIME: datetime.fromisoformat,
    }[kind]
    try:
        parser(value.strip())
    except ValueError:
        return _fail(f"'{value}' is not a valid {kind.value}")
    return _ok()


def validate_value(component_type: str, limits: Iterable[LimitEntry], value: str) -> ValidationResult:
    try:
        kind = ComponentKind(component_type)
    except ValueError:
        return _fail(f"Unknown component type '{component_type}'")
    limit_map = {limit.key: limit.value for limit in limits}

    if kind in NUMERIC_KINDS:
        return _validate_number(kind, limit_map, value)
    if kind in TEXT_KINDS:
        return _validate_text(limit_map, value)
    if kind in (ComponentKind.DATE, ComponentKind.TIME, ComponentKind.DATE_TIME):
        return _validate_temporal(kind, value)
    if kind in (ComponentKind.CHECK_BOX, ComponentKind.TOGGLE):
        if value.strip().lower() not in BOOLEAN_VALUES:
            return _fail(f"'{value}' is not a boolean")
        return _ok()
    # Buttons carry no value
    return _ok()
