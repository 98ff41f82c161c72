from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Iterable

from sqlalchemy import Integer, String, Text, DateTime
from sqlalchemy.orm import DeclarativeMeta

from .models import PRODUCT_CATEGORIES, MOVEMENT_TYPES
from .time_utils import parse_iso_datetime


# Maximum unit price: 9,999,999.99
MAX_PRICE = Decimal("9999999.99")
PRICE_QUANT = Decimal("0.01")

# SQLite INTEGER is a signed 64-bit value
INT_MIN = -2**63
INT_MAX = 2**63 - 1


def int_in_range(value: int) -> bool:
    return INT_MIN <= value <= INT_MAX


@dataclass(frozen=True)
class FieldError:
    field: str | None
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}

    def __str__(self) -> str:
        return self.message


class ValidationError(ValueError):
    """400-level input problem. Carries every field-level violation found."""

    def __init__(self, errors: Iterable[FieldError] | str):
        if isinstance(errors, str):
            errors = [FieldError(None, errors)]
        self.errors: list[FieldError] = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors))

    def to_dict(self) -> dict:
        return {"error": "Invalid data", "errors": [e.to_dict() for e in self.errors]}


class ConflictError(ValueError):
    """409-level business rule conflict (e.g., second inventory row for a product)."""


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - writable_fields: wire names clients are allowed to set (security boundary)
    - required_on_create: wire names required for POST
    - aliases: wire name -> model column key (camelCase payloads, snake_case columns)
    - derived_fields: wire names the server computes; always rejected from payloads
    """
    writable_fields: set[str]
    required_on_create: set[str] = field(default_factory=set)
    aliases: dict[str, str] = field(default_factory=dict)
    derived_fields: set[str] = field(default_factory=set)

    def column_key(self, wire_name: str) -> str:
        return self.aliases.get(wire_name, wire_name)


def _columns_by_key(model: DeclarativeMeta) -> dict[str, Any]:
    mapper = model.__mapper__
    return {c.key: c for c in mapper.columns}


def _check_int_range(name: str, value: int) -> int:
    if not int_in_range(value):
        raise ValueError(f"{name} is out of range")
    return value


def _coerce_value(name: str, col, value: Any):
    """Coerce one raw JSON value to the column's Python type; ValueError on mismatch."""
    coltype = col.type

    # Integers - strict validation to reject floats and scientific notation
    if isinstance(coltype, Integer):
        # Already an int (but not bool which is a subclass of int)
        if isinstance(value, int) and not isinstance(value, bool):
            return _check_int_range(name, value)
        # String input - must be plain digits (with optional leading minus)
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                raise ValueError(f"{name} must be an integer")
            if 'e' in stripped.lower():
                raise ValueError(f"{name} must be a plain integer (scientific notation not allowed)")
            if '.' in stripped:
                raise ValueError(f"{name} must be an integer (no decimals)")
            try:
                parsed = int(stripped)
            except ValueError:
                raise ValueError(f"{name} must be an integer")
            return _check_int_range(name, parsed)
        if isinstance(value, float):
            raise ValueError(f"{name} must be an integer, not a decimal")
        raise ValueError(f"{name} must be an integer")

    # Datetimes (accept ISO-8601 strings; normalize to UTC)
    if isinstance(coltype, DateTime):
        if isinstance(value, datetime):
            return value
        if isinstance(value, str):
            try:
                dt = parse_iso_datetime(value)
            except ValueError:
                raise ValueError(f"{name} must be an ISO-8601 datetime")
            if dt is None:
                raise ValueError(f"{name} must be an ISO-8601 datetime")
            return dt
        raise ValueError(f"{name} must be a datetime")

    # Strings / Text
    if isinstance(coltype, (String, Text)):
        if isinstance(value, (dict, list, bool)):
            raise ValueError(f"{name} must be a string")
        return str(value).strip()

    # JSON and anything else: leave as-is
    return value


def validate_payload(
    *,
    model: DeclarativeMeta,
    payload: Any,
    policy: ModelValidationPolicy,
    partial: bool,
    rules: Iterable[Callable[[dict], None]] = (),
) -> dict:
    """
    Validates + normalizes incoming JSON against:
    - SQLAlchemy column metadata (nullable, type, String length)
    - a policy allowlist (writable_fields) and derived-field blocklist
    - required_on_create (if partial=False)
    - business rules (each may raise ValidationError and may normalize the patch)

    Returns a cleaned patch dict keyed by column key. Every violation is
    collected and raised together as one ValidationError.

    partial=False: create semantics (enforce required_on_create)
    partial=True: patch semantics (validate only provided keys)
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    errors: list[FieldError] = []

    if not partial:
        for name in sorted(policy.required_on_create):
            if name not in payload:
                errors.append(FieldError(name, f"{name} is required"))

    cols = _columns_by_key(model)
    patch: dict = {}

    for name, raw in payload.items():
        if name in policy.derived_fields:
            errors.append(FieldError(name, f"{name} is computed by the server and cannot be set"))
            continue
        if name not in policy.writable_fields:
            errors.append(FieldError(name, f"Field not allowed: {name}"))
            continue

        key = policy.column_key(name)
        col = cols.get(key)
        if col is None:
            errors.append(FieldError(name, f"Unknown field: {name}"))
            continue

        # NULL handling
        if raw is None:
            if not col.nullable:
                errors.append(FieldError(name, f"{name} cannot be null"))
            else:
                patch[key] = None
            continue

        try:
            val = _coerce_value(name, col, raw)
        except ValueError as e:
            errors.append(FieldError(name, str(e)))
            continue

        # Blank string check for non-nullable text fields
        if isinstance(col.type, (String, Text)) and not col.nullable and val == "":
            errors.append(FieldError(name, f"{name} cannot be blank"))
            continue

        # Max length check for String(n)
        if isinstance(col.type, String) and col.type.length and isinstance(val, str):
            if len(val) > col.type.length:
                errors.append(FieldError(name, f"{name} exceeds max length {col.type.length}"))
                continue

        patch[key] = val

    for rule in rules:
        try:
            rule(patch)
        except ValidationError as e:
            errors.extend(e.errors)

    if errors:
        raise ValidationError(errors)

    return patch


def enforce_rules_product(patch: dict) -> None:
    """
    Business rules that are not captured by SQLAlchemy metadata alone.
    Normalizes price to a two-decimal string in place.
    """
    errors: list[FieldError] = []

    if "category" in patch and patch["category"] not in PRODUCT_CATEGORIES:
        errors.append(FieldError(
            "category", f"category must be one of: {', '.join(PRODUCT_CATEGORIES)}"
        ))

    if "price" in patch:
        try:
            price = Decimal(patch["price"])
        except (InvalidOperation, TypeError):
            errors.append(FieldError("price", "price must be a decimal number"))
        else:
            if not price.is_finite():
                errors.append(FieldError("price", "price must be a decimal number"))
            elif price < 0:
                errors.append(FieldError("price", "price must be >= 0"))
            elif price > MAX_PRICE:
                errors.append(FieldError("price", f"price cannot exceed {MAX_PRICE}"))
            else:
                patch["price"] = str(price.quantize(PRICE_QUANT))

    if errors:
        raise ValidationError(errors)


def enforce_rules_movement(patch: dict) -> None:
    # Sign of quantity is the caller's choice; only the type label is checked
    if "type" in patch and patch["type"] not in MOVEMENT_TYPES:
        raise ValidationError([FieldError(
            "type", f"type must be one of: {', '.join(MOVEMENT_TYPES)}"
        )])


def enforce_rules_report(patch: dict) -> None:
    date_from = patch.get("date_from")
    date_to = patch.get("date_to")
    if date_from is not None and date_to is not None and date_from > date_to:
        raise ValidationError([FieldError("dateTo", "dateTo must not be earlier than dateFrom")])
