"""Form field types and label-based type inference for the form builder."""

from __future__ import annotations

from enum import Enum


class FieldType(Enum):
    TEXT = "TEXT"
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    ADDRESS = "ADDRESS"
    TEXTAREA = "TEXTAREA"
    AMOUNT = "AMOUNT"
    FILE_UPLOAD = "FILE_UPLOAD"
    DROPDOWN = "DROPDOWN"
    PRODUCT_SELECTOR = "PRODUCT_SELECTOR"


# Evaluated top to bottom; the first rule with a keyword contained in the
# label wins.  Order matters: "Product price" is an AMOUNT, not a
# PRODUCT_SELECTOR.
FIELD_TYPE_RULES: tuple[tuple[tuple[str, ...], FieldType], ...] = (
    (("email",), FieldType.EMAIL),
    (("phone", "mobile", "contact"), FieldType.PHONE),
    (("address", "location"), FieldType.ADDRESS),
    (("amount", "price", "cost"), FieldType.AMOUNT),
    (("quantity", "qty"), FieldType.AMOUNT),
    (("description", "notes", "message"), FieldType.TEXTAREA),
    (("image", "photo", "file"), FieldType.FILE_UPLOAD),
    (("size", "option", "choice"), FieldType.DROPDOWN),
    (("product", "item"), FieldType.PRODUCT_SELECTOR),
)


def infer_field_type(label: str) -> FieldType:
    """Guess the input type of a form field from its label."""
    text = (label or "").lower()
    for keywords, field_type in FIELD_TYPE_RULES:
        if any(keyword in text for keyword in keywords):
            return field_type
    return FieldType.TEXT
