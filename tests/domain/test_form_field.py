"""Unit tests for label-based form field type inference."""

import pytest

from orderdesk.domain.model.form_field import FieldType, infer_field_type


@pytest.mark.parametrize("label, expected", [
    ("Email Address", FieldType.EMAIL),
    ("Mobile Number", FieldType.PHONE),
    ("Delivery Location", FieldType.ADDRESS),
    ("Payment Amount", FieldType.AMOUNT),
    ("Qty", FieldType.AMOUNT),
    ("Special notes", FieldType.TEXTAREA),
    ("Upload dress photo", FieldType.FILE_UPLOAD),
    ("Size", FieldType.DROPDOWN),
    ("Select products", FieldType.PRODUCT_SELECTOR),
    ("Customer Name", FieldType.TEXT),
    ("", FieldType.TEXT),
])
def test_infers_type_from_label(label, expected):
    assert infer_field_type(label) is expected


def test_earlier_rules_win():
    # "price" (AMOUNT) is checked before "product" (PRODUCT_SELECTOR)
    assert infer_field_type("Product price") is FieldType.AMOUNT
    # "email" is checked before "contact"
    assert infer_field_type("Contact email") is FieldType.EMAIL
