"""
Tests for the domain vocabulary and its decoding boundary.
"""

from datetime import datetime

import pytest
from pydantic import ValidationError

from upcycle.errors import InvalidEnumValueError
from upcycle.models import Colour, Currency, Item, ItemCondition, Sale, Size, User, parse_enum


def make_item(**overrides):
    fields = dict(
        title="Scarf",
        description="Silk scarf",
        condition=ItemCondition.VINTAGE,
        price=12.0,
        currency=Currency.EUR,
    )
    fields.update(overrides)
    return Item(**fields)


class TestVocabulary:
    def test_member_sets(self):
        assert len(Colour) == 11
        assert [s.value for s in Size] == ["extraSmall", "small", "medium", "large", "extraLarge"]
        assert {c.value for c in ItemCondition} == {"new", "used", "vintage"}
        assert {c.value for c in Currency} == {"usd", "aud", "gbp", "cad", "eur"}

    def test_parse_enum_decodes_value(self):
        assert parse_enum(Size, "extraLarge") is Size.EXTRA_LARGE
        assert parse_enum(Colour, "grey") is Colour.GREY

    def test_parse_enum_accepts_member(self):
        assert parse_enum(Currency, Currency.CAD) is Currency.CAD

    @pytest.mark.parametrize("raw", ["gray", "XL", "", None, 3])
    def test_parse_enum_rejects_out_of_set(self, raw):
        with pytest.raises(InvalidEnumValueError) as exc_info:
            parse_enum(Colour if raw != "XL" else Size, raw)
        assert exc_info.value.value == raw

    def test_invalid_enum_value_is_a_value_error(self):
        with pytest.raises(ValueError, match="not a valid ItemCondition"):
            parse_enum(ItemCondition, "mint")


class TestItem:
    def test_optional_fields_default_to_none(self):
        item = make_item()
        assert item.size is None
        assert item.colour is None

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            make_item(price=-1.0)

    def test_out_of_set_colour_rejected(self):
        with pytest.raises(ValidationError):
            make_item(colour="gray")

    def test_item_is_immutable(self):
        item = make_item()
        with pytest.raises(ValidationError):
            item.price = 1.0


class TestUser:
    def test_add_sale_appends(self):
        user = User(username="alice", email="a@example.com", first_name="Alice", last_name="Nguyen")
        sale = Sale(
            item=make_item(),
            buyer_username="alice",
            seller_username="bob",
            sale_price=10.0,
            date=datetime(2026, 1, 1),
        )
        user.add_sale(sale)
        assert user.sales == [sale]
