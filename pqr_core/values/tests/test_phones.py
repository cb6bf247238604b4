import random

import pytest

from pqr_core.common.errors import ValidationError
from pqr_core.values import PhoneNumber


def test_every_colombian_mobile_is_accepted_as_mobile():
    rng = random.Random(57)
    for _ in range(500):
        number = "3" + "".join(str(rng.randint(0, 9)) for _ in range(9))
        phone = PhoneNumber.create(number, validate_as_mobile=True)
        assert phone.is_mobile
        assert phone.value == number


@pytest.mark.parametrize("raw", ["6012345678", "2123456789", "8123456", "1234567"])
def test_numbers_not_starting_with_3_fail_mobile_factory(raw):
    with pytest.raises(ValidationError):
        PhoneNumber.create(raw, validate_as_mobile=True)


def test_country_code_and_separators_are_stripped_before_validation():
    a = PhoneNumber.create("+57 300 123 4567", validate_as_mobile=True)
    b = PhoneNumber.create("3001234567", validate_as_mobile=True)
    c = PhoneNumber.create("573001234567")
    assert a == b == c
    assert c.is_mobile


def test_landline_is_valid_but_not_mobile():
    p = PhoneNumber.create("(601) 234-5678")
    assert p.value == "6012345678"
    assert not p.is_mobile
    assert p.formatted == "601234 5678"


def test_formatted_presentation():
    assert PhoneNumber.create("3001234567").formatted == "300 123 4567"
    assert PhoneNumber.create("8123456").formatted == "812 3456"
    assert PhoneNumber.create("3001234567").international == "+573001234567"


@pytest.mark.parametrize("raw", ["", "12345", "0123456789", "300123456789"])
def test_invalid_phone_numbers(raw):
    with pytest.raises(ValidationError) as exc:
        PhoneNumber.create(raw)
    assert exc.value.field == "phone"
