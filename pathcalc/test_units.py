# Unit conversion checks.
import pytest

from .units import Quantity, UnitConverter, UnitOfLength


def test_units_are_multiples_of_a_centimeter():
    assert UnitOfLength.CENTIMETER.value == 1.0
    assert UnitOfLength.INCH.value == 2.54
    assert UnitOfLength.TILE.value == pytest.approx(24 * UnitOfLength.INCH.value)


def test_from_name_accepts_short_and_long_names():
    assert UnitOfLength.from_name("in") is UnitOfLength.INCH
    assert UnitOfLength.from_name(" CM ") is UnitOfLength.CENTIMETER
    assert UnitOfLength.from_name("meter") is UnitOfLength.METER
    with pytest.raises(ValueError):
        UnitOfLength.from_name("parsec")


def test_short_name():
    assert UnitOfLength.FOOT.short_name == "ft"
    assert UnitOfLength.MILLIMETER.short_name == "mm"


def test_converter_both_ways():
    uc = UnitConverter(UnitOfLength.INCH, UnitOfLength.CENTIMETER)
    assert uc.from_a_to_b(1.0) == pytest.approx(2.54)
    assert uc.from_b_to_a(2.54) == pytest.approx(1.0)
    assert UnitConverter(UnitOfLength.METER, UnitOfLength.METER).from_a_to_b(3.0) == 3.0


def test_quantity_to():
    q = Quantity(2, UnitOfLength.FOOT)
    assert q.to(UnitOfLength.INCH) == pytest.approx(24.0)
    assert q.to(UnitOfLength.CENTIMETER) == pytest.approx(60.96)
    assert "ft" in repr(q)


def run():
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()


if __name__ == "__main__":
    run()
