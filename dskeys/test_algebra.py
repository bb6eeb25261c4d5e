import pytest

from dskeys.algebra import hex_lpad, hex_to_int, int_to_hex, is_hex, mod_inv

def test_mod_inv():
    assert mod_inv(3, 11) == 4
    assert (mod_inv(123456789, 1000000007) * 123456789) % 1000000007 == 1

def test_mod_inv_not_invertible():
    with pytest.raises(ValueError):
        mod_inv(0, 11)
    with pytest.raises(ValueError):
        mod_inv(6, 9)

def test_hex_encoding():
    assert int_to_hex(255) == "ff"
    assert hex_lpad(255, 6) == "0000ff"
    assert hex_lpad(0x123456, 4) == "123456"

@pytest.mark.parametrize("value", ["", " ff", "f f", "0xff", "f_f", "-1", "g", None, 255])
def test_hex_to_int_is_strict(value):
    assert not is_hex(value)
    with pytest.raises(ValueError):
        hex_to_int(value)

def test_hex_to_int():
    assert hex_to_int("00FF") == 255
