from dataclasses import FrozenInstanceError

import pytest

from dskeys.params import DomainParameters, KEYSIZES, get_params, keysize_from_p_bitlength

def test_supported_keysizes():
    assert sorted(KEYSIZES) == [128, 256]

@pytest.mark.parametrize("keysize,p_bits,q_bits,hash_alg", [
    (128, 1024, 160, "sha1"),
    (256, 2048, 256, "sha256"),
])
def test_group_sizes(keysize, p_bits, q_bits, hash_alg):
    params = get_params(keysize)
    assert params.p.bit_length() == p_bits
    assert params.q_bitlength == q_bits
    assert params.hex_length == q_bits // 4
    assert params.hash_alg == hash_alg

@pytest.mark.parametrize("keysize", [128, 256])
def test_groups_are_consistent(keysize):
    assert get_params(keysize).validate()

def test_get_params_accepts_numeric_strings():
    assert get_params("256") is get_params(256)

@pytest.mark.parametrize("keysize", [64, 512, "abc", None, True, 128.9, 128.0, "128.0", " 128", "-128", "１２８"])
def test_get_params_unknown(keysize):
    assert get_params(keysize) is None

def test_params_are_immutable():
    with pytest.raises(FrozenInstanceError):
        get_params(128).p = 7

def test_invalid_group_detected():
    params = get_params(128)
    tampered = DomainParameters(p=params.p, q=params.q, g=params.g + 1, hash_alg=params.hash_alg)
    assert not tampered.validate()

@pytest.mark.parametrize("bits,expected", [
    (1024, 128),
    (1000, 128),
    (995, 128),
    (994, None),
    (1025, None),
    (2048, 256),
    (2030, 256),
    (1500, None),
    (4096, None),
])
def test_keysize_from_p_bitlength(bits, expected):
    assert keysize_from_p_bitlength(bits) == expected
