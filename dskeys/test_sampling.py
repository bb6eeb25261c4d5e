import random

import pytest

from dskeys.sampling import hash_to_int, random_number_mod

SHA1_ABC = 0xa9993e364706816aba3e25717850c26c9cd0d89d
SHA256_ABC = 0xba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad

@pytest.mark.parametrize("q", [2, 3, 7, 11, 101])
def test_random_number_mod_range(q):
    rng = random.Random(q)
    values = [random_number_mod(q, rng) for _ in range(2000)]
    assert min(values) >= 1
    assert max(values) <= q - 1

def test_random_number_mod_covers_range():
    rng = random.Random(0)
    values = {random_number_mod(11, rng) for _ in range(2000)}
    assert values == set(range(1, 11))

def test_random_number_mod_default_rng():
    q = 0xe21e04f911d1ed7991008ecaab3bf775984309c3
    for _ in range(50):
        assert 0 < random_number_mod(q) < q

def test_random_number_mod_rejects_tiny_q():
    with pytest.raises(ValueError):
        random_number_mod(1)

def test_hash_to_int_known_digests():
    assert hash_to_int("sha1", "abc") == SHA1_ABC
    assert hash_to_int("sha256", b"abc") == SHA256_ABC

def test_hash_to_int_matching_size_is_not_truncated():
    assert hash_to_int("sha1", "abc", 160) == SHA1_ABC
    assert hash_to_int("sha256", "abc", 256) == SHA256_ABC

def test_hash_to_int_truncates_to_leftmost_bits():
    assert hash_to_int("sha256", "abc", 160) == SHA256_ABC >> 96

def test_hash_to_int_utf8():
    assert hash_to_int("sha256", "héllo") == hash_to_int("sha256", "héllo".encode("utf-8"))

def test_hash_to_int_unknown_algorithm():
    with pytest.raises(ValueError):
        hash_to_int("md5", "abc")

def test_hash_to_int_rejects_other_types():
    with pytest.raises(TypeError):
        hash_to_int("sha1", None)
