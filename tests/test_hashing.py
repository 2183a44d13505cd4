import pytest

from navi.hashing import fnv


def test_deterministic_and_content_sensitive():
    first = fnv("git commit")
    second = fnv("git " + "commit")
    other = fnv("git commitx")
    assert len({first, second, other}) == 2
    assert first == second


def test_fits_in_64_bits():
    for text in ["", "a", "ssh -A <user>@<server>", "ünïcødé ⠀"]:
        value = fnv(text)
        assert 0 <= value < 2**64


def test_distinct_inputs_give_distinct_hashes():
    inputs = [f"line {n}" for n in range(500)] + ["", "a", "b", "ab", "ba"]
    assert len({fnv(text) for text in inputs}) == len(inputs)


def test_concatenation_boundary_matters_only_via_content():
    assert fnv("ab" + "c") == fnv("a" + "bc")


def test_rejects_non_str():
    with pytest.raises(TypeError):
        fnv(b"bytes")