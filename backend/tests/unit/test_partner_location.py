import pytest

from partnerfinder.domain.partners.location import known_city, matches


@pytest.mark.parametrize(
    "query",
    ["ist", "IST", "İstanbul", "stanbul"],
)
def test_istanbul_aliases_match_full_city(query):
    assert matches("İstanbul, Kadıköy", query)


@pytest.mark.parametrize(
    "location,query",
    [
        ("Ankara", "ank"),
        ("İzmir Karşıyaka", "izm"),
        ("Antalya", "ANT"),
        ("Bursa Nilüfer", "brs"),
    ],
)
def test_city_fast_paths(location, query):
    assert matches(location, query)


def test_alias_that_misses_falls_through_to_token_prefix():
    # "ant" is an Antalya alias but also prefixes "antakya"
    assert matches("Antakya", "ant")


def test_token_prefix_and_substring_fallback():
    assert matches("İstanbul, Kadıköy", "kadı")
    assert matches("Beşiktaş", "iktas")


def test_non_matching_location():
    assert not matches("Ankara Çankaya", "izmir")


def test_empty_inputs_never_match():
    assert not matches("", "ist")
    assert not matches("İstanbul", "")
    assert not matches(None, None)


@pytest.mark.parametrize("value", ["İstanbul, Kadıköy", "Eskişehir", "a", "New  York"])
def test_matches_is_reflexive(value):
    assert matches(value, value)


def test_known_city():
    assert known_city("İst") == "istanbul"
    assert known_city("Konya") is None
