from __future__ import annotations

import pytest

from gymfinder.services.prefill import extract_prefill
from tests.factories import make_shadow


@pytest.mark.parametrize(
    ("tags", "expected"),
    [
        ({"website": "https://a.example", "contact:website": "https://b.example"}, "https://a.example"),
        ({"contact:website": "https://b.example"}, "https://b.example"),
        ({}, None),
    ],
)
def test_website_precedence(tags, expected):
    assert extract_prefill(make_shadow(tags=tags)).website == expected


@pytest.mark.parametrize(
    ("tags", "expected"),
    [
        ({"phone": "+1 555 0100", "contact:phone": "+1 555 0199"}, "+1 555 0100"),
        ({"contact:phone": "+1 555 0199"}, "+1 555 0199"),
        ({}, None),
    ],
)
def test_phone_precedence(tags, expected):
    assert extract_prefill(make_shadow(tags=tags)).phone == expected


def test_description_seed_comes_from_sport_tag():
    assert extract_prefill(make_shadow(tags={"sport": "fitness"})).description == "fitness"
    assert extract_prefill(make_shadow()).description is None


def test_name_coordinate_and_tags_are_carried_over():
    gym = make_shadow(7, "Iron Paradise", lat=32.1, lng=-117.2, tags={"opening_hours": "24/7"})

    prefill = extract_prefill(gym)

    assert prefill.name == "Iron Paradise"
    assert prefill.coordinate == gym.coordinate
    assert prefill.raw_tags == {"name": "Iron Paradise", "opening_hours": "24/7"}


def test_input_tags_are_not_shared_or_mutated():
    gym = make_shadow(tags={"website": "https://a.example"})
    before = dict(gym.tags)

    first = extract_prefill(gym)
    second = extract_prefill(gym)

    assert first == second
    assert first is not second
    assert first.raw_tags is not gym.tags
    assert gym.tags == before
