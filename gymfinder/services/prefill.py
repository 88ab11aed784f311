from __future__ import annotations

from collections.abc import Mapping

from gymfinder.schemas.gym import PrefillPayload, ShadowGym

_WEBSITE_KEYS = ("website", "contact:website")
_PHONE_KEYS = ("phone", "contact:phone")
_DESCRIPTION_KEYS = ("sport",)


def _first_tag(tags: Mapping[str, str], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = tags.get(key)
        if value:
            return value
    return None


def extract_prefill(gym: ShadowGym) -> PrefillPayload:
    """Derive scout form seed values from a shadow gym's POI tags.

    The gym's tag mapping is copied, never mutated.
    """

    tags = dict(gym.tags)
    return PrefillPayload(
        name=gym.name,
        coordinate=gym.coordinate,
        website=_first_tag(tags, _WEBSITE_KEYS),
        phone=_first_tag(tags, _PHONE_KEYS),
        description=_first_tag(tags, _DESCRIPTION_KEYS),
        raw_tags=tags,
    )
