"""Merge catalog gyms with discovered shadow gyms into one render list."""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from gymfinder.schemas.gym import ShadowGym, VerifiedGym

logger = structlog.get_logger(__name__)


def normalize_name(name: str) -> str:
    """Case-folded, whitespace-trimmed name used as the dedup key."""

    return name.strip().casefold()


def reconcile(
    verified: Sequence[VerifiedGym],
    shadow: Sequence[ShadowGym],
) -> list[VerifiedGym | ShadowGym]:
    """Verified gyms in catalog order, then shadow gyms not already in the catalog.

    Shadow gyms are only checked against verified names; two shadow candidates
    sharing a name are both kept.
    """

    verified_names = {normalize_name(gym.name) for gym in verified}
    survivors = [gym for gym in shadow if normalize_name(gym.name) not in verified_names]
    dropped = len(shadow) - len(survivors)
    if dropped:
        logger.debug("shadow_gyms_deduplicated", dropped=dropped)
    return [*verified, *survivors]
