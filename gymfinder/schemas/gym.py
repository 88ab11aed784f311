"""Gym records as the map and the selection flow see them.

Two variants share one list: ``VerifiedGym`` (catalog-owned, read-only here) and
``ShadowGym`` (discovered per query from the POI index, never persisted). The
``kind`` field is the discriminator of ``ReconciledGym``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

SHADOW_DESCRIPTION = "Unverified Location - Scout to claim!"
SCOUTED_ADDRESS = "Scouted Location"


class Coordinate(BaseModel):
    """WGS84 position."""

    lat: float = Field(ge=-90.0, le=90.0, description="緯度")
    lng: float = Field(ge=-180.0, le=180.0, description="経度")

    model_config = ConfigDict(frozen=True)

    def as_lng_lat(self) -> list[float]:
        """GeoJSON ordering, as the backend and the map SDK expect it."""

        return [self.lng, self.lat]


class GeoPoint(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: tuple[float, float] = Field(description="[lon, lat]")
    formatted_address: str | None = Field(default=None, alias="formattedAddress")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    @classmethod
    def from_coordinate(cls, coordinate: Coordinate, **kwargs: Any) -> GeoPoint:
        return cls(coordinates=(coordinate.lng, coordinate.lat), **kwargs)

    def to_coordinate(self) -> Coordinate:
        lng, lat = self.coordinates
        return Coordinate(lat=lat, lng=lng)


class Equipment(BaseModel):
    has_squat_rack: bool = Field(default=False, alias="hasSquatRack")
    has_deadlift_platform: bool = Field(default=False, alias="hasDeadliftPlatform")
    max_dumbbell_weight: float = Field(default=0, ge=0, alias="maxDumbbellWeight")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Amenities(BaseModel):
    has_ac: bool = Field(default=False, alias="hasAC")
    has_showers: bool = Field(default=False, alias="hasShowers")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class VerifiedGym(BaseModel):
    """A gym record owned by the primary backend catalog."""

    kind: Literal["verified"] = "verified"
    id: str = Field(alias="_id", description="カタログ上の ID（不透明な文字列）")
    name: str
    description: str = ""
    day_pass_price: float = Field(default=0, ge=0, alias="dayPassPrice")
    location: GeoPoint
    equipment: Equipment = Field(default_factory=Equipment)
    amenities: Amenities = Field(default_factory=Amenities)
    website: str | None = None
    phone: str | None = None

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @property
    def coordinate(self) -> Coordinate:
        return self.location.to_coordinate()


class ShadowGym(BaseModel):
    """An unverified candidate discovered from the POI index."""

    kind: Literal["shadow"] = "shadow"
    id: str = Field(alias="_id", description="osm-<native id>")
    name: str
    description: str = SHADOW_DESCRIPTION
    coordinate: Coordinate
    is_shadow: Literal[True] = Field(default=True, alias="isShadow")
    tags: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True, populate_by_name=True)


ReconciledGym = Annotated[VerifiedGym | ShadowGym, Field(discriminator="kind")]


class PrefillPayload(BaseModel):
    """Seed values for the scout form, derived from a shadow gym's tags."""

    name: str
    coordinate: Coordinate
    website: str | None = None
    phone: str | None = None
    description: str | None = None
    raw_tags: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class ScoutSubmission(BaseModel):
    """What the user submits to promote a location into the catalog."""

    name: str = Field(min_length=1)
    description: str = ""
    day_pass_price: float = Field(default=0, ge=0)
    has_squat_rack: bool = False
    has_deadlift_platform: bool = False
    has_ac: bool = False
    website: str | None = None
    phone: str | None = None
    coordinate: Coordinate

    model_config = ConfigDict(str_strip_whitespace=True)

    @classmethod
    def from_prefill(cls, prefill: PrefillPayload, **overrides: Any) -> ScoutSubmission:
        values: dict[str, Any] = {
            "name": prefill.name,
            "description": prefill.description or "",
            "website": prefill.website,
            "phone": prefill.phone,
            "coordinate": prefill.coordinate,
        }
        values.update(overrides)
        return cls(**values)

    def to_payload(self, owner_id: str | None = None) -> dict[str, Any]:
        """Body for ``POST /api/gyms``; empty website/phone are left out."""

        payload: dict[str, Any] = {
            "name": self.name.strip(),
            "description": self.description,
            "dayPassPrice": self.day_pass_price,
            "location": {
                "type": "Point",
                "coordinates": self.coordinate.as_lng_lat(),
                "formattedAddress": SCOUTED_ADDRESS,
            },
            "equipment": {
                "hasSquatRack": self.has_squat_rack,
                "hasDeadliftPlatform": self.has_deadlift_platform,
                "maxDumbbellWeight": 0,
            },
            "amenities": {
                "hasAC": self.has_ac,
                "hasShowers": False,
            },
        }
        if owner_id:
            payload["owner"] = owner_id
        if self.website:
            payload["website"] = self.website
        if self.phone:
            payload["phone"] = self.phone
        return payload
