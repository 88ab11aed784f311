from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    email: str = ""
    role: str = "user"

    model_config = ConfigDict(extra="ignore")


class AuthSession(BaseModel):
    """What login leaves behind in durable client storage."""

    token: str = Field(min_length=1)
    user: AuthUser | None = None

    @property
    def owner_id(self) -> str | None:
        return self.user.id if self.user else None

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class UserProfile(BaseModel):
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str = ""
    email: str = ""
    role: str = "user"
    xp: int | None = None

    model_config = ConfigDict(extra="ignore")
