# gymfinder/schemas/common.py
from pydantic import BaseModel, Field

from gymfinder.schemas.gym import ReconciledGym


class ErrorResponse(BaseModel):
    detail: str = Field(description="エラーメッセージ")

    model_config = {"json_schema_extra": {"examples": [{"detail": "Not Found"}]}}


class OkResponse(BaseModel):
    ok: bool = Field(description="成功可否（true 固定）")

    model_config = {"json_schema_extra": {"examples": [{"ok": True}]}}


class MapGymsResponse(BaseModel):
    items: list[ReconciledGym] = Field(description="検証済み → シャドウの順に並んだジム一覧")
    total: int = Field(ge=0)
