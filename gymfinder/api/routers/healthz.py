# gymfinder/api/routers/healthz.py
from fastapi import APIRouter

from gymfinder.schemas.common import OkResponse

router = APIRouter(prefix="/healthz", tags=["health"])


@router.get(
    "",
    response_model=OkResponse,
    summary="Liveness probe",
    description="単純に200(OK)を返すだけのエンドポイント（外部APIアクセスなし）",
)
async def healthz():
    return {"ok": True}
