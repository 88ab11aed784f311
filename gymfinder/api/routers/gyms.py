# gymfinder/api/routers/gyms.py
from fastapi import APIRouter, Depends, Query

from gymfinder.core.config import Settings
from gymfinder.deps import get_app_settings, get_catalog_client, get_poi_client
from gymfinder.schemas.common import ErrorResponse, MapGymsResponse
from gymfinder.schemas.gym import Coordinate
from gymfinder.services.catalog import CatalogClient
from gymfinder.services.map_controller import load_reconciled
from gymfinder.services.poi_client import PoiClient

router = APIRouter(prefix="/gyms", tags=["gyms"])


@router.get(
    "/map",
    response_model=MapGymsResponse,
    response_model_by_alias=True,
    summary="地図表示用のジム一覧（検証済み + シャドウ）",
    description=(
        "カタログの検証済みジムと POI 検索で見つかった未検証ジムを並行取得し、"
        "名前の正規化で重複を除いた一覧を返す。検証済みが先、シャドウが後。"
    ),
    responses={422: {"model": ErrorResponse, "description": "パラメータ不正"}},
)
async def map_gyms(
    lat: float = Query(..., ge=-90.0, le=90.0, description="中心の緯度"),
    lng: float = Query(..., ge=-180.0, le=180.0, description="中心の経度"),
    radius_m: int | None = Query(None, gt=0, le=50_000, description="検索半径（m）"),
    settings: Settings = Depends(get_app_settings),
    catalog: CatalogClient = Depends(get_catalog_client),
    poi: PoiClient = Depends(get_poi_client),
):
    items = await load_reconciled(
        catalog,
        poi,
        Coordinate(lat=lat, lng=lng),
        radius_m or settings.discovery_radius_m,
        discovery_timeout_s=settings.discovery_timeout_s,
    )
    return MapGymsResponse(items=items, total=len(items))
