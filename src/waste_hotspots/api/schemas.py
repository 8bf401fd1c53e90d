# ============================================================
# 📦 src/waste_hotspots/api/schemas.py
# ============================================================

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from waste_hotspots.config.settings import HOTSPOT_RADIUS_KM, HOTSPOT_MIN_SIZE

Strategy = Literal["greedy", "connected"]


class HotspotRequest(BaseModel):
    reports: List[Dict[str, Any]] = Field(default_factory=list)
    statuses: Optional[List[str]] = None
    category: Optional[str] = None
    strategy: Strategy = "greedy"
    radius_km: float = Field(HOTSPOT_RADIUS_KM, gt=0)
    min_size: int = Field(HOTSPOT_MIN_SIZE, ge=1)
    geocode: bool = True


class CountResponse(BaseModel):
    hotspot_count: int
    discarded: int


class HeatPointSchema(BaseModel):
    lat: float
    lng: float
    weight: float


class HeatmapResponse(BaseModel):
    heat_points: List[HeatPointSchema]
    discarded: int


class StatsResponse(BaseModel):
    total: int
    pending: int
    collected: int
    hotspots: int
