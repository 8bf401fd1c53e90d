# ============================================================
# 📦 src/waste_hotspots/api/routes.py
# ============================================================

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from waste_hotspots.api.schemas import (
    HotspotRequest,
    CountResponse,
    HeatmapResponse,
    StatsResponse,
)
from waste_hotspots.application.hotspot_use_case import HotspotAnalysisUseCase
from waste_hotspots.infrastructure.reverse_geocoder import build_reverse_geocoder

router = APIRouter()


# ============================================================
# 🔌 Dependências
# ============================================================
def get_reverse_geocoder():
    return build_reverse_geocoder()


def _use_case(body: HotspotRequest, geocoder=None) -> HotspotAnalysisUseCase:
    return HotspotAnalysisUseCase(
        radius_km=body.radius_km,
        min_size=body.min_size,
        strategy=body.strategy,
        geocoder=geocoder,
        geocode=body.geocode and geocoder is not None,
    )


def _preparar(uc: HotspotAnalysisUseCase, body: HotspotRequest):
    try:
        return uc.prepare(body.reports, body.statuses, body.category)
    except (TypeError, AttributeError) as e:
        logger.warning(f"⚠️ Relatos malformados: {e}")
        raise HTTPException(400, f"Relatos malformados: {e}")


# ============================================================
# 🧠 Health
# ============================================================
@router.get("/health", tags=["Status"])
def health():
    return {"status": "ok", "message": "Hotspot API saudável 🔥"}


# ============================================================
# 🔥 Hotspots completos (com endereço)
# ============================================================
@router.post("/detect")
def detectar(body: HotspotRequest, geocoder=Depends(get_reverse_geocoder)):
    uc = _use_case(body, geocoder)
    try:
        analise = uc.execute(body.reports, body.statuses, body.category)
    except ValueError as e:
        raise HTTPException(400, str(e))
    except (TypeError, AttributeError) as e:
        logger.warning(f"⚠️ Relatos malformados: {e}")
        raise HTTPException(400, f"Relatos malformados: {e}")
    return analise.to_dict()


# ============================================================
# 🔢 Contagem rápida (sem geocodificação)
# ============================================================
@router.post("/count", response_model=CountResponse)
def contar(body: HotspotRequest):
    uc = _use_case(body)
    relatos, descartados = _preparar(uc, body)
    return CountResponse(hotspot_count=uc.count(relatos), discarded=descartados)


# ============================================================
# 🌡️ Heat layer
# ============================================================
@router.post("/heatmap", response_model=HeatmapResponse)
def heatmap(body: HotspotRequest):
    uc = _use_case(body)
    relatos, descartados = _preparar(uc, body)
    return {
        "heat_points": [p.to_dict() for p in uc.heat_points(relatos)],
        "discarded": descartados,
    }


# ============================================================
# 📊 Painel
# ============================================================
@router.post("/stats", response_model=StatsResponse)
def stats(body: HotspotRequest):
    uc = _use_case(body)
    relatos, _ = _preparar(uc, body)
    return uc.stats(relatos).to_dict()
