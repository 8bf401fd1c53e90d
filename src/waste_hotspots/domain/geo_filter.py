# ============================================================
# 📦 src/waste_hotspots/domain/geo_filter.py
# ============================================================

import math
from dataclasses import replace
from typing import Iterable, List, Optional, Tuple
from loguru import logger

from waste_hotspots.domain.entities import WasteReport


def normalizar_coordenada(lat, lon) -> Optional[Tuple[float, float]]:
    """(lat, lon) como float se válidos; None caso contrário."""
    if lat is None or lon is None:
        return None

    # bool é subclasse de int: True/False não são coordenadas
    if isinstance(lat, bool) or isinstance(lon, bool):
        return None

    try:
        lat = float(lat)
        lon = float(lon)
    except (TypeError, ValueError):
        return None

    if not (math.isfinite(lat) and math.isfinite(lon)):
        return None

    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return None

    return lat, lon


def coordenada_valida(lat, lon) -> bool:
    return normalizar_coordenada(lat, lon) is not None


def filter_valid_reports(reports: Iterable[WasteReport]) -> List[WasteReport]:
    """
    Mantém apenas relatos com lat/lon finitos e dentro dos limites.
    A ordem de entrada é preservada; inválidos são descartados sem erro.
    Coordenadas mantidas saem sempre como float.
    """
    validos = []
    invalidos = 0

    for r in reports:
        coords = normalizar_coordenada(r.latitude, r.longitude)
        if coords is None:
            invalidos += 1
            logger.debug(f"🧹 Relato {r.id} descartado | lat={r.latitude!r} lon={r.longitude!r}")
            continue

        lat, lon = coords
        if type(r.latitude) is not float or type(r.longitude) is not float:
            r = replace(r, latitude=lat, longitude=lon)
        validos.append(r)

    if invalidos:
        logger.info(f"🧹 GeoFilter: {invalidos} relatos com coordenadas inválidas descartados")

    return validos
