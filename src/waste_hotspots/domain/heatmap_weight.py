# ============================================================
# 📦 src/waste_hotspots/domain/heatmap_weight.py
# ============================================================

import math
from typing import Iterable, List

from waste_hotspots.config.settings import HEAT_WEIGHT_FACTOR, HEAT_WEIGHT_CAP, DEFAULT_WEIGHT_KG
from waste_hotspots.domain.entities import WasteReport, HeatPoint


def heat_weight(
    estimated_weight_kg,
    factor: float = HEAT_WEIGHT_FACTOR,
    cap: float = HEAT_WEIGHT_CAP,
) -> float:
    """
    Intensidade do ponto no heat layer: min(peso * fator, teto), limitada a [0, teto].
    Peso ausente, zero ou não numérico vale 1 kg.
    """
    try:
        peso = float(estimated_weight_kg) if estimated_weight_kg is not None else DEFAULT_WEIGHT_KG
    except (TypeError, ValueError):
        peso = DEFAULT_WEIGHT_KG

    if math.isnan(peso) or peso == 0:
        peso = DEFAULT_WEIGHT_KG

    return max(0.0, min(peso * factor, cap))


def build_heat_points(reports: Iterable[WasteReport], factor: float = HEAT_WEIGHT_FACTOR, cap: float = HEAT_WEIGHT_CAP) -> List[HeatPoint]:
    return [
        HeatPoint(
            latitude=r.latitude,
            longitude=r.longitude,
            weight=heat_weight(r.estimated_weight_kg, factor, cap),
        )
        for r in reports
    ]
