# ============================================================
# 📦 src/waste_hotspots/domain/report_stats.py
# ============================================================

from typing import List

from waste_hotspots.config.settings import HOTSPOT_RADIUS_KM, HOTSPOT_MIN_SIZE
from waste_hotspots.domain.entities import ReportStats, ReportStatus, WasteReport
from waste_hotspots.domain.hotspot_clusterer import count_hotspots


def compute_report_stats(
    reports: List[WasteReport],
    radius_km: float = HOTSPOT_RADIUS_KM,
    min_size: int = HOTSPOT_MIN_SIZE,
    strategy: str = "greedy",
) -> ReportStats:
    """Resumo do painel: total, pendentes, coletados e contagem rápida de hotspots."""
    if not reports:
        return ReportStats(total=0, pending=0, collected=0, hotspots=0)

    pendentes = 0
    coletados = 0
    for r in reports:
        if r.status == ReportStatus.PENDING:
            pendentes += 1
        elif r.status == ReportStatus.COLLECTED:
            coletados += 1

    return ReportStats(
        total=len(reports),
        pending=pendentes,
        collected=coletados,
        hotspots=count_hotspots(reports, radius_km, min_size, strategy),
    )
