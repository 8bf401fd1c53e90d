# ============================================================
# 📦 src/waste_hotspots/application/hotspot_use_case.py
# ============================================================

import uuid
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from loguru import logger

from waste_hotspots.config import settings
from waste_hotspots.domain.entities import HeatPoint, Hotspot, ReportStats, WasteReport
from waste_hotspots.domain.report_parser import parse_reports, normalize_category
from waste_hotspots.domain.geo_filter import filter_valid_reports
from waste_hotspots.domain.heatmap_weight import build_heat_points
from waste_hotspots.domain.hotspot_clusterer import detect_hotspots, count_hotspots
from waste_hotspots.domain.report_stats import compute_report_stats
from waste_hotspots.infrastructure.reverse_geocoder import (
    AddressResolutionService,
    build_reverse_geocoder,
)


@dataclass
class HotspotAnalysis:
    run_id: str
    hotspots: List[Hotspot] = field(default_factory=list)
    heat_points: List[HeatPoint] = field(default_factory=list)
    hotspot_count: int = 0
    stats: Optional[ReportStats] = None
    discarded: int = 0

    def to_dict(self):
        return {
            "run_id": self.run_id,
            "hotspot_count": self.hotspot_count,
            "discarded": self.discarded,
            "stats": self.stats.to_dict() if self.stats else None,
            "hotspots": [h.to_dict() for h in self.hotspots],
            "heat_points": [p.to_dict() for p in self.heat_points],
        }


class HotspotAnalysisUseCase:
    """
    Orquestra o motor de hotspots sobre uma coleção de relatos:
    parse → GeoFilter → filtros opcionais → heat points / clusters / contagem.
    Nada é persistido; cada chamada recalcula do zero.
    """

    def __init__(
        self,
        radius_km: float = settings.HOTSPOT_RADIUS_KM,
        min_size: int = settings.HOTSPOT_MIN_SIZE,
        strategy: str = settings.HOTSPOT_STRATEGY,
        geocoder=None,
        geocode: bool = True,
        max_workers: int = settings.GEOCODE_MAX_WORKERS,
        geocode_timeout: float = settings.GEOCODE_TIMEOUT_SEC,
        weight_factor: float = settings.HEAT_WEIGHT_FACTOR,
        weight_cap: float = settings.HEAT_WEIGHT_CAP,
    ):
        self.radius_km = radius_km
        self.min_size = min_size
        self.strategy = strategy
        self.weight_factor = weight_factor
        self.weight_cap = weight_cap

        if geocode and geocoder is None:
            geocoder = build_reverse_geocoder(timeout=geocode_timeout)

        self.address_service = AddressResolutionService(
            geocoder=geocoder if geocode else None,
            max_workers=max_workers,
            timeout=geocode_timeout,
        )

    # ------------------------------------------------------------
    # Entrada
    # ------------------------------------------------------------
    def prepare(
        self,
        records: Iterable,
        statuses: Optional[Iterable[str]] = None,
        category: Optional[str] = None,
    ):
        """Devolve (relatos válidos e filtrados, número descartado pelo GeoFilter)."""
        relatos = parse_reports(records or [])
        validos = filter_valid_reports(relatos)
        descartados = len(relatos) - len(validos)

        if statuses:
            permitidos = {str(s).strip().upper() for s in statuses}
            validos = [r for r in validos if r.status in permitidos]

        if category:
            alvo = normalize_category(category)
            validos = [r for r in validos if r.waste_category == alvo]

        return validos, descartados

    # ------------------------------------------------------------
    # Operações
    # ------------------------------------------------------------
    def hotspots(self, reports: List[WasteReport]) -> List[Hotspot]:
        return detect_hotspots(
            reports,
            radius_km=self.radius_km,
            min_size=self.min_size,
            strategy=self.strategy,
            address_resolver=self.address_service.resolve,
        )

    def count(self, reports: List[WasteReport]) -> int:
        return count_hotspots(reports, self.radius_km, self.min_size, self.strategy)

    def heat_points(self, reports: List[WasteReport]) -> List[HeatPoint]:
        return build_heat_points(reports, self.weight_factor, self.weight_cap)

    def stats(self, reports: List[WasteReport]) -> ReportStats:
        return compute_report_stats(reports, self.radius_km, self.min_size, self.strategy)

    # ------------------------------------------------------------
    # Execução completa
    # ------------------------------------------------------------
    def execute(
        self,
        records: Iterable,
        statuses: Optional[Iterable[str]] = None,
        category: Optional[str] = None,
    ) -> HotspotAnalysis:

        run_id = str(uuid.uuid4())
        logger.info(
            f"🚀 Análise de hotspots | run_id={run_id} | raio={self.radius_km} km | "
            f"min={self.min_size} | estratégia={self.strategy}"
        )

        relatos, descartados = self.prepare(records, statuses, category)
        logger.info(f"📦 {len(relatos)} relatos válidos | {descartados} descartados")

        if not relatos:
            logger.warning("⚠️ Nenhum relato válido — resultado vazio.")
            return HotspotAnalysis(
                run_id=run_id,
                stats=ReportStats(total=0, pending=0, collected=0, hotspots=0),
                discarded=descartados,
            )

        hotspots = self.hotspots(relatos)
        stats = self.stats(relatos)

        logger.success(
            f"✅ {len(hotspots)} hotspots | {len(relatos)} heat points | run_id={run_id}"
        )

        return HotspotAnalysis(
            run_id=run_id,
            hotspots=hotspots,
            heat_points=self.heat_points(relatos),
            hotspot_count=stats.hotspots,
            stats=stats,
            discarded=descartados,
        )
