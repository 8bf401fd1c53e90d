# ============================================================
# 📦 src/waste_hotspots/domain/report_parser.py
# ============================================================

import json
import math
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional

import pandas as pd
from loguru import logger

from waste_hotspots.config.settings import DEFAULT_WEIGHT_KG
from waste_hotspots.domain.entities import WasteReport, WasteCategory, ReportStatus


_ALIASES_CATEGORIA = {
    "ELECTRONIC": WasteCategory.E_WASTE,
    "ELECTRONICS": WasteCategory.E_WASTE,
    "EWASTE": WasteCategory.E_WASTE,
    "E_WASTE": WasteCategory.E_WASTE,
    "E WASTE": WasteCategory.E_WASTE,
    "FOOD": WasteCategory.ORGANIC,
    "BIODEGRADABLE": WasteCategory.ORGANIC,
    "CARDBOARD": WasteCategory.PAPER,
}


# ============================================================
# 🏷️ Categoria
# ============================================================
def normalize_category(raw) -> WasteCategory:
    """
    Converte rótulos livres ("Plastic", "plastic waste", "Electronic") no enum.
    Desconhecido ou ausente → MIXED.
    """
    if raw is None:
        return WasteCategory.MIXED
    if isinstance(raw, WasteCategory):
        return raw

    texto = str(raw).strip().upper()
    if not texto:
        return WasteCategory.MIXED

    candidatos = [texto]
    if texto.endswith(" WASTE"):
        candidatos.append(texto[: -len(" WASTE")].strip())

    for candidato in candidatos:
        if candidato in WasteCategory._value2member_map_:
            return WasteCategory(candidato)
        if candidato in _ALIASES_CATEGORIA:
            return _ALIASES_CATEGORIA[candidato]

    logger.debug(f"🏷️ Categoria desconhecida '{raw}' → MIXED")
    return WasteCategory.MIXED


# ============================================================
# 🔢 Conversões tolerantes
# ============================================================
def _to_float(value) -> float:
    """parseFloat tolerante: inválido vira NaN (GeoFilter descarta depois)."""
    if value is None:
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError):
        return math.nan


def _to_weight(value) -> float:
    if value is None:
        return DEFAULT_WEIGHT_KG
    try:
        peso = float(value)
    except (TypeError, ValueError):
        return DEFAULT_WEIGHT_KG
    if math.isnan(peso) or peso == 0:
        return DEFAULT_WEIGHT_KG
    return peso


def _to_datetime(value) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        # fuso tratado em WasteReport
        return value
    try:
        ts = pd.to_datetime(value, utc=True)
    except (TypeError, ValueError, OverflowError):
        logger.debug(f"⏱️ Timestamp inválido ignorado: {value!r}")
        return None
    if pd.isna(ts):
        return None
    return ts.to_pydatetime()


def _first(record: Mapping, *keys):
    for k in keys:
        v = record.get(k)
        if v is None or v == "":
            continue
        # células vazias de CSV chegam como NaN
        if isinstance(v, float) and math.isnan(v):
            continue
        return v
    return None


def _ai_analysis(record: Mapping) -> Dict[str, Any]:
    analise = record.get("aiAnalysis") or record.get("ai_analysis")
    if isinstance(analise, str):
        try:
            analise = json.loads(analise)
        except ValueError:
            return {}
    return analise if isinstance(analise, dict) else {}


# ============================================================
# 📥 Registro bruto → WasteReport
# ============================================================
def parse_report(record) -> WasteReport:
    """
    Aceita WasteReport ou dicionário vindo do armazenamento de relatos.
    Categoria/peso podem vir aninhados em `aiAnalysis` (tem precedência).
    """
    if isinstance(record, WasteReport):
        return record

    analise = _ai_analysis(record)

    categoria = _first(analise, "wasteCategory", "wasteType") or _first(
        record, "wasteCategory", "waste_category", "wasteType", "waste_type"
    )
    peso = _first(analise, "estimatedWeightKg", "estimated_weight_kg") or _first(
        record, "estimatedWeightKg", "estimated_weight_kg"
    )

    status = _first(record, "status")

    return WasteReport(
        id=_first(record, "id", "_id"),
        latitude=_to_float(_first(record, "latitude", "lat")),
        longitude=_to_float(_first(record, "longitude", "lng", "lon")),
        waste_category=normalize_category(categoria),
        estimated_weight_kg=_to_weight(peso),
        status=str(status).strip().upper() if status else ReportStatus.PENDING,
        reported_at=_to_datetime(_first(record, "reportedAt", "reported_at", "createdAt", "created_at")),
    )


def parse_reports(records: Iterable) -> List[WasteReport]:
    return [parse_report(r) for r in records]
