# ============================================================
# 📦 src/waste_hotspots/reporting/exporters.py
# ============================================================

import json
import os
from pathlib import Path
from typing import List, Optional

import pandas as pd
from loguru import logger

from waste_hotspots.domain.entities import Hotspot, HeatPoint


def hotspots_dataframe(hotspots: List[Hotspot]) -> pd.DataFrame:
    linhas = []
    for h in hotspots:
        d = h.to_dict()
        linhas.append({
            "hotspot_id": d["hotspot_id"],
            "centroid_lat": h.centroid_lat,
            "centroid_lon": h.centroid_lon,
            "resolved_address": d["resolved_address"],
            "severity": d["severity"],
            "dominant_waste_category": d["dominant_waste_category"],
            "member_count": d["member_count"],
            "last_updated_at": d["last_updated_at"],
            "member_ids": ",".join(str(i) for i in d["member_ids"]),
        })
    return pd.DataFrame(linhas)


def heat_points_dataframe(points: List[HeatPoint]) -> pd.DataFrame:
    return pd.DataFrame([p.to_dict() for p in points], columns=["lat", "lng", "weight"])


class JSONExporter:
    @staticmethod
    def export(data, output_path: str) -> Optional[str]:
        if not data:
            logger.warning("⚠️ Nenhum dado para exportar.")
            return None

        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2, default=str)
        logger.success(f"✅ Relatório JSON salvo em {output_path}")
        return output_path


class CSVExporter:
    """
    Exporta DataFrames em CSV (separador ';', compatível com Excel).
    """

    @staticmethod
    def export(df: pd.DataFrame, output_path: str) -> Optional[str]:
        if df.empty:
            logger.warning("⚠️ DataFrame vazio — nada a exportar.")
            return None

        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)

        # coordenadas precisam de mais casas que o float_format padrão
        df.to_csv(
            output_path,
            index=False,
            sep=";",
            encoding="utf-8-sig",
            float_format="%.6f",
        )

        logger.success(f"✅ Relatório CSV salvo em {output_path}")
        return output_path


def export_analysis(analysis, output_dir: str, fmt: str = "json") -> List[str]:
    """Grava hotspots e heat points de uma execução; devolve os caminhos gerados."""
    fmt = fmt.lower()
    if fmt not in ("json", "csv"):
        raise ValueError(f"Formato inválido: '{fmt}' — use json ou csv")

    base_hot = os.path.join(output_dir, f"hotspots_{analysis.run_id}.{fmt}")
    base_heat = os.path.join(output_dir, f"heat_points_{analysis.run_id}.{fmt}")

    if fmt == "json":
        gerados = [
            JSONExporter.export([h.to_dict() for h in analysis.hotspots], base_hot),
            JSONExporter.export([p.to_dict() for p in analysis.heat_points], base_heat),
        ]
    else:
        gerados = [
            CSVExporter.export(hotspots_dataframe(analysis.hotspots), base_hot),
            CSVExporter.export(heat_points_dataframe(analysis.heat_points), base_heat),
        ]

    return [g for g in gerados if g]
