# ============================================================
# 📦 src/waste_hotspots/cli/run_hotspots.py
# ============================================================

import argparse
import json
import sys
from pathlib import Path

import pandas as pd
from loguru import logger

from waste_hotspots.config import settings
from waste_hotspots.application.hotspot_use_case import HotspotAnalysisUseCase
from waste_hotspots.domain.hotspot_clusterer import STRATEGIES
from waste_hotspots.reporting.exporters import export_analysis


def carregar_relatos(caminho: str):
    """Lê relatos de JSON (lista ou {"wastes": [...]}) ou CSV."""
    path = Path(caminho)
    if not path.exists():
        raise ValueError(f"Arquivo não encontrado: {caminho}")

    sufixo = path.suffix.lower()

    if sufixo == ".csv":
        df = pd.read_csv(path)
        return df.to_dict(orient="records")

    if sufixo == ".json":
        with open(path, encoding="utf-8") as f:
            dados = json.load(f)
        if isinstance(dados, dict):
            dados = dados.get("wastes") or dados.get("reports") or []
        if not isinstance(dados, list):
            raise ValueError("JSON deve ser uma lista de relatos ou {'wastes': [...]}")
        return dados

    raise ValueError(f"Extensão não suportada: '{sufixo}' — use .json ou .csv")


def build_parser():
    parser = argparse.ArgumentParser(
        description="Detecção de hotspots de resíduos (WasteHotspots)"
    )

    # OBRIGATÓRIO
    parser.add_argument("--input", required=True, help="Arquivo .json ou .csv com os relatos")

    # OPCIONAIS
    parser.add_argument("--radius_km", type=float, default=settings.HOTSPOT_RADIUS_KM)
    parser.add_argument("--min_size", type=int, default=settings.HOTSPOT_MIN_SIZE)
    parser.add_argument(
        "--strategy",
        choices=list(STRATEGIES),
        default=settings.HOTSPOT_STRATEGY,
        help="greedy (ordem de âncora) ou connected (componentes conexas)",
    )
    parser.add_argument(
        "--status",
        action="append",
        dest="statuses",
        help="Filtra por status (pode repetir: --status PENDING --status VERIFIED)",
    )
    parser.add_argument("--category", help="Filtra por categoria (ex.: PLASTIC)")
    parser.add_argument("--no-geocode", action="store_true", help="Não consulta geocodificador reverso")
    parser.add_argument("--output-dir", dest="output_dir", help="Diretório para exportar resultados")
    parser.add_argument("--format", choices=["json", "csv"], default="json")
    return parser


def main(argv=None):
    logger.remove()
    logger.add(
        sys.stdout,
        colorize=True,
        level=settings.LOG_LEVEL,
        format="<green>{time:HH:mm:ss}</green> | <level>{message}</level>",
    )

    args = build_parser().parse_args(argv)

    if args.radius_km <= 0:
        raise ValueError(f"--radius_km deve ser > 0 (recebido {args.radius_km})")
    if args.min_size < 1:
        raise ValueError(f"--min_size deve ser >= 1 (recebido {args.min_size})")

    logger.info("==============================================")
    logger.info("🚀 Iniciando detecção de hotspots via CLI")
    logger.info("==============================================")
    logger.info(f"📂 input       = {args.input}")
    logger.info(f"📏 raio (km)   = {args.radius_km}")
    logger.info(f"🔢 min_size    = {args.min_size}")
    logger.info(f"⚙️ estratégia  = {args.strategy}")
    logger.info(f"🏷️ status      = {args.statuses or 'ALL'}")
    logger.info(f"🗑️ categoria   = {args.category or 'ALL'}")
    logger.info(f"🗺️ geocodificar = {not args.no_geocode}")

    registros = carregar_relatos(args.input)

    uc = HotspotAnalysisUseCase(
        radius_km=args.radius_km,
        min_size=args.min_size,
        strategy=args.strategy,
        geocode=not args.no_geocode,
    )
    analise = uc.execute(registros, statuses=args.statuses, category=args.category)

    if args.output_dir:
        export_analysis(analise, args.output_dir, args.format)

    print("\n=== RESULTADO FINAL ===")
    print(f"run_id: {analise.run_id}")
    print(f"relatos_validos: {len(analise.heat_points)}")
    print(f"descartados: {analise.discarded}")
    print(f"hotspots: {analise.hotspot_count}")
    for h in analise.hotspots:
        print(
            f"  #{h.hotspot_id} [{h.severity.value}] {h.member_count} relatos | "
            f"{h.dominant_waste_category.value} | {h.resolved_address}"
        )

    return analise


if __name__ == "__main__":
    main()
