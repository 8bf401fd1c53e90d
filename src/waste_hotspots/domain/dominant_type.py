# ============================================================
# 📦 src/waste_hotspots/domain/dominant_type.py
# ============================================================

from typing import Iterable

from waste_hotspots.domain.entities import WasteCategory, WasteReport


def dominant_category(members: Iterable[WasteReport]) -> WasteCategory:
    """
    Categoria mais frequente do cluster.

    Empate: vence a primeira categoria (ordem de aparição) que atinge a
    contagem máxima ao varrer as contagens da esquerda para a direita.
    """
    contagem = {}
    for m in members:
        categoria = m.waste_category or WasteCategory.MIXED
        contagem[categoria] = contagem.get(categoria, 0) + 1

    melhor = WasteCategory.MIXED
    maximo = 0
    for categoria, n in contagem.items():
        if n > maximo:
            melhor, maximo = categoria, n

    return melhor
