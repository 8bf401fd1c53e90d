# ============================================================
# 📦 src/waste_hotspots/domain/connected_components.py
# ============================================================

from typing import List

import numpy as np
from loguru import logger
from sklearn.neighbors import BallTree

from waste_hotspots.domain.entities import Cluster, WasteReport
from waste_hotspots.domain.haversine_utils import EARTH_RADIUS_KM


class _UnionFind:
    def __init__(self, n: int):
        self.parent = list(range(n))

    def find(self, x: int) -> int:
        while self.parent[x] != x:
            self.parent[x] = self.parent[self.parent[x]]
            x = self.parent[x]
        return x

    def union(self, a: int, b: int):
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return
        # raiz = menor índice → componentes saem na ordem do primeiro membro
        if ra < rb:
            self.parent[rb] = ra
        else:
            self.parent[ra] = rb


def connected_clusters(reports: List[WasteReport], radius_km: float, min_size: int) -> List[Cluster]:
    """
    Componentes conexas do grafo "distância <= raio" (BallTree haversine + union-find).
    Independe da ordem de entrada quanto à composição dos clusters.
    """
    n = len(reports)
    if n == 0:
        return []

    coords_rad = np.radians(np.array([[r.latitude, r.longitude] for r in reports], dtype=float))
    tree = BallTree(coords_rad, metric="haversine")
    vizinhanca = tree.query_radius(coords_rad, r=radius_km / EARTH_RADIUS_KM)

    uf = _UnionFind(n)
    for i, idxs in enumerate(vizinhanca):
        for j in idxs:
            uf.union(i, int(j))

    grupos = {}
    for i in range(n):
        grupos.setdefault(uf.find(i), []).append(i)

    clusters = []
    for idxs in grupos.values():
        if len(idxs) < min_size:
            continue
        cluster = Cluster()
        for i in idxs:
            cluster.add(reports[i])
        clusters.append(cluster)

    logger.debug(f"🕸️ Componentes conexas: {len(grupos)} grupos | {len(clusters)} qualificados (>= {min_size})")
    return clusters
