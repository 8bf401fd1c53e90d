# ============================================================
# 📦 src/waste_hotspots/domain/hotspot_clusterer.py
# ============================================================

from typing import Callable, List, Optional, Sequence, Tuple, Union

from loguru import logger

from waste_hotspots.config.settings import HOTSPOT_RADIUS_KM, HOTSPOT_MIN_SIZE
from waste_hotspots.domain.entities import Cluster, Hotspot, WasteReport
from waste_hotspots.domain.haversine_utils import distance_between
from waste_hotspots.domain.severity import classify_severity
from waste_hotspots.domain.dominant_type import dominant_category
from waste_hotspots.domain.connected_components import connected_clusters


STRATEGIES = ("greedy", "connected")

# recebe centróides (lat, lon) e devolve um endereço por centróide, mesma ordem
AddressResolver = Callable[[Sequence[Tuple[float, float]]], List[str]]


def coordinate_label(lat: float, lon: float) -> str:
    return f"{lat:.4f}, {lon:.4f}"


def _coordinate_labels(centroids: Sequence[Tuple[float, float]]) -> List[str]:
    return [coordinate_label(lat, lon) for lat, lon in centroids]


def _validar_parametros(radius_km: float, min_size: int, strategy: str):
    if radius_km is None or not radius_km > 0:
        raise ValueError(f"radius_km deve ser > 0 (recebido {radius_km})")
    if min_size is None or min_size < 1:
        raise ValueError(f"min_size deve ser >= 1 (recebido {min_size})")
    if strategy not in STRATEGIES:
        raise ValueError(f"strategy inválida: '{strategy}' — use {', '.join(STRATEGIES)}")


# ============================================================
# 🧭 Passada gulosa (ordem de âncora importa)
# ============================================================
def greedy_clusters(reports: List[WasteReport], radius_km: float, min_size: int) -> List[Cluster]:
    """
    Uma passada na ordem de entrada. Cada relato ainda não processado vira
    âncora; vizinhos posteriores a até `radius_km` da âncora entram no cluster.

    Só clusters com >= min_size consomem seus vizinhos. Abaixo do mínimo,
    apenas a âncora fica marcada e os vizinhos continuam disponíveis.
    """
    processados = set()
    clusters = []
    n = len(reports)

    for i in range(n):
        if i in processados:
            continue
        processados.add(i)

        ancora = reports[i]
        cluster = Cluster()
        cluster.add(ancora)
        vizinhos = []

        for j in range(i + 1, n):
            if j in processados:
                continue
            if distance_between(ancora, reports[j]) <= radius_km:
                cluster.add(reports[j])
                vizinhos.append(j)

        if len(cluster) >= min_size:
            processados.update(vizinhos)
            clusters.append(cluster)

    return clusters


def cluster_reports(
    reports: List[WasteReport],
    radius_km: float = HOTSPOT_RADIUS_KM,
    min_size: int = HOTSPOT_MIN_SIZE,
    strategy: str = "greedy",
) -> List[Cluster]:
    _validar_parametros(radius_km, min_size, strategy)
    if strategy == "connected":
        return connected_clusters(reports, radius_km, min_size)
    return greedy_clusters(reports, radius_km, min_size)


# ============================================================
# 🔥 Enriquecimento
# ============================================================
def build_hotspot(hotspot_id: int, cluster: Cluster, address: str) -> Hotspot:
    datas = [m.reported_at for m in cluster.members if m.reported_at is not None]

    return Hotspot(
        hotspot_id=hotspot_id,
        centroid_lat=cluster.centroid_lat,
        centroid_lon=cluster.centroid_lon,
        resolved_address=address,
        severity=classify_severity(len(cluster)),
        dominant_waste_category=dominant_category(cluster.members),
        member_count=len(cluster),
        last_updated_at=max(datas) if datas else None,
        members=list(cluster.members),
    )


def run_hotspot_pass(
    reports: List[WasteReport],
    radius_km: float = HOTSPOT_RADIUS_KM,
    min_size: int = HOTSPOT_MIN_SIZE,
    strategy: str = "greedy",
    enrich: bool = True,
    address_resolver: Optional[AddressResolver] = None,
) -> Union[List[Hotspot], int]:
    """
    Rotina única para os dois caminhos:
      - enrich=True  → lista de Hotspot (endereço, severidade, categoria dominante)
      - enrich=False → apenas a contagem, sem geocodificação
    """
    clusters = cluster_reports(reports, radius_km, min_size, strategy)

    if not enrich:
        return len(clusters)

    centroides = [(c.centroid_lat, c.centroid_lon) for c in clusters]
    resolver = address_resolver or _coordinate_labels
    enderecos = resolver(centroides) if centroides else []

    if len(enderecos) != len(centroides):
        logger.warning(
            f"⚠️ Resolvedor devolveu {len(enderecos)} endereços para {len(centroides)} clusters — usando coordenadas"
        )
        enderecos = _coordinate_labels(centroides)

    return [
        build_hotspot(idx, cluster, endereco or coordinate_label(cluster.centroid_lat, cluster.centroid_lon))
        for idx, (cluster, endereco) in enumerate(zip(clusters, enderecos), start=1)
    ]


def detect_hotspots(
    reports: List[WasteReport],
    radius_km: float = HOTSPOT_RADIUS_KM,
    min_size: int = HOTSPOT_MIN_SIZE,
    strategy: str = "greedy",
    address_resolver: Optional[AddressResolver] = None,
) -> List[Hotspot]:
    return run_hotspot_pass(reports, radius_km, min_size, strategy, True, address_resolver)


def count_hotspots(
    reports: List[WasteReport],
    radius_km: float = HOTSPOT_RADIUS_KM,
    min_size: int = HOTSPOT_MIN_SIZE,
    strategy: str = "greedy",
) -> int:
    return run_hotspot_pass(reports, radius_km, min_size, strategy, enrich=False)
