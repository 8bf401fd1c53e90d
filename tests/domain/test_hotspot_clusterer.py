# tests/domain/test_hotspot_clusterer.py

import random
from statistics import mean
from datetime import datetime, timezone

import pytest

from waste_hotspots.domain.entities import Severity, WasteCategory
from waste_hotspots.domain.hotspot_clusterer import (
    detect_hotspots,
    count_hotspots,
    run_hotspot_pass,
    coordinate_label,
)
from tests.conftest import make_report, FakeGeocoder, BASE_LAT, BASE_LON, T0

KM_POR_GRAU = 111.195  # longitude no equador


def _linha(*km, ids=None):
    """Relatos no equador, posicionados por distância (km) a leste de lon=0."""
    ids = ids or [f"p{k}" for k in km]
    return [make_report(i, lat=0.0, lon=k / KM_POR_GRAU) for i, k in zip(ids, km)]


def _nuvem(seed, n=40):
    rnd = random.Random(seed)
    return [
        make_report(
            f"n{i}",
            lat=BASE_LAT + rnd.uniform(-0.02, 0.02),
            lon=BASE_LON + rnd.uniform(-0.02, 0.02),
            category=rnd.choice(list(WasteCategory)),
        )
        for i in range(n)
    ]


# ============================================================
# 🔥 Caso de referência
# ============================================================
def test_five_close_reports_make_one_medium_plastic_hotspot(delhi_cluster):
    hotspots = detect_hotspots(delhi_cluster)

    assert len(hotspots) == 1
    h = hotspots[0]
    assert h.hotspot_id == 1
    assert h.member_count == 5
    assert h.severity == Severity.MEDIUM
    assert h.dominant_waste_category == WasteCategory.PLASTIC
    assert h.centroid_lat == pytest.approx(mean(r.latitude for r in delhi_cluster))
    assert h.centroid_lon == pytest.approx(mean(r.longitude for r in delhi_cluster))
    assert h.last_updated_at == max(r.reported_at for r in delhi_cluster)
    assert h.last_updated_at == delhi_cluster[2].reported_at
    assert [m.id for m in h.members] == [r.id for r in delhi_cluster]


def test_without_geocoder_address_is_coordinate_string(delhi_cluster):
    h = detect_hotspots(delhi_cluster)[0]
    assert h.resolved_address == coordinate_label(h.centroid_lat, h.centroid_lon)
    assert h.resolved_address == f"{BASE_LAT:.4f}, {BASE_LON:.4f}"


def test_two_close_reports_are_not_a_hotspot():
    relatos = [make_report("a"), make_report("b", lat=BASE_LAT + 0.001)]
    assert detect_hotspots(relatos) == []
    assert count_hotspots(relatos) == 0


def test_empty_input():
    assert detect_hotspots([]) == []
    assert count_hotspots([]) == 0


def test_last_updated_is_none_without_timestamps():
    relatos = [make_report(i) for i in range(3)]
    assert detect_hotspots(relatos)[0].last_updated_at is None


def test_last_updated_mixes_naive_and_aware_timestamps():
    relatos = [
        make_report("n", reported_at=datetime(2024, 1, 1)),
        make_report("a", reported_at=datetime(2024, 1, 2, tzinfo=timezone.utc)),
        make_report("m", reported_at=datetime(2024, 1, 3, 12)),
    ]

    hotspot = detect_hotspots(relatos)[0]

    assert hotspot.last_updated_at == datetime(2024, 1, 3, 12, tzinfo=timezone.utc)
    assert hotspot.to_dict()["last_updated_at"] == "2024-01-03T12:00:00+00:00"


# ============================================================
# 🧭 Passada gulosa
# ============================================================
def test_sub_threshold_neighbours_are_released_for_later_anchors():
    # A só alcança B; B alcança C e D
    relatos = _linha(0.0, 0.45, 0.9, 0.92, ids=["A", "B", "C", "D"])

    hotspots = detect_hotspots(relatos)

    assert len(hotspots) == 1
    assert [m.id for m in hotspots[0].members] == ["B", "C", "D"]


def test_qualifying_cluster_consumes_its_members():
    relatos = [make_report(i, lat=BASE_LAT + i * 0.0001) for i in range(6)]
    hotspots = detect_hotspots(relatos)
    assert len(hotspots) == 1
    assert hotspots[0].member_count == 6


def test_distance_is_measured_from_anchor_not_centroid():
    # C está a 0.6 km da âncora A, apesar de perto de B
    relatos = _linha(0.0, 0.3, 0.6, 0.1, ids=["A", "B", "C", "E"])
    h = detect_hotspots(relatos)[0]
    assert [m.id for m in h.members] == ["A", "B", "E"]


def test_result_depends_on_anchor_order():
    ordenado = _linha(0.0, 0.3, 0.6, 0.9, 1.2)
    centro_primeiro = [ordenado[2], ordenado[0], ordenado[1], ordenado[3], ordenado[4]]

    assert count_hotspots(ordenado) == 0
    assert count_hotspots(centro_primeiro) == 1
    assert {m.id for m in detect_hotspots(centro_primeiro)[0].members} == {"p0.3", "p0.6", "p0.9"}


def test_hotspots_are_numbered_in_discovery_order():
    longe = [make_report(f"x{i}", lat=BASE_LAT + 1, lon=BASE_LON + i * 0.0001) for i in range(3)]
    perto = [make_report(f"y{i}", lon=BASE_LON + i * 0.0001) for i in range(10)]

    hotspots = detect_hotspots(longe + perto)

    assert [h.hotspot_id for h in hotspots] == [1, 2]
    assert hotspots[0].members[0].id == "x0"
    assert hotspots[0].severity == Severity.LOW
    assert hotspots[1].severity == Severity.CRITICAL


def test_clusters_are_disjoint():
    relatos = _nuvem(7, n=80)
    vistos = set()
    for h in detect_hotspots(relatos):
        ids = {m.id for m in h.members}
        assert not ids & vistos
        assert h.member_count >= 3
        vistos |= ids


# ============================================================
# 🔢 Consistência contagem × lista
# ============================================================
@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
@pytest.mark.parametrize("strategy", ["greedy", "connected"])
def test_count_matches_full_path(seed, strategy):
    relatos = _nuvem(seed)
    assert count_hotspots(relatos, strategy=strategy) == len(detect_hotspots(relatos, strategy=strategy))


def test_count_matches_full_path_with_custom_radius_and_size():
    relatos = _nuvem(11, n=60)
    for raio, minimo in [(0.2, 2), (1.0, 4), (2.5, 6)]:
        assert count_hotspots(relatos, raio, minimo) == len(detect_hotspots(relatos, raio, minimo))


def test_count_path_never_geocodes():
    geocoder = FakeGeocoder()
    chamado = []

    def resolver(centroides):
        chamado.append(centroides)
        return [geocoder.reverse(*c) for c in centroides]

    assert run_hotspot_pass(_nuvem(3), enrich=False, address_resolver=resolver) >= 0
    assert chamado == []
    assert geocoder.calls == []


# ============================================================
# 🔁 Idempotência
# ============================================================
def test_same_ordered_input_gives_same_hotspots():
    relatos = _nuvem(42, n=60)
    geocoder = FakeGeocoder()

    def resolver(centroides):
        return [geocoder.reverse(*c) for c in centroides]

    a = detect_hotspots(relatos, address_resolver=resolver)
    b = detect_hotspots(relatos, address_resolver=resolver)

    assert [[m.id for m in h.members] for h in a] == [[m.id for m in h.members] for h in b]
    assert [(h.centroid_lat, h.centroid_lon, h.severity) for h in a] == [
        (h.centroid_lat, h.centroid_lon, h.severity) for h in b
    ]
    assert [h.resolved_address for h in a] == [h.resolved_address for h in b]


def test_resolver_returning_wrong_length_falls_back_to_coordinates(delhi_cluster):
    h = detect_hotspots(delhi_cluster, address_resolver=lambda c: [])[0]
    assert h.resolved_address == f"{BASE_LAT:.4f}, {BASE_LON:.4f}"


def test_empty_address_falls_back_to_coordinates(delhi_cluster):
    h = detect_hotspots(delhi_cluster, address_resolver=lambda c: [""] * len(c))[0]
    assert h.resolved_address == f"{BASE_LAT:.4f}, {BASE_LON:.4f}"


# ============================================================
# 🕸️ Componentes conexas
# ============================================================
def test_connected_strategy_is_permutation_invariant():
    relatos = _nuvem(9, n=70)
    embaralhado = list(relatos)
    random.Random(0).shuffle(embaralhado)

    def composicao(rs):
        return {frozenset(m.id for m in h.members) for h in detect_hotspots(rs, strategy="connected")}

    assert composicao(relatos) == composicao(embaralhado)


def test_connected_strategy_chains_neighbours():
    relatos = _linha(0.0, 0.3, 0.6, 0.9, 1.2)
    hotspots = detect_hotspots(relatos, strategy="connected")
    assert len(hotspots) == 1
    assert hotspots[0].member_count == 5
    assert [m.id for m in hotspots[0].members] == [r.id for r in relatos]


# ============================================================
# ⚠️ Parâmetros inválidos
# ============================================================
@pytest.mark.parametrize(
    "kwargs",
    [{"radius_km": 0}, {"radius_km": -1}, {"min_size": 0}, {"strategy": "dbscan"}],
)
def test_invalid_parameters_raise(kwargs):
    with pytest.raises(ValueError):
        detect_hotspots([make_report("a")], **kwargs)
