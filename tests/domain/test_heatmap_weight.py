# tests/domain/test_heatmap_weight.py

from waste_hotspots.domain.heatmap_weight import heat_weight, build_heat_points
from tests.conftest import make_report


def test_default_weight_is_three():
    assert heat_weight(1) == 3
    assert heat_weight(None) == 3


def test_missing_zero_or_garbage_defaults_to_one_kg():
    assert heat_weight(0) == 3
    assert heat_weight("lots") == 3
    assert heat_weight(float("nan")) == 3


def test_heavy_report_is_capped():
    assert heat_weight(1000) == 150
    assert heat_weight(float("inf")) == 150
    assert heat_weight(50) == 150


def test_monotonic_up_to_cap():
    pesos = [0.1, 0.5, 1, 2, 10, 49.9, 50, 60, 500]
    valores = [heat_weight(p) for p in pesos]
    assert valores == sorted(valores)
    assert all(0 <= v <= 150 for v in valores)


def test_negative_weight_is_clamped_to_zero():
    assert heat_weight(-4) == 0


def test_build_heat_points_keeps_input_order():
    relatos = [make_report("a", 1, 1, weight=2), make_report("b", 2, 2, weight=100)]
    pontos = build_heat_points(relatos)
    assert [(p.latitude, p.longitude, p.weight) for p in pontos] == [(1, 1, 6), (2, 2, 150)]
