# tests/conftest.py

from datetime import datetime, timedelta, timezone

import pytest

from waste_hotspots.domain.entities import WasteReport, WasteCategory

BASE_LAT, BASE_LON = 28.6139, 77.2090
T0 = datetime(2024, 12, 1, 8, 0, tzinfo=timezone.utc)


def make_report(rid, lat=BASE_LAT, lon=BASE_LON, category=WasteCategory.MIXED,
                weight=1.0, status="PENDING", reported_at=None):
    return WasteReport(
        id=rid,
        latitude=lat,
        longitude=lon,
        waste_category=category,
        estimated_weight_kg=weight,
        status=status,
        reported_at=reported_at,
    )


class FakeGeocoder:
    """Geocodificador determinístico: endereço derivado do centróide."""

    def __init__(self):
        self.calls = []

    def reverse(self, lat, lon):
        self.calls.append((lat, lon))
        return f"Rua Teste @ {lat:.3f},{lon:.3f}"


@pytest.fixture
def fake_geocoder():
    return FakeGeocoder()


@pytest.fixture
def delhi_cluster():
    """5 relatos a menos de 100 m de (28.6139, 77.2090)."""
    offsets = [(0.0, 0.0), (0.0003, 0.0), (0.0, 0.0003), (-0.0003, 0.0), (0.0, -0.0003)]
    categorias = [
        WasteCategory.PLASTIC,
        WasteCategory.PLASTIC,
        WasteCategory.PAPER,
        WasteCategory.PLASTIC,
        WasteCategory.METAL,
    ]
    return [
        make_report(
            f"r{i}",
            lat=BASE_LAT + dlat,
            lon=BASE_LON + dlon,
            category=categorias[i],
            weight=float(i + 1),
            reported_at=T0 + timedelta(hours=i * 3 if i != 2 else 20),
        )
        for i, (dlat, dlon) in enumerate(offsets)
    ]
