# ============================================================
# 📦 src/waste_hotspots/domain/haversine_utils.py
# ============================================================

import math

EARTH_RADIUS_KM = 6371.0


def haversine(coord1, coord2):
    """
    Calcula a distância de grande círculo entre dois pontos (lat, lon) em quilômetros.
    """
    lat1, lon1 = coord1
    lat2, lon2 = coord2

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # arredondamento pode empurrar `a` levemente acima de 1 em pontos antipodais
    a = min(1.0, a)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def distance_between(report_a, report_b):
    return haversine(
        (report_a.latitude, report_a.longitude),
        (report_b.latitude, report_b.longitude),
    )
