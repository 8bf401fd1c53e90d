# ============================================================
# 📦 src/waste_hotspots/domain/severity.py
# ============================================================

from waste_hotspots.domain.entities import Severity


def classify_severity(member_count: int) -> Severity:
    if member_count >= 10:
        return Severity.CRITICAL
    if member_count >= 7:
        return Severity.HIGH
    if member_count >= 5:
        return Severity.MEDIUM
    return Severity.LOW
