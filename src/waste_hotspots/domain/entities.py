# ==========================================================
# 📦 src/waste_hotspots/domain/entities.py
# ==========================================================

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, List, Any


class WasteCategory(str, Enum):
    ORGANIC = "ORGANIC"
    PLASTIC = "PLASTIC"
    PAPER = "PAPER"
    METAL = "METAL"
    GLASS = "GLASS"
    E_WASTE = "E-WASTE"
    HAZARDOUS = "HAZARDOUS"
    MIXED = "MIXED"


class Severity(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"


class ReportStatus:
    PENDING = "PENDING"
    VERIFIED = "VERIFIED"
    IN_PROGRESS = "IN_PROGRESS"
    COLLECTED = "COLLECTED"


@dataclass(frozen=True)
class WasteReport:
    """Relato geolocalizado de resíduo (somente leitura para o motor)."""
    id: Any
    latitude: float
    longitude: float
    waste_category: WasteCategory = WasteCategory.MIXED
    estimated_weight_kg: float = 1.0
    status: str = ReportStatus.PENDING
    reported_at: Optional[datetime] = None

    def __post_init__(self):
        # naive → UTC, para max() entre fontes diferentes
        if isinstance(self.reported_at, datetime) and self.reported_at.tzinfo is None:
            object.__setattr__(self, "reported_at", self.reported_at.replace(tzinfo=timezone.utc))

    @property
    def coords(self):
        return (self.latitude, self.longitude)


# ==========================================================
# 🧩 Cluster transitório (antes do corte por tamanho)
# ==========================================================
@dataclass
class Cluster:
    members: List[WasteReport] = field(default_factory=list)
    centroid_lat: float = 0.0
    centroid_lon: float = 0.0

    @property
    def anchor(self) -> WasteReport:
        return self.members[0]

    def add(self, report: WasteReport):
        # média aritmética incremental
        n = len(self.members)
        self.members.append(report)
        self.centroid_lat = (self.centroid_lat * n + report.latitude) / (n + 1)
        self.centroid_lon = (self.centroid_lon * n + report.longitude) / (n + 1)

    def __len__(self):
        return len(self.members)


# ==========================================================
# 🔥 Hotspot enriquecido
# ==========================================================
@dataclass
class Hotspot:
    hotspot_id: int
    centroid_lat: float
    centroid_lon: float
    resolved_address: str
    severity: Severity
    dominant_waste_category: WasteCategory
    member_count: int
    last_updated_at: Optional[datetime]
    members: List[WasteReport] = field(default_factory=list)

    def to_dict(self):
        return {
            "hotspot_id": self.hotspot_id,
            "centroid": {"lat": self.centroid_lat, "lng": self.centroid_lon},
            "resolved_address": self.resolved_address,
            "severity": self.severity.value,
            "dominant_waste_category": self.dominant_waste_category.value,
            "member_count": self.member_count,
            "last_updated_at": self.last_updated_at.isoformat() if self.last_updated_at else None,
            "member_ids": [m.id for m in self.members],
        }


@dataclass(frozen=True)
class HeatPoint:
    latitude: float
    longitude: float
    weight: float

    def to_dict(self):
        return {"lat": self.latitude, "lng": self.longitude, "weight": self.weight}


@dataclass(frozen=True)
class ReportStats:
    total: int
    pending: int
    collected: int
    hotspots: int

    def to_dict(self):
        return {
            "total": self.total,
            "pending": self.pending,
            "collected": self.collected,
            "hotspots": self.hotspots,
        }
