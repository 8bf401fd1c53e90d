from .entities import (
    WasteReport,
    WasteCategory,
    Severity,
    ReportStatus,
    Cluster,
    Hotspot,
    HeatPoint,
    ReportStats,
)
from .haversine_utils import haversine
from .geo_filter import filter_valid_reports
from .heatmap_weight import heat_weight, build_heat_points
from .severity import classify_severity
from .dominant_type import dominant_category
from .hotspot_clusterer import detect_hotspots, count_hotspots, run_hotspot_pass
