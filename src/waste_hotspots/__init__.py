# ============================================================
# 📦 src/waste_hotspots/__init__.py
# ============================================================

__version__ = "1.0.0"
