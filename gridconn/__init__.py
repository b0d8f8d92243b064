"""
Grid Connection Map — battery storage grid-connection dashboard.

Entry point: python -m gridconn  (or the ``gridconn`` console script)

Provides:
- Dataset ingest from a local JSON file or an HTTP(S) URL (ingest)
- Square-root bubble scale and per-region map layers (viz)
- National summary, area cards, region detail and timeline projections (projection)
- Single-owner selection controller shared by map and cards (selection)
- PyQt5 GUI: bubble map, card strip, detail panel, pyqtgraph timeline (gui, gui_main)
"""

__version__ = "0.1.0"
