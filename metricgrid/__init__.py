"""
metricgrid

Grid of metric chart images loaded from a metrics server and kept fresh
with cache-busting refreshes.
"""

__version__ = "1.0.0"
