"""
covidatlas: Pandemic time-series atlas.

This package provides ingestion, name normalization and aggregation of
COVID-19 time-series tables, plus the magnitude bucketing and layered
rendering models behind bubble maps, state rankings and the 3D globe.
"""

from importlib.metadata import version

__version__ = version("covidatlas")

__all__ = ["__version__"]
