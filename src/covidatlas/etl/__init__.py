"""
Loading, canonicalization and aggregation of the atlas datasets.
"""

from covidatlas.etl.aggregate import aggregate_by_entity, exclude_entities
from covidatlas.etl.pipeline import AtlasPipeline, AtlasResult

__all__ = [
    "AtlasPipeline",
    "AtlasResult",
    "aggregate_by_entity",
    "exclude_entities",
]
