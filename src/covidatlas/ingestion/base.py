"""
Base classes and utilities for data ingestion.

Provides common functionality for all data loaders.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar

import pandas as pd
import pandera.pandas as pa

from covidatlas.config.settings import PipelineConfig
from covidatlas.normalization.columns import normalize_columns
from covidatlas.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T", bound=pa.DataFrameModel)


class DataLoader(ABC, Generic[T]):
    """
    Abstract base class for data loaders.

    Subclasses name the configured path attribute they read and the
    schema the normalized table must satisfy.
    """

    path_attr: str

    def __init__(self, config: PipelineConfig, schema: type[T]) -> None:
        """
        Initialize data loader.

        Args:
            config: Pipeline configuration.
            schema: Pandera schema for validation.
        """
        self.config = config
        self.schema = schema

    @property
    def path(self) -> Path:
        """Full path of the source file."""
        return self.config.data_paths.resolve(self.path_attr)

    def _read_csv(self, **kwargs: object) -> pd.DataFrame:
        """Read the source CSV and normalize its column names."""
        path = self.path
        if not path.exists():
            msg = f"Data file not found: {path}"
            raise FileNotFoundError(msg)

        log.info("Reading source file", path=str(path))
        return normalize_columns(pd.read_csv(path, **kwargs))

    @abstractmethod
    def _load_raw(self) -> pd.DataFrame:
        """Load raw data from source. Implemented by subclasses."""
        ...

    def load(self, *, validate: bool = True) -> pd.DataFrame:
        """
        Load and optionally validate data.

        Args:
            validate: Whether to validate against schema.

        Returns:
            Loaded (and optionally validated) DataFrame.

        Raises:
            FileNotFoundError: If data file not found.
            pandera.errors.SchemaError: If validation fails.
        """
        log.info("Loading data", loader=self.__class__.__name__)

        df = self._load_raw()
        log.info("Loaded raw data", rows=len(df), columns=len(df.columns))

        if validate:
            df = self.schema.validate(df)
            log.info("Schema validation passed", schema=self.schema.__name__)

        return df
