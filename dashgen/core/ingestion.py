"""
File Ingestor

Normalizes uploaded CSV, JSON and spreadsheet bytes into a uniform
``Dataset``. Parsers are kept in a registry keyed by file extension so
new formats can be added without touching call sites.
"""

from typing import Dict, List, Optional, Any, Callable
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path
import io
import json
import logging
import math
import warnings

import numpy as np
import pandas as pd

from dashgen.config import IngestionConfig
from dashgen.core.models import Dataset
from dashgen.exceptions import (
    EmptyDatasetError,
    ParseError,
    UnsupportedFormatError,
)

logger = logging.getLogger(__name__)


class Parser:
    """Parses raw file bytes of one format into a ``Dataset``."""

    def parse(self, data: bytes) -> Dataset:
        raise NotImplementedError


def _normalize_cell(value: Any) -> Any:
    """Convert pandas/numpy cell values into plain Python values."""
    if value is None or value is pd.NaT or value is pd.NA:
        return None
    if isinstance(value, np.datetime64):
        value = pd.Timestamp(value)
        if value is pd.NaT:
            return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def dataframe_to_dataset(df: pd.DataFrame) -> Dataset:
    """Convert a pandas DataFrame into a ``Dataset``."""
    headers = [str(c) for c in df.columns]
    rows = [
        tuple(_normalize_cell(v) for v in row)
        for row in df.itertuples(index=False, name=None)
    ]
    try:
        return Dataset(headers=tuple(headers), rows=tuple(rows))
    except ValueError as e:
        raise ParseError(str(e)) from e


class CsvParser(Parser):
    """CSV with a header row. Every cell is read as text."""

    def __init__(self, encodings: Optional[List[str]] = None):
        self.encodings = encodings or ["utf-8-sig", "latin-1"]

    def _decode(self, data: bytes) -> str:
        for encoding in self.encodings:
            try:
                return data.decode(encoding)
            except UnicodeDecodeError:
                logger.debug(f"CSV is not valid {encoding}, trying next encoding")
        raise ParseError(f"Could not decode CSV with encodings: {', '.join(self.encodings)}")

    def parse(self, data: bytes) -> Dataset:
        text = self._decode(data)
        try:
            # index_col=False keeps the first field as data when rows end with a delimiter
            with warnings.catch_warnings():
                warnings.simplefilter("ignore", pd.errors.ParserWarning)
                df = pd.read_csv(
                    io.StringIO(text),
                    dtype=str,
                    keep_default_na=False,
                    skip_blank_lines=True,
                    index_col=False,
                )
        except pd.errors.EmptyDataError as e:
            raise EmptyDatasetError("CSV file is empty") from e
        except (pd.errors.ParserError, ValueError) as e:
            raise ParseError(f"Malformed CSV: {e}") from e
        return dataframe_to_dataset(df)


class JsonParser(Parser):
    """
    JSON records.

    Accepts a top-level array of objects, an object holding a ``data``
    array, or a plain object which becomes ``{key, value}`` rows.
    """

    def parse(self, data: bytes) -> Dataset:
        try:
            payload = json.loads(data.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ParseError(f"Malformed JSON: {e}") from e

        if isinstance(payload, list):
            records = payload
        elif isinstance(payload, dict):
            if isinstance(payload.get("data"), list):
                records = payload["data"]
            else:
                records = [{"key": k, "value": v} for k, v in payload.items()]
        else:
            raise ParseError(
                "JSON file must contain an array of objects or an object with a data array"
            )

        if not records:
            raise EmptyDatasetError("JSON file contains no data")
        if not all(isinstance(r, dict) for r in records):
            raise ParseError("JSON array must contain objects")

        # Union of keys in first-seen order
        headers = list(dict.fromkeys(key for record in records for key in record))
        df = pd.DataFrame(records, columns=headers, dtype=object)
        return dataframe_to_dataset(df)


class ExcelParser(Parser):
    """First sheet of an XLSX/XLS workbook."""

    def parse(self, data: bytes) -> Dataset:
        try:
            df = pd.read_excel(io.BytesIO(data), sheet_name=0, dtype=object)
        except ImportError:
            raise
        except Exception as e:
            raise ParseError(f"Malformed spreadsheet: {e}") from e
        df = df.dropna(how="all")
        return dataframe_to_dataset(df)


DEFAULT_PARSERS: Dict[str, Callable[[IngestionConfig], Parser]] = {
    "csv": lambda config: CsvParser(config.csv_encodings),
    "json": lambda config: JsonParser(),
    "xlsx": lambda config: ExcelParser(),
    "xls": lambda config: ExcelParser(),
}


def _normalize_extension(extension: str) -> str:
    return (extension or "").strip().lower().lstrip(".")


class FileIngestor:
    """
    Turns uploaded file bytes into a ``Dataset``.

    Fails with ``UnsupportedFormatError`` for unknown extensions,
    ``ParseError`` for malformed content and ``EmptyDatasetError``
    when no rows remain.
    """

    def __init__(self, config: Optional[IngestionConfig] = None):
        """
        Initialize the ingestor with the default parsers.

        Args:
            config: Ingestion configuration
        """
        self.config = config or IngestionConfig()
        self._parsers: Dict[str, Parser] = {}

        for extension in self.config.supported_extensions:
            factory = DEFAULT_PARSERS.get(_normalize_extension(extension))
            if factory is None:
                logger.warning(f"No built-in parser for extension: {extension}")
                continue
            self.register_parser(extension, factory(self.config))

    def register_parser(self, extension: str, parser: Parser):
        """Register (or replace) the parser for an extension."""
        self._parsers[_normalize_extension(extension)] = parser

    @property
    def supported_extensions(self) -> List[str]:
        return sorted(self._parsers)

    def ingest(
        self,
        data: bytes,
        extension: str,
        source_name: Optional[str] = None,
    ) -> Dataset:
        """
        Parse raw bytes into a dataset.

        Args:
            data: Raw file content
            extension: Declared file extension (``csv``, ``.json``, ...)
            source_name: Original file name, kept for reporting

        Returns:
            Dataset with at least one row
        """
        key = _normalize_extension(extension)
        parser = self._parsers.get(key)
        if parser is None:
            raise UnsupportedFormatError(key)

        dataset = parser.parse(data)

        if dataset.column_count == 0 or dataset.row_count == 0:
            raise EmptyDatasetError(f"{source_name or key.upper() + ' file'} contains no data rows")

        if source_name:
            dataset = replace(dataset, source_name=source_name)

        logger.info(
            f"Ingested {source_name or key} dataset: "
            f"{dataset.row_count} rows x {dataset.column_count} columns"
        )
        return dataset

    def ingest_file(self, path: str) -> Dataset:
        """Read a file from disk and ingest it using its suffix."""
        file_path = Path(path)
        return self.ingest(
            file_path.read_bytes(),
            file_path.suffix,
            source_name=file_path.name,
        )
