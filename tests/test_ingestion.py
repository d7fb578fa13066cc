"""Tests for the file ingestor."""

import io
import json
from datetime import datetime

import pandas as pd
import pytest

from dashgen.core.ingestion import CsvParser, FileIngestor, Parser, dataframe_to_dataset
from dashgen.core.models import ColumnType, Dataset
from dashgen.core.type_inference import TypeInferencer
from dashgen.exceptions import EmptyDatasetError, ParseError, UnsupportedFormatError

from tests.conftest import sales_csv


def _assert_rectangular(dataset: Dataset):
    for row in dataset.rows:
        assert len(row) == len(dataset.headers)
    assert len(set(dataset.headers)) == len(dataset.headers)


class TestCsv:

    def test_header_row_becomes_columns(self, ingestor):
        dataset = ingestor.ingest(sales_csv(), "csv")

        assert dataset.headers == ("date", "region", "revenue")
        assert dataset.row_count == 30
        assert dataset.rows[0] == ("2024-01-01", "North", "100")
        _assert_rectangular(dataset)

    def test_empty_cells_stay_empty_strings(self, ingestor):
        dataset = ingestor.ingest(b"name,score\nann,\nbob,3\n", "csv")

        assert dataset.rows == (("ann", ""), ("bob", "3"))

    def test_blank_lines_are_skipped(self, ingestor):
        dataset = ingestor.ingest(b"a,b\n1,2\n\n\n3,4\n", "csv")

        assert dataset.row_count == 2

    def test_latin1_fallback(self, ingestor):
        data = "city,visits\ncafé,3\n".encode("latin-1")

        dataset = ingestor.ingest(data, "csv")

        assert dataset.rows[0][0] == "café"

    def test_utf8_bom_is_stripped(self, ingestor):
        dataset = ingestor.ingest("\ufeffid,name\n1,x\n".encode("utf-8"), "csv")

        assert dataset.headers == ("id", "name")

    def test_duplicate_headers_are_made_unique(self, ingestor):
        dataset = ingestor.ingest(b"a,a\n1,2\n", "csv")

        assert len(set(dataset.headers)) == 2

    def test_trailing_delimiter_keeps_columns_aligned(self, ingestor):
        data = b"date,region,revenue\n2024-01-01,North,100,\n2024-01-02,South,200,\n"

        dataset = ingestor.ingest(data, "csv")

        assert dataset.headers == ("date", "region", "revenue")
        assert dataset.rows[0] == ("2024-01-01", "North", "100")
        assert TypeInferencer().infer(dataset) == {
            "date": ColumnType.DATE,
            "region": ColumnType.STRING,
            "revenue": ColumnType.INTEGER,
        }

    def test_extra_field_on_every_row_keeps_first_column(self, ingestor):
        dataset = ingestor.ingest(b"a,b\n1,2,3\n4,5,6\n", "csv")

        assert dataset.headers == ("a", "b")
        assert dataset.rows == (("1", "2"), ("4", "5"))

    def test_empty_file(self, ingestor):
        with pytest.raises(EmptyDatasetError):
            ingestor.ingest(b"", "csv")

    def test_header_only(self, ingestor):
        with pytest.raises(EmptyDatasetError):
            ingestor.ingest(b"a,b\n", "csv")

    def test_malformed_rows(self, ingestor):
        with pytest.raises(ParseError):
            ingestor.ingest(b"a,b\n1,2\n3,4,5,6\n", "csv")

    def test_undecodable_bytes(self):
        parser = CsvParser(encodings=["ascii"])

        with pytest.raises(ParseError):
            parser.parse("é".encode("utf-8"))


class TestJson:

    def test_array_of_objects(self, ingestor):
        data = json.dumps([{"a": 1, "b": "x"}, {"a": 2, "b": "y"}]).encode()

        dataset = ingestor.ingest(data, "json")

        assert dataset.headers == ("a", "b")
        assert dataset.rows == ((1, "x"), (2, "y"))

    def test_object_with_data_array(self, ingestor):
        data = json.dumps({"meta": {"v": 1}, "data": [{"a": 1}, {"a": 2}]}).encode()

        dataset = ingestor.ingest(data, "json")

        assert dataset.headers == ("a",)
        assert dataset.row_count == 2

    def test_plain_object_becomes_key_value_rows(self, ingestor):
        data = json.dumps({"visits": 10, "signups": 3}).encode()

        dataset = ingestor.ingest(data, "json")

        assert dataset.headers == ("key", "value")
        assert dataset.rows == (("visits", 10), ("signups", 3))

    def test_headers_are_union_of_keys(self, ingestor):
        data = json.dumps([{"a": 1}, {"a": 2, "b": "z"}]).encode()

        dataset = ingestor.ingest(data, "json")

        assert dataset.headers == ("a", "b")
        assert dataset.rows[0] == (1, None)
        _assert_rectangular(dataset)

    def test_malformed(self, ingestor):
        with pytest.raises(ParseError):
            ingestor.ingest(b"[{\"a\": 1,", "json")

    def test_empty_array(self, ingestor):
        with pytest.raises(EmptyDatasetError):
            ingestor.ingest(b"[]", "json")

    def test_array_of_scalars(self, ingestor):
        with pytest.raises(ParseError):
            ingestor.ingest(b"[1, 2, 3]", "json")

    def test_top_level_scalar(self, ingestor):
        with pytest.raises(ParseError):
            ingestor.ingest(b"42", "json")


class TestExcel:

    def _workbook(self) -> bytes:
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine="openpyxl") as writer:
            pd.DataFrame({
                "order_date": [datetime(2024, 1, 1), datetime(2024, 1, 2)],
                "sales": [10, 20],
            }).to_excel(writer, sheet_name="Orders", index=False)
            pd.DataFrame({"other": ["x"]}).to_excel(writer, sheet_name="Other", index=False)
        return buffer.getvalue()

    def test_first_sheet_only(self, ingestor):
        dataset = ingestor.ingest(self._workbook(), "xlsx")

        assert dataset.headers == ("order_date", "sales")
        assert dataset.row_count == 2

    def test_dates_are_normalized_to_iso_strings(self, ingestor):
        dataset = ingestor.ingest(self._workbook(), "xlsx")

        assert dataset.rows[0][0].startswith("2024-01-01")
        types = TypeInferencer().infer(dataset)
        assert types == {"order_date": ColumnType.DATE, "sales": ColumnType.INTEGER}

    def test_garbage_bytes(self, ingestor):
        with pytest.raises(ParseError):
            ingestor.ingest(b"definitely not a workbook", "xlsx")


class TestRegistry:

    def test_unsupported_extension(self, ingestor):
        with pytest.raises(UnsupportedFormatError) as exc_info:
            ingestor.ingest(b"a,b\n1,2\n", "txt")

        assert exc_info.value.extension == "txt"

    def test_extension_is_normalized(self, ingestor):
        dataset = ingestor.ingest(b"a\n1\n", ".CSV")

        assert dataset.headers == ("a",)

    def test_supported_extensions(self, ingestor):
        assert ingestor.supported_extensions == ["csv", "json", "xls", "xlsx"]

    def test_register_custom_parser(self, ingestor):
        class TsvParser(Parser):
            def parse(self, data):
                df = pd.read_csv(io.BytesIO(data), sep="\t", dtype=str, keep_default_na=False)
                return dataframe_to_dataset(df)

        ingestor.register_parser("tsv", TsvParser())

        dataset = ingestor.ingest(b"a\tb\n1\t2\n", "tsv")

        assert dataset.rows == (("1", "2"),)

    def test_ingest_file_uses_suffix_and_name(self, ingestor, tmp_path):
        path = tmp_path / "sales.csv"
        path.write_bytes(sales_csv())

        dataset = ingestor.ingest_file(str(path))

        assert dataset.source_name == "sales.csv"
        assert dataset.row_count == 30


class TestDataset:

    def test_rejects_duplicate_headers(self):
        with pytest.raises(ValueError):
            Dataset(headers=("a", "a"), rows=())

    def test_rejects_ragged_rows(self):
        with pytest.raises(ValueError):
            Dataset(headers=("a", "b"), rows=((1,),))

    def test_distinct_count_ignores_missing(self):
        dataset = Dataset(headers=("a",), rows=(("x",), ("",), (None,), ("x",), ("y",)))

        assert dataset.distinct_count("a") == 2
        assert dataset.missing_count("a") == 2
