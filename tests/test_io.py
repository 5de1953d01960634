"""Tests for loading datasets from JSON and long-form tables."""

import io
import json

import numpy as np
import pandas as pd
import pytest

from motionchart import DimensionEncoding
from motionchart.errors import DatasetValidationError
from motionchart.io import read_csv, read_json, records_from_dataframe


@pytest.fixture
def honey_frame():
    """Long-form table shaped like honeyproduction.csv (unsorted on purpose)."""
    return pd.DataFrame(
        {
            "state": ["AL", "AZ", "AL", "AZ", "AL"],
            "numcol": [16000.0, 55000.0, 17000.0, np.nan, 15000.0],
            "yieldpercol": [71, 60, 68, 64, 69],
            "totalprod": [1136000.0, 3300000.0, 1156000.0, 3200000.0, 1035000.0],
            "priceperlb": [0.72, 0.64, 0.70, 0.62, 0.80],
            "year": [1998, 1998, 1999, 1999, 2000],
        }
    ).iloc[[4, 1, 0, 3, 2]]


class TestRecordsFromDataframe:
    def test_groups_and_sorts_by_time(self, honey_frame):
        records = records_from_dataframe(honey_frame)
        by_key = {r["state"]: r for r in records}
        assert by_key["AL"]["totalprod"] == [
            [1998.0, 1136000.0],
            [1999.0, 1156000.0],
            [2000.0, 1035000.0],
        ]

    def test_keys_in_first_seen_order(self, honey_frame):
        records = records_from_dataframe(honey_frame)
        assert [r["state"] for r in records] == ["AL", "AZ"]

    def test_missing_values_dropped_per_dimension(self, honey_frame):
        records = records_from_dataframe(honey_frame)
        az = next(r for r in records if r["state"] == "AZ")
        assert az["numcol"] == [[1998.0, 55000.0]]
        assert len(az["totalprod"]) == 2

    def test_values_are_builtin_types(self, honey_frame):
        record = records_from_dataframe(honey_frame)[0]
        assert type(record["state"]) is str
        assert type(record["numcol"][0][1]) is float

    def test_missing_required_column(self, honey_frame):
        with pytest.raises(DatasetValidationError, match=r"\[E2005\].*year"):
            records_from_dataframe(honey_frame.drop(columns="year"))

    @pytest.mark.parametrize("column", ["totalprod", "year"])
    def test_non_numeric_column_rejected(self, honey_frame, column):
        frame = honey_frame.astype({column: object})
        frame.loc[frame.index[0], column] = "n/a"
        with pytest.raises(DatasetValidationError, match=rf"\[E2005\].*{column}.*numeric"):
            records_from_dataframe(frame)

    def test_missing_key_rejected(self, honey_frame):
        """Test that rows without an entity key are not silently dropped."""
        frame = honey_frame.astype({"state": object})
        frame.loc[frame.index[1], "state"] = None
        with pytest.raises(DatasetValidationError, match=r"\[E2005\].*1 missing key"):
            records_from_dataframe(frame)

    def test_varying_color_key_rejected(self, honey_frame):
        frame = honey_frame.assign(region=["s", "w", "s", "w", "x"])
        encoding = DimensionEncoding(color="region")
        with pytest.raises(DatasetValidationError, match="color column"):
            records_from_dataframe(frame, encoding=encoding)


class TestReadCsv:
    def test_round_trip_through_file(self, honey_frame, tmp_path):
        path = tmp_path / "honeyproduction.csv"
        honey_frame.to_csv(path, index=False)
        dataset = read_csv(path)
        assert dataset.keys() == ("AL", "AZ")
        assert dataset.time_extent() == (1998.0, 2000.0)
        assert dataset["AZ"].series["numcol"].pairs() == [(1998.0, 55000.0)]

    def test_custom_time_column(self, honey_frame, tmp_path):
        path = tmp_path / "honey.csv"
        honey_frame.rename(columns={"year": "season"}).to_csv(path, index=False)
        dataset = read_csv(path, time_column="season")
        assert dataset["AL"].series["priceperlb"].last_time == 2000.0


class TestReadJson:
    def test_from_path(self, honey_records, tmp_path):
        path = tmp_path / "honey.json"
        path.write_text(json.dumps(honey_records), encoding="utf-8")
        dataset = read_json(path)
        assert dataset.keys() == ("AL", "CA", "ND")

    def test_from_file_object(self, honey_records):
        dataset = read_json(io.StringIO(json.dumps(honey_records)))
        assert len(dataset) == 3

    def test_top_level_must_be_list(self):
        with pytest.raises(DatasetValidationError, match=r"\[E2005\].*list"):
            read_json(io.StringIO('{"state": "AL"}'))
