"""Tests for upload validation."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pandas as pd

from data.validator import (
    validate_coaches,
    validate_travel_classes,
    validate_trains,
    validate_train_coaches,
    validate_cross_file,
)
from data.sample_data import (
    generate_coaches_df,
    generate_travel_classes_df,
    generate_trains_df,
    generate_train_coaches_df,
)


def make_coaches_df(rows=None):
    return pd.DataFrame(rows or [
        {"Coach Code": "CHA", "Total Seats": 60, "Front Start": 1, "Front End": 30, "Back Start": None, "Back End": None},
    ])


def make_trains_df(**overrides):
    row = {"Train ID": "1", "Train Name": "Demo", "Origin Station": "Dhaka",
           "Destination Station": "Panchagarh", "Code From To": "101", "Code To From": "103"}
    row.update(overrides)
    return pd.DataFrame([row])


class TestSampleData:
    def test_sample_data_is_valid(self):
        assert validate_coaches(generate_coaches_df()).is_valid
        assert validate_travel_classes(generate_travel_classes_df()).is_valid
        assert validate_trains(generate_trains_df()).is_valid
        assert validate_train_coaches(generate_train_coaches_df()).is_valid

    def test_sample_cross_file_has_no_unknown_references(self):
        result = validate_cross_file(
            generate_coaches_df(), generate_travel_classes_df(),
            generate_trains_df(), generate_train_coaches_df(),
        )
        assert not any("unknown" in w for w in result.warnings)


class TestValidateCoaches:
    def test_missing_column(self):
        result = validate_coaches(pd.DataFrame([{"Coach Code": "CHA"}]))
        assert not result.is_valid
        assert "Total Seats" in result.errors[0]

    def test_empty_sheet(self):
        result = validate_coaches(pd.DataFrame(columns=["Coach Code", "Total Seats"]))
        assert not result.is_valid

    def test_duplicate_codes_case_insensitive(self):
        df = make_coaches_df([
            {"Coach Code": "CHA", "Total Seats": 60},
            {"Coach Code": "cha", "Total Seats": 60},
        ])
        assert not validate_coaches(df).is_valid

    def test_negative_seats(self):
        df = make_coaches_df([{"Coach Code": "CHA", "Total Seats": -1}])
        assert not validate_coaches(df).is_valid

    def test_non_numeric(self):
        df = make_coaches_df([{"Coach Code": "CHA", "Total Seats": "sixty"}])
        result = validate_coaches(df)
        assert not result.is_valid
        assert "must be a number" in result.errors[0]

    def test_zero_seats_is_warning(self):
        df = make_coaches_df([{"Coach Code": "JA", "Total Seats": 0}])
        result = validate_coaches(df)
        assert result.is_valid
        assert result.warnings

    def test_range_past_total(self):
        df = make_coaches_df([{"Coach Code": "KA", "Total Seats": 40, "Front Start": 1, "Front End": 45}])
        result = validate_coaches(df)
        assert not result.is_valid
        assert "exceeds 40 seats" in result.errors[0]

    def test_end_before_start(self):
        df = make_coaches_df([{"Coach Code": "KA", "Total Seats": 40, "Front Start": 20, "Front End": 10}])
        assert not validate_coaches(df).is_valid

    def test_overlap(self):
        df = make_coaches_df([{"Coach Code": "KA", "Total Seats": 60, "Front Start": 1, "Front End": 30,
                               "Back Start": 30, "Back End": 60}])
        result = validate_coaches(df)
        assert not result.is_valid
        assert "overlaps" in result.errors[0]

    def test_lone_start_ignored(self):
        df = make_coaches_df([{"Coach Code": "KA", "Total Seats": 60, "Front Start": 70, "Front End": None}])
        assert validate_coaches(df).is_valid


class TestValidateTravelClasses:
    def test_duplicate_short_codes(self):
        df = pd.DataFrame([
            {"Class Name": "A", "Short Code": "S_CHAIR"},
            {"Class Name": "B", "Short Code": "s_chair "},
        ])
        assert not validate_travel_classes(df).is_valid


class TestValidateTrains:
    def test_valid(self):
        result = validate_trains(make_trains_df())
        assert result.is_valid
        assert result.warnings == []

    def test_origin_equals_destination(self):
        assert not validate_trains(make_trains_df(**{"Destination Station": "dhaka"})).is_valid

    def test_missing_code_warns(self):
        result = validate_trains(make_trains_df(**{"Code To From": ""}))
        assert result.is_valid
        assert any("Code To From" in w for w in result.warnings)

    def test_identical_codes_warn(self):
        result = validate_trains(make_trains_df(**{"Code To From": "101"}))
        assert any("identical" in w for w in result.warnings)


class TestValidateTrainCoaches:
    def test_override_without_total_warns(self):
        df = pd.DataFrame([{"Train ID": "1", "Class Short Code": "S_CHAIR", "Coach Code": "KA",
                            "Override Seats": True, "Override Total Seats": None}])
        result = validate_train_coaches(df)
        assert result.is_valid
        assert result.warnings

    def test_override_range_checked_only_when_enabled(self):
        base = {"Train ID": "1", "Class Short Code": "S_CHAIR", "Coach Code": "KA",
                "Override Total Seats": 40, "Override Front Start": 1, "Override Front End": 45}
        assert validate_train_coaches(pd.DataFrame([{**base, "Override Seats": False}])).is_valid
        assert not validate_train_coaches(pd.DataFrame([{**base, "Override Seats": True}])).is_valid


class TestCrossFile:
    def test_unknown_references(self):
        coaches = make_coaches_df()
        classes = pd.DataFrame([{"Class Name": "Shovan Chair", "Short Code": "S_CHAIR"}])
        trains = make_trains_df()
        assignments = pd.DataFrame([
            {"Train ID": "1", "Class Short Code": "S_CHAIR", "Coach Code": "CHA"},
            {"Train ID": "9", "Class Short Code": "AC_B", "Coach Code": "ZZ"},
        ])
        result = validate_cross_file(coaches, classes, trains, assignments)
        text = " ".join(result.warnings)
        assert "ZZ" in text
        assert "AC_B" in text
        assert "9" in text


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
