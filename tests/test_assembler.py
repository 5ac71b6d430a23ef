"""Tests for per-train seat report assembly."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest
from dataclasses import FrozenInstanceError

from models.route import RouteDeclaration, DirectionRequest
from models.rolling_stock import Coach, TravelClass, CoachAssignment, Train
from engine.assembler import assemble_train_seats, classify_coaches, index_records
from engine.direction_resolver import resolve_direction
from data.sample_data import FALLBACK_COACHES


def make_train(assignments=None):
    route = RouteDeclaration("Dhaka", "Panchagarh", "101", "103")
    return Train("1", "Demo Line", route, assignments or [])


def make_assignment(code, class_code="S_CHAIR", position=1, **override):
    return CoachAssignment(code, class_code, position, **override)


def make_lookups():
    coaches = [
        Coach("CHA", 60, 1, 30),
        Coach("BAD", 40, 1, 45),
        Coach("JA", 0),
    ]
    classes = [TravelClass("Shovan Chair", "S_CHAIR", 60, 1, 30)]
    return index_records(coaches, classes)


class TestIndexRecords:
    def test_keys_upper_cased(self):
        coaches, classes = index_records([Coach(" cha ", 60)], [TravelClass("x", "s_chair", 60)])
        assert "CHA" in coaches
        assert "S_CHAIR" in classes


class TestClassifyCoaches:
    def test_bad_coach_does_not_stop_batch(self):
        coaches, classes = make_lookups()
        direction = resolve_direction(None, DirectionRequest())
        outcomes = classify_coaches(
            [make_assignment("CHA", position=1), make_assignment("BAD", position=2),
             make_assignment("NOPE", class_code="UNKNOWN", position=3), make_assignment("JA", position=4)],
            coaches, classes, direction,
        )
        assert [o.ok for o in outcomes] == [True, False, False, True]
        assert "BAD" in outcomes[1].error
        assert "NOPE" in outcomes[2].error
        assert outcomes[3].template_source == "travel_class"

    def test_lower_case_codes_match(self):
        coaches, classes = make_lookups()
        direction = resolve_direction(None, DirectionRequest())
        outcomes = classify_coaches([make_assignment("cha", class_code="s_chair")], coaches, classes, direction)
        assert outcomes[0].ok
        assert outcomes[0].coach_code == "CHA"


class TestAssembleTrainSeats:
    def test_reverse_swaps_stations_and_seats(self):
        coaches, classes = make_lookups()
        train = make_train([make_assignment("CHA")])
        report = assemble_train_seats(train, DirectionRequest(route_code="103"), coaches, classes)
        assert report.direction == "reverse"
        assert report.route_code == "103"
        assert (report.from_station, report.to_station) == ("Panchagarh", "Dhaka")
        assert report.coaches[0].classification.front_facing_seats == tuple(range(31, 61))

    def test_forward_report(self):
        coaches, classes = make_lookups()
        train = make_train([make_assignment("CHA")])
        request = DirectionRequest(from_station="Dhaka", to_station="Panchagarh")
        report = assemble_train_seats(train, request, coaches, classes)
        assert report.direction == "forward"
        assert (report.from_station, report.to_station) == ("Dhaka", "Panchagarh")
        assert not report.fallback

    def test_failures_reported(self):
        coaches, classes = make_lookups()
        train = make_train([make_assignment("CHA", position=1), make_assignment("BAD", position=2)])
        report = assemble_train_seats(train, DirectionRequest(), coaches, classes)
        assert len(report.classified) == 1
        assert [f.coach_code for f in report.failures] == ["BAD"]
        data = report.to_dict()
        assert data["count"] == 1
        assert data["failures"][0]["coachCode"] == "BAD"

    def test_coach_filter(self):
        coaches, classes = make_lookups()
        train = make_train([make_assignment("CHA", position=1), make_assignment("JA", position=2)])
        report = assemble_train_seats(train, DirectionRequest(), coaches, classes, coach_code="ja")
        assert [o.coach_code for o in report.coaches] == ["JA"]

    def test_fallback_for_train_without_coaches(self):
        report = assemble_train_seats(make_train(), DirectionRequest(), {}, {}, fallback=FALLBACK_COACHES)
        assert report.fallback
        assert [o.coach_code for o in report.coaches] == ["CHA", "SCHA", "UMA", "JA"]
        assert all(o.template_source == "fallback" for o in report.coaches)

    def test_fallback_filtered(self):
        report = assemble_train_seats(None, DirectionRequest(train_number="702"), {}, {},
                                      fallback=FALLBACK_COACHES, coach_code="uma")
        assert [o.coach_code for o in report.coaches] == ["UMA"]
        assert report.direction == "reverse"
        assert report.confidence == "heuristic"
        # UMA has every seat front-facing going forward, so all back-facing in reverse
        assert report.coaches[0].classification.back_facing_count == 48

    def test_fallback_table_cannot_be_altered(self):
        template = FALLBACK_COACHES[0].to_template()
        template.total_seats = 10
        template.explanation_steps.append("edited")
        assert FALLBACK_COACHES[0].to_template().total_seats == 60
        assert FALLBACK_COACHES[0].to_template().explanation_steps == []
        with pytest.raises(FrozenInstanceError):
            FALLBACK_COACHES[0].total_seats = 10
        assert isinstance(hash(FALLBACK_COACHES), int)

        report = assemble_train_seats(make_train(), DirectionRequest(), {}, {}, fallback=FALLBACK_COACHES)
        assert report.coaches[0].classification.total_seats == 60

    def test_no_fallback_unless_given(self):
        report = assemble_train_seats(make_train(), DirectionRequest(), {}, {})
        assert report.coaches == []
        assert not report.fallback

    def test_unknown_train_identity(self):
        report = assemble_train_seats(None, DirectionRequest(train_number="701"), {}, {}, fallback=FALLBACK_COACHES)
        assert report.train_id == "701"
        assert report.train_name == "Train 701"

    def test_grid_included_on_request(self):
        coaches, classes = make_lookups()
        train = make_train([make_assignment("CHA")])
        report = assemble_train_seats(train, DirectionRequest(), coaches, classes, include_grid=True)
        assert len(report.coaches[0].classification.grid) == 12

    def test_explanation_copied(self):
        coaches, classes = make_lookups()
        report = assemble_train_seats(make_train([make_assignment("CHA")]), DirectionRequest(route_code="103"),
                                      coaches, classes)
        assert report.explanation_steps


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
