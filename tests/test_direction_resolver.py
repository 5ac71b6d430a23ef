"""Tests for the direction cascade and route-code helpers."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from models.route import RouteDeclaration, DirectionRequest
from models.rolling_stock import Train
from engine.direction_resolver import (
    resolve_direction,
    is_reverse_route_code,
    parity_direction,
    oriented_stations,
    find_train_by_route_code,
    expand_directions,
    opposite_train_number,
    return_leg_request,
)
from config.defaults import DEFAULT_DIRECTION


def make_route(origin="Dhaka", destination="Panchagarh", code_from_to="101", code_to_from="103", **kwargs):
    return RouteDeclaration(origin, destination, code_from_to, code_to_from, **kwargs)


def make_train(train_id="1", name="Demo Line", **route_kwargs):
    return Train(train_id, name, make_route(**route_kwargs))


class TestRouteCodeRule:
    def test_103_is_reverse(self):
        result = resolve_direction(make_route(), DirectionRequest(route_code="103"))
        assert result.direction == "reverse"
        assert result.rule == "route_code"
        assert result.confidence == "authoritative"
        assert result.route_code == "103"

    def test_reverse_token_in_code(self):
        result = resolve_direction(None, DirectionRequest(route_code="DHK-Return"))
        assert result.direction == "reverse"
        assert result.route_code == "DHK-Return"

    def test_train_own_return_code(self):
        route = make_route(code_from_to="793", code_to_from="794")
        result = resolve_direction(route, DirectionRequest(route_code="794"))
        assert result.direction == "reverse"

    def test_same_codes_both_ways_not_reverse(self):
        route = make_route(code_from_to="500", code_to_from="500")
        assert not is_reverse_route_code("500", route)

    def test_route_code_beats_station_pair(self):
        request = DirectionRequest(from_station="Dhaka", to_station="Panchagarh", route_code="103")
        result = resolve_direction(make_route(), request)
        assert result.direction == "reverse"
        assert result.rule == "route_code"

    def test_configured_reverse_codes(self):
        cfg = {"reverse_route_codes": ["900"]}
        assert is_reverse_route_code("900", rule_config=cfg)
        assert not is_reverse_route_code("103", rule_config=cfg)


class TestStationPairRule:
    def test_destination_to_origin_is_reverse(self):
        request = DirectionRequest(from_station="Panchagarh", to_station="Dhaka")
        result = resolve_direction(make_route(), request)
        assert result.direction == "reverse"
        assert result.rule == "station_pair"
        assert result.route_code == "103"

    def test_case_and_whitespace_ignored(self):
        request = DirectionRequest(from_station=" panchagarh ", to_station="DHAKA")
        assert resolve_direction(make_route(), request).direction == "reverse"

    def test_forward_pair_tagged_authoritative(self):
        request = DirectionRequest(from_station="Dhaka", to_station="Panchagarh")
        result = resolve_direction(make_route(), request)
        assert result.direction == "forward"
        assert result.rule == "station_pair"
        assert result.confidence == "authoritative"
        assert result.route_code == "101"

    def test_single_station_does_not_fire(self):
        request = DirectionRequest(from_station="Panchagarh")
        result = resolve_direction(make_route(), request)
        assert result.direction == "forward"
        assert result.confidence == "default"


class TestUpstreamFlag:
    def test_direction_hint(self):
        result = resolve_direction(make_route(direction_hint="reverse"), DirectionRequest())
        assert result.direction == "reverse"
        assert result.rule == "upstream_flag"

    def test_is_reverse_direction_flag(self):
        result = resolve_direction(make_route(is_reverse_direction=True), DirectionRequest())
        assert result.direction == "reverse"

    def test_station_pair_checked_first(self):
        request = DirectionRequest(from_station="Panchagarh", to_station="Dhaka")
        result = resolve_direction(make_route(is_reverse_direction=True), request)
        assert result.rule == "station_pair"


class TestParity:
    def test_odd_is_forward(self):
        result = resolve_direction(None, DirectionRequest(train_number="701"))
        assert result.direction == "forward"
        assert result.rule == "train_number_parity"
        assert result.confidence == "heuristic"
        assert result.is_guess

    def test_even_is_reverse(self):
        result = resolve_direction(None, DirectionRequest(train_number="702"))
        assert result.direction == "reverse"
        assert result.confidence == "heuristic"

    def test_not_used_when_stations_given(self):
        request = DirectionRequest(from_station="Dhaka", to_station="Panchagarh", train_number="702")
        result = resolve_direction(make_route(), request)
        assert result.direction == "forward"
        assert result.rule == "station_pair"

    def test_non_numeric_number(self):
        assert parity_direction("Ekota") is None
        result = resolve_direction(None, DirectionRequest(train_number="Ekota"))
        assert result.rule == "default"

    def test_configured_odd_direction(self):
        assert parity_direction("701", {"odd_number_direction": "reverse"}) == "reverse"
        assert parity_direction("702", {"odd_number_direction": "reverse"}) == "forward"


class TestDefault:
    def test_empty_request(self):
        result = resolve_direction(make_route(), DirectionRequest())
        assert result.direction == "forward"
        assert result.rule == "default"
        assert result.confidence == "default"
        assert result.route_code == "101"

    def test_forward_code_tagged(self):
        result = resolve_direction(make_route(), DirectionRequest(route_code="101"))
        assert result.direction == "forward"
        assert result.rule == "route_code"
        assert result.confidence == "authoritative"

    def test_unknown_code_keeps_request_code(self):
        result = resolve_direction(None, DirectionRequest(route_code="555"))
        assert result.direction == "forward"
        assert result.route_code == "555"

    def test_explanation_present(self):
        result = resolve_direction(make_route(), DirectionRequest())
        assert any("assuming forward" in step for step in result.explanation_steps)


class TestRouteHelpers:
    def test_oriented_stations(self):
        route = make_route()
        assert oriented_stations(route, "forward") == ("Dhaka", "Panchagarh")
        assert oriented_stations(route, "reverse") == ("Panchagarh", "Dhaka")

    def test_find_by_forward_code(self):
        trains = [make_train(), make_train("2", "Panchagarh Express", code_from_to="793", code_to_from="794")]
        train, resolved = find_train_by_route_code(trains, "793")
        assert train.train_id == "2"
        assert resolved.direction == "forward"

    def test_find_by_reverse_code(self):
        train, resolved = find_train_by_route_code([make_train()], " 103 ")
        assert train.train_id == "1"
        assert resolved.direction == "reverse"
        assert resolved.route_code == "103"

    def test_find_missing(self):
        assert find_train_by_route_code([make_train()], "999") is None
        assert find_train_by_route_code([make_train()], "") is None

    def test_expand_directions(self):
        trains = [make_train(), make_train("2", "One Way", code_from_to="400", code_to_from="")]
        legs = expand_directions(trains)
        assert [(t.train_id, r.direction, r.route_code) for t, r in legs] == [
            ("1", "forward", "101"),
            ("1", "reverse", "103"),
            ("2", "forward", "400"),
        ]

    def test_expand_skips_identical_codes(self):
        legs = expand_directions([make_train(code_from_to="500", code_to_from="500")])
        assert len(legs) == 1

    @pytest.mark.parametrize("number,expected", [("701", "702"), ("702", "701"), (" 15 ", "16")])
    def test_opposite_train_number(self, number, expected):
        assert opposite_train_number(number) == expected

    def test_opposite_non_numeric(self):
        assert opposite_train_number("abc") is None



class TestReturnLeg:
    def test_reverse_code_returns_forward_leg(self):
        route = make_route()
        other = return_leg_request(route, DirectionRequest(route_code="103"))
        result = resolve_direction(route, other)
        assert result.direction == "forward"
        assert result.route_code == "101"
        assert result.confidence == "authoritative"

    def test_forward_pair_returns_reverse_leg(self):
        route = make_route(code_from_to="753", code_to_from="754")
        other = return_leg_request(route, DirectionRequest(from_station="Dhaka", to_station="Panchagarh"))
        assert (other.from_station, other.to_station) == ("Panchagarh", "Dhaka")
        result = resolve_direction(route, other)
        assert result.direction == "reverse"
        assert result.route_code == "754"

    def test_round_trip(self):
        route = make_route()
        request = DirectionRequest(from_station="Panchagarh", to_station="Dhaka")
        back = return_leg_request(route, return_leg_request(route, request))
        assert resolve_direction(route, back).direction == resolve_direction(route, request).direction

    def test_train_number_flipped_without_route(self):
        other = return_leg_request(None, DirectionRequest(train_number="701"))
        assert other.train_number == "702"
        assert resolve_direction(None, other).direction == "reverse"

    def test_not_expressible(self):
        assert return_leg_request(None, DirectionRequest(route_code="103")) is None
        assert return_leg_request(None, DirectionRequest(from_station="A", to_station="B")) is None

    def test_upstream_flag_pins_direction(self):
        route = make_route(is_reverse_direction=True)
        assert return_leg_request(route, DirectionRequest()) is None


class TestDefaultDirection:
    def test_unmatched_stations_use_default(self):
        request = DirectionRequest(from_station="Rajshahi", to_station="Khulna")
        result = resolve_direction(make_route(), request)
        assert not request.is_empty
        assert result.direction == DEFAULT_DIRECTION
        assert result.rule == "default"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
