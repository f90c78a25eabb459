import pytest

from cta_controller.controller.placement import PlacementEngine, clamp_axis
from cta_payload.cta_model import CustomPosition
from cta_payload.settings import LinkSettings


def test_drag_left_past_the_edge_pins_to_zero():
    point = PlacementEngine.resolve(
        initial_offset=(40, 200),
        start_pointer=(500, 300),
        current_pointer=(400, 300),
        container=(300, 400),
        element=(120, 60),
    )

    assert point == CustomPosition(x=0.0, y=200.0)


def test_drag_past_far_edge_pins_to_container_minus_element():
    point = PlacementEngine.resolve((100, 100), (0, 0), (1000, 1000), (300, 400), (120, 60))

    assert point == CustomPosition(x=180.0, y=340.0)


def test_drag_inside_bounds_follows_pointer_delta():
    point = PlacementEngine.resolve((10, 20), (50, 50), (80, 40), (300, 400), (120, 60))

    assert point == CustomPosition(x=40.0, y=10.0)


@pytest.mark.parametrize(
    "value, container, element, expected",
    [
        (-5, 300, 120, 0.0),
        (500, 300, 120, 180.0),
        (50, 100, 200, 0.0),
        (75, 300, 120, 75.0),
    ],
)
def test_clamp_axis(value, container, element, expected):
    assert clamp_axis(value, container, element) == expected


def test_extent_scales_nominal_footprint():
    engine = PlacementEngine()

    assert engine.estimate_extent(1) == (300.0, 60.0)
    assert engine.estimate_extent(1.5) == (450.0, 90.0)


@pytest.mark.parametrize("scale", [0, -1, float("nan"), "big"])
def test_invalid_scale_uses_nominal_footprint(scale):
    assert PlacementEngine().estimate_extent(scale) == (300.0, 60.0)


def test_engine_reads_footprint_from_settings():
    engine = PlacementEngine.from_settings(LinkSettings(nominal_width=200.0, nominal_height=50.0))

    assert engine.estimate_extent(2) == (400.0, 100.0)
    assert PlacementEngine.from_settings(None).nominal_width == 300.0


def test_default_footprint_follows_link_settings():
    engine = PlacementEngine()
    defaults = LinkSettings()

    assert (engine.nominal_width, engine.nominal_height) == (defaults.nominal_width, defaults.nominal_height)


def test_anchor_for_named_positions_only():
    assert PlacementEngine.anchor_for("bottom-right").right == 20.0
    with pytest.raises(ValueError):
        PlacementEngine.anchor_for("custom")


@pytest.mark.parametrize(
    "position, scale, expected",
    [
        ("bottom-left", 1, CustomPosition(x=20.0, y=520.0)),
        ("bottom-right", 1, CustomPosition(x=480.0, y=520.0)),
        ("bottom-right", 1.5, CustomPosition(x=330.0, y=490.0)),
        ("bottom-banner", 1, CustomPosition(x=0.0, y=540.0)),
        ("custom", 1, CustomPosition(x=20.0, y=520.0)),
    ],
)
def test_anchored_offset_matches_anchor_rule(position, scale, expected):
    assert PlacementEngine().anchored_offset(position, (800.0, 600.0), scale) == expected


def test_anchored_offset_stays_inside_small_containers():
    point = PlacementEngine().anchored_offset("bottom-right", (200.0, 40.0), 1)

    assert point == CustomPosition(x=0.0, y=0.0)
