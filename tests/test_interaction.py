import pytest

from pulsemap.services.view.interaction import (
    NavigationIntent,
    dc_tooltip,
    parse_navigation_target,
    store_tooltip,
)


def test_store_tooltip_shows_store_metrics():
    tooltip = store_tooltip(
        {
            "store_id": "1042",
            "store_name": None,
            "health": 84.6,
            "turnover": 3.25,
            "return_pct": 0.034,
            "division": "Southern",
            "dc_id": "ATL-DC",
        }
    )

    assert tooltip.kind == "store"
    assert tooltip.title == "#1042"
    assert tooltip.health == 85
    assert tooltip.band == "healthy"
    assert dict(tooltip.lines) == {"Turnover": "3.2x", "Returns": "3.4%", "Division": "Southern", "DC": "ATL-DC"}


def test_store_tooltip_without_returns():
    tooltip = store_tooltip({"store_id": "7", "store_name": "Dallas #7", "health": 59.9})

    assert tooltip.title == "Dallas #7"
    assert tooltip.band == "at-risk"
    assert dict(tooltip.lines)["Returns"] == "-"
    assert dict(tooltip.lines)["Turnover"] == "0.0x"


def test_dc_tooltip_shows_rollup_and_division():
    tooltip = dc_tooltip(
        {"dc_id": "ATL", "dc_name": "Atlanta DC", "division": "Southern", "rollup_health": 70, "store_count": 2}
    ).to_dict()

    assert tooltip["kind"] == "dc"
    assert tooltip["title"] == "Atlanta DC"
    assert tooltip["band"] == "watch"
    assert {"label": "Division", "value": "Southern"} in tooltip["lines"]
    assert {"label": "Stores", "value": "2"} in tooltip["lines"]


def test_navigation_target_round_trip():
    intent = NavigationIntent(store_id="ATL 001", period="WEEKLY")

    path = intent.to_path()

    assert path == "/store/ATL%20001?period=WEEKLY"
    assert parse_navigation_target(path) == intent


def test_navigation_period_is_optional():
    assert NavigationIntent(store_id="1000").to_path() == "/store/1000"
    assert parse_navigation_target("/store/1000") == NavigationIntent("1000", "DAILY")
    assert parse_navigation_target("/store/1000?period=hourly").period == "DAILY"


@pytest.mark.parametrize("target", ["/", "/stores/1000", "/store/"])
def test_parse_rejects_non_store_targets(target):
    with pytest.raises(ValueError):
        parse_navigation_target(target)
