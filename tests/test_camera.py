import pytest

from pulsemap.data.dc_repository import build_distribution_centers
from pulsemap.models.domain import DivisionRegion, GeoDataset, Store
from pulsemap.services.view.camera import DC_ZOOM, US_CENTER, US_ZOOM, CameraDirector
from pulsemap.services.view.derive import derive_view
from pulsemap.services.view.filters import FilterState

SOUTHERN = {
    "type": "Polygon",
    "coordinates": [[[-118.0, 25.0], [-79.0, 25.0], [-79.0, 36.5], [-118.0, 36.5], [-118.0, 25.0]]],
}


def _store(sid: str, lon: float, lat: float, division: str, dc: str, health: float) -> Store:
    return Store(store_id=sid, longitude=lon, latitude=lat, division=division, dc_id=dc, health=health, country="USA")


@pytest.fixture
def dataset() -> GeoDataset:
    stores = (
        _store("A", -84.4, 33.7, "Southern", "ATL", 85),
        _store("B", -84.2, 33.9, "Southern", "ATL", 55),
        _store("C", -122.3, 47.6, "Northern", "SEA", 70),
    )
    return GeoDataset(
        stores=stores,
        dcs=build_distribution_centers(stores),
        regions={"Southern": DivisionRegion(division="Southern", geometry=SOUTHERN)},
    )


def test_dc_selection_wins_regardless_of_division(dataset):
    director = CameraDirector(dataset)

    targets = {director.target(FilterState(division, "ATL")) for division in ("All", "Southern", "Northern")}

    assert len(targets) == 1
    (command,) = targets
    assert command.reason == "dc"
    assert command.kind == "fly_to"
    assert command.center == pytest.approx((-84.3, 33.8))
    assert command.zoom == DC_ZOOM
    assert command.pitch > 0


def test_division_frames_region_bounds(dataset):
    command = CameraDirector(dataset).target(FilterState("Southern"))

    assert command.reason == "division"
    assert command.kind == "fit_bounds"
    assert command.bounds == ((-118.0, 25.0), (-79.0, 36.5))
    assert command.max_zoom is not None


def test_division_without_region_falls_back_to_national(dataset):
    command = CameraDirector(dataset).target(FilterState("Northern"))

    assert command.reason == "national"
    assert command.center == US_CENTER
    assert command.zoom == US_ZOOM
    assert command.pitch == 0


def test_unknown_dc_falls_through_to_division(dataset):
    command = CameraDirector(dataset).target(FilterState("Southern", "GONE"))

    assert command.reason == "division"


def test_fit_visible_stores_only_when_nothing_is_selected(dataset):
    director = CameraDirector(dataset, fit_visible_stores=True)

    national = FilterState()
    command = director.target(national, derive_view(dataset, national))
    assert command.reason == "visible_stores"
    assert command.bounds == ((-122.3, 33.7), (-84.2, 47.6))

    drilled = FilterState("Southern", "ATL")
    assert director.target(drilled, derive_view(dataset, drilled)).reason == "dc"

    division = FilterState("Southern")
    assert director.target(division, derive_view(dataset, division)).reason == "division"


def test_fit_visible_stores_with_no_stores_uses_national(dataset):
    director = CameraDirector(dataset, fit_visible_stores=True)
    state = FilterState("Eastern")

    assert director.target(state, derive_view(dataset, state)).reason == "national"


def test_to_dict_drops_unset_fields(dataset):
    payload = CameraDirector(dataset).target(FilterState()).to_dict()

    assert payload["kind"] == "fly_to"
    assert "bounds" not in payload
