from pulsemap.data.dc_repository import build_distribution_centers
from pulsemap.models.domain import GeoDataset, Store
from pulsemap.services.view.filters import FilterController, FilterState


def _store(sid: str, division: str, dc: str, health: float) -> Store:
    return Store(store_id=sid, longitude=-90.0, latitude=38.0, division=division, dc_id=dc, health=health, country="USA")


def _controller() -> FilterController:
    stores = (
        _store("A", "Southern", "ATL", 85),
        _store("B", "Southern", "ATL", 55),
        _store("C", "Northern", "SEA", 70),
    )
    return FilterController(GeoDataset(stores=stores, dcs=build_distribution_centers(stores)), country="USA")


def test_defaults():
    assert _controller().state == FilterState("All", "ALL", False)


def test_set_division_always_resets_dc():
    controller = _controller()
    controller.set_division("Southern")
    controller.set_dc("ATL")

    state = controller.set_division("Southern")

    assert state.dc == "ALL"


def test_set_dc_outside_current_division_degrades_to_all():
    controller = _controller()
    controller.set_division("Southern")

    state = controller.set_dc("SEA")

    assert state == FilterState("Southern", "ALL", False)


def test_set_dc_unknown_id_degrades_to_all():
    controller = _controller()

    assert controller.set_dc("NOPE").dc == "ALL"
    assert controller.set_dc("SEA").dc == "SEA"


def test_unknown_division_falls_back_to_all():
    controller = _controller()
    controller.set_division("Southern")

    state = controller.set_division("Western")

    assert state.division == "All"


def test_changed_flag_tracks_real_transitions():
    controller = _controller()

    controller.set_only_assigned(False)
    assert controller.changed is False

    controller.set_only_assigned(True)
    assert controller.changed is True


def test_reset_restores_defaults():
    controller = _controller()
    controller.set_division("Northern")
    controller.set_dc("SEA")
    controller.set_only_assigned(True)

    assert controller.reset() == FilterState()
