from pulsemap.data.dc_repository import build_distribution_centers
from pulsemap.models.domain import GeoDataset, Store
from pulsemap.services.stores import compute_store_summary, list_distribution_centers, store_detail
from pulsemap.services.view.derive import derive_view
from pulsemap.services.view.filters import FilterState


def _store(sid: str, division: str, dc: str, health: float, country: str | None = "USA", assigned: bool = False) -> Store:
    return Store(
        store_id=sid,
        longitude=-90.0,
        latitude=38.0,
        division=division,
        dc_id=dc,
        health=health,
        assigned=assigned,
        country=country,
    )


def _dataset() -> GeoDataset:
    stores = (
        _store("A", "Southern", "ATL", 85, assigned=True),
        _store("B", "Southern", "ATL", 62),
        _store("C", "Northern", "SEA", 40, country=None),
        _store("D", "Northern", "TOR", 90, country="CAN", assigned=True),
    )
    return GeoDataset(stores=stores, dcs=build_distribution_centers(stores))


def test_summary_uses_the_same_country_scope_as_the_map():
    dataset = _dataset()

    summary = compute_store_summary(dataset, "USA")
    derived = derive_view(dataset, FilterState(), country="USA")

    assert summary["totalStores"] == derived.store_count == 3
    assert summary["assignedStores"] == 1
    northern = next(entry for entry in summary["divisions"] if entry["division"] == "Northern")
    assert northern == {"division": "Northern", "stores": 1, "dcs": 1, "bands": {"healthy": 0, "watch": 0, "at-risk": 1}}


def test_summary_without_country_counts_everything():
    assert compute_store_summary(_dataset())["totalStores"] == 4


def test_distribution_centers_by_division():
    dcs = list_distribution_centers(_dataset(), "Southern")

    assert [(dc["dc_id"], dc["rollup_health"], dc["health_band"]) for dc in dcs] == [("ATL", 73.5, "watch")]


def test_store_detail_echoes_period():
    detail = store_detail(_dataset(), "B", "WEEKLY")

    assert detail["period"] == "WEEKLY"
    assert detail["health_band"] == "watch"
    assert store_detail(_dataset(), "Z", "DAILY") is None
