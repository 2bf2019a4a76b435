import json

import pytest
from openpyxl import Workbook

from pulsemap.config import settings
from pulsemap.data import stores_repository
from pulsemap.data.dc_repository import _load_dc_overrides_from_file, get_distribution_centers
from pulsemap.data.generator import StoreGenerator, division_regions
from pulsemap.data.stores_repository import (
    get_geo_dataset,
    load_regions,
    load_stores,
    parse_store_feature,
    set_active_dataset_files,
)
from pulsemap.services.export.geojson import save_geojson


def _point(props: dict, coordinates=(-84.4, 33.7)) -> dict:
    return {"type": "Feature", "geometry": {"type": "Point", "coordinates": list(coordinates)}, "properties": props}


def _write(path, features):
    path.write_text(json.dumps({"type": "FeatureCollection", "features": features}), encoding="utf-8")
    return path


@pytest.fixture
def stores_file(tmp_path):
    return _write(
        tmp_path / "stores.geo.json",
        [
            _point({"store_id": "A", "division": "Southern", "dc_id": "ATL", "health": 85, "assigned": True}),
            _point({"store_id": 7, "division": "Southern", "dc_id": "ATL", "health": "55", "is_assigned": "yes"}),
            _point({"store_id": "C", "division": "Northern", "dc_id": "SEA", "health": 70}, (-122.3, 47.6)),
            _point({"division": "Southern", "dc_id": "ATL", "health": 40}),
            _point({"store_id": "D", "division": "Southern", "dc_id": "ATL"}),
            {"type": "Feature", "geometry": None, "properties": {"store_id": "E", "health": 90}},
        ],
    )


def test_parse_store_feature_coerces_fields():
    store = parse_store_feature(
        _point({"store_id": " 12 ", "health": "1,050", "turnover": "4.5", "assigned": "true", "store_name": "Midtown"})
    )

    assert store.store_id == "12"
    assert store.health == 1050.0
    assert store.turnover == 4.5
    assert store.assigned is True
    assert store.store_name == "Midtown"
    assert store.return_pct is None


def test_load_stores_skips_unusable_features(stores_file, caplog):
    stores = load_stores(stores_file)

    assert [store.store_id for store in stores] == ["A", "7", "C"]
    assert stores[1].assigned is True
    assert "Skipped 3 store features" in caplog.text


def test_load_stores_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_stores(tmp_path / "missing.geo.json")


def test_load_stores_rejects_non_collection(tmp_path):
    path = tmp_path / "bad.geo.json"
    path.write_text(json.dumps({"type": "Feature"}), encoding="utf-8")

    with pytest.raises(ValueError):
        load_stores(path)


def test_load_regions_keeps_division_polygons(tmp_path):
    square = [[[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]]
    path = _write(
        tmp_path / "regions.geo.json",
        [
            {"type": "Feature", "geometry": {"type": "Polygon", "coordinates": square}, "properties": {"type": "Division", "division": "Southern"}},
            {"type": "Feature", "geometry": {"type": "MultiPolygon", "coordinates": [square]}, "properties": {"division": "Eastern"}},
            {"type": "Feature", "geometry": {"type": "Polygon", "coordinates": square}, "properties": {"type": "State", "division": "Northern"}},
            {"type": "Feature", "geometry": {"type": "Polygon", "coordinates": square}, "properties": {"division": "Pacific"}},
        ],
    )

    regions = load_regions(path)

    assert set(regions) == {"Southern", "Eastern"}
    assert regions["Eastern"].geometry["type"] == "MultiPolygon"


def test_load_regions_missing_file_is_empty(tmp_path):
    assert load_regions(tmp_path / "nope.geo.json") == {}


def test_dc_workbook_overrides(tmp_path, stores_file):
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["DC", "Name", "Division", "Latitude", "Longitude"])
    sheet.append(["ATL", "Atlanta DC", "Southern", 33.75, -84.39])
    sheet.append(["XYZ", "Ghost DC", None, 10.0, 10.0])
    sheet.append([None, None, None, None, None])
    path = tmp_path / "dcs.xlsx"
    workbook.save(path)

    dcs = get_distribution_centers(load_stores(stores_file), path)

    assert set(dcs) == {"ATL", "SEA"}
    assert dcs["ATL"].name == "Atlanta DC"
    assert (dcs["ATL"].longitude, dcs["ATL"].latitude) == (-84.39, 33.75)
    assert dcs["ATL"].rollup_health == pytest.approx(70.0)
    assert dcs["SEA"].name == "SEA"


def test_dc_workbook_missing_columns(tmp_path):
    workbook = Workbook()
    workbook.active.append(["DC", "Latitude"])
    path = tmp_path / "dcs.xlsx"
    workbook.save(path)

    with pytest.raises(ValueError, match="Longitude"):
        _load_dc_overrides_from_file(path)


def test_set_active_dataset_files_reloads(tmp_path, stores_file, monkeypatch):
    monkeypatch.setattr(settings, "stores_file", settings.stores_file)
    monkeypatch.setattr(settings, "regions_file", settings.regions_file)
    monkeypatch.setattr(settings, "dc_locations_file", settings.dc_locations_file)
    regions_file = tmp_path / "regions.geo.json"
    save_geojson(division_regions(), regions_file)

    set_active_dataset_files(stores_file, regions_file)
    try:
        dataset = get_geo_dataset()
        assert len(dataset.stores) == 3
        assert set(dataset.dcs) == {"ATL", "SEA"}
        assert len(dataset.regions) == 4
        assert get_geo_dataset() is dataset
    finally:
        stores_repository.get_geo_dataset.cache_clear()


def test_generator_is_deterministic():
    first = StoreGenerator(seed=7).stores()
    second = StoreGenerator(seed=7).stores()

    assert len(first["features"]) == 453
    assert first == second
    ids = [feature["properties"]["store_id"] for feature in first["features"]]
    assert len(set(ids)) == len(ids)


def test_generated_dataset_loads(tmp_path):
    path = tmp_path / "stores.geo.json"
    save_geojson(StoreGenerator(seed=1).stores(), path)

    stores = load_stores(path)
    dcs = get_distribution_centers(stores)

    assert len(stores) == 453
    assert dcs["ATL-DC"].store_count >= 200
    assert all(0 <= store.health <= 100 for store in stores)
