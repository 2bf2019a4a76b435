"""Pure derivation of the visible map data from a filter state."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Dict, Optional

from ...models.domain import ALL_DCS, ALL_DIVISIONS, GeoDataset, Store
from ..export.geojson import dc_feature, feature_collection, store_feature

if TYPE_CHECKING:
    from .filters import FilterState


@dataclass(frozen=True)
class DerivedViewData:
    visible_stores: Dict[str, Any]
    visible_dcs: Dict[str, Any]
    dc_options: tuple[str, ...]

    @property
    def store_count(self) -> int:
        return len(self.visible_stores["features"])

    @property
    def dc_count(self) -> int:
        return len(self.visible_dcs["features"])

    def store_coordinates(self) -> list[tuple[float, float]]:
        return [tuple(feature["geometry"]["coordinates"]) for feature in self.visible_stores["features"]]


def in_country(store: Store, country: Optional[str]) -> bool:
    return not (country and store.country and store.country != country)


def _in_division(store: Store, division: str) -> bool:
    return division == ALL_DIVISIONS or store.division == division


def store_matches(store: Store, state: "FilterState", country: Optional[str] = None) -> bool:
    """Country, division, DC, then assignment. Cheapest rejection first."""
    if not in_country(store, country):
        return False
    if not _in_division(store, state.division):
        return False
    if state.dc != ALL_DCS and store.dc_id != state.dc:
        return False
    if state.only_assigned and not store.assigned:
        return False
    return True


def dc_options(dataset: GeoDataset, division: str, country: Optional[str] = None) -> tuple[str, ...]:
    """Selectable DC ids for a division, ``ALL`` first.

    Ignores the DC and assignment filters so the list does not collapse once
    a DC is picked.
    """
    ids = {
        store.dc_id
        for store in dataset.stores
        if store.dc_id and in_country(store, country) and _in_division(store, division)
    }
    ids.discard(ALL_DCS)
    return (ALL_DCS, *sorted(ids))


def derive_view(dataset: GeoDataset, state: "FilterState", *, country: Optional[str] = None) -> DerivedViewData:
    visible_stores = []
    # DCs are drill-down targets, so the DC selector never hides other DCs.
    dc_state = replace(state, dc=ALL_DCS)
    visible_dc_ids: set[str] = set()
    for store in dataset.stores:
        if not store_matches(store, dc_state, country):
            continue
        visible_dc_ids.add(store.dc_id)
        if store_matches(store, state, country):
            visible_stores.append(store_feature(store))

    visible_dcs = [dc_feature(dc) for dc_id, dc in sorted(dataset.dcs.items()) if dc_id in visible_dc_ids]

    return DerivedViewData(
        visible_stores=feature_collection(visible_stores),
        visible_dcs=feature_collection(visible_dcs),
        dc_options=dc_options(dataset, state.division, country),
    )
