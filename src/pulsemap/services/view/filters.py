"""Filter selection state and the setters that keep it valid."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional

from ...models.domain import ALL_DCS, ALL_DIVISIONS, DIVISIONS, GeoDataset
from .derive import dc_options

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterState:
    division: str = ALL_DIVISIONS
    dc: str = ALL_DCS
    only_assigned: bool = False


class FilterController:
    """Single source of truth for what the map shows.

    Invalid requests never raise: an unknown division becomes ``All`` and a
    DC outside the current division's options becomes ``ALL``.
    """

    def __init__(self, dataset: GeoDataset, *, country: Optional[str] = None) -> None:
        self.dataset = dataset
        self.country = country
        self.state = FilterState()
        self.changed = False

    def _commit(self, state: FilterState) -> FilterState:
        self.changed = state != self.state
        self.state = state
        return state

    def options(self, division: Optional[str] = None) -> tuple[str, ...]:
        return dc_options(self.dataset, division or self.state.division, self.country)

    def set_division(self, division: str) -> FilterState:
        if division != ALL_DIVISIONS and division not in DIVISIONS:
            logger.warning("Unknown division '%s', falling back to '%s'", division, ALL_DIVISIONS)
            division = ALL_DIVISIONS
        return self._commit(replace(self.state, division=division, dc=ALL_DCS))

    def set_dc(self, dc_id: str) -> FilterState:
        if dc_id not in self.options():
            logger.info("DC '%s' is not selectable under division '%s', using '%s'", dc_id, self.state.division, ALL_DCS)
            dc_id = ALL_DCS
        return self._commit(replace(self.state, dc=dc_id))

    def set_only_assigned(self, only_assigned: bool) -> FilterState:
        return self._commit(replace(self.state, only_assigned=bool(only_assigned)))

    def reset(self) -> FilterState:
        return self._commit(FilterState())
