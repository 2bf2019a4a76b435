"""Hover tooltips and click targets for map features."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional
from urllib.parse import parse_qs, quote, unquote, urlencode, urlsplit

from ...models.domain import PERIODS
from ..health import health_band, health_color

STORE_PATH_PREFIX = "/store/"
DEFAULT_PERIOD = PERIODS[0]


@dataclass(frozen=True)
class Tooltip:
    kind: str
    title: str
    health: int
    band: str
    color: str
    lines: tuple[tuple[str, str], ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "title": self.title,
            "health": self.health,
            "band": self.band,
            "color": self.color,
            "lines": [{"label": label, "value": value} for label, value in self.lines],
        }


@dataclass(frozen=True)
class NavigationIntent:
    store_id: str
    period: Optional[str] = None

    def to_path(self) -> str:
        path = f"{STORE_PATH_PREFIX}{quote(self.store_id, safe='')}"
        if self.period:
            path = f"{path}?{urlencode({'period': self.period})}"
        return path


def parse_navigation_target(target: str) -> NavigationIntent:
    """Inverse of :meth:`NavigationIntent.to_path`; the period defaults to DAILY."""
    parts = urlsplit(target)
    if not parts.path.startswith(STORE_PATH_PREFIX):
        raise ValueError(f"Not a store detail target: '{target}'")
    store_id = unquote(parts.path[len(STORE_PATH_PREFIX):]).strip("/")
    if not store_id:
        raise ValueError(f"Store detail target has no store id: '{target}'")
    period = (parse_qs(parts.query).get("period") or [DEFAULT_PERIOD])[0].upper()
    if period not in PERIODS:
        period = DEFAULT_PERIOD
    return NavigationIntent(store_id=store_id, period=period)


def _fmt_turnover(value: Any) -> str:
    return f"{float(value or 0):.1f}x"


def _fmt_returns(value: Any) -> str:
    if value is None:
        return "-"
    return f"{float(value) * 100:.1f}%"


def store_tooltip(props: dict) -> Tooltip:
    health = float(props.get("health") or 0)
    return Tooltip(
        kind="store",
        title=props.get("store_name") or f"#{props.get('store_id')}",
        health=round(health),
        band=health_band(health).value,
        color=health_color(health),
        lines=(
            ("Turnover", _fmt_turnover(props.get("turnover"))),
            ("Returns", _fmt_returns(props.get("return_pct"))),
            ("Division", props.get("division") or "-"),
            ("DC", props.get("dc_id") or "-"),
        ),
    )


def dc_tooltip(props: dict) -> Tooltip:
    health = float(props.get("rollup_health") or 0)
    return Tooltip(
        kind="dc",
        title=props.get("dc_name") or props.get("dc_id") or "-",
        health=round(health),
        band=health_band(health).value,
        color=health_color(health),
        lines=(
            ("Division", props.get("division") or "-"),
            ("Stores", str(props.get("store_count", 0))),
        ),
    )
