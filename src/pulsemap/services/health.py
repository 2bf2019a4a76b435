"""Health score banding shared by map styling, tooltips and the legend."""

from __future__ import annotations

from enum import Enum

HEALTHY_MIN = 80.0
WATCH_MIN = 60.0


class HealthBand(str, Enum):
    HEALTHY = "healthy"
    WATCH = "watch"
    AT_RISK = "at-risk"


BAND_COLORS: dict[HealthBand, str] = {
    HealthBand.HEALTHY: "#00FFC6",
    HealthBand.WATCH: "#FFC14D",
    HealthBand.AT_RISK: "#FF2E63",
}

BAND_LABELS: dict[HealthBand, str] = {
    HealthBand.HEALTHY: "Healthy (80-100)",
    HealthBand.WATCH: "Watch (60-79)",
    HealthBand.AT_RISK: "At Risk (<60)",
}


def health_band(health: float) -> HealthBand:
    """Map a 0-100 health score onto its band. Lower bounds are inclusive."""

    if health >= HEALTHY_MIN:
        return HealthBand.HEALTHY
    if health >= WATCH_MIN:
        return HealthBand.WATCH
    return HealthBand.AT_RISK


def health_color(health: float) -> str:
    return BAND_COLORS[health_band(health)]


def health_color_expression(prop: str = "health") -> list:
    """Mapbox ``case`` expression equivalent to :func:`health_color`."""

    return [
        "case",
        [">=", ["get", prop], HEALTHY_MIN],
        BAND_COLORS[HealthBand.HEALTHY],
        [">=", ["get", prop], WATCH_MIN],
        BAND_COLORS[HealthBand.WATCH],
        BAND_COLORS[HealthBand.AT_RISK],
    ]


def legend_entries() -> list[dict]:
    return [
        {"band": band.value, "color": BAND_COLORS[band], "label": BAND_LABELS[band]}
        for band in HealthBand
    ]
