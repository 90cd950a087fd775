"""Default option groups and the configuration builder.

Defaults are applied per top-level group: a group the caller supplied is
kept as-is (no deep merge), a group the caller omitted receives a fresh copy
of its default. Scale defaults are only injected for cartesian chart types.
"""

from __future__ import annotations

import copy
from typing import Any, Dict, Mapping

from .settings import DEFAULT_DURATION_MS, DEFAULT_EASING, DEFAULT_PADDING
from .types import CARTESIAN_TYPES, ChartConfig, ChartType

__all__ = ["DEFAULT_OPTION_GROUPS", "DEFAULT_SCALES", "build_options", "normalize_config"]

_FONT_FAMILY = "Arial, sans-serif"

DEFAULT_OPTION_GROUPS: Dict[str, Any] = {
    "responsive": True,
    "maintainAspectRatio": False,
    "backgroundColor": "#ffffff",
    "animation": {"duration": DEFAULT_DURATION_MS, "easing": DEFAULT_EASING},
    "legend": {
        "display": True,
        "position": "top",
        "labels": {"color": "#333333", "font": {"size": 12, "family": _FONT_FAMILY}},
    },
    "tooltip": {
        "enabled": True,
        "backgroundColor": "rgba(0, 0, 0, 0.8)",
        "titleColor": "#ffffff",
        "bodyColor": "#ffffff",
        "borderColor": "rgba(255, 255, 255, 0.1)",
        "borderWidth": 1,
    },
    "padding": {
        "top": DEFAULT_PADDING,
        "right": DEFAULT_PADDING,
        "bottom": DEFAULT_PADDING,
        "left": DEFAULT_PADDING,
    },
}


def _axis_defaults() -> Dict[str, Any]:
    return {
        "display": True,
        "grid": {"display": True, "color": "rgba(0, 0, 0, 0.1)", "lineWidth": 1},
        "ticks": {"display": True, "color": "#666666", "font": {"size": 10, "family": _FONT_FAMILY}},
    }


DEFAULT_SCALES: Dict[str, Any] = {"x": _axis_defaults(), "y": _axis_defaults()}


def _is_cartesian(chart_type: str) -> bool:
    try:
        return ChartType(chart_type) in CARTESIAN_TYPES
    except ValueError:
        return False


def build_options(chart_type: str, options: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Return ``options`` with every omitted group filled from the defaults.

    Unknown keys are carried through untouched.
    """
    supplied = dict(options or {})
    merged: Dict[str, Any] = {}
    for group, default in DEFAULT_OPTION_GROUPS.items():
        if group in supplied:
            merged[group] = supplied[group]
        else:
            merged[group] = copy.deepcopy(default)
    if _is_cartesian(chart_type):
        if "scales" in supplied:
            merged["scales"] = supplied["scales"]
        else:
            merged["scales"] = copy.deepcopy(DEFAULT_SCALES)
    elif "scales" in supplied:
        # carried through like any other key; pie/doughnut never read it
        merged["scales"] = supplied["scales"]
    for key, value in supplied.items():
        merged.setdefault(key, value)
    return merged


def normalize_config(config: ChartConfig | Mapping[str, Any]) -> ChartConfig:
    """Coerce ``config`` into a ``ChartConfig`` with defaulted options."""
    if not isinstance(config, ChartConfig):
        config = ChartConfig.from_mapping(config)
    return ChartConfig(
        type=config.type,
        data=config.data,
        options=build_options(config.type, config.options),
    )
