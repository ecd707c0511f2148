"""Speed unit conversions (mph ↔ ft/s ↔ km/h).

Factors match the values printed on reconstruction worksheets, so hand
calculations and engine output agree to the last digit.
"""

from __future__ import annotations

MPH_TO_FPS = 1.46667
MPH_TO_KPH = 1.60934


def mph_to_fps(mph: float) -> float:
    return mph * MPH_TO_FPS


def fps_to_mph(fps: float) -> float:
    return fps / MPH_TO_FPS


def mph_to_kph(mph: float) -> float:
    return mph * MPH_TO_KPH


def kph_to_mph(kph: float) -> float:
    return kph / MPH_TO_KPH


def fps_to_kph(fps: float) -> float:
    return mph_to_kph(fps_to_mph(fps))


def kph_to_fps(kph: float) -> float:
    return mph_to_fps(kph_to_mph(kph))
