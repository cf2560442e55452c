"""Degrees/minutes/seconds parsing and formatting."""

from __future__ import annotations

import math
import re
from numbers import Real

from margee_lib.core.exceptions import ValidationError

DEGREE = "°"
PRIME = "′"
DOUBLE_PRIME = "″"

_DEFAULT_DP = {"d": 4, "dm": 2, "dms": 0}


def parse_dms(dms: str | float) -> float:
    """
    Parse degrees, or degrees/minutes/seconds, into decimal degrees.

    Accepts signed decimal degrees, or deg-min-sec optionally suffixed by a
    compass direction (NSEW). Any non-numeric separators are allowed
    (eg 3° 37′ 09″W), as is the fixed-width form without separators
    (eg 0033709W). Seconds and minutes may be omitted.

    Args:
        dms: Number or string to parse

    Returns:
        Decimal degrees, negative for west/south or a leading '-'

    Raises:
        ValidationError: If nothing numeric can be read from the input
    """
    if isinstance(dms, Real) and not isinstance(dms, bool):
        if math.isfinite(dms):
            return float(dms)
        raise ValidationError(f"Cannot parse non-finite angle {dms!r}")
    if not isinstance(dms, str):
        raise ValidationError(f"Cannot parse angle from {type(dms).__name__}")

    text = dms.strip()
    stripped = re.sub(r"[NSEW]$", "", re.sub(r"^-", "", text), flags=re.IGNORECASE)
    parts = [p.replace(",", ".") for p in re.split(r"[^0-9.,]+", stripped) if p]

    try:
        if len(parts) == 3:
            deg = float(parts[0]) + float(parts[1]) / 60 + float(parts[2]) / 3600
        elif len(parts) == 2:
            deg = float(parts[0]) + float(parts[1]) / 60
        elif len(parts) == 1:
            digits = parts[0]
            # N/S values carry 2-digit degrees in the fixed-width form
            if re.search(r"[NS]", text, flags=re.IGNORECASE):
                digits = "0" + digits
            if re.fullmatch(r"[0-9]{7,}", digits):
                deg = float(digits[:3]) + float(digits[3:5]) / 60 + float(digits[5:]) / 3600
            else:
                deg = float(digits)
        else:
            raise ValidationError(f"Cannot parse angle from {dms!r}")
    except ValueError as e:
        raise ValidationError(f"Cannot parse angle from {dms!r}") from e

    if re.search(r"^-|[WS]$", text, flags=re.IGNORECASE):
        deg = -deg
    return deg


def to_dms(deg: float, fmt: str = "dms", dp: int | None = None) -> str:
    """
    Format decimal degrees as deg/min/sec.

    The sign is discarded and no compass direction is added; see to_lat,
    to_lon and to_bearing for that.

    Args:
        deg: Degrees
        fmt: One of 'd', 'dm', 'dms'; anything else falls back to 'dms'
        dp: Decimal places, default 4 for 'd', 2 for 'dm', 0 for 'dms'

    Returns:
        Formatted string, or 'NaN' if deg is not a number
    """
    if isinstance(deg, bool) or not isinstance(deg, Real) or math.isnan(deg):
        return "NaN"

    if fmt not in _DEFAULT_DP:
        fmt, dp = "dms", 0
    if dp is None:
        dp = _DEFAULT_DP[fmt]

    deg = abs(deg)

    if fmt == "d":
        d = float(f"{deg:.{dp}f}")
        return f"{_pad(d, dp, 3)}{DEGREE}"

    if fmt == "dm":
        minutes = float(f"{deg * 60:.{dp}f}")
        d = math.floor(minutes / 60)
        m = float(f"{minutes % 60:.{dp}f}")
        return f"{d:03d}{DEGREE}{_pad(m, dp, 2)}{PRIME}"

    seconds = float(f"{deg * 3600:.{dp}f}")
    d = math.floor(seconds / 3600)
    m = math.floor(seconds / 60) % 60
    s = float(f"{seconds % 60:.{dp}f}")
    return f"{d:03d}{DEGREE}{m:02d}{PRIME}{_pad(s, dp, 2)}{DOUBLE_PRIME}"


def _pad(value: float, dp: int, width: int) -> str:
    """Fixed-point text with the integer part zero-padded to width digits."""
    text = f"{value:.{dp}f}"
    integer = text.split(".")[0]
    return "0" * max(0, width - len(integer)) + text


def to_lat(deg: float, fmt: str = "dms", dp: int | None = None) -> str:
    """Latitude as deg/min/sec suffixed with N/S."""
    lat = to_dms(deg, fmt, dp)
    if lat == "NaN":
        return lat
    return lat[1:] + ("S" if deg < 0 else "N")


def to_lon(deg: float, fmt: str = "dms", dp: int | None = None) -> str:
    """Longitude as deg/min/sec suffixed with E/W."""
    lon = to_dms(deg, fmt, dp)
    if lon == "NaN":
        return lon
    return lon + ("W" if deg < 0 else "E")


def to_bearing(deg: float, fmt: str = "dms", dp: int | None = None) -> str:
    """Bearing as deg/min/sec in 0°..360°."""
    if isinstance(deg, Real) and not isinstance(deg, bool):
        deg = (float(deg) + 360) % 360
    brng = to_dms(deg, fmt, dp)
    # rounding may carry a bearing up to 360°
    return brng.replace("360", "0", 1) if brng.startswith("360") else brng
