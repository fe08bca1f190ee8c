"""Geographic utility functions."""


def is_valid_coordinates(lat: float, lon: float) -> bool:
    """Check if latitude and longitude are valid.

    Args:
        lat: Latitude in degrees
        lon: Longitude in degrees

    Returns:
        True if coordinates are valid, False otherwise
    """
    return -90 <= lat <= 90 and -180 <= lon <= 180


def normalize_center(center) -> tuple[float, float]:
    """Coerce a ``[lon, lat]`` sequence into a validated ``(lon, lat)`` tuple.

    Raises:
        ValueError: If the value is not a pair of numbers or out of range
    """
    try:
        lon, lat = (float(value) for value in center)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Center must be a [lon, lat] pair, got {center!r}") from e

    if not is_valid_coordinates(lat, lon):
        raise ValueError(f"Coordinates out of range: lon={lon}, lat={lat}")

    return lon, lat


def format_lonlat(center: tuple[float, float], precision: int = 5) -> str:
    """Format a ``(lon, lat)`` pair as ``"lon,lat"`` with fixed decimals."""
    return ",".join(f"{value:.{precision}f}" for value in center)


def format_coordinate(value: float, precision: int = 7) -> str:
    """Format a coordinate in plain decimal notation, without trailing zeros.

    ``0.00001`` -> ``"0.00001"`` (never ``"1e-05"``), ``50.1`` -> ``"50.1"``.
    """
    text = f"{value:.{precision}f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text
