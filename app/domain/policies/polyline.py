"""Encoded polyline codec (Google's polyline algorithm, precision 1e-5)."""

from __future__ import annotations

from collections.abc import Iterable

from app.domain.value_objects.geo_point import GeoPoint

PRECISION = 1e5

# A coordinate delta fits in 32 bits, i.e. at most 7 five-bit chunks.
MAX_CHUNKS = 7

_MIN_CHAR = 63
_MAX_CHAR = 63 + 0x3F


class PolylineDecodeError(ValueError):
    """Raised when an encoded polyline is truncated or malformed."""


def _decode_value(encoded: str, index: int) -> tuple[int, int]:
    """Read one zig-zag encoded signed integer starting at *index*.

    Returns the value and the index of the next unread character.
    """
    result = 0
    shift = 0
    for _ in range(MAX_CHUNKS):
        if index >= len(encoded):
            raise PolylineDecodeError(f"Truncated polyline at offset {index}")
        code = ord(encoded[index])
        if not _MIN_CHAR <= code <= _MAX_CHAR:
            raise PolylineDecodeError(
                f"Invalid character {encoded[index]!r} at offset {index}"
            )
        b = code - _MIN_CHAR
        index += 1
        result |= (b & 0x1F) << shift
        shift += 5
        if b < 0x20:
            value = ~(result >> 1) if result & 1 else result >> 1
            return value, index
    raise PolylineDecodeError(f"Unterminated value ending at offset {index}")


def decode(encoded: str) -> list[GeoPoint]:
    """Decode an encoded polyline string into a list of points.

    Raises:
        PolylineDecodeError: on truncated input, characters outside the
            encoding alphabet, or a value with no terminating chunk.
    """
    points: list[GeoPoint] = []
    index = 0
    lat = 0
    lng = 0

    while index < len(encoded):
        dlat, index = _decode_value(encoded, index)
        dlng, index = _decode_value(encoded, index)
        lat += dlat
        lng += dlng
        points.append(GeoPoint(latitude=lat / PRECISION, longitude=lng / PRECISION))

    return points


def _encode_value(value: int) -> str:
    value = ~(value << 1) if value < 0 else value << 1
    chunks = []
    while value >= 0x20:
        chunks.append(chr((0x20 | (value & 0x1F)) + _MIN_CHAR))
        value >>= 5
    chunks.append(chr(value + _MIN_CHAR))
    return "".join(chunks)


def encode(points: Iterable[GeoPoint]) -> str:
    """Encode points into a polyline string."""
    parts = []
    prev_lat = 0
    prev_lng = 0
    for point in points:
        lat = int(round(point.latitude * PRECISION))
        lng = int(round(point.longitude * PRECISION))
        parts.append(_encode_value(lat - prev_lat))
        parts.append(_encode_value(lng - prev_lng))
        prev_lat, prev_lng = lat, lng
    return "".join(parts)
