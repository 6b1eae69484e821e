"""RouteOverlayPolicy — turn ranked routes into drawable map overlays."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from app.domain.entities.route_result import RouteResult
from app.domain.policies.polyline import PolylineDecodeError, decode
from app.domain.value_objects.geo_point import GeoPoint

logger = logging.getLogger(__name__)

MAX_DRAWN_ROUTES = 3

ROUTE_OPACITY = 0.9
ESTIMATE_OPACITY = 0.6


@dataclass(frozen=True)
class OverlayStyle:
    color: str
    weight: int


# Best route green, second yellow, third red
RANK_STYLES: tuple[OverlayStyle, ...] = (
    OverlayStyle(color="#28a745", weight=5),
    OverlayStyle(color="#ffc107", weight=4),
    OverlayStyle(color="#dc3545", weight=3),
)


@dataclass(frozen=True)
class RouteOverlay:
    rank: int
    crew_id: int
    crew_code: str
    path: list[GeoPoint]
    style: OverlayStyle
    opacity: float
    estimated: bool
    label: str
    marker: GeoPoint | None = None


def _label(result: RouteResult) -> str:
    return f"{result.crew.code}: {result.duration_minutes:.1f} min, {result.distance_km:.2f} km"


def _straight_connector(
    origin: GeoPoint, result: RouteResult, rank: int, style: OverlayStyle
) -> RouteOverlay:
    return RouteOverlay(
        rank=rank,
        crew_id=result.crew.id,
        crew_code=result.crew.code,
        path=[origin, result.crew.location],
        style=style,
        opacity=ESTIMATE_OPACITY,
        estimated=True,
        label=_label(result),
    )


def build_route_overlays(origin: GeoPoint, results: list[RouteResult]) -> list[RouteOverlay]:
    """Build overlays for the top-ranked results.

    A result with a decodable polyline becomes the real path with a marker at
    its midpoint. Anything else becomes a straight origin → crew connector
    drawn at lower opacity.
    """
    overlays: list[RouteOverlay] = []

    for index, result in enumerate(results[:MAX_DRAWN_ROUTES]):
        rank = index + 1
        style = RANK_STYLES[index]

        if result.crew.location is None:
            continue

        if not result.encoded_polyline:
            overlays.append(_straight_connector(origin, result, rank, style))
            continue

        try:
            path = decode(result.encoded_polyline)
        except PolylineDecodeError:
            logger.warning("Bad polyline for crew %s, drawing straight line", result.crew.code)
            overlays.append(_straight_connector(origin, result, rank, style))
            continue

        if not path:
            overlays.append(_straight_connector(origin, result, rank, style))
            continue

        overlays.append(
            RouteOverlay(
                rank=rank,
                crew_id=result.crew.id,
                crew_code=result.crew.code,
                path=path,
                style=style,
                opacity=ROUTE_OPACITY,
                estimated=False,
                label=_label(result),
                marker=path[len(path) // 2],
            )
        )

    return overlays
