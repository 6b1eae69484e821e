"""Response serializers shared by the API routers."""

from __future__ import annotations

from app.domain.entities.crew import Crew
from app.domain.entities.crew_assignment import CrewAssignment
from app.domain.entities.map_point import MapPoint
from app.domain.entities.route_result import RouteResult
from app.domain.entities.site import Site
from app.domain.entities.ticket import Ticket
from app.domain.policies.route_overlays import RouteOverlay
from app.domain.value_objects.geo_point import GeoPoint


def _coords(point: GeoPoint | None) -> tuple[float | None, float | None]:
    return (point.latitude, point.longitude) if point else (None, None)


def serialize_point(p: MapPoint) -> dict:
    lat, lng = _coords(p.location)
    data = {
        "id": p.id,
        "code": p.code,
        "name": p.name,
        "region": p.region,
        "kind": p.kind.value,
        "latitude": lat,
        "longitude": lng,
    }
    if p.crew_category is not None or p.crew_state is not None:
        data.update(category=p.crew_category, active=p.crew_active, state=p.crew_state)
    if p.ticket_state is not None or p.ticket_source is not None:
        data.update(state=p.ticket_state, ticket_source=p.ticket_source)
    return data


def serialize_site(s: Site) -> dict:
    lat, lng = _coords(s.location)
    return {
        "id": s.id,
        "code": s.code,
        "name": s.name,
        "region": s.region,
        "address": s.address,
        "latitude": lat,
        "longitude": lng,
        "detail": s.detail,
    }


def serialize_crew(c: Crew) -> dict:
    lat, lng = _coords(c.location)
    return {
        "id": c.id,
        "code": c.code,
        "name": c.name,
        "latitude": lat,
        "longitude": lng,
        "active": c.active,
        "category": c.category.value if c.category else None,
        "state": c.state.value,
        "skills": c.skills,
    }


def serialize_ticket(t: Ticket) -> dict:
    lat, lng = _coords(t.location)
    return {
        "id": t.id,
        "ticket_source": t.source,
        "site_id": t.site_code,
        "site_name": t.site_name,
        "state": t.state,
        "task_category": t.task_category,
        "task_subcategory": t.task_subcategory,
        "fault_level": t.fault_level,
        "platform_affected": t.platform_affected,
        "attention_type": t.attention_type,
        "service_affected": t.service_affected,
        "crew_category": t.crew_category.value if t.crew_category else None,
        "created_by": t.created_by,
        "fault_occur_time": t.fault_occurred_at.isoformat() if t.fault_occurred_at else None,
        "created_at": t.created_at.isoformat() if t.created_at else None,
        "region": t.region,
        "latitude": lat,
        "longitude": lng,
    }


def serialize_assignment(a: CrewAssignment) -> dict:
    return {
        "id": a.id,
        "ticket_id": a.ticket_id,
        "crew_id": a.crew_id,
        "state": a.state,
        "assigned_at": a.assigned_at.isoformat(),
        "created_by": a.created_by,
    }


def serialize_route_result(rank: int, r: RouteResult) -> dict:
    return {
        "rank": rank,
        "crew": serialize_crew(r.crew),
        "duration_minutes": round(r.duration_minutes, 1),
        "distance_km": round(r.distance_km, 2),
        "encoded_polyline": r.encoded_polyline,
        "estimated": r.estimated,
    }


def serialize_overlay(o: RouteOverlay) -> dict:
    return {
        "rank": o.rank,
        "crew_id": o.crew_id,
        "crew_code": o.crew_code,
        "path": [p.as_dict() for p in o.path],
        "color": o.style.color,
        "weight": o.style.weight,
        "opacity": o.opacity,
        "estimated": o.estimated,
        "label": o.label,
        "marker": o.marker.as_dict() if o.marker else None,
    }
