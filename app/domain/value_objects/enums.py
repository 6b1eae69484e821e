"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class PointKind(str, Enum):
    SITE = "site"
    CREW = "crew"
    TICKET = "ticket"


class CrewCategory(str, Enum):
    A = "A"
    B = "B"
    C = "C"


class CrewState(str, Enum):
    AVAILABLE = "DISPONIBLE"
    ASSIGNED = "ASIGNADO"


class TicketState(str, Enum):
    NEW = "NUEVO"
    IN_PROGRESS = "EN_PROCESO"
    ASSIGNED = "ASIGNADO"
    RESOLVED = "RESUELTO"
    CLOSED = "CERRADO"
    CANCELLED = "CANCELADO"


# Administrative regions accepted when registering a site
SITE_REGIONS: tuple[str, ...] = (
    "AMAZONAS", "ANCASH", "APURIMAC", "AREQUIPA", "AYACUCHO",
    "CAJAMARCA", "CALLAO", "CUSCO", "HUANCAVELICA", "HUANUCO",
    "ICA", "JUNIN", "LA LIBERTAD", "LAMBAYEQUE", "LIMA",
    "LORETO", "MADRE DE DIOS", "MOQUEGUA", "PASCO", "PIURA",
    "PUNO", "SAN MARTIN", "TACNA", "TUMBES", "UCAYALI",
)

# Used when the ticket-state catalog table is empty or unreachable
DEFAULT_TICKET_STATES: tuple[dict, ...] = (
    {"code": 1, "name": TicketState.NEW.value, "description": "Ticket recién creado"},
    {"code": 2, "name": TicketState.IN_PROGRESS.value, "description": "Ticket en proceso"},
    {"code": 3, "name": TicketState.RESOLVED.value, "description": "Ticket completamente resuelto"},
    {"code": 4, "name": TicketState.CLOSED.value, "description": "Ticket cerrado"},
    {"code": 5, "name": TicketState.CANCELLED.value, "description": "Ticket cancelado"},
    {"code": 6, "name": TicketState.ASSIGNED.value, "description": "Cuadrilla asignada"},
)
