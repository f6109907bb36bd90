# ticketdesk/core/enums.py
from enum import Enum


class Role(str, Enum):
    USER = "user"
    SUPPORT = "support"
    ADMIN = "admin"


class Priority(str, Enum):
    LOW = "baixa"
    MEDIUM = "média"
    HIGH = "alta"
    CRITICAL = "crítica"


class TicketStatus(str, Enum):
    NEW = "novo"
    OPEN = "aberto"
    IN_PROGRESS = "em andamento"
    PENDING = "pendente"
    RESOLVED = "resolvido"
    CLOSED = "fechado"
    CANCELLED = "cancelado"


class AssetType(str, Enum):
    HARDWARE = "hardware"
    SOFTWARE = "software"


class AssetStatus(str, Enum):
    ACTIVE = "ativo"
    IN_USE = "em_uso"
    IN_MAINTENANCE = "em_manutencao"
    RETIRED = "baixado"


STAFF_ROLES = frozenset({Role.SUPPORT, Role.ADMIN})
