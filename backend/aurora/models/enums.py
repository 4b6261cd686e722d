"""
Enumerations shared by models, schemas and the suggestion engine.
"""
from enum import Enum, IntEnum


class EventPriority(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


class SuggestionType(str, Enum):
    MOVE_EVENT = "MoveEvent"
    RESOLVE_CONFLICT = "ResolveConflict"
    OPTIMIZE_DISTRIBUTION = "OptimizeDistribution"
    PATTERN_ALERT = "PatternAlert"
    SUGGEST_BREAK = "SuggestBreak"
    GENERAL_REORGANIZATION = "GeneralReorganization"


class SuggestionStatus(str, Enum):
    PENDING = "Pending"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"
    POSTPONED = "Postponed"
    EXPIRED = "Expired"


class ValidationSeverity(str, Enum):
    INFO = "Info"
    WARNING = "Warning"
    CRITICAL = "Critical"


# Display labels shown in the UI
SUGGESTION_TYPE_LABELS = {
    SuggestionType.MOVE_EVENT: "Mover evento",
    SuggestionType.RESOLVE_CONFLICT: "Resolver conflicto",
    SuggestionType.OPTIMIZE_DISTRIBUTION: "Optimizar distribución",
    SuggestionType.PATTERN_ALERT: "Alerta de patrón",
    SuggestionType.SUGGEST_BREAK: "Sugerir descanso",
    SuggestionType.GENERAL_REORGANIZATION: "Reorganización general",
}

SUGGESTION_STATUS_LABELS = {
    SuggestionStatus.PENDING: "Pendiente",
    SuggestionStatus.ACCEPTED: "Aceptada",
    SuggestionStatus.REJECTED: "Rechazada",
    SuggestionStatus.POSTPONED: "Pospuesta",
    SuggestionStatus.EXPIRED: "Expirada",
}
