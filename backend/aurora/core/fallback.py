"""
Local validation used when the AI adapter cannot answer.

The message always contains FALLBACK_MARKER so clients can tell a
heuristic verdict from a model-generated one.
"""
from datetime import tzinfo
from typing import Iterable, Optional

from aurora.core.overlap import TimedEvent, overlaps
from aurora.models.enums import ValidationSeverity
from aurora.schemas.validation import AIValidationResult

FALLBACK_MARKER = "solapamiento"


def fallback_validation(
    candidate: TimedEvent,
    existing_events: Iterable[TimedEvent],
    tz: Optional[tzinfo] = None,
) -> AIValidationResult:
    """
    Coarse overlap check of a candidate event against the existing calendar.

    Args:
        candidate: Event about to be created
        existing_events: The user's events around the candidate's time
        tz: Timezone for the times quoted in the message

    Returns:
        Warning and not approved when anything overlaps, Info otherwise.
        used_ai is always False.
    """
    def hhmm(dt):
        return (dt.astimezone(tz) if tz is not None else dt).strftime("%H:%M")

    conflicts = []
    if not candidate.is_all_day:
        conflicts = [
            e for e in existing_events
            if not e.is_all_day
            and (candidate.id is None or e.id != candidate.id)
            and overlaps(candidate.start, candidate.end, e.start, e.end)
        ]
        conflicts.sort(key=lambda e: e.start)

    if not conflicts:
        return AIValidationResult(
            is_approved=True,
            severity=ValidationSeverity.INFO,
            recommendation_message=(
                f"Validación básica: no se detectó ningún {FALLBACK_MARKER} con tus eventos. "
                "El análisis con IA no estuvo disponible."
            ),
            suggestions=[],
            used_ai=False,
        )

    listed = ", ".join(f"'{e.title}' ({hhmm(e.start)}-{hhmm(e.end)})" for e in conflicts[:3])
    if len(conflicts) > 3:
        listed += f" y {len(conflicts) - 3} más"
    latest_end = max(e.end for e in conflicts)

    suggestions = [
        f"Mueve '{candidate.title}' para que comience después de las {hhmm(latest_end)}",
        f"Acorta la duración de '{candidate.title}' para liberar el horario ocupado",
    ]
    suggestions.extend(f"Revisa si '{e.title}' puede reprogramarse" for e in conflicts[:2])

    return AIValidationResult(
        is_approved=False,
        severity=ValidationSeverity.WARNING,
        recommendation_message=(
            f"Validación básica: posible {FALLBACK_MARKER} con {len(conflicts)} "
            f"evento(s) existente(s): {listed}."
        ),
        suggestions=suggestions,
        used_ai=False,
    )
