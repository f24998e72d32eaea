"""
Draw schedules - closing time of each quiniela modality (La Primera, Matutina...)
"""
from dataclasses import dataclass
from datetime import time

from app.domain.errors import LedgerValidationError


@dataclass(frozen=True)
class DrawSchedule:
    modality_id: int
    modality_name: str
    opens_at: time
    closes_at: time


@dataclass(frozen=True)
class ModalityStatus:
    schedule: DrawSchedule
    is_open: bool
    minutes_remaining: int


DEFAULT_SCHEDULES: tuple[DrawSchedule, ...] = (
    DrawSchedule(1, "La Primera", time(8, 0), time(9, 15)),
    DrawSchedule(2, "Matutina", time(8, 0), time(11, 45)),
    DrawSchedule(3, "Vespertina", time(8, 0), time(13, 15)),
    DrawSchedule(4, "De la Tarde", time(8, 0), time(18, 45)),
    DrawSchedule(5, "Nocturna", time(8, 0), time(20, 45)),
)


def _minutes(t: time) -> int:
    return t.hour * 60 + t.minute


def modality_status(schedule: DrawSchedule, now: time) -> ModalityStatus:
    """
    A modality takes bets all day until its closing minute.

    Compared at minute resolution: at 11:45:30 Matutina (closes 11:45) is closed.
    """
    remaining = _minutes(schedule.closes_at) - _minutes(now)
    is_open = remaining > 0
    return ModalityStatus(
        schedule=schedule,
        is_open=is_open,
        minutes_remaining=remaining if is_open else 0,
    )


def validate_schedules(schedules: list[DrawSchedule]) -> None:
    """
    Raises:
        LedgerValidationError: empty list, blank name, duplicate modality id,
            or a window that closes before it opens
    """
    if not schedules:
        raise LedgerValidationError("Se requiere una lista de horarios válida")

    seen: set[int] = set()
    for schedule in schedules:
        if not schedule.modality_id or not schedule.modality_name.strip():
            raise LedgerValidationError(
                "Faltan campos requeridos en la configuración de horarios"
            )
        if schedule.modality_id in seen:
            raise LedgerValidationError(
                f"Modalidad repetida: {schedule.modality_id}"
            )
        seen.add(schedule.modality_id)
        if schedule.opens_at >= schedule.closes_at:
            raise LedgerValidationError(
                f"El horario de {schedule.modality_name} debe abrir antes de cerrar"
            )
