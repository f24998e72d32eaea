"""
Draw schedule use cases - modality closing times and their live status
"""
import logging
from datetime import datetime

from app.application.ledger_store import LedgerStore
from app.domain.draw_schedule import (
    DEFAULT_SCHEDULES,
    DrawSchedule,
    ModalityStatus,
    modality_status,
    validate_schedules,
)
from app.utils.clock import local_now

logger = logging.getLogger(__name__)


class GetDrawSchedulesUseCase:
    """Custom schedules of the account, or the defaults when none are saved"""

    def __init__(self, store: LedgerStore):
        self.store = store

    def execute(self, account_id: int) -> tuple[list[DrawSchedule], bool]:
        """
        Returns:
            (schedules, is_custom)
        """
        custom = self.store.list_draw_schedules(account_id)
        if custom:
            return custom, True
        return list(DEFAULT_SCHEDULES), False


class ReplaceDrawSchedulesUseCase:
    def __init__(self, store: LedgerStore):
        self.store = store

    def execute(self, account_id: int, schedules: list[DrawSchedule]) -> list[DrawSchedule]:
        """
        Raises:
            LedgerValidationError
        """
        validate_schedules(schedules)

        with self.store.unit_of_work():
            self.store.replace_draw_schedules(account_id, schedules)

        logger.info("Draw schedules replaced: account=%s count=%d", account_id, len(schedules))
        return sorted(schedules, key=lambda s: s.modality_id)


class GetModalityStatusUseCase:
    def __init__(self, store: LedgerStore):
        self.store = store

    def execute(self, account_id: int, now: datetime | None = None) -> list[ModalityStatus]:
        now = now or local_now()
        schedules, _ = GetDrawSchedulesUseCase(self.store).execute(account_id)
        return [modality_status(s, now.time()) for s in schedules]
