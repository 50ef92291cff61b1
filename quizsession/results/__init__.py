from .ledger import DEFAULT_KEY, HISTORY_LIMIT, HistoryLedger
from .projection import UNSET, Pinned, ResultSlot, Unset, new_result_id, project_result

__all__ = [
    "DEFAULT_KEY",
    "HISTORY_LIMIT",
    "HistoryLedger",
    "UNSET",
    "Pinned",
    "ResultSlot",
    "Unset",
    "new_result_id",
    "project_result",
]
