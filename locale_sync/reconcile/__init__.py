"""Key reconciliation and merge engine."""

from .models import ReconciliationReport, ReconciliationResult, ResultStatus
from .flattener import FlatKeyMap, flatten
from .differ import missing_keys
from .rehydrator import rehydrate
from .batcher import BATCH_DELIMITER, TranslationBatcher
from .orchestrator import ReconciliationOrchestrator

__all__ = [
    "BATCH_DELIMITER",
    "FlatKeyMap",
    "ReconciliationOrchestrator",
    "ReconciliationReport",
    "ReconciliationResult",
    "ResultStatus",
    "TranslationBatcher",
    "flatten",
    "missing_keys",
    "rehydrate",
]
