from .schema import AnswerRecord, ResultRecord, ReviewAnswerRecord, validate_records
from .store import CorruptStore, JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "AnswerRecord",
    "ResultRecord",
    "ReviewAnswerRecord",
    "validate_records",
    "CorruptStore",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
]
