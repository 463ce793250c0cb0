from .keys import index_key, record_key
from .store import RecordStore

__all__ = ["RecordStore", "index_key", "record_key"]
