from .master_data_backend import MasterDataBackend
from .key_value_store import KeyValueStore

__all__ = [
    "MasterDataBackend",
    "KeyValueStore",
]
