from .loader import LoadedConfig, load_config, open_store
from .store import JsonStore
from .subjects import SubjectCatalog

__all__ = ["JsonStore", "SubjectCatalog", "LoadedConfig", "load_config", "open_store"]
