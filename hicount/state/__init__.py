from .dedup import HelloDedup
from .persist import load_count, save_count
from .store import RWLock, Store
