from .history import HistoryManager, Snapshot

__all__ = ["HistoryManager", "Snapshot"]
