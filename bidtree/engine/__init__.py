from bidtree.engine.store import RecordStore

__all__ = ["RecordStore"]
