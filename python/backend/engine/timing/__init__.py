from backend.engine.timing.deadline import Deadline

__all__ = ["Deadline"]
