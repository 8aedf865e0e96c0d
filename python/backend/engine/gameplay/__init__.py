from backend.engine.gameplay.replay import Replay, replay

__all__ = ["Replay", "replay"]
