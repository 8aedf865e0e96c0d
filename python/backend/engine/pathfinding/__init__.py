from backend.engine.pathfinding.bfs import shortest_path

__all__ = ["shortest_path"]
