from .dulwich_adapter import DulwichGraph, open_repository

__all__ = ["DulwichGraph", "open_repository"]
