"""Persistence layer"""
from neuroquest.db.store import GameStore, InMemoryGameStore, UserSnapshot

__all__ = ["GameStore", "InMemoryGameStore", "UserSnapshot"]
