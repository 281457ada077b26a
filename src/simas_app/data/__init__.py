from .database import Database
from .state_store import StateStore

__all__ = ["Database", "StateStore"]
