# app/telegram/__init__.py
from .dispatcher import UpdateDispatcher
from .state import ChatState, MeterField, StateStore
from .updates import parse_update

__all__ = [
    "ChatState",
    "MeterField",
    "StateStore",
    "UpdateDispatcher",
    "parse_update",
]
