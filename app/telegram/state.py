# app/telegram/state.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional


class MeterField(str, Enum):
    PREVIOUS = "previous"
    CURRENT = "current"
    PRICE = "price"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def action(self) -> str:
        """Callback data carried by the menu button for this field."""
        return f"set_{self.value}"

    @classmethod
    def from_action(cls, action: Optional[str]) -> Optional["MeterField"]:
        for field in cls:
            if field.action == action:
                return field
        return None


_LABELS = {
    MeterField.PREVIOUS: "previous reading",
    MeterField.CURRENT: "current reading",
    MeterField.PRICE: "price per unit",
}


@dataclass
class ChatState:
    """
    Conversation record for one chat.

    ``expecting`` names the field the next free-text message fills.
    """

    expecting: Optional[MeterField] = None
    previous_value: Optional[Decimal] = None
    current_value: Optional[Decimal] = None
    price: Optional[Decimal] = None

    def has_readings(self) -> bool:
        return self.previous_value is not None and self.current_value is not None

    def is_complete(self) -> bool:
        return self.has_readings() and self.price is not None

    def store(self, field: MeterField, value: Decimal) -> None:
        if field is MeterField.PREVIOUS:
            self.previous_value = value
        elif field is MeterField.CURRENT:
            self.current_value = value
        else:
            self.price = value


class StateStore:
    """
    In-memory state store: chat_id -> ChatState.

    Lives as long as the process. One instance is built by the app factory
    and handed to the dispatcher, which is its only writer.
    """

    def __init__(self) -> None:
        self._states: Dict[int, ChatState] = {}

    def get(self, chat_id: int) -> ChatState:
        """
        Return the state for this chat_id, creating an empty one on first use.
        """
        state = self._states.get(chat_id)
        if state is None:
            state = ChatState()
            self._states[chat_id] = state
        return state

    def peek(self, chat_id: int) -> Optional[ChatState]:
        """
        Return the state for this chat_id without creating it.
        """
        return self._states.get(chat_id)

    def set(self, chat_id: int, state: ChatState) -> None:
        self._states[chat_id] = state

    def clear(self, chat_id: int) -> None:
        self._states.pop(chat_id, None)

    def __contains__(self, chat_id: object) -> bool:
        return chat_id in self._states

    def __len__(self) -> int:
        return len(self._states)
