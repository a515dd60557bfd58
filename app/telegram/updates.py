# app/telegram/updates.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class TextMessage:
    update_id: Optional[int]
    chat_id: int
    text: str


@dataclass(frozen=True)
class CallbackQuery:
    update_id: Optional[int]
    callback_id: Optional[str]
    chat_id: Optional[int]
    data: Optional[str]


@dataclass(frozen=True)
class UnhandledUpdate:
    update_id: Optional[int]
    kind: str
    chat_id: Optional[int] = None


Update = Union[TextMessage, CallbackQuery, UnhandledUpdate]


def _chat_id_of(message: Any) -> Optional[int]:
    if not isinstance(message, dict):
        return None
    chat = message.get("chat") or {}
    chat_id = chat.get("id") if isinstance(chat, dict) else None
    # bool is an int subclass; Telegram never sends one here
    if isinstance(chat_id, int) and not isinstance(chat_id, bool):
        return chat_id
    return None


def _kind_of(payload: Dict[str, Any]) -> str:
    for key in payload:
        if key != "update_id":
            return key
    return "empty"


def parse_update(payload: Any) -> Update:
    """
    Turn a decoded Telegram webhook body into one of the Update kinds.

    - "message" with text and a chat id  -> TextMessage
    - "callback_query"                   -> CallbackQuery (chat id and data may be missing)
    - anything else                      -> UnhandledUpdate

    Raises ValueError if the body is not a JSON object.
    """
    if not isinstance(payload, dict):
        raise ValueError(f"Update payload must be a JSON object, got {type(payload).__name__}")

    update_id = payload.get("update_id")

    callback = payload.get("callback_query")
    if isinstance(callback, dict):
        data = callback.get("data")
        callback_id = callback.get("id")
        return CallbackQuery(
            update_id=update_id,
            callback_id=str(callback_id) if callback_id is not None else None,
            chat_id=_chat_id_of(callback.get("message")),
            data=data if isinstance(data, str) and data else None,
        )

    message = payload.get("message")
    if isinstance(message, dict):
        chat_id = _chat_id_of(message)
        text = message.get("text")
        if chat_id is not None and isinstance(text, str):
            return TextMessage(update_id=update_id, chat_id=chat_id, text=text)
        return UnhandledUpdate(update_id=update_id, kind="message", chat_id=chat_id)

    return UnhandledUpdate(update_id=update_id, kind=_kind_of(payload))
