from __future__ import annotations

from typing import Any, Dict, List, Optional

from app.services.telegram import TelegramError


class FakeTelegramClient:
    """Records outgoing calls instead of hitting the Bot API."""

    def __init__(self) -> None:
        self.messages: List[Dict[str, Any]] = []
        self.acks: List[str] = []
        self.fail_acks = False
        self.fail_sends = False

    def send_message(
        self,
        chat_id: int | str,
        text: str,
        reply_markup: Optional[Dict[str, Any]] = None,
    ) -> None:
        if self.fail_sends:
            raise TelegramError("sendMessage", "Bad Request: chat not found")
        self.messages.append({"chat_id": chat_id, "text": text, "reply_markup": reply_markup})

    def answer_callback_query(self, callback_query_id: str, text: Optional[str] = None) -> None:
        if self.fail_acks:
            raise TelegramError("answerCallbackQuery", "Bad Request: query is too old")
        self.acks.append(callback_query_id)

    @property
    def last_text(self) -> str:
        return self.messages[-1]["text"]


def text_update(chat_id: int, text: str, update_id: int = 1) -> Dict[str, Any]:
    return {
        "update_id": update_id,
        "message": {
            "message_id": update_id,
            "chat": {"id": chat_id, "type": "private"},
            "text": text,
        },
    }


def callback_update(
    chat_id: Optional[int],
    data: Optional[str],
    callback_id: str = "cb-1",
    update_id: int = 1,
) -> Dict[str, Any]:
    callback: Dict[str, Any] = {"id": callback_id, "from": {"id": 42}}
    if chat_id is not None:
        callback["message"] = {"message_id": 7, "chat": {"id": chat_id, "type": "private"}}
    if data is not None:
        callback["data"] = data
    return {"update_id": update_id, "callback_query": callback}


