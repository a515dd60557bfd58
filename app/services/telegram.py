# app/services/telegram.py
from __future__ import annotations

from typing import Any, Dict, Optional

import requests


class TelegramError(RuntimeError):
    """Raised when a Bot API call fails at the transport or API level."""

    def __init__(self, method: str, description: str) -> None:
        super().__init__(f"{method} failed: {description}")
        self.method = method
        self.description = description


class TelegramClient:
    """
    Thin synchronous wrapper around the few Bot API methods the bot uses.

    Every call either returns the decoded ``result`` or raises
    TelegramError. Whether a failure is fatal is decided by the caller.
    """

    def __init__(
        self,
        token: str,
        api_base: str = "https://api.telegram.org",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._base_url = f"{api_base.rstrip('/')}/bot{token}"
        self._timeout = timeout
        self._session = session or requests.Session()

    def _post(self, method: str, payload: Dict[str, Any]) -> Any:
        url = f"{self._base_url}/{method}"
        try:
            response = self._session.post(url, json=payload, timeout=self._timeout)
        except requests.RequestException as e:
            raise TelegramError(method, str(e)) from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if not response.ok or not body.get("ok", False):
            description = body.get("description") or f"HTTP {response.status_code}"
            raise TelegramError(method, description)

        return body.get("result")

    def send_message(
        self,
        chat_id: int | str,
        text: str,
        reply_markup: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send a plain-text message to a Telegram chat.

        reply_markup can be an inline keyboard dict, e.g.:
        {
            "inline_keyboard": [[{"text": "Button", "callback_data": "foo"}]]
        }
        """
        payload: Dict[str, Any] = {
            "chat_id": chat_id,
            "text": text,
        }
        if reply_markup is not None:
            payload["reply_markup"] = reply_markup

        return self._post("sendMessage", payload)

    def answer_callback_query(
        self,
        callback_query_id: str,
        text: Optional[str] = None,
    ) -> Any:
        """
        Acknowledge a callback query so Telegram stops the 'loading' spinner.
        """
        payload: Dict[str, Any] = {"callback_query_id": callback_query_id}
        if text:
            payload["text"] = text

        return self._post("answerCallbackQuery", payload)

    def set_webhook(self, url: str) -> Any:
        return self._post("setWebhook", {"url": url})

    def delete_webhook(self) -> Any:
        return self._post("deleteWebhook", {})
