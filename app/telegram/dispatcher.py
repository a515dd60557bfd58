# app/telegram/dispatcher.py
from __future__ import annotations

import logging
from dataclasses import replace

from app.services.telegram import TelegramClient, TelegramError
from app.telegram.flows.meter_flow import (
    Reply,
    handle_meter_callback,
    handle_meter_text,
    start_meter_flow,
)
from app.telegram.state import StateStore
from app.telegram.updates import CallbackQuery, TextMessage, UnhandledUpdate, Update
from app.telegram.ux import echo, is_reset_command


class UpdateDispatcher:
    """
    Runs one conversation step per Telegram update.

    Owns the StateStore. Send failures propagate to the caller, except for
    callback acknowledgments which are best-effort.
    """

    def __init__(self, store: StateStore, client: TelegramClient) -> None:
        self._store = store
        self._client = client

    @property
    def store(self) -> StateStore:
        return self._store

    def dispatch(self, update: Update) -> None:
        if isinstance(update, TextMessage):
            self._handle_text(update)
        elif isinstance(update, CallbackQuery):
            self._handle_callback(update)
        elif isinstance(update, UnhandledUpdate):
            logging.info(
                "[UNHANDLED UPDATE] update_id=%s kind=%s chat_id=%s",
                update.update_id,
                update.kind,
                update.chat_id,
            )
        else:
            raise TypeError(f"Unsupported update type: {type(update).__name__}")

    def _apply(self, chat_id: int, reply: Reply) -> None:
        # Reply first: a failed send leaves the stored state untouched, so a
        # re-delivered update replays the same step.
        reply_text, reply_markup, new_state = reply
        self._client.send_message(chat_id, reply_text, reply_markup=reply_markup)
        if new_state is None:
            self._store.clear(chat_id)
        else:
            self._store.set(chat_id, new_state)

    def _handle_text(self, message: TextMessage) -> None:
        chat_id = message.chat_id

        # 1) /new, /start: fresh record + menu
        if is_reset_command(message.text):
            self._apply(chat_id, start_meter_flow(chat_id))
            return

        # 2) A field is expected: treat the text as its value
        state = self._store.peek(chat_id)
        if state is not None and state.expecting is not None:
            self._apply(chat_id, handle_meter_text(chat_id, message.text, replace(state)))
            return

        # 3) Nothing expected
        self._client.send_message(chat_id, echo(message.text))

    def _handle_callback(self, callback: CallbackQuery) -> None:
        if callback.callback_id:
            try:
                self._client.answer_callback_query(callback.callback_id)
            except TelegramError as e:
                logging.warning("[CALLBACK ACK FAILED] id=%s %s", callback.callback_id, e)

        chat_id = callback.chat_id
        if chat_id is None:
            logging.info(
                "[CALLBACK IGNORED] update_id=%s no chat id (data=%r)",
                callback.update_id,
                callback.data,
            )
            return

        state = self._store.get(chat_id)
        self._apply(chat_id, handle_meter_callback(chat_id, callback.data, replace(state)))
