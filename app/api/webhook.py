from __future__ import annotations

import logging
from typing import Optional, Tuple

from flask import Blueprint, current_app, request

from app.telegram import UpdateDispatcher, parse_update

api = Blueprint("api", __name__)

DISPATCHER_KEY = "update_dispatcher"


@api.route("/", methods=["GET"])
def healthcheck() -> str:
    return "Meter cost bot running"


@api.route("/bot", methods=["POST"])
@api.route("/webhook", methods=["POST"])
def webhook() -> Tuple[str, int]:
    """
    Main Telegram webhook endpoint.

    - 200 "OK" once the update is handled (validation errors included)
    - 500 "Error" on any unexpected fault, so Telegram re-delivers
    - 500 "Internal Server Error" when no bot token is configured
    """
    dispatcher: Optional[UpdateDispatcher] = current_app.extensions.get(DISPATCHER_KEY)
    if dispatcher is None:
        logging.error("[CONFIG] TELEGRAM_BOT_TOKEN is not set; rejecting update.")
        return "Internal Server Error", 500

    try:
        payload = request.get_json(force=True)
        update = parse_update(payload)
        dispatcher.dispatch(update)
    except Exception as e:  # noqa: BLE001
        logging.exception("[WEBHOOK ERROR] %s", e)
        return "Error", 500

    return "OK", 200
