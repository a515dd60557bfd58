from __future__ import annotations

import logging
from typing import Optional

import click
from flask import Flask, current_app

from app.api.webhook import DISPATCHER_KEY, api
from app.config import Settings
from app.services.telegram import TelegramClient, TelegramError
from app.telegram import StateStore, UpdateDispatcher

LOG_FORMAT = "%(asctime)s %(levelname)s:%(message)s"

CLIENT_KEY = "telegram_client"


# ================================
# APP FACTORY
# ================================
def create_app(
    settings: Optional[Settings] = None,
    client: Optional[TelegramClient] = None,
) -> Flask:
    """
    Build the Flask app.

    The state store and dispatcher are created here, once per process.
    ``client`` replaces the real Bot API client (tests pass a fake).
    """
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    app = Flask(__name__)
    app.config["SETTINGS"] = settings
    app.register_blueprint(api)

    if client is None and settings.has_token:
        client = TelegramClient(
            settings.telegram_bot_token,
            api_base=settings.telegram_api_base,
            timeout=settings.telegram_timeout,
        )

    if client is None:
        logging.error("[CONFIG] TELEGRAM_BOT_TOKEN is not set; replies are disabled.")
    else:
        app.extensions[CLIENT_KEY] = client
        app.extensions[DISPATCHER_KEY] = UpdateDispatcher(StateStore(), client)

    _register_commands(app)
    return app


# ================================
# CLI
# ================================
def _require_client() -> TelegramClient:
    client = current_app.extensions.get(CLIENT_KEY)
    if client is None:
        raise click.ClickException("TELEGRAM_BOT_TOKEN is not set.")
    return client


def _register_commands(app: Flask) -> None:
    @app.cli.command("set-webhook")
    @click.argument("url")
    def set_webhook_command(url: str) -> None:
        """Point the bot's webhook at URL (e.g. https://example.com/bot)."""
        try:
            _require_client().set_webhook(url)
        except TelegramError as e:
            raise click.ClickException(str(e)) from e
        click.echo(f"Webhook set to {url}")

    @app.cli.command("delete-webhook")
    def delete_webhook_command() -> None:
        """Remove the bot's webhook."""
        try:
            _require_client().delete_webhook()
        except TelegramError as e:
            raise click.ClickException(str(e)) from e
        click.echo("Webhook deleted")
