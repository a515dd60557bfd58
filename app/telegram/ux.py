# app/telegram/ux.py
from __future__ import annotations

from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Dict, Optional, Tuple

from app.telegram.state import MeterField

ReplyTuple = Tuple[str, Optional[Dict[str, Any]]]

RESET_COMMANDS = ("/new", "/start")

_CENT = Decimal("0.01")
_MONEY_CONTEXT = Context(prec=60, rounding=ROUND_HALF_UP)

_BUTTON_TEXT = {
    MeterField.PREVIOUS: "📟 Previous reading",
    MeterField.CURRENT: "📈 Current reading",
    MeterField.PRICE: "💶 Price per unit",
}


def is_reset_command(text: str) -> bool:
    return text.strip().startswith(RESET_COMMANDS)


def build_main_menu() -> ReplyTuple:
    """
    Build the menu with one button per value we need.
    """
    text = (
        "Let’s calculate your consumption cost.\n\n"
        "Choose what you want to enter:"
    )
    reply_markup = {
        "inline_keyboard": [
            [
                {"text": _BUTTON_TEXT[MeterField.PREVIOUS], "callback_data": MeterField.PREVIOUS.action},
                {"text": _BUTTON_TEXT[MeterField.CURRENT], "callback_data": MeterField.CURRENT.action},
            ],
            [
                {"text": _BUTTON_TEXT[MeterField.PRICE], "callback_data": MeterField.PRICE.action},
            ],
        ]
    }
    return text, reply_markup


def prompt_for(field: MeterField) -> str:
    return f"Please enter the {field.label} (a number, e.g. 123.45):"


def invalid_number(field: MeterField) -> str:
    return f"⚠️ That doesn’t look like a number. Please enter a valid {field.label}."


def value_saved(field: MeterField, value: Decimal) -> str:
    return f"✅ Saved {field.label}: {value}"


def ordering_error() -> str:
    return (
        "❌ The current reading can’t be lower than the previous reading.\n"
        "Both readings were cleared, please enter them again."
    )


def unknown_option() -> str:
    return "Got it, but I don’t know that option. Send /new to start over."


def echo(text: str) -> str:
    return f"Echo: {text}"


def money(value: Decimal) -> str:
    return str(value.quantize(_CENT, context=_MONEY_CONTEXT))


def build_result(
    previous: Decimal,
    current: Decimal,
    price: Decimal,
    consumption: Decimal,
    total: Decimal,
) -> str:
    lines = [
        "🧾 Calculation result:",
        f"• Previous reading: {previous}",
        f"• Current reading: {current}",
        f"• Consumption: {money(consumption)}",
        f"• Price per unit: {money(price)}",
        f"• Total cost: {money(total)}",
        "",
        "Send /new to start another calculation.",
    ]
    return "\n".join(lines)
