from __future__ import annotations

import re
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from app.telegram.state import ChatState, MeterField
from app.telegram.ux import (
    build_main_menu,
    build_result,
    invalid_number,
    ordering_error,
    prompt_for,
    unknown_option,
    value_saved,
)

Reply = Tuple[str, Optional[Dict[str, Any]], Optional[ChatState]]

# Plain decimal notation only: no exponents, no digit separators
_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)$")

# Integer digits allowed per value; keeps totals well inside the decimal context
MAX_INTEGER_DIGITS = 12


def parse_number(text: str) -> Optional[Decimal]:
    """
    Parse free text as a decimal number.

    Accepts a comma as decimal separator ("0,25"). Returns None for
    anything else, and for values with more than MAX_INTEGER_DIGITS
    digits before the decimal point.
    """
    raw = text.strip().replace(",", ".")
    if not _NUMBER_RE.match(raw):
        return None
    value = Decimal(raw)
    if value and value.adjusted() >= MAX_INTEGER_DIGITS:
        return None
    return value


def start_meter_flow(chat_id: int) -> Reply:  # chat_id kept for symmetry
    text, reply_markup = build_main_menu()
    return text, reply_markup, ChatState()


def handle_meter_callback(chat_id: int, callback_data: Optional[str], state: ChatState) -> Reply:
    field = MeterField.from_action(callback_data)
    if field is None:
        return unknown_option(), None, state

    state.expecting = field
    return prompt_for(field), None, state


def handle_meter_text(chat_id: int, text: str, state: ChatState) -> Reply:
    field = state.expecting
    if field is None:
        raise ValueError(f"chat {chat_id} is not expecting a value")

    value = parse_number(text)
    if value is None:
        return invalid_number(field), None, state

    state.store(field, value)
    state.expecting = None

    # Both readings known: price is the only thing left to ask for
    if state.has_readings() and state.price is None:
        state.expecting = MeterField.PRICE
        return prompt_for(MeterField.PRICE), None, state

    if state.is_complete():
        previous = state.previous_value
        current = state.current_value
        price = state.price

        if current < previous:
            # Price survives; the participant re-picks a menu option to retry.
            state.previous_value = None
            state.current_value = None
            return ordering_error(), None, state

        consumption = current - previous
        total = consumption * price
        return build_result(previous, current, price, consumption, total), None, None

    return value_saved(field, value), None, state
