from app.config import Settings
from app.main import create_app
from tests.factories import callback_update, text_update

CHAT = 9001


def test_healthcheck(http) -> None:
    response = http.get("/")
    assert response.status_code == 200
    assert b"running" in response.data


def test_text_update_returns_ok(http, fake_client) -> None:
    response = http.post("/bot", json=text_update(CHAT, "hi"))

    assert response.status_code == 200
    assert response.get_data(as_text=True) == "OK"
    assert fake_client.last_text == "Echo: hi"


def test_webhook_alias(http, fake_client) -> None:
    response = http.post("/webhook", json=text_update(CHAT, "/new"))

    assert response.status_code == 200
    assert fake_client.messages[-1]["reply_markup"] is not None


def test_conversation_over_http(http, fake_client) -> None:
    steps = [
        callback_update(CHAT, "set_previous"),
        text_update(CHAT, "100"),
        callback_update(CHAT, "set_current"),
        text_update(CHAT, "150"),
        text_update(CHAT, "0.25"),
    ]
    for payload in steps:
        assert http.post("/bot", json=payload).status_code == 200

    assert "Total cost: 12.50" in fake_client.last_text


def test_oversized_reading_over_http(http, fake_client) -> None:
    steps = [
        callback_update(CHAT, "set_previous"),
        text_update(CHAT, "0"),
        callback_update(CHAT, "set_current"),
        text_update(CHAT, "100000000000000000000000000000"),
        text_update(CHAT, "1"),
        text_update(CHAT, "1"),
    ]
    statuses = [http.post("/bot", json=payload).status_code for payload in steps]

    assert statuses == [200] * len(steps)
    assert "Total cost: 1.00" in fake_client.last_text


def test_validation_error_still_ok(http, fake_client) -> None:
    http.post("/bot", json=callback_update(CHAT, "set_price"))
    response = http.post("/bot", json=text_update(CHAT, "free"))

    assert response.status_code == 200
    assert "price per unit" in fake_client.last_text


def test_unhandled_update_is_ok(http, fake_client) -> None:
    response = http.post("/bot", json={"update_id": 1, "edited_message": {"chat": {"id": CHAT}}})

    assert response.status_code == 200
    assert fake_client.messages == []


def test_malformed_json_is_500(http) -> None:
    response = http.post("/bot", data="{not json", content_type="application/json")

    assert response.status_code == 500
    assert response.get_data(as_text=True) == "Error"


def test_non_object_payload_is_500(http) -> None:
    response = http.post("/bot", json=[1, 2, 3])
    assert response.status_code == 500


def test_send_failure_is_500(http, fake_client) -> None:
    fake_client.fail_sends = True

    response = http.post("/bot", json=text_update(CHAT, "/new"))

    assert response.status_code == 500
    assert response.get_data(as_text=True) == "Error"


def test_ack_failure_is_still_ok(http, fake_client) -> None:
    fake_client.fail_acks = True

    response = http.post("/bot", json=callback_update(CHAT, "set_current"))

    assert response.status_code == 200


def test_missing_token_is_500() -> None:
    app = create_app(Settings(telegram_bot_token=None))
    http = app.test_client()

    response = http.post("/bot", data="definitely not json")

    assert response.status_code == 500
    assert response.get_data(as_text=True) == "Internal Server Error"
