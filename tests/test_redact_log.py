from __future__ import annotations

from pyacurite._redact import redact_for_log


def test_redact_for_log_redacts_credentials_and_tokens() -> None:
    payload = {
        "token_id": "TOKEN",
        "user": {"email": "me@example.com", "account_users": [{"account_id": 176464}]},
        "headers": {"X-One-Vue-Token": "TOKEN"},
        "password": "pw",
    }

    redacted = redact_for_log(payload)
    assert redacted["token_id"] == "<redacted>"
    assert redacted["password"] == "<redacted>"
    assert redacted["user"]["email"] == "<redacted>"
    assert redacted["headers"]["X-One-Vue-Token"] == "<redacted>"
    assert redacted["user"]["account_users"][0]["account_id"] == 176464


def test_redact_for_log_walks_lists_and_keeps_scalars() -> None:
    redacted = redact_for_log([{"Password": "pw", "remember": True}, 3, None])

    assert redacted == [{"Password": "<redacted>", "remember": True}, 3, None]
