import json

import httpx
import pytest

from backend.core.mailer import RESEND_API_URL, build_verification_html, send_verification_email


def test_send_verification_email_posts_to_resend(monkeypatch):
    monkeypatch.setenv("RESEND_FROM_EMAIL", "Motels <noreply@motels.test>")
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "msg_123"})

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        message_id = send_verification_email(
            "owner@example.com",
            "https://app.test/confirm?token=abc",
            user_name="Ana",
            api_key="re_test",
            client=client,
        )

    assert message_id == "msg_123"
    assert seen["url"] == RESEND_API_URL
    assert seen["auth"] == "Bearer re_test"
    assert seen["body"]["to"] == ["owner@example.com"]
    assert seen["body"]["from"] == "Motels <noreply@motels.test>"
    assert "Olá, Ana!" in seen["body"]["html"]


def test_send_verification_email_raises_on_http_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(422, json={"message": "invalid"}))
    with httpx.Client(transport=transport) as client:
        with pytest.raises(httpx.HTTPStatusError):
            send_verification_email("a@b.test", "https://x.test", api_key="re_test", client=client)


def test_send_verification_email_requires_inputs_and_key(monkeypatch):
    monkeypatch.delenv("RESEND_API_KEY", raising=False)
    with pytest.raises(ValueError):
        send_verification_email("", "https://x.test", api_key="re_test")
    with pytest.raises(RuntimeError):
        send_verification_email("a@b.test", "https://x.test")


def test_verification_html_escapes_values():
    body = build_verification_html("https://x.test/?a=1&b=2", user_name="<b>Ana</b>")
    assert "a=1&amp;b=2" in body
    assert "&lt;b&gt;Ana&lt;/b&gt;" in body
    assert "Olá!" not in body
    assert "24 horas" in body
