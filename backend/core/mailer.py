from __future__ import annotations

import html
import logging
import os
from typing import Any

import httpx


LOGGER = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"
DEFAULT_FROM_EMAIL = "Motel Directory <noreply@example.com>"
VERIFICATION_SUBJECT = "Confirme seu cadastro"
LINK_EXPIRY_HOURS = 24


def send_verification_email(
    email: str,
    confirmation_url: str,
    user_name: str | None = None,
    api_key: str | None = None,
    client: httpx.Client | None = None,
) -> str | None:
    """
    Send the sign-up confirmation email through Resend. Returns the Resend message id.
    """
    if not email or not confirmation_url:
        raise ValueError("email and confirmation_url are required.")
    resolved_key = api_key or os.environ.get("RESEND_API_KEY")
    if not resolved_key:
        raise RuntimeError("RESEND_API_KEY is required to send email.")

    request_body = {
        "from": os.environ.get("RESEND_FROM_EMAIL") or DEFAULT_FROM_EMAIL,
        "to": [email],
        "subject": VERIFICATION_SUBJECT,
        "html": build_verification_html(confirmation_url, user_name),
    }
    headers = {"Authorization": f"Bearer {resolved_key}", "Content-Type": "application/json"}

    if client is not None:
        payload = _post(client, request_body, headers)
    else:
        with httpx.Client(timeout=15.0) as owned_client:
            payload = _post(owned_client, request_body, headers)

    message_id = payload.get("id")
    LOGGER.info("Verification email sent to=%s id=%s", email, message_id)
    return str(message_id) if message_id else None


def build_verification_html(confirmation_url: str, user_name: str | None = None) -> str:
    url = html.escape(confirmation_url, quote=True)
    greeting = f"Olá, {html.escape(user_name)}!" if user_name else "Olá!"
    return (
        "<!DOCTYPE html>"
        '<html><head><meta charset="utf-8"><title>Confirme seu e-mail</title></head>'
        '<body style="margin:0;padding:0;font-family:Arial,sans-serif;">'
        f"<p>{greeting}</p>"
        "<p>Obrigado por se cadastrar! Para completar seu cadastro e começar a divulgar seu motel, "
        "clique no botão abaixo para confirmar seu e-mail.</p>"
        f'<p><a href="{url}" style="display:inline-block;padding:16px 40px;">Confirmar E-mail</a></p>'
        f"<p>Este link expira em <strong>{LINK_EXPIRY_HOURS} horas</strong>.</p>"
        "<p>Se o botão não funcionar, copie e cole este link no seu navegador:<br>"
        f'<a href="{url}">{url}</a></p>'
        "<p>Se você não solicitou este cadastro, pode ignorar este e-mail com segurança.</p>"
        "</body></html>"
    )


def _post(client: httpx.Client, request_body: dict[str, Any], headers: dict[str, str]) -> dict[str, Any]:
    response = client.post(RESEND_API_URL, json=request_body, headers=headers)
    response.raise_for_status()
    data = response.json()
    return data if isinstance(data, dict) else {}
