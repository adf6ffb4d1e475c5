import os
import logging
import httpx
from dotenv import load_dotenv

from exceptions.exceptions import EmailProviderError

load_dotenv()
logger = logging.getLogger(__name__)

EMAIL_API_URL = os.getenv("EMAIL_API_URL")
EMAIL_API_KEY = os.getenv("EMAIL_API_KEY")
EMAIL_FROM = os.getenv("EMAIL_FROM", "no-reply@bookproject.local")
HTTP_TIMEOUT = float(os.getenv("EMAIL_HTTP_TIMEOUT", "10.0"))


async def send_email(to: str, subject: str, html_body: str) -> None:
    if not EMAIL_API_URL or not EMAIL_API_KEY:
        raise EmailProviderError("provider is not configured")

    payload = {
        "from": {"email": EMAIL_FROM},
        "personalizations": [{"to": [{"email": to}], "subject": subject}],
        "content": [{"type": "text/html", "value": html_body}],
    }
    headers = {
        "Authorization": f"Bearer {EMAIL_API_KEY}",
        "Content-Type": "application/json",
    }

    try:
        async with httpx.AsyncClient(timeout=HTTP_TIMEOUT) as client:
            resp = await client.post(EMAIL_API_URL, json=payload, headers=headers)
    except httpx.HTTPError as e:
        raise EmailProviderError(f"request failed: {e}") from e

    if not 200 <= resp.status_code < 300:
        raise EmailProviderError(f"{resp.status_code} {resp.text[:200]}")
    logger.info(f"Email '{subject}' sent to {to}")
