from __future__ import annotations

import logging
import secrets
import smtplib
import socket
from email.message import EmailMessage

from app.core.config import settings
from app.core.errors import UpstreamError

logger = logging.getLogger(__name__)

OTP_SUBJECT = "OTP for verification"


def generate_one_time_code() -> str:
    """
    Six-digit numeric code in the range 100000-999999.
    """
    return str(100000 + secrets.randbelow(900000))


def _build_message(recipient: str, code: str) -> EmailMessage:
    message = EmailMessage()
    message["From"] = settings.SMTP_SENDER or settings.SMTP_USERNAME
    message["To"] = recipient
    message["Subject"] = OTP_SUBJECT
    message.set_content(f"Your OTP is {code}")
    return message


def _deliver(message: EmailMessage) -> None:
    with smtplib.SMTP(
        settings.SMTP_HOST,
        settings.SMTP_PORT,
        timeout=settings.SMTP_TIMEOUT_SECONDS,
    ) as smtp:
        smtp.starttls()
        if settings.SMTP_USERNAME:
            smtp.login(settings.SMTP_USERNAME, settings.SMTP_PASSWORD)
        smtp.send_message(message)


def send_one_time_code(email: str) -> str:
    """
    Generate a code and email it. The code is returned to the caller so the
    server can verify it later; it must not be echoed back to the client.
    """
    code = generate_one_time_code()
    try:
        _deliver(_build_message(email, code))
    except (smtplib.SMTPException, OSError, socket.timeout) as exc:
        logger.warning("Failed to send one-time code email", exc_info=True)
        raise UpstreamError("Failed to send OTP email") from exc

    logger.info("One-time code sent")
    return code
