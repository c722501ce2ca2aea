import logging
import smtplib
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Optional

from daily_diet.core.config import Settings

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when the verification email could not be handed to the mail server."""


def send_email(settings: Settings, to_email: str, subject: str, html: str, from_name: Optional[str] = None):
    if settings.mail_backend == "console":
        logger.info("Email to %s (%s):\n%s", to_email, subject, html)
        return

    msg = MIMEText(html, "html", "utf-8")
    msg["Subject"] = subject
    msg["From"] = formataddr((from_name or settings.mail_from_name, settings.mail_from))
    msg["To"] = to_email

    try:
        # Add timeout to prevent indefinite hangs
        with smtplib.SMTP(settings.smtp_server, settings.smtp_port, timeout=30) as server:
            server.starttls()
            if settings.smtp_user:
                server.login(settings.smtp_user, settings.smtp_password)
            server.sendmail(settings.mail_from, [to_email], msg.as_string())
    except (smtplib.SMTPException, OSError) as e:
        logger.error("Failed to send email to %s: %s", to_email, e)
        raise EmailDeliveryError(f"Failed to send verification email: {e}") from e
    logger.info("Sent '%s' email to %s", subject, to_email)


def verification_email_html(name: str, code: str, ttl_minutes: int) -> str:
    return f'''<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8" />
    <title>Verify your email address</title>
    <style>
        body {{ font-family: 'Segoe UI', Roboto, Helvetica, Arial, sans-serif; background-color: #f6f8fb; margin: 0; padding: 0; color: #333; }}
        .container {{ max-width: 600px; margin: 40px auto; background-color: #fff; border-radius: 12px; overflow: hidden; }}
        .content {{ padding: 28px 32px; line-height: 1.6; }}
        .code {{ font-size: 28px; letter-spacing: 6px; font-weight: bold; }}
    </style>
</head>
<body>
    <div class="container">
        <div class="content">
            <h1>Verify your email address</h1>
            <p>Hello {name},</p>
            <p>Thank you for registering. To verify your email address, please use the following code:</p>
            <p class="code">{code}</p>
            <p>The code expires in {ttl_minutes} minutes.</p>
            <p>If you didn't request this code, you can safely ignore this email.</p>
        </div>
    </div>
</body>
</html>
'''


def send_verification_email(settings: Settings, to_email: str, name: str, code: str) -> None:
    html = verification_email_html(name, code, settings.verification_code_ttl_min)
    send_email(settings, to_email=to_email, subject="Verify your email address", html=html)
