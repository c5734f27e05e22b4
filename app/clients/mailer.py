# app/clients/mailer.py

import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from app.clients.delivery import DeliveryResult
from app.core.config import settings
from app.core.exceptions import DeliveryFailure

logger = logging.getLogger(__name__)

EMAIL_SUBJECT = "Партнерская программа"


class EmailClient:
    """
    Отправка писем через SMTP.
    В dev-режиме (или без SMTP_HOST) письмо только пишется в лог.
    """
    channel = "email"

    def __init__(self, host: str, port: int, user: str, password: str,
                 sender: str, sender_name: str, dev_mode: bool = False):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.sender = sender
        self.sender_name = sender_name
        self.dev_mode = dev_mode or not host

    def _deliver(self, to_email: str, content: str) -> None:
        if self.dev_mode:
            logger.info(f"[EMAIL DEV MODE] To: {to_email} | {content}")
            return

        msg = MIMEMultipart("alternative")
        msg["Subject"] = EMAIL_SUBJECT
        msg["From"] = f"{self.sender_name} <{self.sender}>"
        msg["To"] = to_email
        msg.attach(MIMEText(content, "html"))

        with smtplib.SMTP(self.host, self.port, timeout=20) as server:
            server.starttls()
            if self.user:
                server.login(self.user, self.password)
            server.sendmail(self.sender, to_email, msg.as_string())

    async def send(self, destination: str, content: str) -> DeliveryResult:
        # smtplib блокирующий, уводим его в поток
        try:
            await asyncio.to_thread(self._deliver, destination, content)
            return DeliveryResult.ok()
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send email to {destination}: {e}")
            return DeliveryResult.failed(DeliveryFailure(self.channel, str(e)))
        except Exception as e:
            logger.error(f"Unexpected error sending email to {destination}: {e}", exc_info=True)
            return DeliveryResult.failed(DeliveryFailure(self.channel, str(e)))


email_client = EmailClient(
    host=settings.SMTP_HOST,
    port=settings.SMTP_PORT,
    user=settings.SMTP_USER,
    password=settings.SMTP_PASSWORD,
    sender=settings.SMTP_FROM,
    sender_name=settings.SMTP_FROM_NAME,
    dev_mode=settings.EMAIL_DEV_MODE,
)
