import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate
from typing import Optional, Sequence

from portfolio.errors import EmailDeliveryError
from portfolio.settings import Settings

logger = logging.getLogger(__name__)


class SmtpEmailSender:
    """Sends multipart (plaintext + HTML) mail over SMTP."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        user: Optional[str] = None,
        password: Optional[str] = None,
        *,
        smtp_factory=smtplib.SMTP,
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.smtp_factory = smtp_factory

    @classmethod
    def from_settings(cls, settings_obj: Settings) -> "SmtpEmailSender":
        return cls(
            settings_obj.SMTP_HOST,
            settings_obj.SMTP_PORT,
            settings_obj.SMTP_USER or None,
            settings_obj.SMTP_PASSWORD or None,
        )

    def send(
        self,
        sender: str,
        recipients: Sequence[str],
        subject: str,
        text: str,
        html: str,
    ) -> None:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = sender
        msg["To"] = ", ".join(recipients)
        msg["Date"] = formatdate(localtime=True)
        msg.attach(MIMEText(text, "plain", "utf-8"))
        msg.attach(MIMEText(html, "html", "utf-8"))

        try:
            with self.smtp_factory(self.host, self.port) as server:
                if self.user and self.password:
                    server.starttls()
                    server.login(self.user, self.password)
                server.send_message(msg, from_addr=sender, to_addrs=list(recipients))
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send '{subject}' via {self.host}:{self.port}: {e}")
            raise EmailDeliveryError(str(e)) from e

        logger.info(f"Sent '{subject}' to {', '.join(recipients)}")
