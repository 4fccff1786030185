import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional

from jobhub.core.config import settings

logger = logging.getLogger(__name__)


class MailService:
    """Best-effort HTML mail over SMTP/SSL."""

    def __init__(self, host: Optional[str] = None, port: Optional[int] = None,
                 user: Optional[str] = None, password: Optional[str] = None):
        self.host = host or settings.mail_host
        self.port = port or settings.mail_port
        self.user = user if user is not None else settings.mail_user
        self.password = password if password is not None else settings.mail_password

    def _build_message(self, to: str, subject: str, content: str) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["From"] = self.user or ""
        message["To"] = to
        message["Subject"] = subject
        message.attach(MIMEText(content, "html", "utf-8"))
        return message

    def send_mail(self, to: str, subject: str, content: str) -> bool:
        """Send ``content`` as HTML; failures are logged, never raised."""
        if not self.user or not self.password:
            logger.warning(f"Mail credentials are not configured; skipping mail to {to}")
            return False

        message = self._build_message(to, subject, content)
        try:
            with smtplib.SMTP_SSL(self.host, self.port, timeout=30) as server:
                server.login(self.user, self.password)
                server.sendmail(self.user, [to], message.as_string())
        except (smtplib.SMTPException, OSError):
            logger.exception(f"Failed to send mail to {to}")
            return False

        logger.info(f"Mail sent to {to}: {subject}")
        return True
