import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from html import escape
from urllib.parse import quote

from squareit_config.settings import Settings
from squareit_identity.application.ports import NotificationGateway, NotificationKind
from squareit_identity.domain.account import Account
from squareit_identity.infrastructure.email.templates import (
    ACCOUNT_CONFIRMED_HTML,
    ACCOUNT_CONFIRMED_SUBJECT,
    ACCOUNT_CONFIRMED_TEXT,
    NEW_ACCOUNT_HTML,
    NEW_ACCOUNT_SUBJECT,
    NEW_ACCOUNT_TEXT,
    RESEND_NEW_ACCOUNT_SUBJECT,
)

logger = logging.getLogger(__name__)

CONFIRM_PATH = "/api/v1/registration/confirm/"
RESEND_PATH = "/api/v1/registration/resend/"


class EmailService(NotificationGateway):
    def __init__(self, settings: Settings):
        self._settings = settings
        self._base_url = settings.public_base_url.rstrip("/")

    def confirm_link(self, token: str) -> str:
        return f"{self._base_url}{CONFIRM_PATH}{token}"

    def resend_link(self, email: str) -> str:
        return f"{self._base_url}{RESEND_PATH}{quote(email)}"

    def notify(self, account: Account, kind: NotificationKind) -> None:
        if not self._settings.smtp_enabled:
            logger.warning(
                "SMTP disabled, skipping %s email to %s",
                kind.value,
                account.email,
            )
            return

        subject, text_body, html_body = self._render(account, kind)
        self._deliver(
            self._build_message(account.email, subject, text_body, html_body),
        )

    def _render(self, account: Account, kind: NotificationKind) -> tuple[str, str, str]:
        first_name = account.first_name or account.username

        if kind is NotificationKind.ACCOUNT_CONFIRMED:
            return (
                ACCOUNT_CONFIRMED_SUBJECT,
                ACCOUNT_CONFIRMED_TEXT.format(first_name=first_name),
                ACCOUNT_CONFIRMED_HTML.format(first_name=escape(first_name)),
            )

        subject = (
            RESEND_NEW_ACCOUNT_SUBJECT
            if kind is NotificationKind.RESEND_NEW_ACCOUNT
            else NEW_ACCOUNT_SUBJECT
        )
        confirm_link = self.confirm_link(account.session_token.value)
        resend_link = self.resend_link(account.email)
        return (
            subject,
            NEW_ACCOUNT_TEXT.format(
                first_name=first_name,
                confirm_link=confirm_link,
                resend_link=resend_link,
            ),
            NEW_ACCOUNT_HTML.format(
                first_name=escape(first_name),
                confirm_link=confirm_link,
                resend_link=resend_link,
            ),
        )

    def _build_message(
        self,
        recipient: str,
        subject: str,
        text_body: str,
        html_body: str,
    ) -> MIMEMultipart:
        sender = f"{self._settings.smtp_from_name} <{self._settings.smtp_from_email}>"
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = sender
        message["To"] = recipient
        # plain part first, mail clients prefer the last alternative
        message.attach(MIMEText(text_body, "plain"))
        message.attach(MIMEText(html_body, "html"))
        return message

    def _connect(self) -> smtplib.SMTP:
        """Open an SMTP connection with implicit TLS, STARTTLS or neither."""
        host, port = self._settings.smtp_host, self._settings.smtp_port
        implicit_tls = self._settings.smtp_use_tls and not self._settings.smtp_starttls
        if implicit_tls:
            return smtplib.SMTP_SSL(host, port, context=ssl.create_default_context())
        return smtplib.SMTP(host, port)

    def _deliver(self, message: MIMEMultipart) -> None:
        settings = self._settings
        if not settings.smtp_host:
            logger.error("SMTP enabled but no host configured, mail dropped")
            return

        secret = settings.smtp_password
        password = secret.get_secret_value() if secret else ""
        with self._connect() as server:
            if settings.smtp_starttls:
                server.starttls(context=ssl.create_default_context())
            if settings.smtp_user:
                server.login(settings.smtp_user, password)
            server.send_message(message)

        logger.info("Sent '%s' to %s", message["Subject"], message["To"])
