"""Unit tests for the SMTP notification gateway."""

from unittest.mock import MagicMock, patch

from squareit_config import Settings
from squareit_identity import NotificationKind
from squareit_identity.infrastructure.email import EmailService
from squareit_identity.infrastructure.email.templates import (
    ACCOUNT_CONFIRMED_SUBJECT,
    NEW_ACCOUNT_SUBJECT,
    RESEND_NEW_ACCOUNT_SUBJECT,
)
from tests.shared.fixtures.factories import make_account


def _settings(**overrides) -> Settings:
    fields = {
        "public_base_url": "https://squareit.example/",
        "smtp_enabled": True,
        "smtp_host": "smtp.example.com",
        "smtp_port": 587,
        "smtp_user": "mailer",
        "smtp_starttls": True,
    }
    fields.update(overrides)
    return Settings(**fields)


class TestEmailServiceLinks:
    """Tests for the links embedded in confirmation mails."""

    def test_confirm_link_carries_token(self):
        service = EmailService(_settings())

        assert service.confirm_link("tok") == (
            "https://squareit.example/api/v1/registration/confirm/tok"
        )

    def test_resend_link_quotes_email(self):
        service = EmailService(_settings())

        assert service.resend_link("ada+x@example.com") == (
            "https://squareit.example/api/v1/registration/resend/ada%2Bx%40example.com"
        )


class TestEmailServiceRender:
    """Tests for subjects and bodies."""

    def test_new_account_mail_links_current_token(self):
        service = EmailService(_settings())
        account = make_account()

        subject, text, html = service._render(account, NotificationKind.NEW_ACCOUNT)

        assert subject == NEW_ACCOUNT_SUBJECT
        assert account.session_token.value in text
        assert account.session_token.value in html
        assert "/registration/resend/" in text

    def test_resend_mail_uses_its_own_subject(self):
        service = EmailService(_settings())

        subject, _, _ = service._render(
            make_account(),
            NotificationKind.RESEND_NEW_ACCOUNT,
        )

        assert subject == RESEND_NEW_ACCOUNT_SUBJECT

    def test_confirmed_mail_has_no_link(self):
        service = EmailService(_settings())
        account = make_account()

        subject, text, html = service._render(
            account,
            NotificationKind.ACCOUNT_CONFIRMED,
        )

        assert subject == ACCOUNT_CONFIRMED_SUBJECT
        assert account.session_token.value not in text
        assert "http" not in text
        assert "Ada" in html


class TestEmailServiceNotify:
    """Tests for delivery."""

    def test_disabled_smtp_sends_nothing(self):
        service = EmailService(_settings(smtp_enabled=False))

        with patch("squareit_identity.infrastructure.email.email_service.smtplib") as smtp:
            service.notify(make_account(), NotificationKind.NEW_ACCOUNT)

        smtp.SMTP.assert_not_called()
        smtp.SMTP_SSL.assert_not_called()

    def test_starttls_delivery(self):
        service = EmailService(_settings())
        account = make_account()

        with patch(
            "squareit_identity.infrastructure.email.email_service.smtplib.SMTP",
        ) as smtp_cls:
            server = MagicMock()
            smtp_cls.return_value.__enter__.return_value = server

            service.notify(account, NotificationKind.NEW_ACCOUNT)

        smtp_cls.assert_called_once_with("smtp.example.com", 587)
        server.starttls.assert_called_once()
        server.login.assert_called_once_with("mailer", "")
        message = server.send_message.call_args.args[0]
        assert message["To"] == account.email
        assert message["Subject"] == NEW_ACCOUNT_SUBJECT
