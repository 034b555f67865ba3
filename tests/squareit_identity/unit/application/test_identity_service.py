"""Unit tests for IdentityService."""

from unittest.mock import AsyncMock, Mock

import pytest

from squareit.domain.shared.exceptions import ErrorCode
from squareit_identity import (
    AccountDeletedError,
    AccountNotActivatedError,
    AccountNotFoundError,
    AccountProfile,
    AccountRole,
    CredentialMismatchError,
    EmailAlreadyExistsError,
    IdentityService,
    NotificationKind,
    NotificationService,
    PasswordHashingService,
    SessionExpiredError,
    TokenMalformedError,
    TokenMismatchError,
    UsernameAlreadyExistsError,
    WeakPasswordError,
)
from tests.shared.fixtures.factories import (
    DEFAULT_POLICY,
    TEST_PASSWORD,
    FakeClock,
    make_account,
)

NEW_PROFILE = AccountProfile(
    username="ada",
    email="ada@example.com",
    first_name="Ada",
    last_name="Lovelace",
    password=TEST_PASSWORD,
)


class _IdentityTestBase:
    def setup_method(self):
        self.clock = FakeClock()
        self.account_repo = AsyncMock()
        self.account_repo.exists_by_email.return_value = False
        self.account_repo.exists_by_username.return_value = False
        self.password_service = Mock(spec=PasswordHashingService)
        self.password_service.hash.return_value = "hashed_password"
        self.notifications = Mock(spec=NotificationService)

        self.service = IdentityService(
            account_repository=self.account_repo,
            password_service=self.password_service,
            notification_service=self.notifications,
            policy=DEFAULT_POLICY,
            clock=self.clock,
        )


class TestIdentityServiceCreate(_IdentityTestBase):
    """Tests for account creation."""

    @pytest.mark.asyncio
    async def test_create_stores_unconfirmed_account_and_notifies(self):
        account = await self.service.create_account(NEW_PROFILE)

        assert account.username == "ada"
        assert account.email == "ada@example.com"
        assert account.password_hash == "hashed_password"
        assert not account.enabled
        assert account.session_token.sliding_anchor.anchored_at == self.clock()

        self.password_service.hash.assert_called_once_with(TEST_PASSWORD)
        self.account_repo.save.assert_awaited_once_with(account)
        self.notifications.dispatch.assert_called_once_with(
            account,
            NotificationKind.NEW_ACCOUNT,
        )

    @pytest.mark.asyncio
    async def test_create_rejects_taken_email(self):
        self.account_repo.exists_by_email.return_value = True

        with pytest.raises(EmailAlreadyExistsError) as exc_info:
            await self.service.create_account(NEW_PROFILE)

        assert exc_info.value.field == "email"
        assert exc_info.value.code == ErrorCode.EMAIL_ALREADY_EXISTS
        self.account_repo.save.assert_not_called()
        self.notifications.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_rejects_taken_username(self):
        self.account_repo.exists_by_username.return_value = True

        with pytest.raises(UsernameAlreadyExistsError) as exc_info:
            await self.service.create_account(NEW_PROFILE)

        assert exc_info.value.field == "username"
        self.account_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_sends_no_mail_when_store_rejects_account(self):
        self.account_repo.save.side_effect = EmailAlreadyExistsError(
            "ada@example.com",
        )

        with pytest.raises(EmailAlreadyExistsError):
            await self.service.create_account(NEW_PROFILE)

        self.notifications.dispatch.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_requires_password(self):
        profile = AccountProfile(username="ada", email="ada@example.com")

        with pytest.raises(WeakPasswordError):
            await self.service.create_account(profile)

    @pytest.mark.asyncio
    async def test_failed_notification_does_not_undo_creation(self):
        self.notifications.dispatch.return_value = False

        account = await self.service.create_account(NEW_PROFILE)

        self.account_repo.save.assert_awaited_once_with(account)


class TestIdentityServiceUpdate(_IdentityTestBase):
    """Tests for profile updates."""

    def _profile(self, **overrides) -> AccountProfile:
        fields = {
            "username": "ada",
            "email": "ada@example.com",
            "first_name": "Augusta",
            "last_name": "King",
        }
        fields.update(overrides)
        return AccountProfile(**fields)

    @pytest.mark.asyncio
    async def test_update_applies_profile_without_rotating(self):
        account = make_account(now=self.clock(), enabled=True)
        token = account.session_token.value
        self.account_repo.find_by_email.return_value = account

        updated = await self.service.update_account(
            "ada@example.com",
            self._profile(),
            token,
        )

        assert updated.first_name == "Augusta"
        assert updated.session_token.value == token
        self.password_service.hash.assert_not_called()
        self.account_repo.exists_by_email.assert_not_called()
        self.account_repo.exists_by_username.assert_not_called()
        self.account_repo.save.assert_awaited_once_with(account)

    @pytest.mark.asyncio
    async def test_update_keeps_role_and_names_left_out(self):
        account = make_account(
            now=self.clock(),
            enabled=True,
            role=AccountRole.ADMIN,
        )
        self.account_repo.find_by_email.return_value = account

        await self.service.update_account(
            "ada@example.com",
            AccountProfile(
                username="ada",
                email="ada@example.com",
                first_name=None,
                last_name=None,
                role=None,
            ),
            account.session_token.value,
        )

        assert account.role == AccountRole.ADMIN
        assert account.first_name == "Ada"
        assert account.last_name == "Lovelace"

    @pytest.mark.asyncio
    async def test_update_applies_explicit_role(self):
        account = make_account(now=self.clock(), enabled=True)
        self.account_repo.find_by_email.return_value = account

        await self.service.update_account(
            "ada@example.com",
            self._profile(role=AccountRole.ADMIN),
            account.session_token.value,
        )

        assert account.role == AccountRole.ADMIN

    @pytest.mark.asyncio
    async def test_update_rehashes_new_password(self):
        account = make_account(now=self.clock(), enabled=True)
        self.account_repo.find_by_email.return_value = account

        await self.service.update_account(
            "ada@example.com",
            self._profile(password="Changed#456"),
            account.session_token.value,
        )

        self.password_service.hash.assert_called_once_with("Changed#456")
        assert account.password_hash == "hashed_password"

    @pytest.mark.asyncio
    async def test_update_checks_changed_email_for_uniqueness(self):
        account = make_account(now=self.clock(), enabled=True)
        self.account_repo.find_by_email.return_value = account
        self.account_repo.exists_by_email.return_value = True

        with pytest.raises(EmailAlreadyExistsError):
            await self.service.update_account(
                "ada@example.com",
                self._profile(email="taken@example.com"),
                account.session_token.value,
            )

        self.account_repo.exists_by_email.assert_awaited_once_with(
            "taken@example.com",
        )
        self.account_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_checks_changed_username_for_uniqueness(self):
        account = make_account(now=self.clock(), enabled=True)
        self.account_repo.find_by_email.return_value = account
        self.account_repo.exists_by_username.return_value = True

        with pytest.raises(UsernameAlreadyExistsError):
            await self.service.update_account(
                "ada@example.com",
                self._profile(username="taken"),
                account.session_token.value,
            )

    @pytest.mark.asyncio
    async def test_update_with_foreign_token_is_mismatch(self):
        account = make_account(now=self.clock(), enabled=True)
        other = make_account(username="bob", email="bob@example.com")
        self.account_repo.find_by_email.return_value = account

        with pytest.raises(TokenMismatchError) as exc_info:
            await self.service.update_account(
                "ada@example.com",
                self._profile(),
                other.session_token.value,
            )

        assert exc_info.value.code == ErrorCode.TOKEN_MISMATCH

    @pytest.mark.asyncio
    async def test_update_after_window_is_expired(self):
        account = make_account(now=self.clock(), enabled=True)
        self.account_repo.find_by_email.return_value = account
        self.clock.advance(hours=3)

        with pytest.raises(SessionExpiredError):
            await self.service.update_account(
                "ada@example.com",
                self._profile(),
                account.session_token.value,
            )

    @pytest.mark.asyncio
    async def test_update_unknown_email(self):
        self.account_repo.find_by_email.return_value = None

        with pytest.raises(AccountNotFoundError):
            await self.service.update_account(
                "ghost@example.com",
                self._profile(),
                "a" * 36,
            )

    @pytest.mark.asyncio
    async def test_update_validates_token_format_first(self):
        with pytest.raises(TokenMalformedError):
            await self.service.update_account("ada@example.com", self._profile(), "")

        self.account_repo.find_by_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_deleted_account(self):
        account = make_account(now=self.clock(), enabled=True, deleted=True)
        self.account_repo.find_by_email.return_value = account

        with pytest.raises(AccountDeletedError):
            await self.service.update_account(
                "ada@example.com",
                self._profile(),
                account.session_token.value,
            )

    @pytest.mark.asyncio
    async def test_update_unconfirmed_account(self):
        account = make_account(now=self.clock())
        self.account_repo.find_by_email.return_value = account

        with pytest.raises(AccountNotActivatedError):
            await self.service.update_account(
                "ada@example.com",
                self._profile(),
                account.session_token.value,
            )


class TestIdentityServiceDelete(_IdentityTestBase):
    """Tests for account deletion."""

    @pytest.mark.asyncio
    async def test_delete_marks_account_deleted(self):
        account = make_account(now=self.clock(), enabled=True)

        await self.service.delete_account(account)

        assert account.deleted
        self.account_repo.save.assert_awaited_once_with(account)

    @pytest.mark.asyncio
    async def test_delete_twice_fails(self):
        account = make_account(now=self.clock(), enabled=True, deleted=True)

        with pytest.raises(AccountDeletedError):
            await self.service.delete_account(account)


class TestIdentityServiceLogin(_IdentityTestBase):
    """Tests for login."""

    @pytest.mark.asyncio
    async def test_login_with_live_token_returns_it_unchanged(self):
        account = make_account(now=self.clock(), enabled=True)
        token = account.session_token.value
        self.account_repo.find_by_email.return_value = account
        self.password_service.verify.return_value = True
        self.clock.advance(hours=1)

        result = await self.service.login("ada@example.com", TEST_PASSWORD)

        assert result.token == token
        assert not result.rotated
        self.account_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_login_with_stale_token_rotates(self):
        account = make_account(now=self.clock(), enabled=True)
        token = account.session_token.value
        self.account_repo.find_by_email.return_value = account
        self.password_service.verify.return_value = True
        self.clock.advance(hours=5)

        result = await self.service.login("ada@example.com", TEST_PASSWORD)

        assert result.token != token
        assert result.rotated
        assert account.session_token.is_live(self.clock(), DEFAULT_POLICY)
        self.account_repo.save.assert_awaited_once_with(account)

    @pytest.mark.asyncio
    async def test_login_falls_back_to_username(self):
        account = make_account(now=self.clock(), enabled=True)
        self.account_repo.find_by_email.return_value = None
        self.account_repo.find_by_username.return_value = account
        self.password_service.verify.return_value = True

        result = await self.service.login("ada", TEST_PASSWORD)

        assert result.account is account
        self.account_repo.find_by_username.assert_awaited_once_with("ada")

    @pytest.mark.asyncio
    async def test_login_unknown_identifier(self):
        self.account_repo.find_by_email.return_value = None
        self.account_repo.find_by_username.return_value = None

        with pytest.raises(AccountNotFoundError):
            await self.service.login("ghost", TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_login_wrong_password(self):
        account = make_account(now=self.clock(), enabled=True)
        self.account_repo.find_by_email.return_value = account
        self.password_service.verify.return_value = False

        with pytest.raises(CredentialMismatchError) as exc_info:
            await self.service.login("ada@example.com", "Wrong#123")

        assert exc_info.value.code == ErrorCode.PASSWORD_MISMATCH

    @pytest.mark.asyncio
    async def test_login_deleted_account(self):
        account = make_account(now=self.clock(), enabled=True, deleted=True)
        self.account_repo.find_by_email.return_value = account

        with pytest.raises(AccountDeletedError):
            await self.service.login("ada@example.com", TEST_PASSWORD)

        self.password_service.verify.assert_not_called()

    @pytest.mark.asyncio
    async def test_login_unconfirmed_account(self):
        account = make_account(now=self.clock())
        self.account_repo.find_by_email.return_value = account

        with pytest.raises(AccountNotActivatedError):
            await self.service.login("ada@example.com", TEST_PASSWORD)


class TestIdentityServiceCount(_IdentityTestBase):
    """Tests for counting active accounts."""

    @pytest.mark.asyncio
    async def test_count_active_delegates_to_repository(self):
        self.account_repo.count_active.return_value = 3

        assert await self.service.count_active() == 3
