"""Account schemas for request/response models."""

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)

from squareit_identity import (
    Account,
    AccountProfile,
    AccountRole,
    PasswordHashingService,
    WeakPasswordError,
)

EMAIL_MIN_LENGTH = 6
EMAIL_MAX_LENGTH = 50

_password_rules = PasswordHashingService()


def _check_email_length(email: str) -> str:
    if not EMAIL_MIN_LENGTH <= len(email) <= EMAIL_MAX_LENGTH:
        msg = (
            f"Email must be between {EMAIL_MIN_LENGTH} and "
            f"{EMAIL_MAX_LENGTH} characters"
        )
        raise ValueError(msg)
    return email


def _check_password_strength(password: str) -> str:
    try:
        _password_rules.validate_strength(password)
    except WeakPasswordError as e:
        raise ValueError(e.message) from e
    return password


class _ProfileFields(BaseModel):
    username: str = Field(..., min_length=2, max_length=30)
    first_name: str = Field(default="", max_length=30)
    last_name: str = Field(default="", max_length=30)
    email: EmailStr
    role: AccountRole = AccountRole.USER

    @field_validator("email")
    @classmethod
    def _validate_email_length(cls, v: str) -> str:
        return _check_email_length(v)


class AccountCreateRequest(_ProfileFields):
    """Request schema for account registration."""

    password: str
    confirm_password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "ada",
                "first_name": "Ada",
                "last_name": "Lovelace",
                "email": "ada@example.com",
                "password": "Engine#1843",
                "confirm_password": "Engine#1843",
            },
        },
    )

    @field_validator("password")
    @classmethod
    def _validate_password(cls, v: str) -> str:
        return _check_password_strength(v)

    @model_validator(mode="after")
    def _passwords_match(self) -> "AccountCreateRequest":
        if self.password != self.confirm_password:
            msg = "Passwords do not match"
            raise ValueError(msg)
        return self

    def to_profile(self) -> AccountProfile:
        return AccountProfile(
            username=self.username,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            password=self.password,
            role=self.role,
        )


class AccountUpdateRequest(_ProfileFields):
    """Request schema for a profile update.

    ``current_email`` identifies the account; ``email`` is its new value.
    Leaving ``password``, a name or ``role`` out keeps the stored value.
    """

    current_email: EmailStr
    first_name: str | None = Field(default=None, max_length=30)
    last_name: str | None = Field(default=None, max_length=30)
    role: AccountRole | None = None
    password: str | None = None
    confirm_password: str | None = None

    @field_validator("password")
    @classmethod
    def _validate_password(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return _check_password_strength(v)

    @model_validator(mode="after")
    def _passwords_match(self) -> "AccountUpdateRequest":
        if self.password is not None and self.password != self.confirm_password:
            msg = "Passwords do not match"
            raise ValueError(msg)
        return self

    def to_profile(self) -> AccountProfile:
        return AccountProfile(
            username=self.username,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            password=self.password,
            role=self.role,
        )


class LoginRequest(BaseModel):
    """Request schema for login by email or username."""

    identifier: str = Field(..., min_length=1, description="Email or username")
    password: str = Field(..., min_length=1)


class AccountResponse(BaseModel):
    """Account data together with the caller's current session token."""

    username: str
    first_name: str
    last_name: str
    email: str
    role: AccountRole
    enabled: bool
    token: str

    @classmethod
    def from_account(cls, account: Account, token: str) -> "AccountResponse":
        return cls(
            username=account.username,
            first_name=account.first_name,
            last_name=account.last_name,
            email=account.email,
            role=account.role,
            enabled=account.enabled,
            token=token,
        )
