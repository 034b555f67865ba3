"""Request helpers for API tests."""

from tests.shared.fixtures.factories import TEST_PASSWORD


def registration_payload(
    username: str = "alice",
    email: str = "a@x.com",
    password: str = TEST_PASSWORD,
    role: str | None = None,
) -> dict:
    payload = {
        "username": username,
        "first_name": "Alice",
        "last_name": "Liddell",
        "email": email,
        "password": password,
        "confirm_password": password,
    }
    if role is not None:
        payload["role"] = role
    return payload


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
