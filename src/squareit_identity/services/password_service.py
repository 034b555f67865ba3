"""bcrypt-backed credential hasher and the password rules."""

from collections.abc import Callable

import bcrypt

from squareit_identity.exceptions import WeakPasswordError

SPECIAL_CHARACTERS = frozenset("!@#$%^&*()_+-=[]{};':\"\\|,.<>/?`~")

# (description used in the error message, check on a single character)
_CHARACTER_CLASSES: tuple[tuple[str, Callable[[str], bool]], ...] = (
    ("an uppercase letter", str.isupper),
    ("a lowercase letter", str.islower),
    ("a digit", str.isdigit),
    ("a special character", SPECIAL_CHARACTERS.__contains__),
)


class PasswordHashingService:
    """Hashes and verifies passwords and enforces the password rules.

    Parameters
    ----------
    rounds
        bcrypt cost factor. Tests lower it to keep hashing fast.

    Examples
    --------
    >>> hasher = PasswordHashingService(rounds=4)
    >>> stored = hasher.hash("Secret#123")
    >>> hasher.verify("Secret#123", stored), hasher.verify("secret", stored)
    (True, False)
    """

    MIN_LENGTH = 8
    MAX_LENGTH = 30

    def __init__(self, rounds: int = 12):
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Return the bcrypt hash of ``password`` after checking its strength.

        Raises
        ------
        WeakPasswordError
            If the password breaks one of the rules
        """
        self.validate_strength(password)
        digest = bcrypt.hashpw(password.encode(), bcrypt.gensalt(self._rounds))
        return digest.decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """Check ``password`` against a stored hash. Unreadable hashes never match."""
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except (ValueError, TypeError):
            return False

    def validate_strength(self, password: str) -> None:
        """Raise ``WeakPasswordError`` unless the password follows the rules.

        A valid password has between ``MIN_LENGTH`` and ``MAX_LENGTH``
        characters and contains at least one character of every class in
        ``_CHARACTER_CLASSES``.
        """
        if not password:
            raise WeakPasswordError("Password cannot be empty")

        length = len(password)
        if length < self.MIN_LENGTH:
            raise WeakPasswordError(
                f"Password must be at least {self.MIN_LENGTH} characters",
            )
        if length > self.MAX_LENGTH:
            raise WeakPasswordError(
                f"Password cannot exceed {self.MAX_LENGTH} characters",
            )

        missing = [
            description
            for description, matches in _CHARACTER_CLASSES
            if not any(matches(char) for char in password)
        ]
        if missing:
            raise WeakPasswordError(f"Password must contain {', '.join(missing)}")
