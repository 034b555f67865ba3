from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class SessionPolicy:
    """Window lengths for the two token clocks.

    Attributes
    ----------
    confirmation_window
        How long a (re)issued token may be used to confirm the account.
    session_window
        How long after its last use a token stays live.
    """

    confirmation_window: timedelta = timedelta(hours=24)
    session_window: timedelta = timedelta(hours=2)
