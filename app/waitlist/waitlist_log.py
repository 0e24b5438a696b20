from datetime import datetime, timezone
from pathlib import Path


class InvalidEmailError(ValueError):
    """Raised when a waitlist signup does not look like an email address."""


def is_valid_email(email: object) -> bool:
    if not isinstance(email, str):
        return False
    value = email.strip()
    return "@" in value and "." in value


class WaitlistLog:
    """Append-only text log of waitlist signups."""

    def __init__(self, path: Path) -> None:
        self._path = path

    def add(self, email: object, now: datetime | None = None) -> None:
        """Append `<timestamp>  <email>` to the log.

        Raises:
            InvalidEmailError: if `email` is not plausibly an address.
        """
        if not is_valid_email(email):
            raise InvalidEmailError("Invalid email")
        stamp = (now or datetime.now(timezone.utc)).isoformat()
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(f"{stamp}  {str(email).strip()}\n")
