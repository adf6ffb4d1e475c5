import logging
import bcrypt

logger = logging.getLogger(__name__)


class PasswordEncoder:
    """bcrypt-backed credential verifier."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def encode(self, raw_password: str) -> str:
        hashed = bcrypt.hashpw(raw_password.encode("utf-8"), bcrypt.gensalt(self.rounds))
        return hashed.decode("utf-8")

    def matches(self, raw_password: str, encoded_password: str | None) -> bool:
        if not raw_password or not encoded_password:
            return False
        try:
            return bcrypt.checkpw(
                raw_password.encode("utf-8"), encoded_password.encode("utf-8")
            )
        except ValueError:
            logger.warning("Stored password is not a valid bcrypt hash")
            return False
