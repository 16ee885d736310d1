import base64
import hashlib
import hmac
import secrets

from pydantic import SecretStr

from app.domain.common.utils import DateTimeUtils


class PasswordHasher:
    """PBKDF2-SHA256 hashes encoded as ``pbkdf2_sha256$<iterations>$<salt>$<hex>``."""

    ALGORITHM = 'pbkdf2_sha256'

    def __init__(self, iterations: int) -> None:
        self._iterations = iterations

    def hash(self, password: str) -> str:
        salt = secrets.token_hex(16)
        digest = self._digest(password, salt, self._iterations)
        return f'{self.ALGORITHM}${self._iterations}${salt}${digest}'

    def verify(self, password: str, encoded: str) -> bool:
        try:
            algorithm, iterations, salt, expected = encoded.split('$')
            rounds = int(iterations)
        except ValueError:
            return False

        if algorithm != self.ALGORITHM:
            return False

        return hmac.compare_digest(self._digest(password, salt, rounds), expected)

    @staticmethod
    def _digest(password: str, salt: str, iterations: int) -> str:
        return hashlib.pbkdf2_hmac(
            'sha256', password.encode('utf-8'), salt.encode('utf-8'), iterations
        ).hex()


class TokenService:
    """Issues signed, expiring sign-in tokens (``<user_id>.<expires>.<signature>``)."""

    def __init__(self, secret: SecretStr, ttl_seconds: int) -> None:
        self._secret = secret.get_secret_value().encode('utf-8')
        self._ttl_seconds = ttl_seconds

    def issue(self, user_id: int) -> str:
        payload = f'{user_id}.{DateTimeUtils.timestamp() + self._ttl_seconds}'
        token = f'{payload}.{self._sign(payload)}'
        return base64.urlsafe_b64encode(token.encode('ascii')).decode('ascii')

    def verify(self, token: str) -> int | None:
        """Return the user id carried by a valid, unexpired *token*."""
        try:
            decoded = base64.urlsafe_b64decode(token.encode('ascii')).decode('ascii')
            user_id, expires, signature = decoded.split('.')
            payload = f'{user_id}.{expires}'
            valid = hmac.compare_digest(self._sign(payload), signature)
            if not valid or int(expires) < DateTimeUtils.timestamp():
                return None
            return int(user_id)
        except (ValueError, UnicodeError):
            return None

    def _sign(self, payload: str) -> str:
        return hmac.new(self._secret, payload.encode('ascii'), hashlib.sha256).hexdigest()
