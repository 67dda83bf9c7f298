from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from househunter.core.errors import TokenError
from househunter.core.session import SessionClaims

DEFAULT_BCRYPT_ROUNDS = 10
DEFAULT_TOKEN_TTL = timedelta(hours=1)


def _normalize_password(password: str) -> str:
    """
    bcrypt only looks at the first 72 bytes.
    Truncate on a UTF-8 boundary so multi-byte characters are not split.
    """
    return password.encode("utf-8")[:72].decode("utf-8", errors="ignore")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PasswordHasher:
    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        if not password:
            raise ValueError("Password must not be empty")
        return self._context.hash(_normalize_password(password))

    def verify(self, password: str, hashed: str) -> bool:
        if not password or not hashed:
            return False
        try:
            return self._context.verify(_normalize_password(password), hashed)
        except (ValueError, TypeError):
            # unrecognised or corrupted hash record
            return False


class TokenCodec:
    """
    Signs and verifies HS256 session tokens.

    verify() checks, in order: the token parses as a JWT, the signature
    matches the secret, and the clock is still before `exp`. The first
    failing check decides the TokenError kind.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret:
            raise ValueError("TokenCodec requires a non-empty secret")
        self._secret = secret
        self._algorithm = algorithm
        self.ttl = ttl
        self._clock = clock or _utcnow

    def sign(self, claims: dict, ttl: Optional[timedelta] = None) -> str:
        now = self._clock()
        to_encode = claims.copy()
        to_encode.update({
            "iat": int(now.timestamp()),
            "exp": int((now + (ttl or self.ttl)).timestamp()),
        })
        return jwt.encode(to_encode, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> SessionClaims:
        if not token:
            raise TokenError(TokenError.MALFORMED, "empty token")

        try:
            jwt.get_unverified_claims(token)
        except JWTError as exc:
            raise TokenError(TokenError.MALFORMED, str(exc))

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise TokenError(TokenError.BAD_SIGNATURE, str(exc))

        exp = payload.get("exp")
        if not isinstance(exp, int) or isinstance(exp, bool):
            raise TokenError(TokenError.MALFORMED, "missing exp claim")
        if int(self._clock().timestamp()) >= exp:
            raise TokenError(TokenError.EXPIRED)

        email = payload.get("email")
        if not email:
            raise TokenError(TokenError.MALFORMED, "missing email claim")

        return SessionClaims(
            email=email,
            role=payload.get("role"),
            issued_at=payload.get("iat"),
            expires_at=exp,
        )
