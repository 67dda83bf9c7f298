from typing import Optional

from househunter.core.errors import EmailAlreadyExists, InvalidCredentials
from househunter.core.logger import logger
from househunter.core.security import PasswordHasher, TokenCodec
from househunter.core.session import SessionClaims
from househunter.models.user import User
from househunter.schemas.auth import LoginRequest, RegisterRequest
from househunter.services.credential_store import CredentialStore, normalize_email


class AuthService:
    def __init__(
        self,
        *,
        store: CredentialStore,
        hasher: PasswordHasher,
        codec: TokenCodec,
    ):
        self.store = store
        self.hasher = hasher
        self.codec = codec

    def register(self, req: RegisterRequest) -> User:
        email = normalize_email(req.email)

        # fast path only; the unique index on insert is authoritative
        if self.store.find_by_email(email):
            logger.warning(f"REGISTER REJECTED | email={email} | reason=duplicate")
            raise EmailAlreadyExists()

        user = User(
            email=email,
            full_name=req.full_name,
            role=req.role,
            phone_number=req.phone_number,
            password_hash=self.hasher.hash(req.password),
        )
        try:
            user = self.store.insert(user)
        except EmailAlreadyExists:
            logger.warning(f"REGISTER REJECTED | email={email} | reason=unique_violation")
            raise

        logger.info(f"REGISTER SUCCESS | user_id={user.id} | email={email}")
        return user

    def login(self, req: LoginRequest) -> str:
        email = normalize_email(req.email)
        user: Optional[User] = self.store.find_by_email(email)

        # unknown email and wrong password must look the same to the caller
        if not user or not self.hasher.verify(req.password, user.password_hash):
            logger.warning(f"LOGIN FAILED | email={email}")
            raise InvalidCredentials()

        token = self.codec.sign({"email": user.email, "role": user.role})
        logger.info(f"LOGIN SUCCESS | user_id={user.id} | email={email}")
        return token

    def reissue(self, session: SessionClaims) -> str:
        return self.codec.sign(session.to_claims())
