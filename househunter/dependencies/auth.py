from fastapi import Depends, Request
from sqlalchemy.orm import Session

from househunter.core.auth_context import extract_token
from househunter.core.errors import InvalidOrExpiredToken, TokenError
from househunter.core.logger import logger
from househunter.core.security import PasswordHasher, TokenCodec
from househunter.core.session import SessionClaims
from househunter.db.session import get_db
from househunter.services.auth_service import AuthService
from househunter.services.credential_store import CredentialStore


def get_token_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_password_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_credential_store(db: Session = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_auth_service(
    store: CredentialStore = Depends(get_credential_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    codec: TokenCodec = Depends(get_token_codec),
) -> AuthService:
    return AuthService(store=store, hasher=hasher, codec=codec)


def get_current_session(
    request: Request,
    codec: TokenCodec = Depends(get_token_codec),
) -> SessionClaims:
    """
    Session gate for protected routes.
    No header -> MissingToken (401); any codec failure -> InvalidOrExpiredToken (403).
    """
    token = extract_token(request, request.app.state.settings.TOKEN_HEADER)

    try:
        session = codec.verify(token)
    except TokenError as exc:
        logger.info(f"TOKEN REJECTED | reason={exc.kind} | path={request.url.path}")
        raise InvalidOrExpiredToken()

    request.state.session = session
    return session
