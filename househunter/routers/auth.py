from fastapi import APIRouter, Depends, status

from househunter.core.logger import logger
from househunter.core.session import SessionClaims
from househunter.dependencies.auth import get_auth_service, get_current_session
from househunter.schemas.auth import (
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
)
from househunter.services.auth_service import AuthService

router = APIRouter(tags=["Auth"])


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(req: RegisterRequest, svc: AuthService = Depends(get_auth_service)):
    svc.register(req)
    return {"message": "User registered successfully"}


@router.post("/login", response_model=TokenResponse)
def login(req: LoginRequest, svc: AuthService = Depends(get_auth_service)):
    return {"token": svc.login(req)}


@router.post("/jwt", response_model=TokenResponse)
def reissue_token(
    session: SessionClaims = Depends(get_current_session),
    svc: AuthService = Depends(get_auth_service),
):
    return {"token": svc.reissue(session)}


@router.post("/logout", response_model=MessageResponse)
def logout(session: SessionClaims = Depends(get_current_session)):
    # sessions are stateless; the client just drops its token
    logger.info(f"LOGOUT | email={session.email}")
    return {"message": "Logged out successfully"}
