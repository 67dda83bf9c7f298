from fastapi import APIRouter, Depends

from househunter.core.session import SessionClaims
from househunter.dependencies.auth import get_current_session
from househunter.schemas.auth import SessionResponse

router = APIRouter(tags=["Protected"])


@router.get("/protected", response_model=SessionResponse)
def protected(session: SessionClaims = Depends(get_current_session)):
    return {"message": "This is a protected route", "user": session.to_dict()}


@router.post("/secured-endpoint", response_model=SessionResponse)
def secured_endpoint(session: SessionClaims = Depends(get_current_session)):
    return {"message": "Access granted", "user": session.to_dict()}
