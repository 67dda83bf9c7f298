from typing import List

from fastapi import APIRouter, Depends

from househunter.dependencies.auth import get_credential_store
from househunter.schemas.auth import UserOut
from househunter.services.credential_store import CredentialStore

router = APIRouter(tags=["Users"])


@router.get("/users", response_model=List[UserOut])
def get_all_users(store: CredentialStore = Depends(get_credential_store)):
    return [UserOut.model_validate(user) for user in store.list_all()]
