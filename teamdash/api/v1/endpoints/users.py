# teamdash/api/v1/endpoints/users.py
from fastapi import APIRouter, Depends, status
from typing import List

from teamdash.api import deps
from teamdash.core import security
from teamdash.db.store import Store
from teamdash.schemas import user as user_schema
from teamdash.services.auth import AuthService

router = APIRouter()

@router.get("/me", response_model=user_schema.User)
def read_user_me(current_user: user_schema.User = Depends(security.get_current_user)):
    """
    Get the details for the currently logged-in user.
    """
    return current_user

@router.put("/me/password", status_code=status.HTTP_204_NO_CONTENT)
def update_user_password(
    passwords: user_schema.PasswordUpdate,
    auth: AuthService = Depends(deps.get_auth_service),
    current_user: user_schema.User = Depends(security.get_current_user)
):
    """
    Allows a logged-in user to change their own password.
    """
    auth.change_password(current_user, passwords)
    return

@router.get("", response_model=List[user_schema.User])
def get_all_users(
    store: Store = Depends(deps.get_store),
    manager: user_schema.User = Depends(security.get_current_manager_user)
):
    """ Retrieves a list of all users. """
    return store.list_users()
