# teamdash/api/v1/endpoints/auth.py
from fastapi import APIRouter, Depends, status
from fastapi.security import OAuth2PasswordRequestForm

from teamdash.api import deps
from teamdash.schemas import user as user_schema
from teamdash.services.auth import AuthService

router = APIRouter()

@router.post("/register", response_model=user_schema.User, status_code=status.HTTP_201_CREATED)
def register(user_in: user_schema.UserCreate, auth: AuthService = Depends(deps.get_auth_service)):
    return auth.register(user_in)

@router.post("/token", response_model=user_schema.Token)
def login(form_data: OAuth2PasswordRequestForm = Depends(), auth: AuthService = Depends(deps.get_auth_service)):
    # OAuth2 form login, the username field carries the email
    return auth.login(form_data.username, form_data.password)

@router.post("/login", response_model=user_schema.Token)
def login_json(credentials: user_schema.LoginRequest, auth: AuthService = Depends(deps.get_auth_service)):
    return auth.login(credentials.email, credentials.password)
