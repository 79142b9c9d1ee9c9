# teamdash/core/security.py
# Handles password hashing, JWTs, and the current-user dependencies.
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from jose import JWTError, jwt
from passlib.context import CryptContext
from datetime import datetime, timedelta

from teamdash.db import session
from teamdash.db.store import Store
from teamdash.core.config import settings
from teamdash.core.errors import UnauthorizedError
from teamdash.schemas import user as user_schema
from teamdash.services import policy

# --- Password Hashing ---
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")
def verify_password(plain: str, hashed: str) -> bool: return pwd_context.verify(plain, hashed)
def get_password_hash(pwd: str) -> str: return pwd_context.hash(pwd)

# --- JWT Creation ---
def create_access_token(data: dict) -> str:
    to_encode = data.copy()
    expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

def decode_access_token(token: str) -> user_schema.TokenData:
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise UnauthorizedError("Could not validate credentials")
    email = payload.get("sub")
    if email is None:
        raise UnauthorizedError("Could not validate credentials")
    return user_schema.TokenData(email=email)

# --- Role-Checking Dependencies ---
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")

def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(session.get_db)) -> user_schema.User:
    """Resolve the acting user once; services receive it as an explicit argument."""
    token_data = decode_access_token(token)
    user = Store(db).get_user_by_email(token_data.email)
    if user is None:
        raise UnauthorizedError("Could not validate credentials")
    return user

def get_current_manager_user(current_user: user_schema.User = Depends(get_current_user)) -> user_schema.User:
    policy.require_manager(current_user, "access this resource")
    return current_user
