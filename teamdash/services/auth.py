# teamdash/services/auth.py
import logging

from teamdash.core import security
from teamdash.core.enums import Role, parse_enum_or_default
from teamdash.core.errors import BadRequestError, UnauthorizedError
from teamdash.db.store import Store
from teamdash.schemas.user import PasswordUpdate, Token, User, UserCreate

logger = logging.getLogger(__name__)


class AuthService:

    def __init__(self, store: Store):
        self.store = store

    def register(self, request: UserCreate) -> User:
        if self.store.email_exists(request.email):
            raise BadRequestError("Email is already in use")
        role = parse_enum_or_default(Role, request.role, Role.EMPLOYEE)
        with self.store.atomic():
            user = self.store.add_user(
                name=request.name, email=request.email,
                hashed_password=security.get_password_hash(request.password), role=role.value,
            )
        logger.info("Registered user %s with role %s", user.email, user.role.value)
        return user

    def login(self, email: str, password: str) -> Token:
        credentials = self.store.get_credentials(email)
        if credentials is None or not security.verify_password(password, credentials[1]):
            logger.warning("Failed login for %s", email)
            raise UnauthorizedError("Invalid email or password")
        user = credentials[0]
        access_token = security.create_access_token(data={"sub": user.email, "uid": user.id, "role": user.role.value})
        return Token(access_token=access_token, user_id=user.id, name=user.name, role=user.role)

    def change_password(self, user: User, passwords: PasswordUpdate) -> None:
        hashed = self.store.get_password_hash(user.id)
        if hashed is None or not security.verify_password(passwords.current_password, hashed):
            raise BadRequestError("Incorrect current password")
        with self.store.atomic():
            self.store.set_password(user.id, security.get_password_hash(passwords.new_password))
