import logging
from typing import Optional

from sqlmodel import Session, select

from ..errors import NotFound, Unauthenticated, ValidationError
from ..models import User
from ..schemas.token import AuthResponse
from ..schemas.user import UserCreate, UserLogin, UserPublic, UserRead
from ..utils.security import hash_password, verify_password
from .auth import token_for_user
from .transaction import unit_of_work


# Logger
logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def authenticate_user(session: Session, email: str, password: str) -> Optional[User]:
    statement = select(User).where(User.email == _normalize_email(email))
    user = session.exec(statement).first()
    if user and verify_password(password, user.hashed_password):
        return user
    return None


def register_user(session: Session, data: UserCreate, deadline: float = None) -> AuthResponse:
    name = (data.name or "").strip()
    if not data.password or not name:
        raise ValidationError("Email, password, and name are required")
    email = _normalize_email(data.email)

    with unit_of_work(session, deadline):
        existing_user = session.exec(select(User).where(User.email == email)).first()
        if existing_user:
            raise ValidationError("User already exists with this email")
        new_user = User(email=email, name=name, hashed_password=hash_password(data.password))
        session.add(new_user)

    session.refresh(new_user)
    logger.info(f"User registered: {new_user.id}")
    return AuthResponse(
        message="User registered successfully",
        token=token_for_user(new_user),
        user=UserPublic.model_validate(new_user),
    )


def login_user(session: Session, data: UserLogin, deadline: float = None) -> AuthResponse:
    if not data.password:
        raise ValidationError("Email and password are required")
    with unit_of_work(session, deadline):
        user = authenticate_user(session, data.email, data.password)
        if not user:
            raise Unauthenticated("Invalid email or password")
        response = AuthResponse(
            message="Login successful",
            token=token_for_user(user),
            user=UserPublic.model_validate(user),
        )
    return response


def get_profile(session: Session, user_id: str, deadline: float = None) -> UserRead:
    with unit_of_work(session, deadline):
        user = session.get(User, user_id)
        if not user:
            raise NotFound("User not found")
        profile = UserRead.model_validate(user)
    return profile
