from datetime import timedelta
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from typing import Optional, Annotated
from ..config import get_settings
from ..errors import Unauthenticated
from ..schemas.token import TokenData
from ..utils.time import get_time_stamp


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None):
    settings = get_settings()
    to_encode = data.copy()
    expire = (get_time_stamp() +
              (expires_delta or timedelta(minutes=settings.access_token_expire_minutes)))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def token_for_user(user) -> str:
    return create_access_token(data={"sub": str(user.id), "email": str(user.email)})


def resolve_token(token: str) -> TokenData:
    """
    Resolves a bearer token into the caller's identity.

    Raises:
        Unauthenticated: If the token is malformed, expired, or lacks the
            user id.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        raise Unauthenticated("Invalid or expired token")
    user_id: str = payload.get("sub")
    email: str = payload.get("email")
    if user_id is None:
        raise Unauthenticated()
    return TokenData(id=user_id, email=email or "")


async def get_current_user(
    token: Annotated[str, Depends(oauth2_scheme)]) -> TokenData:
    return resolve_token(token)


user_dependency = Annotated[TokenData, Depends(get_current_user)]
