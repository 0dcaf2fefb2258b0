from fastapi import APIRouter, Depends
from sqlmodel import Session
from taskboard.database import get_session
from taskboard.dependencies import deadline_dependency
from taskboard.schemas.token import AuthResponse
from taskboard.schemas.user import UserCreate, UserLogin, UserRead
from taskboard.services import users
from taskboard.services.auth import user_dependency


router = APIRouter(prefix="/auth", tags=["Authenticator"])
db_session = Depends(get_session)


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(user: UserCreate, deadline: deadline_dependency,
                   session: Session = db_session):
    return users.register_user(session, user, deadline)


@router.post("/login", response_model=AuthResponse)
async def login(credentials: UserLogin, deadline: deadline_dependency,
                session: Session = db_session):
    return users.login_user(session, credentials, deadline)


@router.get("/profile", response_model=UserRead)
async def profile(current_user: user_dependency, deadline: deadline_dependency,
                  session: Session = db_session):
    return users.get_profile(session, current_user.id, deadline)
