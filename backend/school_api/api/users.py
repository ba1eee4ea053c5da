from typing import List

from fastapi import APIRouter, Depends, status

from .. import schemas
from ..config import Settings, get_settings
from ..models import User
from ..services import auth
from ..services.repository import Repository
from .deps import authenticate, repository_for

router = APIRouter(tags=["users"])
get_user_repository = repository_for(User)


@router.post("/register", response_model=schemas.RegisterResponse, status_code=status.HTTP_201_CREATED)
def register_route(
    payload: schemas.UserCreate,
    repo: Repository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
):
    user = auth.register_user(repo, payload, settings)
    return schemas.RegisterResponse(message="User registered", user_id=user.id)


@router.post("/login", response_model=schemas.TokenResponse)
def login_route(
    payload: schemas.UserLogin,
    repo: Repository = Depends(get_user_repository),
    settings: Settings = Depends(get_settings),
):
    return schemas.TokenResponse(token=auth.login(repo, payload, settings))


@router.get("/users", response_model=List[schemas.UserRead], dependencies=[Depends(authenticate)])
def list_users_route(repo: Repository = Depends(get_user_repository)):
    return auth.list_users(repo)
