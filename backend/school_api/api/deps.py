from typing import Callable, Optional, Type

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel import Session, SQLModel

from ..config import Settings, get_settings
from ..database import get_session
from ..errors import MissingToken
from ..services.auth import Principal, decode_token
from ..services.repository import Repository
from ..services.resources import ResourceConfig, ResourceService

bearer_scheme = HTTPBearer(auto_error=False)


def repository_for(model: Type[SQLModel]) -> Callable[..., Repository]:
    """Build a dependency yielding a repository bound to the request session."""

    def get_repository(session: Session = Depends(get_session)) -> Repository:
        return Repository(session, model)

    return get_repository


def service_for(config: ResourceConfig) -> Callable[..., ResourceService]:
    get_repository = repository_for(config.model)

    def get_service(repo: Repository = Depends(get_repository)) -> ResourceService:
        return ResourceService(repo, config)

    return get_service


def authenticate(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> Principal:
    """Require a valid bearer token and attach the decoded principal to the request."""
    if credentials is None or not credentials.credentials:
        raise MissingToken()
    principal = decode_token(credentials.credentials, settings)
    request.state.user = principal
    return principal
