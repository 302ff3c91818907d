from typing import Optional

from dependency_injector.wiring import Provide, inject
from fastapi import Cookie, Depends
from opentelemetry import trace

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError
from src.service.marketplace.domain.entity.user_entity import UserEntity, UserRole
from src.service.marketplace.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


tracer = trace.get_tracer(__name__)


class RoleAuthStrategy:
    @staticmethod
    def is_buyer(user: UserEntity) -> bool:
        return user.role == UserRole.BUYER

    @staticmethod
    def is_farmer(user: UserEntity) -> bool:
        return user.role == UserRole.FARMER


@inject
async def get_current_user(
    jwt_auth: JwtAuth = Depends(Provide[Container.jwt_auth]),
    token: Optional[str] = Cookie(None, alias=settings.AUTH_COOKIE_NAME),
) -> UserEntity:
    """Get current user from JWT token (stateless, no DB query)"""
    return jwt_auth.get_current_user_info_from_jwt(token)


async def require_buyer(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    with tracer.start_as_current_span(
        'auth.require_buyer',
        attributes={'user.id': current_user.id, 'user.role': current_user.role.value},
    ):
        if not RoleAuthStrategy.is_buyer(current_user):
            raise ForbiddenError('Only buyers can perform this action')
        return current_user


async def require_farmer(current_user: UserEntity = Depends(get_current_user)) -> UserEntity:
    with tracer.start_as_current_span(
        'auth.require_farmer',
        attributes={'user.id': current_user.id, 'user.role': current_user.role.value},
    ):
        if not RoleAuthStrategy.is_farmer(current_user):
            raise ForbiddenError('Only farmers can perform this action')
        return current_user
