"""
Dependencias de seguridad: restringe endpoints al usuario administrador.
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from app.core.config import settings
from app.infrastructure.security.admin_auth_service import AdminAuthService
from app.shared.exceptions.auth import (
    AdminAuthNotConfiguredException,
    InvalidCredentialsException,
)


_basic_auth = HTTPBasic(auto_error=False)


def get_admin_auth_service() -> AdminAuthService:
    """Servicio de verificacion de credenciales admin desde la configuracion."""
    return AdminAuthService(settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)


def require_admin(
    credentials: Optional[HTTPBasicCredentials] = Depends(_basic_auth),
    auth_service: AdminAuthService = Depends(get_admin_auth_service),
) -> str:
    """
    Exige credenciales HTTP Basic del administrador.

    Returns:
        str: Usuario autenticado

    Raises:
        AdminAuthNotConfiguredException: si no hay credenciales configuradas (503)
        InvalidCredentialsException: si faltan o no coinciden (401)
    """
    if not auth_service.is_configured():
        raise AdminAuthNotConfiguredException()

    if credentials is None or not auth_service.verify(credentials.username, credentials.password):
        raise InvalidCredentialsException()

    return credentials.username
