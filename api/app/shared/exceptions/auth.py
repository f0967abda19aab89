"""
Excepciones relacionadas con autenticación del área de administración.
"""
from app.shared.exceptions.base import AppException


class AuthException(AppException):
    """Excepción base para errores de autenticación."""

    def __init__(self, message: str, error_code: str = "AUTH_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=401,
            error_code=error_code,
            details=details
        )


class InvalidCredentialsException(AuthException):
    """Excepción para credenciales inválidas o ausentes."""

    def __init__(self):
        super().__init__(
            message="Credenciales inválidas",
            error_code="INVALID_CREDENTIALS"
        )


class AdminAuthNotConfiguredException(AppException):
    """Las credenciales de admin no están configuradas (ADMIN_USERNAME/ADMIN_PASSWORD)."""

    def __init__(self):
        super().__init__(
            message="Auth de administración no configurado (ADMIN_USERNAME/ADMIN_PASSWORD vacíos)",
            status_code=503,
            error_code="ADMIN_AUTH_NOT_CONFIGURED"
        )
