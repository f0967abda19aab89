"""
Autenticación del área de administración (un único usuario admin por env).

Solo valida credenciales HTTP Basic; no emite tokens.
"""

from __future__ import annotations

import hmac


class AdminAuthService:
    """
    Verifica credenciales contra el usuario/contraseña admin configurados.

    Usa comparación en tiempo constante (hmac.compare_digest).
    """

    def __init__(self, admin_username: str, admin_password: str) -> None:
        self._admin_username = admin_username or ""
        self._admin_password = admin_password or ""

    def is_configured(self) -> bool:
        return bool(self._admin_username and self._admin_password)

    def verify(self, username: str, password: str) -> bool:
        if not self.is_configured():
            return False

        # Se evalúan ambas comparaciones siempre (sin cortocircuito)
        username_ok = hmac.compare_digest(
            (username or "").encode("utf-8"), self._admin_username.encode("utf-8")
        )
        password_ok = hmac.compare_digest(
            (password or "").encode("utf-8"), self._admin_password.encode("utf-8")
        )
        return username_ok and password_ok
