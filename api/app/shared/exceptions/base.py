"""
Excepción base para todas las excepciones personalizadas del servicio.
"""
from typing import Optional, Dict, Any


class AppException(Exception):
    """
    Excepción base del servicio.
    Todas las excepciones del pipeline y de la API heredan de esta clase,
    de modo que el handler global pueda renderizarlas como JSON.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Inicializa la excepción.

        Args:
            message: Mensaje de error descriptivo
            status_code: Código de estado HTTP con el que se expone
            error_code: Código de error estable (para clientes/scripts)
            details: Detalles adicionales del error
        """
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)
