# ==============================================================================
# EXCEPCIONES DE LA TIENDA
# ==============================================================================
# ConfigLoadError   → el documento no se pudo obtener o no es válido
#                     (DataLoader lo resuelve con la copia local o los defaults)
# ConfigImportError → el archivo importado no pasa la validación mínima
# TransportError    → falló una llamada al backend simulado
# ValidationError   → un formulario no cumple una regla; nunca sale del
#                     servicio que valida (se convierte en {'ok': False})
#
# Del lado del backend simulado las rutas traducen cada excepción al código
# HTTP de status_code.
# ==============================================================================


class StoreError(Exception):
    """Base de las excepciones de la tienda."""
    status_code = 400


class ConfigLoadError(StoreError):
    """Excepción lanzada cuando no se puede cargar el documento de configuración."""
    pass


class ConfigImportError(StoreError):
    """Excepción lanzada cuando un documento importado no es válido."""
    pass


class TransportError(StoreError):
    """
    Excepción lanzada cuando falla una llamada al backend simulado.

    Attributes:
        status: Código HTTP (None si no hubo respuesta, p. ej. timeout)
        path: Ruta solicitada
    """

    def __init__(self, message: str, status: int = None, path: str = None):
        super().__init__(message)
        self.status = status
        self.path = path


class ValidationError(StoreError):
    """Excepción lanzada cuando un formulario no cumple una regla."""
    pass


class AuthError(StoreError):
    """Token ausente o inválido, o credenciales incorrectas."""
    status_code = 401


class NotFoundError(StoreError):
    """El recurso pedido no existe."""
    status_code = 404


class ConflictError(StoreError):
    """El registro ya existe (email repetido)."""
    status_code = 422
