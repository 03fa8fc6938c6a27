# ==============================================================================
# CARGADOR DE CONFIGURACIÓN
# ==============================================================================
# Obtiene el documento JSON de configuración desde su ubicación fija.
#
# POLÍTICA: fallback (nunca bloquea a quien llama)
#   1. Documento del backend (GET settings.CONFIG_DOCUMENT_PATH)
#   2. Copia local persistida (store_config.json)
#   3. Configuración por defecto empaquetada
# Un documento sin storeInfo o sin lastModified cuenta como fallo.
# ==============================================================================

import asyncio
from typing import Any, Dict, List, Optional

from gada_store import settings
from gada_store.models import build_default_config
from gada_store.repositories.interfaces import IConfigRepository
from gada_store.services.errors import ConfigLoadError, TransportError
from gada_store.services.transport import MockTransport
from gada_store.utils import now_iso


SOURCE_REMOTE = 'remote'
SOURCE_LOCAL = 'local'
SOURCE_DEFAULTS = 'defaults'


def missing_required_keys(document: Any) -> List[str]:
    """
    Verifica el contrato mínimo de un documento de configuración.

    'storeInfo' debe ser un objeto (puede estar vacío) y 'lastModified'
    un valor no vacío.

    Returns:
        Lista de claves obligatorias ausentes (vacía si es válido)
    """
    if not isinstance(document, dict):
        return list(settings.REQUIRED_CONFIG_KEYS)

    missing = []
    if not isinstance(document.get('storeInfo'), dict):
        missing.append('storeInfo')
    if not document.get('lastModified'):
        missing.append('lastModified')
    return missing


class DataLoader:
    """
    Cargador del documento de configuración.

    Attributes:
        last_source: De dónde salió la última carga (remote, local, defaults)
    """

    def __init__(
        self,
        transport: Optional[MockTransport] = None,
        config_repo: Optional[IConfigRepository] = None,
        document_path: str = None
    ):
        """
        Args:
            transport: Transporte al backend simulado (opcional)
            config_repo: Copia local persistida (opcional)
            document_path: Ruta del documento (settings.CONFIG_DOCUMENT_PATH)
        """
        self.transport = transport
        self.config_repo = config_repo
        self.document_path = document_path or settings.CONFIG_DOCUMENT_PATH
        self.last_source: Optional[str] = None

    # =========================================================================
    # CARGA PRINCIPAL
    # =========================================================================

    async def load(self) -> Dict[str, Any]:
        """
        Carga la configuración efectiva aplicando la política de fallback.

        Returns:
            Documento StoreConfig (nunca lanza por fallos de carga)
        """
        try:
            config = await self.fetch_document()
            self.last_source = SOURCE_REMOTE
            print(f"[CONFIG] Configuración cargada desde {self.document_path} "
                  f"({len(config.get('products') or [])} productos, "
                  f"{len(config.get('categories') or [])} categorías)")
            return config
        except ConfigLoadError as e:
            print(f"[CONFIG] {e}")

        local = self.load_local()
        if local is not None:
            self.last_source = SOURCE_LOCAL
            print("[CONFIG] Usando copia local de la configuración")
            return local

        self.last_source = SOURCE_DEFAULTS
        print("[CONFIG] Usando configuración por defecto")
        return self.get_defaults()

    async def fetch_document(self) -> Dict[str, Any]:
        """
        Obtiene y valida el documento del backend.

        Raises:
            ConfigLoadError: Si no hay transporte, falla la llamada o el
                documento no tiene storeInfo/lastModified
        """
        if self.transport is None:
            raise ConfigLoadError("No hay transporte configurado para obtener el documento")

        try:
            document = await self.transport.get(self.document_path)
        except TransportError as e:
            raise ConfigLoadError(f"Error al cargar configuración desde JSON: {e}") from e

        missing = missing_required_keys(document)
        if missing:
            raise ConfigLoadError(
                f"Documento de configuración inválido, faltan: {', '.join(missing)}"
            )
        return document

    def load_local(self) -> Optional[Dict[str, Any]]:
        """Copia local válida, o None si no existe o no cumple el contrato mínimo."""
        if self.config_repo is None:
            return None
        local = self.config_repo.load()
        if local is None or missing_required_keys(local):
            return None
        return local

    def get_defaults(self) -> Dict[str, Any]:
        """Copia nueva de la configuración empaquetada con 'lastModified' actual."""
        return build_default_config(now_iso(), settings.CONFIG_VERSION)

    # =========================================================================
    # CATÁLOGO DESDE LA API
    # =========================================================================

    async def fetch_catalog(self) -> Dict[str, List[Dict[str, Any]]]:
        """
        Obtiene productos y categorías en paralelo desde la API.

        Si cualquiera de las dos llamadas falla, falla todo.

        Returns:
            {'products': [...], 'categories': [...]}

        Raises:
            TransportError: Si alguna llamada falla
        """
        if self.transport is None:
            raise TransportError("No hay transporte configurado")

        products_response, categories_response = await asyncio.gather(
            self.transport.get('/api/products'),
            self.transport.get('/api/categories'),
        )
        return {
            'products': products_response.get('products', []),
            'categories': categories_response.get('categories', []),
        }
