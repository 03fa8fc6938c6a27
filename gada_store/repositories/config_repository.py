# ==============================================================================
# REPOSITORIO DE CONFIGURACIÓN LOCAL
# ==============================================================================
# Copia persistida de la StoreConfig entre cargas (el equivalente de la
# clave 'adminStoreConfig' que la versión web guardaba en localStorage).
# Una sola clave: el archivo completo es el documento.
# ==============================================================================

import os
from typing import Any, Dict, Optional

from gada_store import settings
from .base import BaseRepository


class ConfigRepository(BaseRepository):
    """
    Repositorio de la copia local de la configuración.

    Formato de store_config.json: el documento StoreConfig tal cual
    (storeInfo, coupons, zones, products, categories, lastModified, version).
    """

    def __init__(self, base_path: str):
        """
        Args:
            base_path: Carpeta donde se guarda store_config.json
        """
        super().__init__(os.path.join(base_path, settings.LOCAL_CONFIG_FILE))

    def _empty_data(self) -> Dict:
        return {}

    def load(self) -> Optional[Dict[str, Any]]:
        """
        Carga la copia local.

        Returns:
            Documento guardado, o None si no existe o no es un objeto JSON
        """
        if not self.exists():
            return None
        data = self._read_raw()
        if not isinstance(data, dict) or not data:
            return None
        return data

    def save(self, config: Dict[str, Any]) -> None:
        """Reemplaza la copia local por el documento dado."""
        self._write_raw(config)
