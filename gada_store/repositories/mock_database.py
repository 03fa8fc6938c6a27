# ==============================================================================
# BASE DE DATOS DEL BACKEND SIMULADO
# ==============================================================================
# Estado en memoria del servidor simulado:
#   - Documento de configuración servido en CONFIG_DOCUMENT_PATH
#   - Usuarios con su carrito y lista de deseos
#   - Tokens de sesión emitidos
#
# Los productos y categorías públicos salen del documento servido, así un
# POST /api/admin/update-config se refleja de inmediato en /api/products.
# Las peticiones llegan desde hilos de trabajo, por eso todo pasa por un RLock.
# ==============================================================================

import copy
import json
import os
import threading
from typing import Any, Callable, Dict, List, Optional

from gada_store import settings
from gada_store.models import build_default_config
from gada_store.utils import next_timestamp, now_iso


class MockDatabase:
    """
    Almacenamiento del backend simulado.

    Solo persiste en memoria: reiniciar el proceso vuelve a la semilla.
    """

    LIST_NAMES = ('cart', 'wishlist')

    def __init__(self, seed_file: str = None, seed_config: Dict[str, Any] = None):
        """
        Args:
            seed_file: Archivo JSON con el documento inicial (opcional)
            seed_config: Documento inicial ya cargado (tiene prioridad)
        """
        self._lock = threading.RLock()
        self._users: Dict[str, Dict[str, Any]] = {}
        self._tokens: Dict[str, str] = {}
        self._config = self._initial_config(seed_file, seed_config)

    # =========================================================================
    # SEMILLA
    # =========================================================================

    def _initial_config(self, seed_file, seed_config) -> Dict[str, Any]:
        if seed_config is not None:
            return copy.deepcopy(seed_config)

        if seed_file and os.path.exists(seed_file):
            try:
                with open(seed_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if isinstance(data, dict) and isinstance(data.get('storeInfo'), dict) and data.get('lastModified'):
                    print(f"[MOCK DB] Configuración sembrada desde {os.path.basename(seed_file)}")
                    return data
                print(f"[MOCK DB] {seed_file} no tiene storeInfo/lastModified, usando valores por defecto")
            except (OSError, json.JSONDecodeError) as e:
                print(f"[MOCK DB ERROR] No se pudo leer {seed_file}: {e}")

        return build_default_config(now_iso(), settings.CONFIG_VERSION)

    # =========================================================================
    # DOCUMENTO DE CONFIGURACIÓN
    # =========================================================================

    def get_snapshot(self) -> Dict[str, Any]:
        """Copia del documento de configuración servido."""
        with self._lock:
            return copy.deepcopy(self._config)

    def replace_config(self, new_config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Reemplaza el documento servido y renueva 'lastModified'.

        Args:
            new_config: Documento completo

        Returns:
            Copia del documento guardado
        """
        with self._lock:
            updated = copy.deepcopy(new_config)
            updated['lastModified'] = next_timestamp(self._config.get('lastModified'))
            self._config = updated
            return copy.deepcopy(updated)

    def get_products(self) -> List[Dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._config.get('products') or [])

    def get_categories(self) -> List[Dict[str, Any]]:
        with self._lock:
            return copy.deepcopy(self._config.get('categories') or [])

    # =========================================================================
    # USUARIOS Y TOKENS
    # =========================================================================

    def get_user(self, email: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            user = self._users.get(email.lower())
            return copy.deepcopy(user) if user else None

    def add_user(self, user: Dict[str, Any]) -> None:
        with self._lock:
            record = copy.deepcopy(user)
            for list_name in self.LIST_NAMES:
                record.setdefault(list_name, [])
            self._users[record['email'].lower()] = record

    def save_token(self, token: str, email: str) -> None:
        with self._lock:
            self._tokens[token] = email.lower()

    def get_email_by_token(self, token: str) -> Optional[str]:
        with self._lock:
            return self._tokens.get(token)

    # =========================================================================
    # CARRITO Y LISTA DE DESEOS
    # =========================================================================

    def get_list(self, email: str, list_name: str) -> List[Dict[str, Any]]:
        """
        Obtiene el carrito o la lista de deseos de un usuario.

        Raises:
            KeyError: Si el usuario no existe
        """
        with self._lock:
            return copy.deepcopy(self._users[email.lower()][list_name])

    def set_list(self, email: str, list_name: str, items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Reemplaza el carrito o la lista de deseos completa."""
        return self.update_list(email, list_name, lambda _: items)

    def update_list(
        self,
        email: str,
        list_name: str,
        mutate: Callable[[List[Dict[str, Any]]], List[Dict[str, Any]]]
    ) -> List[Dict[str, Any]]:
        """
        Lee, modifica y guarda una lista bajo el mismo lock.

        Si mutate() lanza una excepción la lista no cambia.

        Args:
            email: Usuario dueño de la lista
            list_name: 'cart' o 'wishlist'
            mutate: Recibe una copia de la lista y devuelve la nueva

        Returns:
            Copia de la lista guardada

        Raises:
            KeyError: Si el usuario no existe
            ValueError: Si la lista no existe
        """
        if list_name not in self.LIST_NAMES:
            raise ValueError(f"Lista desconocida: {list_name}")
        with self._lock:
            user = self._users[email.lower()]
            items = mutate(copy.deepcopy(user[list_name]))
            user[list_name] = copy.deepcopy(items)
            return copy.deepcopy(items)
