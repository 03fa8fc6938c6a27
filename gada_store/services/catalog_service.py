# ==============================================================================
# SERVICIO DE CATÁLOGO - Consultas de productos y categorías
# ==============================================================================
# Lee siempre de una fuente con get_snapshot() (el ConfigStore o la base del
# backend simulado), así la tienda solo ve lo confirmado/exportado.
# ==============================================================================

from typing import Any, Dict, List, Optional

from gada_store import settings
from gada_store.models import entity_id
from gada_store.performance_logger import profile_function
from gada_store.repositories.interfaces import ISnapshotSource


def _name_of(record: Dict[str, Any], field: str) -> str:
    return str(record.get(field) or '').lower()


class CatalogService:
    """
    Consultas de solo lectura sobre productos y categorías.

    Uso:
        catalog = CatalogService(config_store)
        catalog.search('mi')
    """

    def __init__(self, source: ISnapshotSource, search_limit: int = None):
        """
        Args:
            source: Objeto con get_snapshot() que devuelve la StoreConfig
            search_limit: Máximo de resultados de búsqueda (settings.SEARCH_LIMIT)
        """
        self.source = source
        self.search_limit = search_limit or settings.SEARCH_LIMIT

    # =========================================================================
    # PRODUCTOS
    # =========================================================================

    def get_all(self) -> List[Dict[str, Any]]:
        """Todos los productos en el orden en que están guardados."""
        return self.source.get_snapshot().get('products') or []

    def get_by_id(self, product_id: Any) -> Optional[Dict[str, Any]]:
        """Busca un producto por id (acepta 'id' o '_id' en el registro)."""
        target = str(product_id)
        for product in self.get_all():
            if entity_id(product) == target:
                return product
        return None

    def get_by_category(self, category_name: str) -> List[Dict[str, Any]]:
        """Productos cuya categoría coincide por nombre, sin distinguir mayúsculas."""
        wanted = (category_name or '').lower()
        return [p for p in self.get_all() if _name_of(p, 'category') == wanted]

    @profile_function(name="Buscar productos")
    def search(self, query: str) -> List[Dict[str, Any]]:
        """
        Busca productos por nombre.

        Primero los que empiezan con el texto; si no llegan al límite se
        agregan los que lo contienen. Sin distinguir mayúsculas, en el orden
        original y sin repetidos.

        Args:
            query: Texto a buscar

        Returns:
            Hasta search_limit productos
        """
        needle = (query or '').lower()
        products = self.get_all()

        results = [p for p in products if _name_of(p, 'name').startswith(needle)]

        if len(results) < self.search_limit:
            seen = {id(p) for p in results}
            results.extend(
                p for p in products
                if id(p) not in seen and needle in _name_of(p, 'name')
            )

        return results[:self.search_limit]

    # =========================================================================
    # CATEGORÍAS
    # =========================================================================

    def get_categories(self) -> List[Dict[str, Any]]:
        return self.source.get_snapshot().get('categories') or []

    def get_active_categories(self) -> List[Dict[str, Any]]:
        """Categorías que no están deshabilitadas."""
        return [c for c in self.get_categories() if c.get('disabled') is not True]

    def get_category_by_id(self, category_id: Any) -> Optional[Dict[str, Any]]:
        target = str(category_id)
        for category in self.get_categories():
            if entity_id(category) == target:
                return category
        return None
