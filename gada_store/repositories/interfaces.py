# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
# Contratos (Protocol) de los que dependen los servicios. Permiten que el
# servicio de catálogo lea tanto del ConfigStore del cliente como del
# backend simulado, y facilitan dobles de prueba.
# ==============================================================================

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class ISnapshotSource(Protocol):
    """Cualquier objeto capaz de entregar una StoreConfig completa."""

    def get_snapshot(self) -> Dict[str, Any]:
        """Copia del documento de configuración vigente."""
        ...


@runtime_checkable
class IConfigRepository(Protocol):
    """Copia persistida de la configuración entre cargas."""

    def load(self) -> Optional[Dict[str, Any]]:
        ...

    def save(self, config: Dict[str, Any]) -> None:
        ...

    def clear(self) -> None:
        ...


@runtime_checkable
class IAuditRepository(Protocol):
    """Registro de actividad."""

    def log(
        self,
        log_type: str,
        user: str,
        message: str,
        related_id: str = '',
        details: Dict[str, Any] = None
    ) -> Dict[str, Any]:
        ...

    def load(self) -> List[Dict[str, Any]]:
        ...

    def get_by_type(self, log_type: str) -> List[Dict[str, Any]]:
        ...
