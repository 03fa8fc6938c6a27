# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# ESTRUCTURA:
# ├── interfaces.py         → Protocolos (contratos que usan los servicios)
# ├── base.py               → Clases base para archivos JSON
# ├── config_repository.py  → Copia local de la configuración (store_config.json)
# ├── audit_repository.py   → Registro de actividad (audit.json)
# └── mock_database.py      → Estado en memoria del backend simulado
# ==============================================================================

from .interfaces import (
    ISnapshotSource,
    IConfigRepository,
    IAuditRepository,
)

from .base import BaseRepository, ListRepository
from .config_repository import ConfigRepository
from .audit_repository import AuditRepository
from .mock_database import MockDatabase

__all__ = [
    # Interfaces
    'ISnapshotSource',
    'IConfigRepository',
    'IAuditRepository',

    # Clases base
    'BaseRepository',
    'ListRepository',

    # Implementaciones
    'ConfigRepository',
    'AuditRepository',
    'MockDatabase',
]
