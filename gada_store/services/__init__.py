# ==============================================================================
# CAPA DE SERVICIOS - Lógica de la tienda
# ==============================================================================
# PRINCIPIOS:
# 1. Los servicios orquestan operaciones entre repositorios y el transporte
# 2. Aplican reglas de negocio y validaciones
# 3. Las rutas del backend simulado solo llaman a servicios
#
# ESTRUCTURA:
# ├── errors.py           → Excepciones de la tienda
# ├── transport.py        → Llamadas al backend simulado (con timeout)
# ├── phone_validator.py  → Validación de teléfonos por prefijo de país
# ├── data_loader.py      → Carga del documento de configuración (con fallback)
# ├── config_store.py     → Configuración efectiva, pendientes, export/import
# ├── export_service.py   → Archivos gada-electronics-config-YYYY-MM-DD.json
# ├── catalog_service.py  → Consultas de productos y categorías
# ├── cart_service.py     → Carrito y lista de deseos (cliente)
# ├── account_service.py  → Usuarios, carritos y listas (servidor simulado)
# ├── admin_service.py    → Editores del panel de administración
# ├── address_service.py  → Libreta de direcciones
# └── audit_service.py    → Registro de actividad
# ==============================================================================

from gada_store.services.errors import (
    StoreError,
    ConfigLoadError,
    ConfigImportError,
    TransportError,
    ValidationError,
    AuthError,
    NotFoundError,
    ConflictError,
)
from gada_store.services.transport import MockTransport
from gada_store.services.phone_validator import (
    PhoneValidation,
    validate_phone_number,
    is_valid_phone_number,
)
from gada_store.services.audit_service import AuditService
from gada_store.services.export_service import ExportService
from gada_store.services.data_loader import DataLoader
from gada_store.services.config_store import ConfigStore
from gada_store.services.catalog_service import CatalogService
from gada_store.services.cart_service import CartService
from gada_store.services.account_service import AccountService
from gada_store.services.admin_service import AdminService
from gada_store.services.address_service import AddressService

__all__ = [
    'StoreError',
    'ConfigLoadError',
    'ConfigImportError',
    'TransportError',
    'ValidationError',
    'AuthError',
    'NotFoundError',
    'ConflictError',
    'MockTransport',
    'PhoneValidation',
    'validate_phone_number',
    'is_valid_phone_number',
    'AuditService',
    'ExportService',
    'DataLoader',
    'ConfigStore',
    'CatalogService',
    'CartService',
    'AccountService',
    'AdminService',
    'AddressService',
]
