# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos de la tienda
# ==============================================================================
# Entidades del dominio (dataclasses) y configuración por defecto.
# El documento StoreConfig viaja como dict; las entidades normalizan
# lo que llega desde los formularios del panel de administración.
# ==============================================================================

from .entities import (
    # Configuración
    StoreInfo,

    # Catálogo
    Product,
    ProductColor,
    Category,

    # Cupones y zonas
    Coupon,
    Zone,
    zone_id_from_name,

    # Teléfonos y direcciones
    CountryCode,
    Address,
    ServiceType,

    # Auditoría
    AuditType,

    entity_id,
)
from .defaults import (
    COUNTRY_CODES,
    DEFAULT_CATEGORIES,
    DEFAULT_COUPONS,
    DEFAULT_PRODUCTS,
    DEFAULT_STORE_INFO,
    SANTIAGO_ZONES,
    build_default_config,
)

__all__ = [
    'StoreInfo',
    'Product',
    'ProductColor',
    'Category',
    'Coupon',
    'Zone',
    'zone_id_from_name',
    'CountryCode',
    'Address',
    'ServiceType',
    'AuditType',
    'entity_id',
    'COUNTRY_CODES',
    'DEFAULT_CATEGORIES',
    'DEFAULT_COUPONS',
    'DEFAULT_PRODUCTS',
    'DEFAULT_STORE_INFO',
    'SANTIAGO_ZONES',
    'build_default_config',
]
