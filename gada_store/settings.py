# ==============================================================================
# CONFIGURACIÓN DE LA APLICACIÓN
# ==============================================================================
# Constantes globales de la tienda. Todo lo que cambia entre entornos se
# puede sobrescribir con variables de entorno GADA_*.
#
# Ejemplo:
#   export GADA_SECRET_KEY="clave_larga_y_aleatoria"
#   export GADA_TRANSPORT_TIMEOUT=5
# ==============================================================================

import os


def _env_bool(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on', 'si', 'sí')


def _env_float(name, default):
    try:
        return float(os.environ.get(name, default))
    except (TypeError, ValueError):
        return default


# ═══════════════════════════════════════════════════════════════════════════════
# RUTAS
# ═══════════════════════════════════════════════════════════════════════════════
PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))

# Carpeta donde viven los JSON locales (copia persistida, auditoría, exports)
BASE_PATH = os.environ.get('GADA_BASE_PATH', PACKAGE_DIR)

# Directorio de logs de rendimiento
LOGS_DIR = os.environ.get('GADA_LOGS_DIR', os.path.join(PACKAGE_DIR, 'logs'))

# Copia local de la configuración (equivalente al localStorage del navegador)
LOCAL_CONFIG_FILE = 'store_config.json'

# Carpeta de "descargas" de configuración exportada
EXPORT_DIR_NAME = 'exports'
EXPORT_FILE_PREFIX = 'gada-electronics-config'

# Archivo JSON opcional con el que se siembra el backend simulado
SEED_CONFIG_FILE = os.environ.get('GADA_SEED_CONFIG_FILE')

# ═══════════════════════════════════════════════════════════════════════════════
# DOCUMENTO DE CONFIGURACIÓN
# ═══════════════════════════════════════════════════════════════════════════════
CONFIG_DOCUMENT_PATH = os.environ.get(
    'GADA_CONFIG_DOCUMENT_PATH',
    '/gada-electronics-config-2025-06-30.json'
)
CONFIG_VERSION = '1.0.0'

# Secciones editables desde el panel de administración
CONFIG_SECTIONS = ('products', 'categories', 'coupons', 'zones', 'storeInfo')

# Claves mínimas que debe tener un documento para considerarse válido
REQUIRED_CONFIG_KEYS = ('storeInfo', 'lastModified')

# ═══════════════════════════════════════════════════════════════════════════════
# TRANSPORTE Y BÚSQUEDA
# ═══════════════════════════════════════════════════════════════════════════════
# Segundos máximos de espera por llamada al backend simulado
TRANSPORT_TIMEOUT = _env_float('GADA_TRANSPORT_TIMEOUT', 10.0)

# Máximo de resultados en la búsqueda de productos
SEARCH_LIMIT = 10

# ═══════════════════════════════════════════════════════════════════════════════
# PROFILING
# ═══════════════════════════════════════════════════════════════════════════════
ENABLE_PROFILING = _env_bool('GADA_ENABLE_PROFILING', True)

# ═══════════════════════════════════════════════════════════════════════════════
# SEGURIDAD
# ═══════════════════════════════════════════════════════════════════════════════
_DEFAULT_SECRET = 'gada_store_dev_secret_key_change_in_production'
SECRET_KEY = os.environ.get('GADA_SECRET_KEY') or _DEFAULT_SECRET

if SECRET_KEY == _DEFAULT_SECRET and os.environ.get('GADA_PRODUCTION'):
    print("[ADVERTENCIA] GADA_PRODUCTION activo sin GADA_SECRET_KEY definida")

# Usuario de demostración sembrado en el backend simulado
DEMO_USER = {
    'email': 'demo@gadaelectronics.cu',
    'password': 'gada1234',
    'firstName': 'Gada',
    'lastName': 'Demo',
}
