# ==============================================================================
# GADA ELECTRONICS - Tienda con backend simulado
# ==============================================================================
# Paquetes:
#   models/        → Entidades y configuración por defecto
#   repositories/  → Copia local, auditoría y estado del backend simulado
#   services/      → Carga, configuración, catálogo, carrito, administración
#   main.py        → Rutas Flask del backend simulado
#   app_container  → Cableado de dependencias por sesión
# ==============================================================================

__version__ = '1.0.0'
