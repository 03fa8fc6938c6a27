# ==============================================================================
# WSGI Entry Point - Backend simulado de Gada Electronics
# ==============================================================================
# Punto de entrada para servidores WSGI como Gunicorn.
#
# USO:
#   gunicorn wsgi:app --bind 0.0.0.0:$PORT
#
# ESTRUCTURA DEL PROYECTO:
#   repo_root/           <- Directorio de trabajo (en sys.path automáticamente)
#   ├── wsgi.py          <- Este archivo
#   ├── pyproject.toml
#   └── gada_store/      <- Paquete Python
#       ├── main.py
#       ├── services/
#       └── repositories/
#
# Los datos locales van a GADA_BASE_PATH y el documento inicial puede
# sembrarse con GADA_SEED_CONFIG_FILE.
# ==============================================================================

from gada_store.app_container import AppContainer

container = AppContainer()
app = container.app

if __name__ == '__main__':
    app.run(debug=True, host='127.0.0.1', port=5000)
