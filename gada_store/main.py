# ==============================================================================
# BACKEND SIMULADO - Aplicación Flask
# ==============================================================================
# Rutas REST que consume la tienda a través de MockTransport:
#
#   GET  /gada-electronics-config-YYYY-MM-DD.json   documento de configuración
#   POST /api/auth/signup | /api/auth/login          autenticación mínima
#   GET  /api/products[/search?query=|/<id>]         catálogo
#   GET  /api/categories[/<id>]                      categorías activas
#   *    /api/user/cart[/<id>]                       carrito (requiere token)
#   *    /api/user/wishlist[/<id>]                   lista de deseos (token)
#   POST /api/admin/update-config                    reemplaza el documento
#
# Todas las respuestas son JSON. Los errores: {"error": mensaje} con 4xx.
# ==============================================================================

import os
from functools import wraps

from flask import Blueprint, Flask, current_app, g, request
from werkzeug.exceptions import HTTPException

from gada_store import settings
from gada_store.performance_logger import get_function_stats, get_log_summary, init_profiling
from gada_store.services.account_service import CART, WISHLIST
from gada_store.services.data_loader import missing_required_keys
from gada_store.services.errors import NotFoundError, StoreError, ValidationError


api = Blueprint('api', __name__)


def _container():
    return current_app.extensions['gada_container']


def _json_body():
    """Cuerpo JSON de la petición o ValidationError si no llegó."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Datos no recibidos o formato inválido")
    return data


def token_required(f):
    """Exige un token válido en la cabecera 'authorization' (deja g.user_email)."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        token = request.headers.get('authorization')
        g.user_email = _container().account_service.resolve_token(token)
        return f(*args, **kwargs)
    return wrapper


# ═══════════════════════════════════════════════════════════════════════════
# DOCUMENTO DE CONFIGURACIÓN
# ═══════════════════════════════════════════════════════════════════════════

def config_document():
    """Documento de configuración vigente (ruta fija, sin autenticación)."""
    return _container().database.get_snapshot()


@api.route('/api/admin/update-config', methods=['POST'])
def update_config():
    """Reemplaza el documento servido; productos y categorías salen de él."""
    data = _json_body()
    missing = missing_required_keys(data)
    if missing:
        raise ValidationError(f"Documento inválido, faltan: {', '.join(missing)}")

    saved = _container().database.replace_config(data)
    print(f"[MOCK API] Configuración actualizada ({len(saved.get('products') or [])} productos)")
    return {
        'success': True,
        'message': 'Configuración actualizada',
        'lastModified': saved['lastModified'],
    }


@api.route('/api/admin/performance', methods=['GET'])
def performance_summary():
    return {'functions': get_function_stats(), 'logs': get_log_summary()}


# ═══════════════════════════════════════════════════════════════════════════
# AUTENTICACIÓN
# ═══════════════════════════════════════════════════════════════════════════

@api.route('/api/auth/signup', methods=['POST'])
def signup():
    return _container().account_service.signup(_json_body()), 201


@api.route('/api/auth/login', methods=['POST'])
def login():
    data = _json_body()
    return _container().account_service.login(data.get('email'), data.get('password'))


# ═══════════════════════════════════════════════════════════════════════════
# CATÁLOGO
# ═══════════════════════════════════════════════════════════════════════════

@api.route('/api/products', methods=['GET'])
def get_products():
    return {'products': _container().server_catalog.get_all()}


@api.route('/api/products/search', methods=['GET'])
def search_products():
    query = request.args.get('query', '')
    return {'products': {'models': _container().server_catalog.search(query)}}


@api.route('/api/products/<product_id>', methods=['GET'])
def get_product(product_id):
    product = _container().server_catalog.get_by_id(product_id)
    if product is None:
        raise NotFoundError("Producto no encontrado")
    return {'product': product}


@api.route('/api/categories', methods=['GET'])
def get_categories():
    return {'categories': _container().server_catalog.get_active_categories()}


@api.route('/api/categories/<category_id>', methods=['GET'])
def get_category(category_id):
    category = _container().server_catalog.get_category_by_id(category_id)
    if category is None:
        raise NotFoundError("Categoría no encontrada")
    return {'category': category}


# ═══════════════════════════════════════════════════════════════════════════
# CARRITO
# ═══════════════════════════════════════════════════════════════════════════

@api.route('/api/user/cart', methods=['GET'])
@token_required
def get_cart():
    return {CART: _container().account_service.get_list(g.user_email, CART)}


@api.route('/api/user/cart', methods=['POST'])
@token_required
def add_to_cart():
    data = _json_body()
    cart = _container().account_service.add_to_cart(g.user_email, data.get('product'))
    return {CART: cart}, 201


@api.route('/api/user/cart/<product_id>', methods=['POST'])
@token_required
def update_cart_item(product_id):
    data = _json_body()
    cart = _container().account_service.update_cart_item(g.user_email, product_id, data.get('action'))
    return {CART: cart}


@api.route('/api/user/cart/<product_id>', methods=['DELETE'])
@token_required
def remove_from_cart(product_id):
    color = request.args.get('color')
    return {CART: _container().account_service.remove_from_cart(g.user_email, product_id, color)}


@api.route('/api/user/cart', methods=['DELETE'])
@token_required
def clear_cart():
    return {CART: _container().account_service.clear_list(g.user_email, CART)}


# ═══════════════════════════════════════════════════════════════════════════
# LISTA DE DESEOS
# ═══════════════════════════════════════════════════════════════════════════

@api.route('/api/user/wishlist', methods=['GET'])
@token_required
def get_wishlist():
    return {WISHLIST: _container().account_service.get_list(g.user_email, WISHLIST)}


@api.route('/api/user/wishlist', methods=['POST'])
@token_required
def add_to_wishlist():
    data = _json_body()
    wishlist = _container().account_service.add_to_wishlist(g.user_email, data.get('product'))
    return {WISHLIST: wishlist}, 201


@api.route('/api/user/wishlist/<product_id>', methods=['DELETE'])
@token_required
def remove_from_wishlist(product_id):
    return {WISHLIST: _container().account_service.remove_from_wishlist(g.user_email, product_id)}


@api.route('/api/user/wishlist', methods=['DELETE'])
@token_required
def clear_wishlist():
    return {WISHLIST: _container().account_service.clear_list(g.user_email, WISHLIST)}


# ═══════════════════════════════════════════════════════════════════════════
# ERRORES
# ═══════════════════════════════════════════════════════════════════════════

def handle_store_error(error: StoreError):
    return {'error': str(error)}, error.status_code


def handle_http_error(error: HTTPException):
    return {'error': error.description}, error.code


# ═══════════════════════════════════════════════════════════════════════════
# FÁBRICA DE LA APLICACIÓN
# ═══════════════════════════════════════════════════════════════════════════

def create_app(container=None) -> Flask:
    """
    Crea la app Flask del backend simulado.

    Args:
        container: AppContainer dueño del estado (uno nuevo si None)

    Returns:
        Aplicación Flask lista para test_client() o app.run()
    """
    if container is None:
        from gada_store.app_container import AppContainer
        container = AppContainer()

    app = Flask(__name__)
    app.config['SECRET_KEY'] = settings.SECRET_KEY
    app.extensions['gada_container'] = container

    # Mide rendimiento de rutas. Logs en settings.LOGS_DIR
    init_profiling(app)

    app.add_url_rule(settings.CONFIG_DOCUMENT_PATH, 'config_document', config_document, methods=['GET'])
    app.register_blueprint(api)

    app.register_error_handler(StoreError, handle_store_error)
    app.register_error_handler(HTTPException, handle_http_error)

    return app


if __name__ == "__main__":
    # Configuración para desarrollo local
    DEBUG = os.environ.get('FLASK_DEBUG', '0') == '1'
    HOST = os.environ.get('FLASK_HOST', '127.0.0.1')
    PORT = int(os.environ.get('FLASK_PORT', 5000))

    if not DEBUG:
        print(f"\n{'='*50}")
        print(f"  Backend simulado en http://{HOST}:{PORT}")
        print(f"  Documento: http://localhost:{PORT}{settings.CONFIG_DOCUMENT_PATH}")
        print(f"{'='*50}\n")

    create_app().run(host=HOST, port=PORT, debug=DEBUG)
