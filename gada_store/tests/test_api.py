import asyncio
import time

import pytest
from flask import Flask

from gada_store import performance_logger, settings
from gada_store.services.errors import TransportError
from gada_store.services.transport import MockTransport


BOOK_ID = '9eb0c25b-447c-4723-9ce4-639527debb68'


def auth(token):
    return {'authorization': token}


# ---------------------------------------------------------------------------
# Documento y catálogo
# ---------------------------------------------------------------------------

def test_config_document_is_served(client):
    response = client.get(settings.CONFIG_DOCUMENT_PATH)
    assert response.status_code == 200
    data = response.get_json()
    assert data['storeInfo']['storeName'] == 'Gada Electronics'
    assert data['lastModified']


def test_products_and_single_product(client):
    products = client.get('/api/products').get_json()['products']
    assert len(products) == 2

    response = client.get(f'/api/products/{BOOK_ID}')
    assert response.get_json()['product']['name'] == 'mi book 15'


def test_search_response_shape(client):
    response = client.get('/api/products/search', query_string={'query': 'note'})
    models = response.get_json()['products']['models']
    assert [p['name'] for p in models] == ['mi notebook pro']


def test_unknown_product_is_json_404(client):
    response = client.get('/api/products/no-existe')
    assert response.status_code == 404
    assert response.get_json() == {'error': 'Producto no encontrado'}


def test_unknown_route_is_json_404(client):
    response = client.get('/api/nada')
    assert response.status_code == 404
    assert 'error' in response.get_json()


def test_update_config_rejects_incomplete_document(client, config_factory):
    doc = config_factory()
    del doc['storeInfo']
    response = client.post('/api/admin/update-config', json=doc)
    assert response.status_code == 400
    assert 'storeInfo' in response.get_json()['error']


def test_update_config_accepts_empty_store_info(client, config_factory):
    response = client.post('/api/admin/update-config', json=config_factory(storeInfo={}))
    assert response.status_code == 200
    assert client.get(settings.CONFIG_DOCUMENT_PATH).get_json()['storeInfo'] == {}


def test_update_config_replaces_catalog_and_restamps(client, config_factory):
    categories = [
        {'id': 'c1', 'categoryName': 'laptop', 'categoryImage': 'a.png'},
        {'id': 'c2', 'categoryName': 'tv', 'categoryImage': 'b.png', 'disabled': True},
    ]
    doc = config_factory(products=[{'id': 'p1', 'name': 'tv oneplus'}], categories=categories)

    response = client.post('/api/admin/update-config', json=doc)

    body = response.get_json()
    assert body['success'] is True
    assert body['lastModified'] > doc['lastModified']
    assert client.get(settings.CONFIG_DOCUMENT_PATH).get_json()['lastModified'] == body['lastModified']
    assert [p['id'] for p in client.get('/api/products').get_json()['products']] == ['p1']
    assert [c['id'] for c in client.get('/api/categories').get_json()['categories']] == ['c1']
    assert client.get('/api/categories/c2').status_code == 200


def test_update_config_requires_json_body(client):
    response = client.post('/api/admin/update-config', data='hola')
    assert response.status_code == 400


# ---------------------------------------------------------------------------
# Autenticación
# ---------------------------------------------------------------------------

def test_signup_and_duplicate(client):
    payload = {'email': 'nuevo@gada.cu', 'password': 'secreto', 'firstName': 'Nuevo'}

    response = client.post('/api/auth/signup', json=payload)
    assert response.status_code == 201
    body = response.get_json()
    assert body['encodedToken']
    assert 'password' not in body['createdUser']

    assert client.post('/api/auth/signup', json=payload).status_code == 422


def test_login_errors(client):
    wrong = client.post('/api/auth/login', json={'email': settings.DEMO_USER['email'], 'password': 'mala'})
    assert wrong.status_code == 401

    unknown = client.post('/api/auth/login', json={'email': 'nadie@gada.cu', 'password': 'x'})
    assert unknown.status_code == 404


def test_user_routes_require_token(client):
    assert client.get('/api/user/cart').status_code == 401
    assert client.get('/api/user/wishlist', headers=auth('falso')).status_code == 401


# ---------------------------------------------------------------------------
# Carrito por HTTP
# ---------------------------------------------------------------------------

def test_cart_routes(client, demo_token):
    product = client.get(f'/api/products/{BOOK_ID}').get_json()['product']
    blue = dict(product, colors=[product['colors'][0]])
    red = dict(product, colors=[product['colors'][2]])

    assert client.post('/api/user/cart', json={'product': blue}, headers=auth(demo_token)).status_code == 201
    client.post('/api/user/cart', json={'product': red}, headers=auth(demo_token))

    response = client.post(
        f'/api/user/cart/{BOOK_ID}',
        json={'action': {'type': 'increment', 'colorBody': {'color': '#ff0000'}}},
        headers=auth(demo_token),
    )
    cart = response.get_json()['cart']
    assert {e['colors'][0]['color']: e['qty'] for e in cart} == {'#0000ff': 1, '#ff0000': 2}

    response = client.delete(
        f'/api/user/cart/{BOOK_ID}', query_string={'color': '#0000ff'}, headers=auth(demo_token)
    )
    assert [e['colors'][0]['color'] for e in response.get_json()['cart']] == ['#ff0000']

    response = client.delete('/api/user/cart', headers=auth(demo_token))
    assert response.get_json() == {'cart': []}


def test_cart_rejects_bad_requests(client, demo_token):
    assert client.post('/api/user/cart', headers=auth(demo_token)).status_code == 400
    bad_action = client.post(
        f'/api/user/cart/{BOOK_ID}', json={'action': {'type': 'duplicar'}}, headers=auth(demo_token)
    )
    assert bad_action.status_code == 400
    missing = client.post(
        f'/api/user/cart/{BOOK_ID}', json={'action': {'type': 'increment'}}, headers=auth(demo_token)
    )
    assert missing.status_code == 404


# ---------------------------------------------------------------------------
# Transporte y profiling
# ---------------------------------------------------------------------------

def test_transport_error_carries_status(container):
    with pytest.raises(TransportError) as info:
        asyncio.run(container.transport.get('/api/products/no-existe'))
    assert info.value.status == 404
    assert 'Producto no encontrado' in str(info.value)


def test_transport_times_out():
    app = Flask(__name__)

    @app.route('/lento')
    def lento():
        time.sleep(0.5)
        return {'ok': True}

    with pytest.raises(TransportError) as info:
        asyncio.run(MockTransport(app, timeout=0.05).get('/lento'))
    assert 'Tiempo de espera agotado' in str(info.value)


def test_requests_are_profiled(client):
    client.get('/api/products')
    with open(performance_logger.PERFORMANCE_LOG, encoding='utf-8') as f:
        assert 'Listar productos' in f.read()

    summary = client.get('/api/admin/performance').get_json()
    assert summary['logs']['performance']['exists'] is True
