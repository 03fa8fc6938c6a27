import asyncio

import pytest

from gada_store import performance_logger, settings
from gada_store.app_container import AppContainer


@pytest.fixture(autouse=True)
def logs_in_tmp(tmp_path, monkeypatch):
    """Los logs de rendimiento de los tests van a una carpeta temporal."""
    logs_dir = tmp_path / 'logs'
    monkeypatch.setattr(performance_logger, 'PERFORMANCE_LOG', str(logs_dir / 'performance.log'))
    monkeypatch.setattr(performance_logger, 'SLOW_ROUTES_LOG', str(logs_dir / 'slow_routes.log'))
    monkeypatch.setattr(performance_logger, 'SLOW_FUNCTIONS_LOG', str(logs_dir / 'slow_functions.log'))


@pytest.fixture
def container(tmp_path):
    return AppContainer(base_path=str(tmp_path / 'data'))


@pytest.fixture
def client(container):
    with container.app.test_client() as c:
        yield c


@pytest.fixture
def store(container):
    asyncio.run(container.config_store.load())
    return container.config_store


@pytest.fixture
def demo_token(container):
    result = container.account_service.login(settings.DEMO_USER['email'], settings.DEMO_USER['password'])
    return result['encodedToken']


def make_config(products=None, categories=None, **extra):
    config = {
        'storeInfo': {
            'storeName': 'Gada Electronics',
            'whatsappNumber': '+53 54690878',
            'storeAddressId': 'store-main-address',
        },
        'coupons': [],
        'zones': [{'id': 'nuevo_vista_alegre', 'name': 'Nuevo vista alegre', 'cost': 100}],
        'products': products if products is not None else [],
        'categories': categories if categories is not None else [],
        'lastModified': '2025-06-30T10:00:00.000Z',
        'version': '1.0.0',
    }
    config.update(extra)
    return config


@pytest.fixture
def config_factory():
    return make_config
