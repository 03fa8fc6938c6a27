import asyncio

import pytest

from gada_store.app_container import AppContainer
from gada_store.repositories import ConfigRepository
from gada_store.services.data_loader import (
    SOURCE_DEFAULTS,
    SOURCE_LOCAL,
    SOURCE_REMOTE,
    DataLoader,
    missing_required_keys,
)
from gada_store.services.errors import ConfigLoadError, TransportError


class BrokenTransport:
    async def get(self, path, token=None, params=None):
        raise TransportError('backend caído', status=500, path=path)


def test_missing_required_keys(config_factory):
    assert missing_required_keys(config_factory()) == []
    assert missing_required_keys({'storeInfo': {}, 'lastModified': 'x'}) == []
    assert missing_required_keys({'storeInfo': None, 'lastModified': 'x'}) == ['storeInfo']
    assert missing_required_keys({'storeInfo': 'Gada', 'lastModified': ''}) == ['storeInfo', 'lastModified']
    assert missing_required_keys(['no', 'dict']) == ['storeInfo', 'lastModified']


def test_load_prefers_backend_document(container):
    config = asyncio.run(container.data_loader.load())
    assert container.data_loader.last_source == SOURCE_REMOTE
    assert config == container.database.get_snapshot()


def test_invalid_backend_document_falls_back_to_local_copy(tmp_path, config_factory):
    seed = config_factory()
    del seed['storeInfo']
    container = AppContainer(base_path=str(tmp_path), seed_config=seed)
    local = config_factory(products=[{'id': 'local-1', 'name': 'copia local'}])
    container.config_repo.save(local)

    config = asyncio.run(container.data_loader.load())

    assert container.data_loader.last_source == SOURCE_LOCAL
    assert config == local


def test_invalid_backend_document_without_local_copy_uses_defaults(tmp_path, config_factory):
    seed = config_factory()
    del seed['lastModified']
    container = AppContainer(base_path=str(tmp_path), seed_config=seed)

    config = asyncio.run(container.data_loader.load())

    assert container.data_loader.last_source == SOURCE_DEFAULTS
    assert [p['name'] for p in config['products']] == ['mi book 15', 'mi notebook pro']
    assert config['storeInfo']['storeName'] == 'Gada Electronics'


def test_transport_failure_falls_back(tmp_path):
    loader = DataLoader(BrokenTransport(), ConfigRepository(str(tmp_path)))
    config = asyncio.run(loader.load())
    assert loader.last_source == SOURCE_DEFAULTS
    assert config['lastModified']


def test_local_copy_without_required_keys_is_ignored(tmp_path):
    repo = ConfigRepository(str(tmp_path))
    repo.save({'products': []})
    loader = DataLoader(None, repo)

    asyncio.run(loader.load())

    assert loader.last_source == SOURCE_DEFAULTS


def test_fetch_document_errors():
    with pytest.raises(ConfigLoadError):
        asyncio.run(DataLoader().fetch_document())
    with pytest.raises(ConfigLoadError):
        asyncio.run(DataLoader(BrokenTransport()).fetch_document())


def test_defaults_are_fresh_copies():
    loader = DataLoader()
    first = loader.get_defaults()
    first['products'].clear()
    first['storeInfo']['storeName'] = 'otra'

    second = loader.get_defaults()
    assert len(second['products']) == 2
    assert second['storeInfo']['storeName'] == 'Gada Electronics'


def test_fetch_catalog_returns_products_and_active_categories(container):
    catalog = asyncio.run(container.data_loader.fetch_catalog())
    assert [p['name'] for p in catalog['products']] == ['mi book 15', 'mi notebook pro']
    assert len(catalog['categories']) == 5


def test_fetch_catalog_fails_as_a_whole():
    with pytest.raises(TransportError):
        asyncio.run(DataLoader().fetch_catalog())
    with pytest.raises(TransportError):
        asyncio.run(DataLoader(BrokenTransport()).fetch_catalog())
