import json
from datetime import datetime

import pytest

from gada_store.repositories import AuditRepository, ConfigRepository, MockDatabase
from gada_store.services.export_service import ExportService
from gada_store.utils import next_timestamp, parse_timestamp, to_float, to_int


# ---------------------------------------------------------------------------
# Copia local de la configuración
# ---------------------------------------------------------------------------

def test_config_repository_round_trip(tmp_path, config_factory):
    repo = ConfigRepository(str(tmp_path))
    assert repo.load() is None

    doc = config_factory(products=[{'id': 'p1', 'name': 'cámara'}])
    repo.save(doc)

    assert repo.load() == doc
    assert (tmp_path / 'store_config.json').exists()


@pytest.mark.parametrize('content', ['{roto', '[]', '{}'])
def test_config_repository_ignores_unusable_files(tmp_path, content):
    (tmp_path / 'store_config.json').write_text(content, encoding='utf-8')
    assert ConfigRepository(str(tmp_path)).load() is None


# ---------------------------------------------------------------------------
# Auditoría
# ---------------------------------------------------------------------------

def test_audit_repository_filters_by_type(tmp_path):
    repo = AuditRepository(str(tmp_path))
    repo.log('CONFIG', 'admin', 'exportada', 'archivo.json')
    repo.log('CATALOGO', 'admin', 'producto creado', 'p1', {'section': 'products'})

    assert len(repo.load()) == 2
    catalog = repo.get_by_type('CATALOGO')
    assert [e['related_id'] for e in catalog] == ['p1']
    assert catalog[0]['details'] == {'section': 'products'}


def test_audit_repository_caps_entries(tmp_path, monkeypatch):
    monkeypatch.setattr(AuditRepository, 'MAX_LOGS', 3)
    repo = AuditRepository(str(tmp_path))
    for n in range(5):
        repo.log('SISTEMA', 'admin', f'evento {n}')

    messages = [e['message'] for e in repo.get_all()]
    assert messages == ['evento 2', 'evento 3', 'evento 4']


# ---------------------------------------------------------------------------
# Exportaciones
# ---------------------------------------------------------------------------

def test_export_filename(tmp_path):
    service = ExportService(str(tmp_path))
    assert service.build_filename(datetime(2025, 6, 30)) == 'gada-electronics-config-2025-06-30.json'


def test_write_export_and_status(tmp_path, config_factory):
    service = ExportService(str(tmp_path))
    doc = config_factory(products=[{'id': 'p1', 'name': 'cámara'}])

    path = service.write_export(doc)

    with open(path, encoding='utf-8') as f:
        text = f.read()
    assert 'cámara' in text
    assert json.loads(text) == doc

    status = service.get_export_status()
    assert status['total_exports'] == 1
    assert status['today_exists'] is True
    assert status['exports'][0]['date'] == datetime.now().strftime('%Y-%m-%d')


def test_old_exports_are_rotated(tmp_path, config_factory):
    service = ExportService(str(tmp_path))
    service.MAX_EXPORTS = 2
    export_root = tmp_path / 'exports'
    export_root.mkdir()
    for day in ('2020-01-01', '2020-01-02', '2020-01-03'):
        (export_root / f'gada-electronics-config-{day}.json').write_text('{}', encoding='utf-8')
    (export_root / 'otro-archivo.json').write_text('{}', encoding='utf-8')

    service.write_export(config_factory())

    names = [e['filename'] for e in service.get_export_status()['exports']]
    assert names == [service.build_filename(), 'gada-electronics-config-2020-01-03.json']
    assert (export_root / 'otro-archivo.json').exists()


# ---------------------------------------------------------------------------
# Backend simulado
# ---------------------------------------------------------------------------

def test_replace_config_restamps_last_modified(config_factory):
    db = MockDatabase(seed_config=config_factory())
    before = db.get_snapshot()['lastModified']

    saved = db.replace_config(config_factory(products=[{'id': 'p1'}]))

    assert saved['lastModified'] > before
    assert db.get_products() == [{'id': 'p1'}]


def test_seed_file_is_used_when_valid(tmp_path, config_factory):
    seed = tmp_path / 'seed.json'
    seed.write_text(json.dumps(config_factory(products=[{'id': 'semilla'}])), encoding='utf-8')
    assert MockDatabase(seed_file=str(seed)).get_products() == [{'id': 'semilla'}]

    seed.write_text('{"products": []}', encoding='utf-8')
    assert len(MockDatabase(seed_file=str(seed)).get_products()) == 2


def test_update_list_is_all_or_nothing():
    db = MockDatabase()
    db.add_user({'email': 'Ana@Gada.cu', 'password': 'x'})
    db.set_list('ana@gada.cu', 'cart', [{'id': 'p1', 'qty': 1}])

    def broken(cart):
        cart.append({'id': 'p2'})
        raise RuntimeError('fallo a mitad')

    with pytest.raises(RuntimeError):
        db.update_list('ana@gada.cu', 'cart', broken)

    assert db.get_list('ANA@gada.cu', 'cart') == [{'id': 'p1', 'qty': 1}]
    with pytest.raises(ValueError):
        db.update_list('ana@gada.cu', 'orders', lambda items: items)


# ---------------------------------------------------------------------------
# Utilidades
# ---------------------------------------------------------------------------

def test_next_timestamp_is_strictly_increasing():
    future = '2999-01-01T00:00:00.000Z'
    assert next_timestamp(future) == '2999-01-01T00:00:00.001Z'

    stamps = [next_timestamp()]
    for _ in range(50):
        stamps.append(next_timestamp(stamps[-1]))
    assert all(a < b for a, b in zip(stamps, stamps[1:]))
    assert parse_timestamp(stamps[0]) is not None


def test_form_value_conversion():
    assert to_int('3') == 3
    assert to_int('3.0') == 3
    assert to_int('3.5') is None
    assert to_int(True) is None
    assert to_float('') is None
    assert to_float('2.5') == 2.5


@pytest.mark.parametrize('value', ['nan', 'inf', '-inf', '1e400', float('nan'), float('inf')])
def test_non_finite_numbers_are_rejected(value):
    assert to_float(value) is None
    assert to_int(value) is None
