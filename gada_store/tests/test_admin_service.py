import pytest

from gada_store.models import AuditType


VALID_PRODUCT = {
    'name': 'redmi note 12',
    'price': 25000,
    'originalPrice': 30000,
    'colors': [{'color': '#fff', 'colorQuantity': 3}],
    'category': 'mobile',
    'stock': 3,
    'reviewCount': 10,
    'stars': 4.5,
}


@pytest.fixture
def admin(container, store):
    return container.admin_service


# ---------------------------------------------------------------------------
# Productos
# ---------------------------------------------------------------------------

def test_new_product_is_staged_not_published(admin, store, container):
    result = admin.save_product(VALID_PRODUCT)

    assert result['ok']
    assert result['nota']
    assert result['product']['name'] == 'redmi note 12'
    assert len(store.get_current()['products']) == 3
    assert len(container.catalog_service.get_all()) == 2


@pytest.mark.parametrize('override, error', [
    ({'name': '  '}, 'El nombre del producto es requerido'),
    ({'price': 0}, 'El precio debe ser mayor a 0'),
    ({'price': 'abc'}, 'El precio debe ser mayor a 0'),
    ({'stock': -1}, 'El stock debe ser un entero mayor o igual a 0'),
    ({'stock': 1.5}, 'El stock debe ser un entero mayor o igual a 0'),
    ({'price': 'nan'}, 'El precio debe ser mayor a 0'),
    ({'price': 'inf'}, 'El precio debe ser mayor a 0'),
    ({'stock': 'inf'}, 'El stock debe ser un entero mayor o igual a 0'),
    ({'stock': '1e400'}, 'El stock debe ser un entero mayor o igual a 0'),
    ({'reviewCount': 'nan'}, 'La cantidad de reseñas debe ser un entero mayor o igual a 0'),
    ({'stars': 6}, 'La valoración debe estar entre 0 y 5'),
    ({'colors': [{'color': 'rojo', 'colorQuantity': 1}]}, 'Color inválido: rojo'),
])
def test_invalid_product_is_rejected(admin, store, override, error):
    result = admin.save_product({**VALID_PRODUCT, **override})
    assert result == {'ok': False, 'error': error}
    assert not store.has_pending_changes()


def test_original_price_defaults_to_price(admin):
    data = dict(VALID_PRODUCT)
    del data['originalPrice']
    assert admin.save_product(data)['product']['originalPrice'] == 25000


def test_update_product_keeps_id(admin, store):
    product_id = 'eb7db2dd-231a-47f5-b803-4415c2150efa'
    result = admin.save_product({**VALID_PRODUCT, 'name': 'mi notebook pro 2'}, product_id)

    assert result['product']['id'] == product_id
    names = [p['name'] for p in store.get_current()['products']]
    assert names == ['mi book 15', 'mi notebook pro 2']


def test_update_unknown_product(admin):
    assert admin.save_product(VALID_PRODUCT, 'no-existe')['error'] == 'Producto no encontrado'


def test_delete_product(admin, store):
    result = admin.delete_product('9eb0c25b-447c-4723-9ce4-639527debb68')
    assert result['ok']
    assert [p['name'] for p in store.get_current()['products']] == ['mi notebook pro']
    assert admin.delete_product('9eb0c25b-447c-4723-9ce4-639527debb68')['ok'] is False


def test_product_with_legacy_id_can_be_edited(admin, store, config_factory):
    store.import_document(config_factory(products=[{'_id': 'legacy', 'name': 'viejo', 'price': 1}]))
    result = admin.save_product(VALID_PRODUCT, 'legacy')
    assert result['ok']
    assert store.get_current()['products'][0]['id'] == 'legacy'


# ---------------------------------------------------------------------------
# Categorías
# ---------------------------------------------------------------------------

def test_category_name_is_unique_ignoring_case(admin, store):
    before = store.get_current()['categories']

    result = admin.save_category({'categoryName': 'Laptop', 'categoryImage': 'x.png'})

    assert result == {'ok': False, 'error': 'Ya existe una categoría con este nombre'}
    assert store.get_current()['categories'] == before


def test_new_category_is_stored_lowercase(admin):
    result = admin.save_category({'categoryName': 'Gaming', 'categoryImage': 'x.png'})
    assert result['ok']
    assert result['category']['categoryName'] == 'gaming'
    assert result['category']['disabled'] is False


def test_category_requires_name_and_image(admin):
    assert admin.save_category({'categoryImage': 'x.png'})['error'] == 'El nombre de la categoría es requerido'
    assert admin.save_category({'categoryName': 'gaming'})['error'] == 'La imagen de la categoría es requerida'


def test_editing_category_can_keep_its_own_name(admin):
    laptop_id = '35abdf47-0dae-40fc-b201-a981e9daa3d4'
    result = admin.save_category({'categoryName': 'LAPTOP', 'categoryImage': 'nueva.png'}, laptop_id)
    assert result['ok']
    assert result['category']['categoryImage'] == 'nueva.png'


def test_toggle_category(admin, store):
    tv_id = 'fab4d8a9-84cd-49bb-9479-ff73e5bcf0fc'
    assert admin.toggle_category(tv_id)['category']['disabled'] is True
    assert admin.toggle_category(tv_id)['category']['disabled'] is False
    assert admin.toggle_category('no-existe')['ok'] is False


def test_delete_category(admin, store):
    assert admin.delete_category('fab4d8a9-84cd-49bb-9479-ff73e5bcf0fc')['ok']
    assert len(store.get_current()['categories']) == 4


# ---------------------------------------------------------------------------
# Cupones
# ---------------------------------------------------------------------------

def test_coupon_code_is_uppercase_with_default_text(admin):
    result = admin.save_coupon({'couponCode': 'verano', 'discountPercent': 15, 'minCartPriceRequired': 0})
    coupon = result['coupon']
    assert coupon['couponCode'] == 'VERANO'
    assert coupon['text'] == '15% Descuento'
    assert coupon['minCartPriceRequired'] == 0


@pytest.mark.parametrize('override, error', [
    ({'couponCode': ''}, 'El código del cupón es requerido'),
    ({'discountPercent': 0}, 'El descuento debe ser entre 1 y 100%'),
    ({'discountPercent': 101}, 'El descuento debe ser entre 1 y 100%'),
    ({'minCartPriceRequired': -5}, 'El precio mínimo debe ser mayor o igual a 0'),
    ({'minCartPriceRequired': 'inf'}, 'El precio mínimo debe ser mayor o igual a 0'),
    ({'discountPercent': 'nan'}, 'El descuento debe ser entre 1 y 100%'),
])
def test_invalid_coupon_is_rejected(admin, override, error):
    data = {'couponCode': 'X10', 'discountPercent': 10, 'minCartPriceRequired': 100, **override}
    assert admin.save_coupon(data)['error'] == error


def test_coupon_code_is_unique_ignoring_case(admin):
    admin.save_coupon({'couponCode': 'GADA', 'discountPercent': 10, 'minCartPriceRequired': 0})
    result = admin.save_coupon({'couponCode': 'gada', 'discountPercent': 20, 'minCartPriceRequired': 0})
    assert result['error'] == 'Ya existe un cupón con este código'


def test_delete_coupon(admin, store):
    coupon_id = admin.save_coupon({'couponCode': 'A', 'discountPercent': 5, 'minCartPriceRequired': 0})['coupon']['id']
    assert admin.delete_coupon(coupon_id)['ok']
    assert store.get_current()['coupons'] == []


# ---------------------------------------------------------------------------
# Zonas y datos de la tienda
# ---------------------------------------------------------------------------

def test_zone_id_is_derived_from_name(admin):
    result = admin.save_zone({'name': 'Vista  Hermosa', 'cost': 150})
    assert result['zone'] == {'id': 'vista_hermosa', 'name': 'Vista  Hermosa', 'cost': 150.0}


def test_zone_validation(admin):
    assert admin.save_zone({'name': '', 'cost': 10})['error'] == 'Todos los campos son requeridos'
    assert admin.save_zone({'name': 'Centro', 'cost': ''})['error'] == 'Todos los campos son requeridos'
    assert admin.save_zone({'name': 'Centro', 'cost': 'inf'})['error'] == 'Todos los campos son requeridos'
    assert admin.save_zone({'name': 'Centro', 'cost': float('nan')})['error'] == 'Todos los campos son requeridos'
    duplicate = admin.save_zone({'name': 'Nuevo Vista Alegre', 'cost': 10})
    assert duplicate['error'] == 'Ya existe una zona con este nombre'


def test_edit_and_delete_zone(admin, store):
    assert admin.save_zone({'name': 'Nuevo vista alegre', 'cost': 120}, 'nuevo_vista_alegre')['ok']
    assert store.get_current()['zones'][0]['cost'] == 120.0
    assert admin.delete_zone('nuevo_vista_alegre')['ok']
    assert store.get_current()['zones'] == []


def test_store_info(admin, store):
    assert admin.save_store_info({'storeName': ''})['error'] == 'El nombre de la tienda es requerido'
    assert admin.save_store_info({'whatsappNumber': '12345'})['error'] == 'Número de WhatsApp inválido'

    result = admin.save_store_info({'storeName': 'Gada Store', 'whatsappNumber': '+53 5 123 4567'})
    assert result['ok']
    assert store.get_current()['storeInfo']['storeName'] == 'Gada Store'
    assert store.get_snapshot()['storeInfo']['storeName'] == 'Gada Electronics'


def test_edits_are_audited(admin, container):
    admin.save_zone({'name': 'Centro', 'cost': 50})
    logs = container.audit_service.get_logs(AuditType.CATALOGO)
    assert logs[0]['related_id'] == 'centro'
    assert logs[0]['details'] == {'section': 'zones', 'action': 'creado'}
