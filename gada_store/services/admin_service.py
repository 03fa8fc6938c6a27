# ==============================================================================
# SERVICIO DEL PANEL DE ADMINISTRACIÓN
# ==============================================================================
# Editores de productos, categorías, cupones, zonas y datos de la tienda.
#
# Cada edición:
#   1. Valida el formulario (ValidationError → {'ok': False, 'error'})
#   2. Arma la sección completa nueva a partir de la vista efectiva
#   3. La deja pendiente en el ConfigStore (stage), SIN exportar
#   4. Registra el cambio en auditoría
#
# Para que la tienda vea los cambios hay que exportar la configuración.
# ==============================================================================

import re
import uuid
from functools import wraps
from typing import Any, Dict, List, Optional

from gada_store.models import (
    Category,
    Coupon,
    Product,
    ProductColor,
    StoreInfo,
    Zone,
    entity_id,
    zone_id_from_name,
)
from gada_store.services.audit_service import AuditService
from gada_store.services.config_store import ConfigStore
from gada_store.services.errors import ValidationError
from gada_store.services.phone_validator import validate_phone_number
from gada_store.utils import to_float, to_int


_HEX_COLOR = re.compile(r'^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')

PENDING_NOTE = 'Para aplicar los cambios exporta la configuración'


def form_result(fn):
    """Convierte ValidationError en {'ok': False, 'error': mensaje}."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except ValidationError as e:
            print(f"[ADMIN] Formulario rechazado: {e}")
            return {'ok': False, 'error': str(e)}
    return wrapper


def _text(data: Dict[str, Any], key: str) -> str:
    return str(data.get(key) or '').strip()


class AdminService:
    """
    Servicio de edición del catálogo y la configuración de la tienda.

    Todas las operaciones retornan un dict {'ok': bool, ...}; nunca lanzan
    por errores de validación.
    """

    def __init__(self, store: ConfigStore, audit_service: AuditService = None):
        self.store = store
        self.audit_service = audit_service

    def _section(self, name: str) -> List[Dict[str, Any]]:
        return list(self.store.get_section(name) or [])

    def _commit(self, section: str, data: Any, action: str, related_id: str, mensaje: str) -> Dict[str, Any]:
        self.store.stage(section, data)
        if self.audit_service is not None:
            self.audit_service.log_catalog_change(section, action, related_id)
        return {'ok': True, 'mensaje': mensaje, 'nota': PENDING_NOTE}

    @staticmethod
    def _find_index(records: List[Dict[str, Any]], record_id: str) -> Optional[int]:
        for index, record in enumerate(records):
            if entity_id(record) == str(record_id):
                return index
        return None

    # =========================================================================
    # PRODUCTOS
    # =========================================================================

    def _build_colors(self, raw_colors: Any) -> List[ProductColor]:
        colors = []
        for raw in raw_colors or []:
            if not isinstance(raw, dict):
                raise ValidationError("Formato de color inválido")
            color = _text(raw, 'color')
            if not _HEX_COLOR.match(color):
                raise ValidationError(f"Color inválido: {color or '(vacío)'}")
            quantity = to_int(raw.get('colorQuantity', 0))
            if quantity is None or quantity < 0:
                raise ValidationError("La cantidad por color debe ser un entero mayor o igual a 0")
            colors.append(ProductColor(color, quantity))
        return colors

    def validate_product(self, data: Dict[str, Any], product_id: str = None) -> Product:
        """
        Valida el formulario de producto y arma la entidad.

        Args:
            data: Campos del formulario (claves camelCase)
            product_id: Id existente al editar, None al crear

        Raises:
            ValidationError: Si algún campo no es válido
        """
        name = _text(data, 'name')
        if not name:
            raise ValidationError('El nombre del producto es requerido')

        price = to_float(data.get('price'))
        if price is None or price <= 0:
            raise ValidationError('El precio debe ser mayor a 0')

        original_price = to_float(data.get('originalPrice')) or price
        if original_price < 0:
            raise ValidationError('El precio original debe ser mayor o igual a 0')

        stock = to_int(data.get('stock') or 0)
        review_count = to_int(data.get('reviewCount') or 0)
        if stock is None or stock < 0:
            raise ValidationError('El stock debe ser un entero mayor o igual a 0')
        if review_count is None or review_count < 0:
            raise ValidationError('La cantidad de reseñas debe ser un entero mayor o igual a 0')

        stars = to_float(data.get('stars')) or 0.0
        if not 0 <= stars <= 5:
            raise ValidationError('La valoración debe estar entre 0 y 5')

        return Product(
            product_id=product_id or str(uuid.uuid4()),
            name=name,
            price=price,
            original_price=original_price,
            image=_text(data, 'image'),
            colors=self._build_colors(data.get('colors')),
            company=_text(data, 'company'),
            description=_text(data, 'description'),
            category=_text(data, 'category'),
            is_shipping_available=bool(data.get('isShippingAvailable', True)),
            stock=stock,
            review_count=review_count,
            stars=stars,
            featured=bool(data.get('featured', False))
        )

    @form_result
    def save_product(self, data: Dict[str, Any], product_id: str = None) -> Dict[str, Any]:
        """
        Crea (sin product_id) o actualiza un producto en memoria.

        El id de un producto existente nunca cambia.
        """
        products = self._section('products')

        index = None
        if product_id is not None:
            index = self._find_index(products, product_id)
            if index is None:
                raise ValidationError('Producto no encontrado')

        product = self.validate_product(data, product_id).to_dict()

        if index is None:
            products.append(product)
            action, mensaje = 'creado', 'Producto creado (cambios en memoria)'
        else:
            products[index] = product
            action, mensaje = 'actualizado', 'Producto actualizado (cambios en memoria)'

        result = self._commit('products', products, action, product['id'], mensaje)
        result['product'] = product
        return result

    @form_result
    def delete_product(self, product_id: str) -> Dict[str, Any]:
        products = self._section('products')
        if self._find_index(products, product_id) is None:
            raise ValidationError('Producto no encontrado')
        remaining = [p for p in products if entity_id(p) != str(product_id)]
        return self._commit('products', remaining, 'eliminado', str(product_id),
                            'Producto eliminado (cambios en memoria)')

    # =========================================================================
    # CATEGORÍAS
    # =========================================================================

    @form_result
    def save_category(self, data: Dict[str, Any], category_id: str = None) -> Dict[str, Any]:
        """
        Crea o actualiza una categoría.

        El nombre se guarda en minúsculas y no puede repetirse (sin
        distinguir mayúsculas, sin contar la propia categoría al editar).
        """
        name = _text(data, 'categoryName')
        if not name:
            raise ValidationError('El nombre de la categoría es requerido')

        image = _text(data, 'categoryImage')
        if not image:
            raise ValidationError('La imagen de la categoría es requerida')

        categories = self._section('categories')

        index = None
        if category_id is not None:
            index = self._find_index(categories, category_id)
            if index is None:
                raise ValidationError('Categoría no encontrada')

        duplicate = any(
            str(c.get('categoryName') or '').lower() == name.lower()
            and entity_id(c) != (str(category_id) if category_id is not None else None)
            for c in categories
        )
        if duplicate:
            raise ValidationError('Ya existe una categoría con este nombre')

        disabled = bool(categories[index].get('disabled', False)) if index is not None else False
        category = Category(
            category_id=str(category_id) if category_id is not None else str(uuid.uuid4()),
            category_name=name.lower(),
            category_image=image,
            description=_text(data, 'description'),
            disabled=bool(data.get('disabled', disabled))
        ).to_dict()

        if index is None:
            categories.append(category)
            action, mensaje = 'creado', 'Categoría creada (cambios en memoria)'
        else:
            categories[index] = category
            action, mensaje = 'actualizado', 'Categoría actualizada (cambios en memoria)'

        result = self._commit('categories', categories, action, category['id'], mensaje)
        result['category'] = category
        return result

    @form_result
    def toggle_category(self, category_id: str) -> Dict[str, Any]:
        """Habilita o deshabilita una categoría."""
        categories = self._section('categories')
        index = self._find_index(categories, category_id)
        if index is None:
            raise ValidationError('Categoría no encontrada')

        category = dict(categories[index])
        category['disabled'] = not category.get('disabled', False)
        categories[index] = category

        estado = 'deshabilitada' if category['disabled'] else 'habilitada'
        result = self._commit('categories', categories, estado, str(category_id),
                              f'Categoría {estado} (cambios en memoria)')
        result['category'] = category
        return result

    @form_result
    def delete_category(self, category_id: str) -> Dict[str, Any]:
        categories = self._section('categories')
        if self._find_index(categories, category_id) is None:
            raise ValidationError('Categoría no encontrada')
        remaining = [c for c in categories if entity_id(c) != str(category_id)]
        return self._commit('categories', remaining, 'eliminado', str(category_id),
                            'Categoría eliminada (cambios en memoria)')

    # =========================================================================
    # CUPONES
    # =========================================================================

    @form_result
    def save_coupon(self, data: Dict[str, Any], coupon_id: str = None) -> Dict[str, Any]:
        """
        Crea o actualiza un cupón.

        El código se guarda en mayúsculas y no puede repetirse (sin
        distinguir mayúsculas). Sin texto se usa "<n>% Descuento".
        """
        code = _text(data, 'couponCode')
        if not code:
            raise ValidationError('El código del cupón es requerido')

        discount = to_int(data.get('discountPercent'))
        if discount is None or discount <= 0 or discount > 100:
            raise ValidationError('El descuento debe ser entre 1 y 100%')

        minimum = to_float(data.get('minCartPriceRequired'))
        if minimum is None or minimum < 0:
            raise ValidationError('El precio mínimo debe ser mayor o igual a 0')

        coupons = self._section('coupons')

        index = None
        if coupon_id is not None:
            index = self._find_index(coupons, coupon_id)
            if index is None:
                raise ValidationError('Cupón no encontrado')

        duplicate = any(
            str(c.get('couponCode') or '').upper() == code.upper()
            and entity_id(c) != (str(coupon_id) if coupon_id is not None else None)
            for c in coupons
        )
        if duplicate:
            raise ValidationError('Ya existe un cupón con este código')

        coupon = Coupon(
            coupon_id=str(coupon_id) if coupon_id is not None else str(uuid.uuid4()),
            coupon_code=code.upper(),
            text=_text(data, 'text') or f'{discount}% Descuento',
            discount_percent=discount,
            min_cart_price_required=minimum
        ).to_dict()

        if index is None:
            coupons.append(coupon)
            action, mensaje = 'creado', 'Cupón creado (cambios en memoria)'
        else:
            coupons[index] = coupon
            action, mensaje = 'actualizado', 'Cupón actualizado (cambios en memoria)'

        result = self._commit('coupons', coupons, action, coupon['id'], mensaje)
        result['coupon'] = coupon
        return result

    @form_result
    def delete_coupon(self, coupon_id: str) -> Dict[str, Any]:
        coupons = self._section('coupons')
        if self._find_index(coupons, coupon_id) is None:
            raise ValidationError('Cupón no encontrado')
        remaining = [c for c in coupons if entity_id(c) != str(coupon_id)]
        return self._commit('coupons', remaining, 'eliminado', str(coupon_id),
                            'Cupón eliminado (cambios en memoria)')

    # =========================================================================
    # ZONAS
    # =========================================================================

    @form_result
    def save_zone(self, data: Dict[str, Any], zone_id: str = None) -> Dict[str, Any]:
        """Crea o actualiza una zona de entrega (id derivado del nombre)."""
        name = _text(data, 'name')
        cost = to_float(data.get('cost'))
        if not name or cost is None or cost < 0:
            raise ValidationError('Todos los campos son requeridos')

        zones = self._section('zones')

        index = None
        if zone_id is not None:
            index = self._find_index(zones, zone_id)
            if index is None:
                raise ValidationError('Zona no encontrada')

        zone = Zone(name=name, cost=cost, zone_id=zone_id or zone_id_from_name(name)).to_dict()

        if index is None:
            if self._find_index(zones, zone['id']) is not None:
                raise ValidationError('Ya existe una zona con este nombre')
            zones.append(zone)
            action, mensaje = 'creado', 'Zona creada (cambios en memoria)'
        else:
            zones[index] = zone
            action, mensaje = 'actualizado', 'Zona actualizada (cambios en memoria)'

        result = self._commit('zones', zones, action, zone['id'], mensaje)
        result['zone'] = zone
        return result

    @form_result
    def delete_zone(self, zone_id: str) -> Dict[str, Any]:
        zones = self._section('zones')
        if self._find_index(zones, zone_id) is None:
            raise ValidationError('Zona no encontrada')
        remaining = [z for z in zones if entity_id(z) != str(zone_id)]
        return self._commit('zones', remaining, 'eliminado', str(zone_id),
                            'Zona eliminada (cambios en memoria)')

    # =========================================================================
    # DATOS DE LA TIENDA
    # =========================================================================

    @form_result
    def save_store_info(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Actualiza nombre y WhatsApp de la tienda."""
        current = self.store.get_section('storeInfo') or {}
        info = StoreInfo.from_dict({**current, **data})

        if not info.store_name:
            raise ValidationError('El nombre de la tienda es requerido')

        if not validate_phone_number(info.whatsapp_number).is_valid:
            raise ValidationError('Número de WhatsApp inválido')

        result = self._commit('storeInfo', info.to_dict(), 'actualizado', 'storeInfo',
                              'Configuración de tienda guardada (cambios en memoria)')
        result['storeInfo'] = info.to_dict()
        return result
