# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un concepto de la tienda.
# El documento de configuración viaja como dict (claves camelCase);
# estas clases normalizan los datos que entran desde formularios.
# ==============================================================================

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any
from enum import Enum


# ==============================================================================
# ENUMERACIONES
# ==============================================================================

class ServiceType(str, Enum):
    """Tipos de servicio de entrega."""
    HOME_DELIVERY = "home_delivery"  # Mensajería a domicilio
    PICKUP = "pickup"                # Recogida en tienda


class AuditType(str, Enum):
    """Tipos de eventos de auditoría."""
    CONFIG = "CONFIG"
    CATALOGO = "CATALOGO"
    SISTEMA = "SISTEMA"


def entity_id(data: Dict[str, Any]) -> Optional[str]:
    """
    Obtiene el identificador de un registro.

    Los documentos generados por la versión web usan '_id';
    los nuevos registros usan 'id'. Se soportan ambos.
    """
    if not data:
        return None
    value = data.get('id', data.get('_id'))
    return str(value) if value is not None else None


# ==============================================================================
# CONFIGURACIÓN DE TIENDA
# ==============================================================================

@dataclass
class StoreInfo:
    """Datos generales de la tienda."""
    store_name: str
    whatsapp_number: str
    store_address_id: str = 'store-main-address'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'storeName': self.store_name,
            'whatsappNumber': self.whatsapp_number,
            'storeAddressId': self.store_address_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StoreInfo':
        return cls(
            store_name=str(data.get('storeName', '')).strip(),
            whatsapp_number=str(data.get('whatsappNumber', '')).strip(),
            store_address_id=data.get('storeAddressId') or 'store-main-address'
        )


# ==============================================================================
# CATÁLOGO
# ==============================================================================

@dataclass
class ProductColor:
    """
    Color disponible de un producto.

    Attributes:
        color: Color en hexadecimal (#rrggbb o #rgb)
        color_quantity: Unidades disponibles en ese color
    """
    color: str = '#000000'
    color_quantity: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {'color': self.color, 'colorQuantity': self.color_quantity}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ProductColor':
        return cls(
            color=data.get('color', '#000000'),
            color_quantity=data.get('colorQuantity', 0)
        )


@dataclass
class Product:
    """
    Producto del catálogo.

    Attributes:
        product_id: Identificador único (inmutable)
        name: Nombre visible
        price: Precio de venta
        original_price: Precio antes del descuento
        category: Nombre de la categoría (no su id)
        stock: Unidades totales en inventario
        stars: Valoración entre 0 y 5
    """
    product_id: str
    name: str
    price: float
    original_price: float
    image: str = ''
    colors: List[ProductColor] = field(default_factory=list)
    company: str = ''
    description: str = ''
    category: str = ''
    is_shipping_available: bool = True
    stock: int = 0
    review_count: int = 0
    stars: float = 0.0
    featured: bool = False

    @property
    def discount_percent(self) -> int:
        """Porcentaje de descuento respecto al precio original."""
        if not self.original_price or self.original_price <= self.price:
            return 0
        return round((1 - self.price / self.original_price) * 100)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para el documento de configuración."""
        return {
            'id': self.product_id,
            'name': self.name,
            'price': self.price,
            'originalPrice': self.original_price,
            'image': self.image,
            'colors': [c.to_dict() for c in self.colors],
            'company': self.company,
            'description': self.description,
            'category': self.category,
            'isShippingAvailable': self.is_shipping_available,
            'stock': self.stock,
            'reviewCount': self.review_count,
            'stars': self.stars,
            'featured': self.featured,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Product':
        """Crea instancia desde diccionario (acepta 'id' o '_id')."""
        return cls(
            product_id=entity_id(data),
            name=data.get('name', ''),
            price=data.get('price', 0),
            original_price=data.get('originalPrice', data.get('price', 0)),
            image=data.get('image', ''),
            colors=[ProductColor.from_dict(c) for c in data.get('colors', [])],
            company=data.get('company', ''),
            description=data.get('description', ''),
            category=data.get('category', ''),
            is_shipping_available=bool(data.get('isShippingAvailable', True)),
            stock=data.get('stock', 0),
            review_count=data.get('reviewCount', 0),
            stars=data.get('stars', 0.0),
            featured=bool(data.get('featured', False))
        )


@dataclass
class Category:
    """Categoría del catálogo. El nombre es único sin distinguir mayúsculas."""
    category_id: str
    category_name: str
    category_image: str = ''
    description: str = ''
    disabled: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.category_id,
            'categoryName': self.category_name,
            'categoryImage': self.category_image,
            'description': self.description,
            'disabled': self.disabled,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Category':
        return cls(
            category_id=entity_id(data),
            category_name=data.get('categoryName', ''),
            category_image=data.get('categoryImage', ''),
            description=data.get('description', '') or '',
            disabled=bool(data.get('disabled', False))
        )


# ==============================================================================
# CUPONES Y ZONAS
# ==============================================================================

@dataclass
class Coupon:
    """
    Cupón de descuento.

    Attributes:
        coupon_code: Código en mayúsculas (único sin distinguir mayúsculas)
        discount_percent: Descuento entero entre 1 y 100
        min_cart_price_required: Monto mínimo del carrito para aplicarlo
    """
    coupon_id: str
    coupon_code: str
    text: str
    discount_percent: int
    min_cart_price_required: float = 0.0

    def applies_to(self, cart_total: float) -> bool:
        """Verifica si el cupón aplica para un total de carrito."""
        return cart_total >= self.min_cart_price_required

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.coupon_id,
            'couponCode': self.coupon_code,
            'text': self.text,
            'discountPercent': self.discount_percent,
            'minCartPriceRequired': self.min_cart_price_required,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Coupon':
        return cls(
            coupon_id=entity_id(data),
            coupon_code=data.get('couponCode', ''),
            text=data.get('text', ''),
            discount_percent=data.get('discountPercent', 0),
            min_cart_price_required=data.get('minCartPriceRequired', 0)
        )


def zone_id_from_name(name: str) -> str:
    """Deriva el id de una zona a partir de su nombre ('Vista Alegre' -> 'vista_alegre')."""
    return '_'.join(name.strip().lower().split())


@dataclass
class Zone:
    """Zona de entrega a domicilio con su costo."""
    name: str
    cost: float
    zone_id: str = ''

    def __post_init__(self):
        if not self.zone_id:
            self.zone_id = zone_id_from_name(self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.zone_id, 'name': self.name, 'cost': self.cost}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Zone':
        return cls(
            name=data.get('name', ''),
            cost=data.get('cost', 0),
            zone_id=data.get('id', '')
        )


# ==============================================================================
# TELÉFONOS Y DIRECCIONES
# ==============================================================================

@dataclass(frozen=True)
class CountryCode:
    """Prefijo telefónico internacional."""
    code: str
    country: str
    flag: str = ''


@dataclass
class Address:
    """
    Dirección de entrega del cliente.

    Para recogida en tienda solo se exigen nombre, móvil y tipo de servicio.
    """
    address_id: str
    username: str
    mobile: str
    service_type: ServiceType = ServiceType.HOME_DELIVERY
    zone: str = ''
    address_info: str = ''
    receiver_name: str = ''
    receiver_phone: str = ''
    additional_info: str = ''
    delivery_cost: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'addressId': self.address_id,
            'username': self.username,
            'mobile': self.mobile,
            'serviceType': self.service_type.value,
            'zone': self.zone,
            'addressInfo': self.address_info,
            'receiverName': self.receiver_name,
            'receiverPhone': self.receiver_phone,
            'additionalInfo': self.additional_info,
            'deliveryCost': self.delivery_cost,
        }
