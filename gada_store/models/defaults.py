# ==============================================================================
# CONFIGURACIÓN POR DEFECTO
# ==============================================================================
# Valores empaquetados con la aplicación. Se usan cuando no se puede
# obtener el documento JSON del backend ni la copia local.
# ==============================================================================

import copy

from .entities import CountryCode


DEFAULT_STORE_INFO = {
    'storeName': 'Gada Electronics',
    'whatsappNumber': '+53 54690878',
    'storeAddressId': 'store-main-address',
}

DEFAULT_COUPONS = []

SANTIAGO_ZONES = [
    {'id': 'nuevo_vista_alegre', 'name': 'Nuevo vista alegre', 'cost': 100},
]

DEFAULT_PRODUCTS = [
    {
        'id': '9eb0c25b-447c-4723-9ce4-639527debb68',
        'name': 'mi book 15',
        'price': 31990,
        'originalPrice': 51999,
        'image': 'https://res.cloudinary.com/dtbd1y4en/image/upload/v1683908106/redmi-book-15_ksizgp.jpg',
        'colors': [
            {'color': '#0000ff', 'colorQuantity': 10},
            {'color': '#00ff00', 'colorQuantity': 6},
            {'color': '#ff0000', 'colorQuantity': 9},
        ],
        'company': 'redmi',
        'description': (
            'For this model, screen size is 39.62 cm and hard disk size is 256 GB. '
            'CPU Model Core is i3. RAM Memory Installed Size is 8 GB. '
            'Operating System is Windows 10 Home.'
        ),
        'category': 'laptop',
        'isShippingAvailable': True,
        'stock': 25,
        'reviewCount': 418,
        'stars': 3.7,
    },
    {
        'id': 'eb7db2dd-231a-47f5-b803-4415c2150efa',
        'name': 'mi notebook pro',
        'price': 54499,
        'originalPrice': 74999,
        'image': 'https://res.cloudinary.com/dtbd1y4en/image/upload/v1683908295/mi-notebook-pro_hi4vih.jpg',
        'colors': [
            {'color': '#00ff00', 'colorQuantity': 8},
            {'color': '#000', 'colorQuantity': 2},
        ],
        'company': 'redmi',
        'description': (
            'For this model, screen size is 14 Inches and hard disk size is 512 GB. '
            'CPU Model Core is i5. RAM Memory Installed Size is 16 GB. '
            'Operating System is Windows 11.'
        ),
        'category': 'laptop',
        'isShippingAvailable': False,
        'stock': 10,
        'reviewCount': 1805,
        'stars': 4.3,
    },
]

DEFAULT_CATEGORIES = [
    {
        'id': '35abdf47-0dae-40fc-b201-a981e9daa3d4',
        'categoryName': 'laptop',
        'categoryImage': 'https://res.cloudinary.com/dtbd1y4en/image/upload/v1683908106/redmi-book-15_ksizgp.jpg',
        'description': '',
    },
    {
        'id': 'fab4d8a9-84cd-49bb-9479-ff73e5bcf0fc',
        'categoryName': 'tv',
        'categoryImage': 'https://res.cloudinary.com/dtbd1y4en/image/upload/v1683918874/oneplus-55U1S_pl3nko.jpg',
        'description': '',
    },
    {
        'id': 'a9c05f11-bb6a-4501-9390-3201ed9f9448',
        'categoryName': 'smartwatch',
        'categoryImage': 'https://res.cloudinary.com/dtbd1y4en/image/upload/v1683911006/apple-watch-ultra_ony1kc.jpg',
        'description': '',
    },
    {
        'id': 'a71bd701-eca8-41a8-a385-e1ec91a03697',
        'categoryName': 'earphone',
        'categoryImage': 'https://res.cloudinary.com/dtbd1y4en/image/upload/v1683955385/oneplus-nord-buds_b9yphw.jpg',
        'description': '',
    },
    {
        'id': '16080c75-5573-4626-9b89-37c670907c02',
        'categoryName': 'mobile',
        'categoryImage': 'https://res.cloudinary.com/dtbd1y4en/image/upload/v1683957585/oneplus-nord-CE-3-lite_weksou.jpg',
        'description': '',
    },
]

# Prefijos reconocidos por el validador de teléfonos
COUNTRY_CODES = (
    CountryCode('+53', 'Cuba', '🇨🇺'),
    CountryCode('+1', 'Estados Unidos', '🇺🇸'),
    CountryCode('+34', 'España', '🇪🇸'),
    CountryCode('+52', 'México', '🇲🇽'),
    CountryCode('+57', 'Colombia', '🇨🇴'),
    CountryCode('+58', 'Venezuela', '🇻🇪'),
    CountryCode('+51', 'Perú', '🇵🇪'),
    CountryCode('+54', 'Argentina', '🇦🇷'),
    CountryCode('+56', 'Chile', '🇨🇱'),
    CountryCode('+593', 'Ecuador', '🇪🇨'),
    CountryCode('+507', 'Panamá', '🇵🇦'),
    CountryCode('+39', 'Italia', '🇮🇹'),
    CountryCode('+49', 'Alemania', '🇩🇪'),
    CountryCode('+33', 'Francia', '🇫🇷'),
    CountryCode('+44', 'Reino Unido', '🇬🇧'),
    CountryCode('+7', 'Rusia', '🇷🇺'),
)


def build_default_config(last_modified: str, version: str) -> dict:
    """
    Construye una copia nueva de la configuración por defecto.

    Args:
        last_modified: Marca de tiempo ISO para 'lastModified'
        version: Versión del formato del documento

    Returns:
        Diccionario StoreConfig completo
    """
    return {
        'storeInfo': copy.deepcopy(DEFAULT_STORE_INFO),
        'coupons': copy.deepcopy(DEFAULT_COUPONS),
        'zones': copy.deepcopy(SANTIAGO_ZONES),
        'products': copy.deepcopy(DEFAULT_PRODUCTS),
        'categories': copy.deepcopy(DEFAULT_CATEGORIES),
        'lastModified': last_modified,
        'version': version,
    }
