# ==============================================================================
# VALIDADOR DE TELÉFONOS
# ==============================================================================
# Valida números en formato internacional (+<código><número>):
#   - Cuba (+53): exactamente 8 dígitos después del código
#   - Resto de países reconocidos: entre 7 y 15 dígitos
#   - Código no reconocido: inválido
# Espacios, guiones y paréntesis se ignoran.
# ==============================================================================

import re
from dataclasses import dataclass
from typing import Optional, Sequence

from gada_store.models import COUNTRY_CODES, CountryCode


CUBA_CODE = '+53'
CUBA_DIGITS = 8
MIN_DIGITS = 7
MAX_DIGITS = 15

_NON_PHONE_CHARS = re.compile(r'[^\d+]')


@dataclass(frozen=True)
class PhoneValidation:
    """Resultado de validar un número."""
    is_valid: bool
    country: Optional[CountryCode]
    message: str


def clean_number(number: str) -> str:
    """Deja solo dígitos y el signo '+'."""
    return _NON_PHONE_CHARS.sub('', number or '')


def find_country(number: str, country_codes: Sequence[CountryCode] = COUNTRY_CODES) -> Optional[CountryCode]:
    """
    Busca el país cuyo prefijo coincide con el número.

    Se prueba primero el prefijo más largo para que '+593' no quede
    tapado por un código más corto.
    """
    cleaned = clean_number(number)
    for country in sorted(country_codes, key=lambda c: len(c.code), reverse=True):
        if cleaned.startswith(country.code):
            return country
    return None


def validate_phone_number(number: str, country_codes: Sequence[CountryCode] = COUNTRY_CODES) -> PhoneValidation:
    """
    Valida un número de teléfono internacional.

    Args:
        number: Número tal como lo escribió el usuario
        country_codes: Prefijos reconocidos

    Returns:
        PhoneValidation con is_valid, país detectado y mensaje
    """
    cleaned = clean_number(number)

    if not cleaned.startswith('+') or not cleaned[1:].isdigit():
        return PhoneValidation(False, None, 'Número inválido')

    country = find_country(cleaned, country_codes)
    if country is None:
        return PhoneValidation(False, None, 'Código de país no reconocido')

    digits = cleaned[len(country.code):]

    if country.code == CUBA_CODE:
        if len(digits) == CUBA_DIGITS:
            return PhoneValidation(True, country, f'Número válido de {country.country}')
        return PhoneValidation(False, country, f'Número cubano debe tener {CUBA_DIGITS} dígitos')

    if MIN_DIGITS <= len(digits) <= MAX_DIGITS:
        return PhoneValidation(True, country, f'Número válido de {country.country}')

    return PhoneValidation(False, country, f'Número inválido para {country.country}')


def is_valid_phone_number(number: str) -> bool:
    """Atajo booleano de validate_phone_number()."""
    return validate_phone_number(number).is_valid
