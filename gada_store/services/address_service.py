# ==============================================================================
# SERVICIO DE DIRECCIONES
# ==============================================================================
# Libreta de direcciones del cliente (en memoria, por sesión).
#
# Tipos de servicio:
#   - home_delivery: nombre, móvil, zona, dirección, receptor y su teléfono
#   - pickup: solo nombre y móvil
#
# El costo de envío sale de las zonas configuradas (0 para recogida o si la
# zona no existe).
# ==============================================================================

import uuid
from typing import Any, Dict, List, Optional

from gada_store.models import Address, ServiceType, entity_id
from gada_store.repositories.interfaces import ISnapshotSource
from gada_store.services.errors import ValidationError
from gada_store.services.phone_validator import validate_phone_number


BASE_REQUIRED = ('username', 'mobile', 'serviceType')
DELIVERY_REQUIRED = ('zone', 'addressInfo', 'receiverName', 'receiverPhone')


class AddressService:
    """
    Alta, edición y baja de direcciones de entrega.

    Uso:
        addresses = AddressService(config_store)
        result = addresses.add_address({...})
    """

    def __init__(self, source: ISnapshotSource):
        """
        Args:
            source: Fuente de la configuración (para las zonas de entrega)
        """
        self.source = source
        self._addresses: List[Dict[str, Any]] = []

    def get_addresses(self) -> List[Dict[str, Any]]:
        return [dict(a) for a in self._addresses]

    def get_delivery_cost(self, zone_id: str) -> float:
        """Costo de la zona con ese id, 0 si no existe."""
        for zone in self.source.get_snapshot().get('zones') or []:
            if entity_id(zone) == zone_id:
                return zone.get('cost') or 0
        return 0

    # =========================================================================
    # VALIDACIÓN
    # =========================================================================

    def validate_address(self, data: Dict[str, Any], address_id: str = None) -> Address:
        """
        Valida el formulario de dirección.

        Raises:
            ValidationError: Campo obligatorio vacío, tipo de servicio
                desconocido o teléfono inválido
        """
        try:
            service_type = ServiceType(data.get('serviceType') or ServiceType.HOME_DELIVERY.value)
        except ValueError:
            raise ValidationError('Tipo de servicio inválido') from None

        required = BASE_REQUIRED
        if service_type == ServiceType.HOME_DELIVERY:
            required = BASE_REQUIRED + DELIVERY_REQUIRED

        for field in required:
            value = data.get(field)
            if not value or (isinstance(value, str) and not value.strip()):
                raise ValidationError('Por favor completa todos los campos obligatorios')

        mobile = validate_phone_number(data['mobile'])
        if not mobile.is_valid:
            raise ValidationError(f'Número de móvil inválido: {mobile.message}')

        is_delivery = service_type == ServiceType.HOME_DELIVERY
        if is_delivery:
            receiver = validate_phone_number(data['receiverPhone'])
            if not receiver.is_valid:
                raise ValidationError(f'Teléfono del receptor inválido: {receiver.message}')

        return Address(
            address_id=address_id or str(uuid.uuid4()),
            username=str(data['username']).strip(),
            mobile=str(data['mobile']).strip(),
            service_type=service_type,
            zone=str(data.get('zone') or '') if is_delivery else '',
            address_info=str(data.get('addressInfo') or '').strip() if is_delivery else '',
            receiver_name=str(data.get('receiverName') or '').strip() if is_delivery else '',
            receiver_phone=str(data.get('receiverPhone') or '').strip() if is_delivery else '',
            additional_info=str(data.get('additionalInfo') or '').strip(),
            delivery_cost=self.get_delivery_cost(data.get('zone')) if is_delivery else 0
        )

    # =========================================================================
    # OPERACIONES
    # =========================================================================

    def _index_of(self, address_id: str) -> Optional[int]:
        for index, address in enumerate(self._addresses):
            if address['addressId'] == address_id:
                return index
        return None

    def add_address(self, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            address = self.validate_address(data).to_dict()
        except ValidationError as e:
            return {'ok': False, 'error': str(e)}

        self._addresses.append(address)
        return {'ok': True, 'mensaje': 'Dirección agregada', 'address': dict(address)}

    def edit_address(self, address_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        index = self._index_of(address_id)
        if index is None:
            return {'ok': False, 'error': 'Dirección no encontrada'}

        try:
            address = self.validate_address(data, address_id).to_dict()
        except ValidationError as e:
            return {'ok': False, 'error': str(e)}

        self._addresses[index] = address
        return {'ok': True, 'mensaje': 'Dirección actualizada', 'address': dict(address)}

    def delete_address(self, address_id: str) -> Dict[str, Any]:
        index = self._index_of(address_id)
        if index is None:
            return {'ok': False, 'error': 'Dirección no encontrada'}

        del self._addresses[index]
        return {'ok': True, 'mensaje': 'Dirección eliminada'}

    def delete_all(self) -> Dict[str, Any]:
        self._addresses = []
        return {'ok': True, 'mensaje': 'Direcciones eliminadas'}
