# ==============================================================================
# ALMACÉN DE CONFIGURACIÓN DE LA TIENDA
# ==============================================================================
# Dueño único de la StoreConfig de la sesión.
#
# POLÍTICA: cambios en memoria hasta exportar
#   - stage(): el panel de administración deja un cambio pendiente por
#     sección (products, categories, coupons, zones, storeInfo)
#   - get_current(): vista del administrador (confirmado + pendientes)
#   - get_snapshot(): vista de la tienda (solo lo confirmado)
#   - export(): confirma los pendientes, escribe el archivo y lo publica
#   - import_document(): reemplaza todo por un documento externo
#   - reset(): vuelve a la configuración por defecto
#
# Nunca se escribe una configuración a medias: cada operación arma el
# documento completo y lo reemplaza de una vez.
# ==============================================================================

import copy
import json
import os
from typing import Any, Dict, Optional, Union

from gada_store import settings
from gada_store.performance_logger import profile_function
from gada_store.repositories.interfaces import IConfigRepository
from gada_store.services.audit_service import AuditService
from gada_store.services.data_loader import DataLoader, SOURCE_REMOTE, missing_required_keys
from gada_store.services.errors import ConfigImportError, TransportError
from gada_store.services.export_service import ExportService
from gada_store.services.transport import MockTransport
from gada_store.utils import next_timestamp


class ConfigStore:
    """
    Configuración efectiva de la tienda con cambios pendientes por sección.

    Uso:
        store = ConfigStore(loader, config_repo, export_service, transport)
        await store.load()
        store.stage('products', productos)
        result = await store.export()
    """

    UPDATE_CONFIG_PATH = '/api/admin/update-config'

    def __init__(
        self,
        loader: DataLoader,
        config_repo: Optional[IConfigRepository] = None,
        export_service: Optional[ExportService] = None,
        transport: Optional[MockTransport] = None,
        audit_service: Optional[AuditService] = None
    ):
        self.loader = loader
        self.config_repo = config_repo
        self.export_service = export_service
        self.transport = transport
        self.audit_service = audit_service

        self._config: Optional[Dict[str, Any]] = None
        self._staged: Dict[str, Any] = {}
        self._staged_at: Optional[str] = None

    # =========================================================================
    # CARGA
    # =========================================================================

    @property
    def is_loaded(self) -> bool:
        return self._config is not None

    async def load(self) -> Dict[str, Any]:
        """
        Carga la configuración con el DataLoader y descarta pendientes.

        Si el documento llegó del backend se guarda también como copia local.

        Returns:
            Configuración efectiva
        """
        config = await self.loader.load()
        self._replace(config)

        if self.loader.last_source == SOURCE_REMOTE:
            self._persist_local(config)

        return self.get_current()

    def _ensure_loaded(self) -> None:
        if self._config is None:
            print("[CONFIG] Configuración no cargada todavía, usando valores por defecto")
            self._config = self.loader.get_defaults()

    def _replace(self, config: Dict[str, Any]) -> None:
        self._config = copy.deepcopy(config)
        self._staged = {}
        self._staged_at = None

    def _persist_local(self, config: Dict[str, Any]) -> None:
        if self.config_repo is None:
            return
        try:
            self.config_repo.save(config)
        except OSError as e:
            print(f"[CONFIG ERROR] No se pudo guardar la copia local: {e}")

    # =========================================================================
    # LECTURA
    # =========================================================================

    def get_current(self) -> Dict[str, Any]:
        """
        Configuración efectiva: lo confirmado con los pendientes encima.

        'lastModified' refleja el último cambio pendiente si lo hay.
        """
        self._ensure_loaded()
        current = copy.deepcopy(self._config)
        for section, data in self._staged.items():
            current[section] = copy.deepcopy(data)
        if self._staged_at:
            current['lastModified'] = self._staged_at
        return current

    def get_snapshot(self) -> Dict[str, Any]:
        """Solo lo confirmado (lo que ve la tienda hasta exportar)."""
        self._ensure_loaded()
        return copy.deepcopy(self._config)

    def get_section(self, section: str) -> Any:
        """Sección de la vista efectiva (products, coupons...)."""
        self._check_section(section)
        return self.get_current().get(section)

    # =========================================================================
    # CAMBIOS PENDIENTES
    # =========================================================================

    def _check_section(self, section: str) -> None:
        if section not in settings.CONFIG_SECTIONS:
            raise ValueError(
                f"Sección desconocida: {section}. "
                f"Válidas: {', '.join(settings.CONFIG_SECTIONS)}"
            )

    def stage(self, section: str, data: Any) -> Dict[str, Any]:
        """
        Deja un cambio pendiente para una sección completa.

        El último stage() de una sección gana. No persiste nada.

        Args:
            section: products, categories, coupons, zones o storeInfo
            data: Contenido completo de la sección

        Returns:
            Configuración efectiva con el cambio aplicado

        Raises:
            ValueError: Si la sección no existe
        """
        self._check_section(section)
        self._ensure_loaded()

        self._staged[section] = copy.deepcopy(data)
        self._staged_at = next_timestamp(self._staged_at or self._config.get('lastModified'))
        print(f"[CONFIG] Cambio pendiente en '{section}' (sin exportar)")
        return self.get_current()

    def discard_staged(self) -> None:
        """Descarta todos los cambios pendientes."""
        if self._staged:
            print(f"[CONFIG] Descartados cambios pendientes: {', '.join(self._staged)}")
        self._staged = {}
        self._staged_at = None

    def has_pending_changes(self, section: str = None) -> bool:
        if section is None:
            return bool(self._staged)
        self._check_section(section)
        return section in self._staged

    def get_stats(self) -> Dict[str, Any]:
        """
        Resumen de la configuración efectiva.

        Returns:
            Dict con totales por sección, lastModified, version y pendientes
        """
        current = self.get_current()
        return {
            'total_products': len(current.get('products') or []),
            'total_categories': len(current.get('categories') or []),
            'total_coupons': len(current.get('coupons') or []),
            'total_zones': len(current.get('zones') or []),
            'store_name': (current.get('storeInfo') or {}).get('storeName', ''),
            'last_modified': current.get('lastModified'),
            'version': current.get('version'),
            'pending_sections': list(self._staged),
        }

    # =========================================================================
    # EXPORTACIÓN
    # =========================================================================

    async def export(self, push: bool = True) -> Dict[str, Any]:
        """
        Confirma los cambios pendientes y exporta la configuración.

        1. Une los pendientes con lo confirmado y sella lastModified,
           exportDate y version
        2. Publica el documento en el backend (si push y hay transporte)
        3. Escribe gada-electronics-config-YYYY-MM-DD.json
        4. Guarda la copia local y limpia los pendientes

        Args:
            push: Publicar también en POST /api/admin/update-config

        Returns:
            {'ok': True, 'path', 'filename', 'config'}

        Raises:
            TransportError: Si la publicación falla (el estado no cambia)
        """
        merged = self.get_current()
        stamp = next_timestamp(merged.get('lastModified'))
        merged['lastModified'] = stamp
        merged['exportDate'] = stamp
        merged['version'] = settings.CONFIG_VERSION

        if push and self.transport is not None:
            try:
                await self.transport.post(self.UPDATE_CONFIG_PATH, merged)
            except TransportError as e:
                print(f"[CONFIG ERROR] No se pudo publicar la configuración: {e}")
                raise

        path = None
        if self.export_service is not None:
            path = self.export_service.write_export(merged)

        self._persist_local(merged)
        self._replace(merged)

        filename = os.path.basename(path) if path else None
        if self.audit_service is not None:
            self.audit_service.log_config_exported(filename or '(sin archivo)', {
                'products': len(merged.get('products') or []),
                'categories': len(merged.get('categories') or []),
                'coupons': len(merged.get('coupons') or []),
                'zones': len(merged.get('zones') or []),
            })

        return {
            'ok': True,
            'path': path,
            'filename': filename,
            'config': copy.deepcopy(merged),
        }

    # =========================================================================
    # IMPORTACIÓN
    # =========================================================================

    @profile_function(name="Importar configuración")
    def import_document(self, document: Union[Dict[str, Any], str, bytes]) -> Dict[str, Any]:
        """
        Reemplaza la configuración completa por un documento externo.

        Args:
            document: Dict ya parseado, texto JSON o bytes UTF-8

        Returns:
            {'ok': True, 'config', 'reload_required': True}

        Raises:
            ConfigImportError: Si no es JSON o le falta storeInfo/lastModified
                (la configuración actual no cambia)
        """
        if isinstance(document, (bytes, bytearray)):
            try:
                document = document.decode('utf-8')
            except UnicodeDecodeError as e:
                raise ConfigImportError("El archivo no está codificado en UTF-8") from e

        if isinstance(document, str):
            try:
                document = json.loads(document)
            except json.JSONDecodeError as e:
                raise ConfigImportError(f"El archivo no es un JSON válido: {e}") from e

        missing = missing_required_keys(document)
        if missing:
            raise ConfigImportError(
                f"Archivo de configuración inválido, faltan: {', '.join(missing)}"
            )

        self._replace(document)
        self._persist_local(document)
        print(f"[CONFIG] Configuración importada (lastModified {document['lastModified']})")

        if self.audit_service is not None:
            self.audit_service.log_config_imported(document['lastModified'])

        return {
            'ok': True,
            'config': self.get_current(),
            'reload_required': True,
        }

    def import_file(self, path: str) -> Dict[str, Any]:
        """
        Importa la configuración desde un archivo .json.

        Raises:
            ConfigImportError: Extensión distinta de .json, archivo ilegible
                o documento inválido
        """
        if not path.lower().endswith('.json'):
            raise ConfigImportError("Por favor selecciona un archivo JSON válido")

        try:
            with open(path, 'rb') as f:
                raw = f.read()
        except OSError as e:
            raise ConfigImportError(f"No se pudo leer {os.path.basename(path)}: {e}") from e

        return self.import_document(raw)

    # =========================================================================
    # RESTABLECER
    # =========================================================================

    def reset(self) -> Dict[str, Any]:
        """
        Descarta pendientes y vuelve a la configuración por defecto.

        Returns:
            Configuración por defecto con 'lastModified' nuevo
        """
        defaults = self.loader.get_defaults()
        if self._config is not None:
            defaults['lastModified'] = next_timestamp(self._config.get('lastModified'))

        self._replace(defaults)
        self._persist_local(defaults)
        print("[CONFIG] Configuración restablecida a valores por defecto")

        if self.audit_service is not None:
            self.audit_service.log_config_reset()

        return self.get_current()
