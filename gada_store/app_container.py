# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Inyección de servicios
# ==============================================================================
# Punto central para obtener repositorios y servicios ya cableados.
#
# No es un singleton: cada AppContainer es una sesión de la tienda con su
# propio ConfigStore, su backend simulado y su carpeta de datos. Quien lo
# necesite lo recibe explícitamente (rutas, tests, scripts).
#
# LADO SERVIDOR (backend simulado):
#   database → account_service, server_catalog → app (Flask)
#
# LADO CLIENTE (tienda):
#   transport → data_loader → config_store → catalog / admin / address
# ==============================================================================

from typing import Any, Dict, Optional

from gada_store import settings
from gada_store.repositories import (
    AuditRepository,
    ConfigRepository,
    MockDatabase,
)
from gada_store.services import (
    AccountService,
    AddressService,
    AdminService,
    AuditService,
    CartService,
    CatalogService,
    ConfigStore,
    DataLoader,
    ExportService,
    MockTransport,
)


class AppContainer:
    """
    Contenedor de dependencias de una sesión de la tienda.

    Uso:
        container = AppContainer(base_path='/tmp/gada')
        await container.config_store.load()
        container.catalog_service.search('mi')
    """

    def __init__(self, base_path: str = None, seed_config: Dict[str, Any] = None):
        """
        Args:
            base_path: Carpeta de datos locales (copia, auditoría, exports)
            seed_config: Documento inicial del backend simulado (opcional)
        """
        self._base_path = base_path or settings.BASE_PATH
        self._seed_config = seed_config

        # Lado servidor (lazy loading)
        self._database: Optional[MockDatabase] = None
        self._account_service: Optional[AccountService] = None
        self._server_catalog: Optional[CatalogService] = None
        self._app = None

        # Lado cliente (lazy loading)
        self._transport: Optional[MockTransport] = None
        self._config_repo: Optional[ConfigRepository] = None
        self._audit_repo: Optional[AuditRepository] = None
        self._audit_service: Optional[AuditService] = None
        self._export_service: Optional[ExportService] = None
        self._data_loader: Optional[DataLoader] = None
        self._config_store: Optional[ConfigStore] = None
        self._catalog_service: Optional[CatalogService] = None
        self._admin_service: Optional[AdminService] = None
        self._address_service: Optional[AddressService] = None

    @property
    def base_path(self) -> str:
        return self._base_path

    # =========================================================================
    # BACKEND SIMULADO
    # =========================================================================

    @property
    def database(self) -> MockDatabase:
        """Estado en memoria del backend simulado."""
        if self._database is None:
            self._database = MockDatabase(
                seed_file=settings.SEED_CONFIG_FILE,
                seed_config=self._seed_config
            )
        return self._database

    @property
    def account_service(self) -> AccountService:
        """Usuarios, carritos y listas (con el usuario demo sembrado)."""
        if self._account_service is None:
            self._account_service = AccountService(self.database)
            self._account_service.seed_demo_user()
        return self._account_service

    @property
    def server_catalog(self) -> CatalogService:
        """Catálogo que sirven las rutas /api/products y /api/categories."""
        if self._server_catalog is None:
            self._server_catalog = CatalogService(self.database)
        return self._server_catalog

    @property
    def app(self):
        """Aplicación Flask del backend simulado."""
        if self._app is None:
            from gada_store.main import create_app
            self._app = create_app(self)
        return self._app

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def config_repo(self) -> ConfigRepository:
        if self._config_repo is None:
            self._config_repo = ConfigRepository(self._base_path)
        return self._config_repo

    @property
    def audit_repo(self) -> AuditRepository:
        if self._audit_repo is None:
            self._audit_repo = AuditRepository(self._base_path)
        return self._audit_repo

    # =========================================================================
    # SERVICIOS DE LA TIENDA
    # =========================================================================

    @property
    def transport(self) -> MockTransport:
        if self._transport is None:
            self._transport = MockTransport(self.app)
        return self._transport

    @property
    def audit_service(self) -> AuditService:
        if self._audit_service is None:
            self._audit_service = AuditService(self.audit_repo)
        return self._audit_service

    @property
    def export_service(self) -> ExportService:
        if self._export_service is None:
            self._export_service = ExportService(self._base_path)
        return self._export_service

    @property
    def data_loader(self) -> DataLoader:
        if self._data_loader is None:
            self._data_loader = DataLoader(self.transport, self.config_repo)
        return self._data_loader

    @property
    def config_store(self) -> ConfigStore:
        """Dueño único de la configuración de esta sesión."""
        if self._config_store is None:
            self._config_store = ConfigStore(
                self.data_loader,
                self.config_repo,
                self.export_service,
                self.transport,
                self.audit_service
            )
        return self._config_store

    @property
    def catalog_service(self) -> CatalogService:
        """Catálogo de la tienda (solo lo confirmado en el ConfigStore)."""
        if self._catalog_service is None:
            self._catalog_service = CatalogService(self.config_store)
        return self._catalog_service

    @property
    def admin_service(self) -> AdminService:
        if self._admin_service is None:
            self._admin_service = AdminService(self.config_store, self.audit_service)
        return self._admin_service

    @property
    def address_service(self) -> AddressService:
        if self._address_service is None:
            self._address_service = AddressService(self.config_store)
        return self._address_service

    def cart_service(self, token: str) -> CartService:
        """Carrito y lista de deseos del usuario dueño del token."""
        return CartService(self.transport, token)

    # =========================================================================
    # UTILIDADES
    # =========================================================================

    def reset(self) -> None:
        """
        Reinicia todas las instancias.
        Útil para testing o para simular una recarga completa.
        """
        self._database = None
        self._account_service = None
        self._server_catalog = None
        self._app = None

        self._transport = None
        self._config_repo = None
        self._audit_repo = None
        self._audit_service = None
        self._export_service = None
        self._data_loader = None
        self._config_store = None
        self._catalog_service = None
        self._admin_service = None
        self._address_service = None
