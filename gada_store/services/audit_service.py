# ==============================================================================
# SERVICIO DE AUDITORÍA
# ==============================================================================
# Registro humanizado de lo que pasa con la configuración de la tienda:
# exportaciones, importaciones, restablecimientos y ediciones del catálogo.
# ==============================================================================

from typing import Any, Dict, List

from gada_store.models import AuditType
from gada_store.repositories.interfaces import IAuditRepository


class AuditService:
    """
    Servicio para registro y consulta de auditoría.

    Un fallo al escribir el log nunca debe romper la operación auditada:
    se informa por consola y la operación sigue.
    """

    DEFAULT_USER = 'admin'

    def __init__(self, audit_repo: IAuditRepository):
        self.audit_repo = audit_repo

    # =========================================================================
    # REGISTRO DE EVENTOS
    # =========================================================================

    def log(
        self,
        log_type: AuditType,
        message: str,
        user: str = None,
        related_id: str = '',
        details: Dict[str, Any] = None
    ) -> None:
        """
        Registra un evento de auditoría genérico.

        Args:
            log_type: Tipo de evento
            message: Mensaje descriptivo humanizado
            user: Usuario que realizó la acción (admin por defecto)
            related_id: Identificador relacionado
            details: Detalles adicionales
        """
        try:
            self.audit_repo.log(
                log_type.value if isinstance(log_type, AuditType) else str(log_type),
                user or self.DEFAULT_USER,
                message,
                related_id,
                details
            )
        except OSError as e:
            print(f"[AUDIT ERROR] No se pudo registrar '{message}': {e}")

    def log_config_exported(self, filename: str, counts: Dict[str, int], user: str = None) -> None:
        self.log(
            AuditType.CONFIG,
            f"Configuración exportada a {filename}",
            user=user,
            related_id=filename,
            details=counts
        )

    def log_config_imported(self, last_modified: str, user: str = None) -> None:
        self.log(
            AuditType.CONFIG,
            "Configuración importada desde archivo",
            user=user,
            details={'lastModified': last_modified}
        )

    def log_config_reset(self, user: str = None) -> None:
        self.log(AuditType.SISTEMA, "Configuración restablecida a valores por defecto", user=user)

    def log_catalog_change(self, section: str, action: str, related_id: str, user: str = None) -> None:
        """
        Registra un cambio del panel de administración (en memoria).

        Args:
            section: products, categories, coupons, zones o storeInfo
            action: creado, actualizado, eliminado...
            related_id: Id del registro afectado
        """
        self.log(
            AuditType.CATALOGO,
            f"{section}: registro {related_id} {action} (pendiente de exportar)",
            user=user,
            related_id=related_id,
            details={'section': section, 'action': action}
        )

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_logs(self, log_type: AuditType = None) -> List[Dict[str, Any]]:
        """Logs más recientes primero, opcionalmente filtrados por tipo."""
        if log_type is None:
            return self.audit_repo.load()
        return self.audit_repo.get_by_type(log_type.value)
