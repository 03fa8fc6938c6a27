# ==============================================================================
# REPOSITORIO DE AUDITORÍA
# ==============================================================================
# Encapsula el acceso a audit.json
# La auditoría se almacena como lista: [{log1}, {log2}, ...]
# ==============================================================================

import os
from typing import Any, Dict, List

from gada_store.utils import now_iso
from .base import ListRepository


class AuditRepository(ListRepository):
    """
    Repositorio del registro de actividad del panel de administración.

    Formato de datos en audit.json:
    [
        {
            "type": "CONFIG",
            "user": "admin",
            "message": "Configuración exportada",
            "timestamp": "2025-06-30T10:00:00.000Z",
            "related_id": "gada-electronics-config-2025-06-30.json",
            "details": {...}
        }
    ]
    """

    # Límite de registros para evitar archivos muy grandes
    MAX_LOGS = 5000

    def __init__(self, base_path: str):
        super().__init__(os.path.join(base_path, 'audit.json'))

    def load(self) -> List[Dict[str, Any]]:
        """
        Carga todos los logs.

        Returns:
            Lista de logs (más recientes primero)
        """
        return sorted(self.get_all(), key=lambda x: x.get('timestamp', ''), reverse=True)

    def log(
        self,
        log_type: str,
        user: str,
        message: str,
        related_id: str = '',
        details: Dict[str, Any] = None
    ) -> Dict[str, Any]:
        """
        Registra un evento.

        Args:
            log_type: Tipo de evento (CONFIG, CATALOGO, SISTEMA)
            user: Usuario que realizó la acción
            message: Mensaje humanizado
            related_id: Identificador relacionado (archivo, id de producto...)
            details: Detalles adicionales

        Returns:
            El registro creado
        """
        entry = {
            'type': log_type,
            'user': user,
            'message': message,
            'timestamp': now_iso(),
            'related_id': related_id,
            'details': details or {},
        }
        with self._file_lock:
            logs = self.get_all()
            logs.append(entry)
            if len(logs) > self.MAX_LOGS:
                logs = logs[-self.MAX_LOGS:]
            self.save_all(logs)
        return entry

    def get_by_type(self, log_type: str) -> List[Dict[str, Any]]:
        """Logs de un tipo, más recientes primero."""
        logs = self.find_all_by('type', log_type)
        return sorted(logs, key=lambda x: x.get('timestamp', ''), reverse=True)
