# ==============================================================================
# SERVICIO DE EXPORTACIÓN DE CONFIGURACIÓN
# ==============================================================================
# Escribe el documento de configuración exportado en la carpeta de
# exportaciones (equivalente a la "descarga" del archivo en la tienda).
#
# FORMATO: gada-electronics-config-YYYY-MM-DD.json
#
# Una exportación del mismo día reemplaza a la anterior. Se conservan solo
# las últimas MAX_EXPORTS (rotación automática).
# ==============================================================================

import json
import os
import tempfile
from datetime import datetime
from typing import Any, Dict, List

from gada_store import settings


class ExportService:
    """
    Servicio para los archivos de exportación.

    Uso:
        export_service = ExportService(base_path='/app')
        path = export_service.write_export(config)
    """

    MAX_EXPORTS = 30

    def __init__(self, base_path: str):
        """
        Args:
            base_path: Ruta base (la carpeta de exportaciones cuelga de aquí)
        """
        self.base_path = base_path
        self.export_root = os.path.join(base_path, settings.EXPORT_DIR_NAME)

    def build_filename(self, day: datetime = None) -> str:
        """Nombre del archivo de exportación para el día dado (hoy por defecto)."""
        day = day or datetime.now()
        return f"{settings.EXPORT_FILE_PREFIX}-{day.strftime('%Y-%m-%d')}.json"

    def _get_today_path(self) -> str:
        return os.path.join(self.export_root, self.build_filename())

    def _get_existing_exports(self) -> List[str]:
        """
        Archivos de exportación con nombre válido, más reciente primero.
        """
        if not os.path.isdir(self.export_root):
            return []

        prefix = f"{settings.EXPORT_FILE_PREFIX}-"
        exports = []
        for item in os.listdir(self.export_root):
            if not (item.startswith(prefix) and item.endswith('.json')):
                continue
            if not os.path.isfile(os.path.join(self.export_root, item)):
                continue
            try:
                datetime.strptime(item[len(prefix):-5], '%Y-%m-%d')
            except ValueError:
                continue
            exports.append(item)

        exports.sort(reverse=True)
        return exports

    def _delete_old_exports(self) -> int:
        deleted = 0
        for name in self._get_existing_exports()[self.MAX_EXPORTS:]:
            try:
                os.remove(os.path.join(self.export_root, name))
                deleted += 1
                print(f"[EXPORT] Eliminada exportación antigua: {name}")
            except OSError as e:
                print(f"[EXPORT ERROR] No se pudo eliminar {name}: {e}")
        return deleted

    # =========================================================================
    # ESCRITURA
    # =========================================================================

    def write_export(self, payload: Dict[str, Any]) -> str:
        """
        Serializa y escribe el documento exportado.

        Args:
            payload: Documento StoreConfig ya sellado (lastModified, exportDate)

        Returns:
            Ruta del archivo escrito

        Raises:
            OSError: Si no se pudo escribir el archivo
        """
        os.makedirs(self.export_root, exist_ok=True)
        path = self._get_today_path()

        fd, temp_path = tempfile.mkstemp(dir=self.export_root, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(temp_path, path)
        except OSError:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise

        size_kb = round(os.path.getsize(path) / 1024, 2)
        print(f"[EXPORT] Configuración exportada: {os.path.basename(path)} ({size_kb} KB)")

        self._delete_old_exports()
        return path

    # =========================================================================
    # ESTADO
    # =========================================================================

    def get_export_status(self) -> Dict[str, Any]:
        """
        Obtiene el historial de exportaciones.

        Returns:
            Dict con total, carpeta y lista de archivos (nombre, fecha, tamaño)
        """
        prefix_len = len(settings.EXPORT_FILE_PREFIX) + 1
        export_info = []
        for name in self._get_existing_exports():
            size_bytes = os.path.getsize(os.path.join(self.export_root, name))
            export_info.append({
                'filename': name,
                'date': name[prefix_len:-5],
                'size_bytes': size_bytes,
                'size_kb': round(size_bytes / 1024, 2)
            })

        return {
            'total_exports': len(export_info),
            'max_exports': self.MAX_EXPORTS,
            'export_root': self.export_root,
            'exports': export_info,
            'today_exists': os.path.exists(self._get_today_path())
        }
