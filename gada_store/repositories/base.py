# ==============================================================================
# REPOSITORIO BASE - Funcionalidad común para acceso a archivos JSON
# ==============================================================================
# Lectura tolerante (JSON corrupto o ausente -> estructura vacía) y
# escritura atómica mediante archivo temporal + os.replace.
# ==============================================================================

import json
import os
import threading
from abc import ABC, abstractmethod
from typing import Any, Dict, List


class BaseRepository(ABC):
    """
    Clase base abstracta para los repositorios de archivos JSON.

    A diferencia de una base de datos, el archivo no se crea al instanciar:
    la ausencia del archivo es información útil (por ejemplo, "no hay copia
    local de la configuración").
    """

    # Lock global para evitar escrituras concurrentes a archivos
    _file_lock = threading.RLock()

    def __init__(self, file_path: str):
        """
        Args:
            file_path: Ruta absoluta al archivo JSON de datos
        """
        self.file_path = file_path

    @abstractmethod
    def _empty_data(self) -> Any:
        """Estructura vacía (dict, list...) de este repositorio."""

    def exists(self) -> bool:
        """Indica si el archivo existe en disco."""
        return os.path.exists(self.file_path)

    def _read_raw(self) -> Any:
        """
        Lee los datos crudos del archivo JSON.

        Returns:
            Datos parseados, o la estructura vacía si el archivo
            no existe o está corrupto
        """
        with self._file_lock:
            try:
                with open(self.file_path, 'r', encoding='utf-8') as f:
                    return json.load(f)
            except (json.JSONDecodeError, FileNotFoundError, UnicodeDecodeError):
                return self._empty_data()

    def _write_raw(self, data: Any) -> None:
        """
        Escribe datos al archivo JSON de forma atómica.

        Raises:
            OSError: Si hay error de escritura
        """
        with self._file_lock:
            directory = os.path.dirname(self.file_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            temp_path = self.file_path + '.tmp'
            try:
                with open(temp_path, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                os.replace(temp_path, self.file_path)
            except Exception:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                raise

    def clear(self) -> None:
        """Elimina el archivo de datos si existe."""
        with self._file_lock:
            if os.path.exists(self.file_path):
                os.remove(self.file_path)


class ListRepository(BaseRepository):
    """
    Repositorio base para datos almacenados como lista.

    Ejemplo: audit.json -> [{...}, {...}]
    """

    def _empty_data(self) -> List:
        return []

    def get_all(self) -> List[Dict[str, Any]]:
        """Obtiene todos los registros."""
        data = self._read_raw()
        return data if isinstance(data, list) else []

    def save_all(self, data: List[Dict[str, Any]]) -> None:
        """Guarda todos los registros (reemplazo completo)."""
        self._write_raw(data)

    def append(self, record: Dict[str, Any]) -> None:
        """Agrega un registro al final."""
        with self._file_lock:
            data = self.get_all()
            data.append(record)
            self._write_raw(data)

    def find_all_by(self, field: str, value: Any) -> List[Dict[str, Any]]:
        """Busca todos los registros cuyo campo coincide con el valor."""
        return [r for r in self.get_all() if r.get(field) == value]
