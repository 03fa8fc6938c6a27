# ==============================================================================
# TRANSPORTE HACIA EL BACKEND SIMULADO
# ==============================================================================
# Intercepta las "llamadas HTTP" de la tienda y las resuelve dentro del
# proceso contra la app Flask de main.py usando el cliente de pruebas de
# Werkzeug. No hay sockets ni red.
#
# - request(): llamada bloqueante, una por cliente nuevo (sin cookies
#   compartidas entre hilos)
# - send(): versión asíncrona; corre request() en un hilo de trabajo y
#   aplica un timeout, así una llamada colgada no cuelga a quien espera
# ==============================================================================

import asyncio
from typing import Any, Dict, Optional

from flask import Flask

from gada_store import settings
from gada_store.services.errors import TransportError


class MockTransport:
    """
    Cliente del backend simulado.

    Uso:
        transport = MockTransport(app)
        data = await transport.get('/api/products')
    """

    def __init__(self, app: Flask, timeout: float = None):
        """
        Args:
            app: Aplicación Flask del backend simulado
            timeout: Segundos máximos por llamada (settings.TRANSPORT_TIMEOUT)
        """
        self.app = app
        self.timeout = settings.TRANSPORT_TIMEOUT if timeout is None else timeout

    # =========================================================================
    # LLAMADA BLOQUEANTE
    # =========================================================================

    def request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        token: str = None,
        params: Dict[str, Any] = None
    ) -> Dict[str, Any]:
        """
        Ejecuta una petición contra el backend simulado.

        Args:
            method: GET, POST, DELETE...
            path: Ruta (/api/products)
            payload: Cuerpo JSON (opcional)
            token: Token para la cabecera 'authorization' (opcional)
            params: Parámetros de query string (opcional)

        Returns:
            Cuerpo JSON de la respuesta

        Raises:
            TransportError: Si el estado es >= 400 o la respuesta no es JSON
        """
        headers = {'authorization': token} if token else {}
        client = self.app.test_client()

        try:
            response = client.open(
                path,
                method=method,
                json=payload,
                headers=headers,
                query_string=params
            )
        except Exception as e:
            print(f"[TRANSPORT ERROR] {method} {path}: {e}")
            raise TransportError(f"Error en {method} {path}: {e}", path=path) from e

        data = response.get_json(silent=True)

        if response.status_code >= 400:
            detail = data.get('error') if isinstance(data, dict) else None
            message = detail or f"HTTP {response.status_code}"
            print(f"[TRANSPORT ERROR] {method} {path}: {message}")
            raise TransportError(message, status=response.status_code, path=path)

        if data is None:
            raise TransportError(
                f"Respuesta no JSON en {method} {path}",
                status=response.status_code,
                path=path
            )

        return data

    # =========================================================================
    # LLAMADAS ASÍNCRONAS
    # =========================================================================

    async def send(
        self,
        method: str,
        path: str,
        payload: Any = None,
        token: str = None,
        params: Dict[str, Any] = None
    ) -> Dict[str, Any]:
        """
        Versión asíncrona de request() con timeout.

        Raises:
            TransportError: Si la llamada falla o supera self.timeout
        """
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(self.request, method, path, payload, token, params),
                timeout=self.timeout
            )
        except asyncio.TimeoutError:
            print(f"[TRANSPORT ERROR] {method} {path}: sin respuesta en {self.timeout}s")
            raise TransportError(
                f"Tiempo de espera agotado ({self.timeout}s) en {method} {path}",
                path=path
            ) from None

    async def get(self, path: str, token: str = None, params: Dict[str, Any] = None) -> Dict[str, Any]:
        return await self.send('GET', path, token=token, params=params)

    async def post(self, path: str, payload: Any = None, token: str = None) -> Dict[str, Any]:
        return await self.send('POST', path, payload=payload, token=token)

    async def delete(self, path: str, token: Optional[str] = None) -> Dict[str, Any]:
        return await self.send('DELETE', path, token=token)
