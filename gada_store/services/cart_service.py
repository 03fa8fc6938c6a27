# ==============================================================================
# SERVICIO DE CARRITO Y LISTA DE DESEOS (cliente)
# ==============================================================================
# Cada operación se delega al backend simulado y el carrito/lista local se
# reemplaza por lo que devuelve el servidor (el servidor manda, no se hace
# merge en el cliente).
#
# FALLOS: se registran, el estado local no cambia y quien llama recibe
# {'ok': False, 'error': ...}.
# ==============================================================================

import asyncio
import copy
from typing import Any, Dict, List, Optional

from gada_store.models import entity_id
from gada_store.services.errors import TransportError
from gada_store.services.transport import MockTransport


CART_PATH = '/api/user/cart'
WISHLIST_PATH = '/api/user/wishlist'


class CartService:
    """
    Carrito y lista de deseos de un usuario autenticado.

    Uso:
        cart_service = CartService(transport, token)
        await cart_service.refresh()
        result = await cart_service.add_to_cart(product, color)
    """

    def __init__(self, transport: MockTransport, token: str):
        """
        Args:
            transport: Transporte al backend simulado
            token: Token devuelto por login/signup
        """
        self.transport = transport
        self.token = token
        self.cart: List[Dict[str, Any]] = []
        self.wishlist: List[Dict[str, Any]] = []

    # =========================================================================
    # RESULTADOS
    # =========================================================================

    def _ok(self, mensaje: str) -> Dict[str, Any]:
        return {
            'ok': True,
            'mensaje': mensaje,
            'cart': copy.deepcopy(self.cart),
            'wishlist': copy.deepcopy(self.wishlist),
        }

    def _fail(self, action: str, error: TransportError) -> Dict[str, Any]:
        print(f"[CARRITO ERROR] {action}: {error}")
        return {'ok': False, 'error': str(error)}

    def get_summary(self) -> Dict[str, Any]:
        """
        Totales del carrito local.

        Returns:
            Dict con items, total_items, total_monto e items_count
        """
        total_items = sum(item.get('qty', 0) for item in self.cart)
        total_monto = sum(item.get('qty', 0) * (item.get('price') or 0) for item in self.cart)
        return {
            'items': copy.deepcopy(self.cart),
            'total_items': total_items,
            'total_monto': round(total_monto, 2),
            'items_count': len(self.cart),
        }

    # =========================================================================
    # CARGA
    # =========================================================================

    async def refresh(self) -> Dict[str, Any]:
        """Trae carrito y lista de deseos del servidor (en paralelo)."""
        try:
            cart_data, wishlist_data = await asyncio.gather(
                self.transport.get(CART_PATH, token=self.token),
                self.transport.get(WISHLIST_PATH, token=self.token),
            )
        except TransportError as e:
            return self._fail("Cargar carrito", e)

        self.cart = cart_data.get('cart', [])
        self.wishlist = wishlist_data.get('wishlist', [])
        return self._ok("Carrito actualizado")

    # =========================================================================
    # CARRITO
    # =========================================================================

    @staticmethod
    def _with_color(product: Dict[str, Any], color: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        """Copia del producto con el color elegido como único elemento de 'colors'."""
        item = copy.deepcopy(product)
        if color is not None:
            item['colors'] = [copy.deepcopy(color)]
        else:
            item['colors'] = (product.get('colors') or [])[:1]
        return item

    async def add_to_cart(self, product: Dict[str, Any], color: Dict[str, Any] = None) -> Dict[str, Any]:
        """
        Agrega un producto al carrito.

        Args:
            product: Producto del catálogo
            color: Color elegido {'color', 'colorQuantity'} (el primero si None)
        """
        try:
            data = await self.transport.post(
                CART_PATH, {'product': self._with_color(product, color)}, token=self.token
            )
        except TransportError as e:
            return self._fail("Agregar al carrito", e)

        self.cart = data.get('cart', [])
        return self._ok("Producto agregado al carrito")

    async def remove_from_cart(self, item_id: str) -> Dict[str, Any]:
        try:
            data = await self.transport.delete(f"{CART_PATH}/{item_id}", token=self.token)
        except TransportError as e:
            return self._fail("Eliminar del carrito", e)

        self.cart = data.get('cart', [])
        return self._ok("Producto eliminado del carrito")

    async def change_quantity(self, item_id: str, delta: int, color: Dict[str, Any] = None) -> Dict[str, Any]:
        """
        Cambia la cantidad de una entrada del carrito.

        Args:
            item_id: Id del producto
            delta: +1 incrementa, -1 decrementa
            color: Color de la entrada (para productos con varios colores)

        El carrito local solo cambia si todos los pasos tienen éxito; si uno
        falla a mitad, el servidor conserva los pasos anteriores y refresh()
        los trae.
        """
        if delta == 0:
            return self._ok("Sin cambios")

        action = {
            'type': 'increment' if delta > 0 else 'decrement',
            'colorBody': color,
        }
        cart = self.cart
        try:
            for _ in range(abs(delta)):
                data = await self.transport.post(
                    f"{CART_PATH}/{item_id}", {'action': action}, token=self.token
                )
                cart = data.get('cart', [])
        except TransportError as e:
            return self._fail("Cambiar cantidad", e)

        self.cart = cart
        return self._ok("Cantidad actualizada")

    async def clear_cart(self) -> Dict[str, Any]:
        try:
            data = await self.transport.delete(CART_PATH, token=self.token)
        except TransportError as e:
            return self._fail("Vaciar carrito", e)

        self.cart = data.get('cart', [])
        return self._ok("Carrito vaciado")

    # =========================================================================
    # LISTA DE DESEOS
    # =========================================================================

    async def add_to_wishlist(self, product: Dict[str, Any]) -> Dict[str, Any]:
        try:
            data = await self.transport.post(WISHLIST_PATH, {'product': product}, token=self.token)
        except TransportError as e:
            return self._fail("Agregar a lista de deseos", e)

        self.wishlist = data.get('wishlist', [])
        return self._ok("Producto agregado a la lista de deseos")

    async def remove_from_wishlist(self, item_id: str) -> Dict[str, Any]:
        try:
            data = await self.transport.delete(f"{WISHLIST_PATH}/{item_id}", token=self.token)
        except TransportError as e:
            return self._fail("Eliminar de lista de deseos", e)

        self.wishlist = data.get('wishlist', [])
        return self._ok("Producto eliminado de la lista de deseos")

    async def clear_wishlist(self) -> Dict[str, Any]:
        try:
            data = await self.transport.delete(WISHLIST_PATH, token=self.token)
        except TransportError as e:
            return self._fail("Vaciar lista de deseos", e)

        self.wishlist = data.get('wishlist', [])
        return self._ok("Lista de deseos vaciada")

    # =========================================================================
    # MOVER ENTRE LISTAS
    # =========================================================================

    async def move_to_cart(self, product: Dict[str, Any], color: Dict[str, Any] = None) -> Dict[str, Any]:
        """
        Pasa un producto de la lista de deseos al carrito.

        Las dos llamadas van en paralelo; si una falla no se aplica ninguna
        respuesta al estado local.
        """
        try:
            cart_data, wishlist_data = await asyncio.gather(
                self.transport.post(
                    CART_PATH, {'product': self._with_color(product, color)}, token=self.token
                ),
                self.transport.delete(f"{WISHLIST_PATH}/{entity_id(product)}", token=self.token),
            )
        except TransportError as e:
            return self._fail("Mover al carrito", e)

        self.cart = cart_data.get('cart', [])
        self.wishlist = wishlist_data.get('wishlist', [])
        return self._ok("Producto movido al carrito")

    async def move_to_wishlist(self, product: Dict[str, Any]) -> Dict[str, Any]:
        """Pasa un producto del carrito a la lista de deseos (en paralelo)."""
        try:
            wishlist_data, cart_data = await asyncio.gather(
                self.transport.post(WISHLIST_PATH, {'product': product}, token=self.token),
                self.transport.delete(f"{CART_PATH}/{entity_id(product)}", token=self.token),
            )
        except TransportError as e:
            return self._fail("Mover a lista de deseos", e)

        self.cart = cart_data.get('cart', [])
        self.wishlist = wishlist_data.get('wishlist', [])
        return self._ok("Producto movido a la lista de deseos")
