# ==============================================================================
# SERVICIO DE CUENTAS DEL BACKEND SIMULADO
# ==============================================================================
# Lado "servidor" de la tienda: registro, inicio de sesión y el carrito y la
# lista de deseos de cada usuario.
#
# Autenticación mínima (solo para saber de quién es cada carrito):
#   - Contraseñas con hash de Werkzeug
#   - Token opaco (uuid4) que viaja en la cabecera 'authorization'
#
# REGLAS DEL CARRITO:
#   - Una entrada por producto + color elegido
#   - Agregar lo mismo otra vez suma 1 a 'qty'
#   - 'qty' no supera colorQuantity del color elegido (o stock del producto)
#   - Decrementar hasta 0 elimina la entrada
# ==============================================================================

import copy
import uuid
from typing import Any, Dict, List, Optional

from werkzeug.security import check_password_hash, generate_password_hash

from gada_store import settings
from gada_store.models import entity_id
from gada_store.repositories.mock_database import MockDatabase
from gada_store.services.errors import AuthError, ConflictError, NotFoundError, ValidationError
from gada_store.utils import now_iso, to_int


CART = 'cart'
WISHLIST = 'wishlist'

ACTION_INCREMENT = 'increment'
ACTION_DECREMENT = 'decrement'


def selected_color(entry: Dict[str, Any]) -> Optional[str]:
    """Color elegido de una entrada (primer elemento de 'colors')."""
    colors = entry.get('colors') or []
    if colors and isinstance(colors[0], dict):
        return colors[0].get('color')
    return None


def max_quantity(entry: Dict[str, Any]) -> Optional[int]:
    """
    Unidades disponibles para una entrada.

    Returns:
        colorQuantity del color elegido, si no stock del producto,
        None si no hay límite conocido
    """
    colors = entry.get('colors') or []
    if colors and isinstance(colors[0], dict):
        limit = to_int(colors[0].get('colorQuantity'))
        if limit is not None:
            return limit
    return to_int(entry.get('stock'))


def _public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in user.items() if k != 'password'}


class AccountService:
    """
    Servicio de cuentas y listas de usuario del backend simulado.

    Los métodos lanzan excepciones de errors.py (AuthError, NotFoundError,
    ValidationError, ConflictError); las rutas las traducen a JSON + código.
    """

    def __init__(self, database: MockDatabase):
        self.database = database

    # =========================================================================
    # USUARIOS
    # =========================================================================

    def seed_demo_user(self) -> None:
        """Crea el usuario de demostración si todavía no existe."""
        demo = settings.DEMO_USER
        if self.database.get_user(demo['email']) is None:
            self._create_user(demo['email'], demo['password'], demo['firstName'], demo['lastName'])

    def _create_user(self, email: str, password: str, first_name: str, last_name: str) -> Dict[str, Any]:
        now = now_iso()
        user = {
            'id': uuid.uuid4().hex,
            'email': email,
            'password': generate_password_hash(password),
            'firstName': first_name,
            'lastName': last_name,
            'createdAt': now,
            'updatedAt': now,
        }
        self.database.add_user(user)
        return user

    def _issue_token(self, email: str) -> str:
        token = uuid.uuid4().hex
        self.database.save_token(token, email)
        return token

    def signup(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Registra un usuario nuevo.

        Args:
            data: email, password, firstName, lastName

        Returns:
            {'createdUser': ..., 'encodedToken': ...}

        Raises:
            ValidationError: Si falta email o contraseña
            ConflictError: Si el email ya está registrado
        """
        email = (data.get('email') or '').strip()
        password = data.get('password') or ''
        if not email or not password:
            raise ValidationError("Email y contraseña son requeridos")

        if self.database.get_user(email) is not None:
            raise ConflictError("El email ya está registrado")

        user = self._create_user(
            email,
            password,
            (data.get('firstName') or '').strip(),
            (data.get('lastName') or '').strip()
        )
        print(f"[AUTH] Usuario registrado: {email}")
        return {
            'createdUser': _public_user(self.database.get_user(email)),
            'encodedToken': self._issue_token(user['email']),
        }

    def login(self, email: str, password: str) -> Dict[str, Any]:
        """
        Inicia sesión.

        Returns:
            {'foundUser': ..., 'encodedToken': ...}

        Raises:
            NotFoundError: Si el email no está registrado
            AuthError: Si la contraseña no coincide
        """
        user = self.database.get_user((email or '').strip())
        if user is None:
            raise NotFoundError("El email no está registrado")

        if not check_password_hash(user['password'], password or ''):
            raise AuthError("Credenciales inválidas")

        return {
            'foundUser': _public_user(user),
            'encodedToken': self._issue_token(user['email']),
        }

    def resolve_token(self, token: Optional[str]) -> str:
        """
        Email del usuario dueño del token.

        Raises:
            AuthError: Si el token falta o no es válido
        """
        email = self.database.get_email_by_token(token) if token else None
        if email is None or self.database.get_user(email) is None:
            raise AuthError("Token inválido o ausente")
        return email

    # =========================================================================
    # LISTAS
    # =========================================================================

    def get_list(self, email: str, list_name: str) -> List[Dict[str, Any]]:
        return self.database.get_list(email, list_name)

    def clear_list(self, email: str, list_name: str) -> List[Dict[str, Any]]:
        return self.database.set_list(email, list_name, [])

    def _check_product(self, product: Any) -> str:
        if not isinstance(product, dict) or entity_id(product) is None:
            raise ValidationError("Producto inválido")
        return entity_id(product)

    # =========================================================================
    # CARRITO
    # =========================================================================

    def add_to_cart(self, email: str, product: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Agrega un producto (con su color elegido en colors[0]) al carrito.

        Raises:
            ValidationError: Producto inválido o sin unidades disponibles
        """
        product_id = self._check_product(product)
        color = selected_color(product)

        def mutate(cart):
            for entry in cart:
                if entity_id(entry) == product_id and selected_color(entry) == color:
                    self._increment(entry)
                    return cart

            entry = copy.deepcopy(product)
            entry['colors'] = (product.get('colors') or [])[:1]
            entry['qty'] = 0
            self._increment(entry)
            entry['createdAt'] = entry['updatedAt']
            cart.append(entry)
            return cart

        return self.database.update_list(email, CART, mutate)

    def _increment(self, entry: Dict[str, Any]) -> None:
        limit = max_quantity(entry)
        qty = to_int(entry.get('qty')) or 0
        if limit is not None and qty + 1 > limit:
            raise ValidationError("No hay más unidades disponibles de este producto")
        entry['qty'] = qty + 1
        entry['updatedAt'] = now_iso()

    def update_cart_item(self, email: str, product_id: str, action: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Incrementa o decrementa la cantidad de una entrada del carrito.

        Args:
            product_id: Id del producto
            action: {'type': 'increment'|'decrement', 'colorBody': {...}}

        Raises:
            ValidationError: Acción desconocida o sin unidades disponibles
            NotFoundError: Si la entrada no está en el carrito
        """
        action = action or {}
        action_type = action.get('type')
        if action_type not in (ACTION_INCREMENT, ACTION_DECREMENT):
            raise ValidationError("Acción inválida, usa 'increment' o 'decrement'")

        color_body = action.get('colorBody')
        color = color_body.get('color') if isinstance(color_body, dict) else None

        def mutate(cart):
            for index, entry in enumerate(cart):
                if entity_id(entry) != str(product_id):
                    continue
                if color is not None and selected_color(entry) != color:
                    continue

                if action_type == ACTION_INCREMENT:
                    self._increment(entry)
                else:
                    entry['qty'] = (to_int(entry.get('qty')) or 0) - 1
                    entry['updatedAt'] = now_iso()
                    if entry['qty'] <= 0:
                        del cart[index]
                return cart

            raise NotFoundError("El producto no está en el carrito")

        return self.database.update_list(email, CART, mutate)

    def remove_from_cart(self, email: str, product_id: str, color: str = None) -> List[Dict[str, Any]]:
        """
        Quita del carrito las entradas de un producto.

        Sin color se quitan todas las variantes de color del producto.
        """
        def keep(entry):
            if entity_id(entry) != str(product_id):
                return True
            return color is not None and selected_color(entry) != color

        return self.database.update_list(email, CART, lambda cart: [e for e in cart if keep(e)])

    # =========================================================================
    # LISTA DE DESEOS
    # =========================================================================

    def add_to_wishlist(self, email: str, product: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Agrega un producto a la lista de deseos (sin repetidos)."""
        product_id = self._check_product(product)

        def mutate(wishlist):
            if any(entity_id(entry) == product_id for entry in wishlist):
                return wishlist
            entry = copy.deepcopy(product)
            entry['createdAt'] = entry['updatedAt'] = now_iso()
            wishlist.append(entry)
            return wishlist

        return self.database.update_list(email, WISHLIST, mutate)

    def remove_from_wishlist(self, email: str, product_id: str) -> List[Dict[str, Any]]:
        return self.database.update_list(
            email,
            WISHLIST,
            lambda wishlist: [e for e in wishlist if entity_id(e) != str(product_id)]
        )
