import asyncio

import pytest


BOOK_ID = '9eb0c25b-447c-4723-9ce4-639527debb68'
NOTEBOOK_ID = 'eb7db2dd-231a-47f5-b803-4415c2150efa'


@pytest.fixture
def products(container):
    return {p['id']: p for p in container.server_catalog.get_all()}


@pytest.fixture
def cart(container, demo_token):
    return container.cart_service(demo_token)


def run(coro):
    return asyncio.run(coro)


def entries(result, product_id):
    return [e for e in result['cart'] if e['id'] == product_id]


# ---------------------------------------------------------------------------
# Carrito
# ---------------------------------------------------------------------------

def test_add_same_product_twice_increments_quantity(cart, products):
    run(cart.add_to_cart(products[BOOK_ID]))
    result = run(cart.add_to_cart(products[BOOK_ID]))

    assert result['ok']
    book = entries(result, BOOK_ID)
    assert len(book) == 1
    assert book[0]['qty'] == 2
    assert book[0]['colors'] == [{'color': '#0000ff', 'colorQuantity': 10}]


def test_same_product_in_two_colors_keeps_two_entries(cart, products):
    book = products[BOOK_ID]
    run(cart.add_to_cart(book, book['colors'][0]))
    result = run(cart.add_to_cart(book, book['colors'][2]))

    colors = sorted(e['colors'][0]['color'] for e in entries(result, BOOK_ID))
    assert colors == ['#0000ff', '#ff0000']
    assert cart.get_summary()['items_count'] == 2


def test_change_quantity_up_and_down(cart, products):
    run(cart.add_to_cart(products[BOOK_ID]))

    result = run(cart.change_quantity(BOOK_ID, 3))
    assert entries(result, BOOK_ID)[0]['qty'] == 4

    result = run(cart.change_quantity(BOOK_ID, -1))
    assert entries(result, BOOK_ID)[0]['qty'] == 3


def test_decrement_to_zero_removes_entry(cart, products):
    run(cart.add_to_cart(products[BOOK_ID]))
    result = run(cart.change_quantity(BOOK_ID, -1))
    assert result['ok']
    assert entries(result, BOOK_ID) == []


def test_quantity_never_exceeds_color_stock(cart, products):
    notebook = products[NOTEBOOK_ID]
    black = notebook['colors'][1]
    run(cart.add_to_cart(notebook, black))
    run(cart.change_quantity(NOTEBOOK_ID, 1, black))
    before = list(cart.cart)

    result = run(cart.change_quantity(NOTEBOOK_ID, 1, black))

    assert result['ok'] is False
    assert 'unidades' in result['error']
    assert cart.cart == before
    assert cart.cart[0]['qty'] == 2


def test_failure_midway_through_change_keeps_local_cart(cart, products):
    notebook = products[NOTEBOOK_ID]
    black = notebook['colors'][1]
    run(cart.add_to_cart(notebook, black))
    before = list(cart.cart)

    result = run(cart.change_quantity(NOTEBOOK_ID, 3, black))

    assert result['ok'] is False
    assert cart.cart == before
    assert cart.cart[0]['qty'] == 1

    run(cart.refresh())
    assert cart.cart[0]['qty'] == 2


def test_change_quantity_of_missing_item_fails(cart):
    result = run(cart.change_quantity('no-existe', 1))
    assert result['ok'] is False
    assert cart.cart == []


def test_remove_and_clear(cart, products):
    run(cart.add_to_cart(products[BOOK_ID]))
    run(cart.add_to_cart(products[NOTEBOOK_ID]))

    result = run(cart.remove_from_cart(BOOK_ID))
    assert [e['id'] for e in result['cart']] == [NOTEBOOK_ID]

    result = run(cart.clear_cart())
    assert result['cart'] == []


def test_summary_totals(cart, products):
    run(cart.add_to_cart(products[BOOK_ID]))
    run(cart.add_to_cart(products[BOOK_ID]))
    run(cart.add_to_cart(products[NOTEBOOK_ID]))

    summary = cart.get_summary()
    assert summary['total_items'] == 3
    assert summary['total_monto'] == 31990 * 2 + 54499


# ---------------------------------------------------------------------------
# Lista de deseos
# ---------------------------------------------------------------------------

def test_wishlist_has_no_duplicates(cart, products):
    run(cart.add_to_wishlist(products[BOOK_ID]))
    result = run(cart.add_to_wishlist(products[BOOK_ID]))
    assert [e['id'] for e in result['wishlist']] == [BOOK_ID]


def test_wishlist_remove_and_clear(cart, products):
    run(cart.add_to_wishlist(products[BOOK_ID]))
    run(cart.add_to_wishlist(products[NOTEBOOK_ID]))

    result = run(cart.remove_from_wishlist(BOOK_ID))
    assert [e['id'] for e in result['wishlist']] == [NOTEBOOK_ID]

    result = run(cart.clear_wishlist())
    assert result['wishlist'] == []


def test_move_between_lists(cart, products):
    book = products[BOOK_ID]
    run(cart.add_to_wishlist(book))

    result = run(cart.move_to_cart(book))
    assert result['ok']
    assert result['wishlist'] == []
    assert entries(result, BOOK_ID)[0]['qty'] == 1

    result = run(cart.move_to_wishlist(book))
    assert result['cart'] == []
    assert [e['id'] for e in result['wishlist']] == [BOOK_ID]


# ---------------------------------------------------------------------------
# Sesión
# ---------------------------------------------------------------------------

def test_refresh_reads_server_state(container, demo_token, products):
    first = container.cart_service(demo_token)
    run(first.add_to_cart(products[BOOK_ID]))
    run(first.add_to_wishlist(products[NOTEBOOK_ID]))

    second = container.cart_service(demo_token)
    result = run(second.refresh())

    assert result['ok']
    assert [e['id'] for e in second.cart] == [BOOK_ID]
    assert [e['id'] for e in second.wishlist] == [NOTEBOOK_ID]


def test_invalid_token_keeps_local_state(container, products):
    cart = container.cart_service('token-falso')

    for result in (
        run(cart.add_to_cart(products[BOOK_ID])),
        run(cart.add_to_wishlist(products[BOOK_ID])),
        run(cart.refresh()),
    ):
        assert result['ok'] is False
        assert result['error']

    assert cart.cart == []
    assert cart.wishlist == []
