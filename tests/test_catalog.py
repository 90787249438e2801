"""Search filtering and record helpers."""

import pytest

from carves.shared.domain.catalog import filter_products, format_price, greeting, matches_query
from carves.shared.domain.models import CartItem, Product, User, WishlistItem

QUERIES = ["", "oak", "OAK", "tray", "o", "spoon", "walnut", " "]


def test_empty_query_returns_every_product(catalog):
    result = filter_products(catalog, "")
    assert result == catalog
    assert all(a is b for a, b in zip(result, catalog))


def test_none_query_behaves_like_empty(catalog):
    assert filter_products(catalog, None) == catalog


@pytest.mark.parametrize("query", QUERIES)
def test_result_is_sound_and_complete(catalog, query):
    result = filter_products(catalog, query)
    result_ids = {id(p) for p in result}

    for product in result:
        assert query.lower() in (product.name or "").lower()
    for product in catalog:
        if id(product) not in result_ids:
            assert not matches_query(product, query)


@pytest.mark.parametrize("query", QUERIES)
def test_filtering_is_idempotent(catalog, query):
    once = filter_products(catalog, query)
    assert filter_products(catalog, query) == once
    assert filter_products(once, query) == once


def test_result_is_identity_subset_in_original_order(catalog):
    result = filter_products(catalog, "oak")
    assert [p.name for p in result] == ["Oak Bowl", "Small oak spoon"]
    assert result[0] is catalog[0]
    assert result[1] is catalog[2]


def test_oak_bowl_scenario():
    oak = Product(name="Oak Bowl")
    products = [oak, Product(name="Teak Tray")]
    assert filter_products(products, "oak") == [oak]


def test_missing_name_only_matches_empty_query():
    nameless = Product(price=10.0)
    assert matches_query(nameless, "")
    assert not matches_query(nameless, "a")


def test_product_reads_store_field_names():
    product = Product.model_validate(
        {"productName": "Ebony Elephant", "productPrice": "4800", "productDescription": "Figurine", "image": "x.png"}
    )
    assert product.name == "Ebony Elephant"
    assert product.price == 4800.0
    assert product.description == "Figurine"


def test_cart_item_from_product_uses_fallbacks():
    item = CartItem.from_product(Product())
    assert item.id == ""
    assert item.product_name == ""
    assert item.product_price == 0.0
    assert item.image == ""
    assert item.quantity == 1
    assert item.to_record() == {"productName": "", "productPrice": 0.0, "image": "", "quantity": 1}


def test_cart_item_quantity_must_be_positive():
    with pytest.raises(ValueError):
        CartItem(product_name="Oak Bowl", quantity=0)


def test_wishlist_item_from_product():
    item = WishlistItem.from_product(Product(name="Teak Tray", price=3200.0, image="t.png"))
    assert item.to_record() == {"productName": "Teak Tray", "productPrice": 3200.0, "image": "t.png"}


def test_display_helpers():
    assert format_price(2500.0) == "Rs. 2500.0"
    assert format_price(None) == "Rs. 0.0"
    assert greeting(None) == "Welcome, User!"
    assert greeting(User(uid="u", first_name="Nimal")) == "Welcome, Nimal!"
    assert greeting(User(uid="u")) == "Welcome, User!"
