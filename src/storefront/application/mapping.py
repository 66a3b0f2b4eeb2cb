"""Domain -> DTO mapping shared by the query and command handlers."""

from __future__ import annotations

from storefront.application.dto import CartDTO, CartLineDTO, ProductDTO
from storefront.domain.exceptions import UnknownProductError
from storefront.domain.model.cart import Cart
from storefront.domain.model.product import Product
from storefront.domain.model.wishlist import Wishlist
from storefront.domain.repository.catalog_repository import ProductCatalog


def product_to_dto(product: Product, wishlist: Wishlist | None = None) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        name=product.name,
        category=product.category,
        price=str(product.price),
        stock=product.stock,
        in_stock=product.in_stock,
        wishlisted=wishlist is not None and product.id in wishlist,
    )


def cart_to_dto(cart: Cart, catalog: ProductCatalog) -> CartDTO:
    summary = cart.compute_summary()
    lines: list[CartLineDTO] = []
    for entry in cart.entries:
        product = catalog.get_by_id(entry.product_id)
        if product is None:
            raise UnknownProductError(f"Product #{entry.product_id} not found in catalog")
        lines.append(
            CartLineDTO(
                product_id=product.id,
                product_name=product.name,
                quantity=entry.quantity.value,
                unit_price=str(product.price),
                line_total=str(product.price * entry.quantity.value),
            )
        )
    return CartDTO(
        lines=lines,
        subtotal=str(summary.subtotal),
        tax=str(summary.tax),
        tax_rate=str(cart.tax_rate),
        total=str(summary.total),
        item_count=summary.item_count,
    )
