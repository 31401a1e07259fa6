# catalog/services/catalog_services.py
from __future__ import annotations

import logging
import re

from catalog.core.config import settings
from catalog.models.catalog_models import (
    Order, OrderItem, OrderState, Product, ProductReview, ProductVariant,
)
from catalog.repositories.catalog_repositories import (
    OrderRepository, ProductRepository, ProductVariantRepository, ReviewRepository,
)
from catalog.schemas.catalog_schemas import OrderCreate, ProductCreate, ReviewCreate, VariantCreate

logger = logging.getLogger(__name__)


class NotFoundError(Exception):
    """Raised when a catalog resource does not exist."""
    pass


def name_to_code(name: str) -> str:
    """'Small PHP T-Shirt' -> 'SMALL_PHP_T_SHIRT'"""
    return re.sub(r"[^0-9A-Za-z]+", "_", name).strip("_").upper()


class CatalogService:
    """
    Builds the catalog state that scenarios start from.
    - Products, variants and reviews are committed one by one.
    - Orders reference variants, which is what makes them undeletable.
    """

    def __init__(
        self,
        products: ProductRepository,
        variants: ProductVariantRepository,
        reviews: ReviewRepository,
        orders: OrderRepository,
    ):
        self.products = products
        self.variants = variants
        self.reviews = reviews
        self.orders = orders

    # ==========================================================
    # === Lookup ===============================================
    # ==========================================================

    def get_product(self, product_id: int) -> Product:
        product = self.products.find(product_id)
        if not product:
            logger.debug("product not found", extra={"product_id": product_id})
            raise NotFoundError(f"Product {product_id} not found")
        return product

    def get_product_by_name(self, name: str) -> Product:
        product = self.products.find_one_by_name(name)
        if not product:
            raise NotFoundError(f'Product "{name}" not found')
        return product

    def get_variant(self, product: Product, name: str) -> ProductVariant:
        variant = self.variants.find_one_by_product_and_name(product, name)
        if not variant:
            raise NotFoundError(f'Variant "{name}" of product "{product.name}" not found')
        return variant

    # ==========================================================
    # === Creation =============================================
    # ==========================================================

    def create_product(self, product_in: ProductCreate) -> Product:
        product = Product(
            name=product_in.name,
            code=product_in.code or name_to_code(product_in.name),
            enabled=product_in.enabled,
        )
        product = self.products.add(product)
        logger.info("product created", extra={"product_id": product.id, "code": product.code})
        return product

    def add_variant(self, product: Product, variant_in: VariantCreate) -> ProductVariant:
        variant = ProductVariant(
            product=product,
            name=variant_in.name,
            code=variant_in.code or name_to_code(f"{product.code} {variant_in.name}"),
            price=variant_in.price,
        )
        variant = self.variants.add(variant)
        logger.info("variant created", extra={"product_id": product.id, "variant_id": variant.id})
        return variant

    def add_review(self, product: Product, review_in: ReviewCreate) -> ProductReview:
        review = ProductReview(review_subject=product, **review_in.model_dump())
        review = self.reviews.add(review)
        logger.info("review created", extra={"product_id": product.id, "review_id": review.id})
        return review

    def place_order(self, order_in: OrderCreate) -> Order:
        """
        Creates an order in state NEW. Each item freezes the current variant price.
        """
        if not order_in.items:
            raise ValueError("An order needs at least one item")

        order = Order(customer_email=order_in.customer_email, state=OrderState.NEW, items=[])
        for item_in in order_in.items:
            variant = self.variants.find(item_in.variant_id)
            if not variant:
                raise NotFoundError(f"Variant {item_in.variant_id} not found")
            order.items.append(
                OrderItem(
                    variant=variant,
                    quantity=item_in.quantity,
                    unit_price=variant.price,
                    total=variant.price * item_in.quantity,
                )
            )
        order.total = sum(it.total for it in order.items)

        order = self.orders.add(order)
        order.number = f"#{order.id:0{settings.ORDER_NUMBER_WIDTH}d}"
        self.orders.db.commit()

        logger.info("order placed", extra={"order_id": order.id, "items": len(order.items)})
        return order
