from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Type

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog.models.catalog_models import Order, Product, ProductReview, ProductVariant

logger = logging.getLogger(__name__)


def identity_of(entity: Any) -> Any:
    """
    Primary key of a mapped entity, also for objects already deleted and detached.
    Falls back to an ``id`` attribute for anything that is not mapped.
    """
    state = sa_inspect(entity, raiseerr=False)
    identity = getattr(state, "identity", None)
    if identity:
        return identity[0] if len(identity) == 1 else identity
    return getattr(entity, "id", None)


class Repository:
    """Data Access Layer shared by the catalog resources."""

    model: Type[Any]
    resource_name: str = "resource"

    def __init__(self, db: Session):
        self.db = db

    def find(self, entity_id: Any) -> Optional[Any]:
        """Get an entity by its ID, None when absent."""
        return self.db.query(self.model).filter(self.model.id == entity_id).first()

    def find_by(self, criteria: Optional[Dict[str, Any]] = None) -> List[Any]:
        """
        List entities matching every criterion.
        Keys are column names or many-to-one relationship names, e.g.
        criteria={"product": product} or {"review_subject_id": 3}.
        """
        query = self.db.query(self.model)
        for key, value in (criteria or {}).items():
            query = query.filter(*self._criterion(key, value))
        return query.order_by(self.model.id).all()

    def find_one_by(self, criteria: Dict[str, Any]) -> Optional[Any]:
        found = self.find_by(criteria)
        return found[0] if found else None

    def add(self, entity: Any) -> Any:
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def remove(self, entity: Any) -> None:
        """
        Delete an entity and commit.
        On IntegrityError the session is rolled back before the error propagates,
        so nothing of a cascaded delete is kept.
        """
        try:
            self.db.delete(entity)
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(
                "removal rejected by integrity constraints",
                extra={"resource": self.resource_name, "entity_id": identity_of(entity)},
            )
            raise
        logger.debug("removed", extra={"resource": self.resource_name, "entity_id": identity_of(entity)})

    # -------- Internal helpers --------
    def _criterion(self, key: str, value: Any) -> list:
        mapper = sa_inspect(self.model)
        if key in mapper.relationships:
            relationship = mapper.relationships[key]
            ident = identity_of(value) if value is not None else None
            if not isinstance(ident, tuple):
                ident = (ident,)
            return [
                local == ident[i]
                for i, (local, _remote) in enumerate(relationship.local_remote_pairs)
            ]
        if key in mapper.columns:
            return [getattr(self.model, key) == value]
        raise ValueError(f"{self.model.__name__} has no field {key!r}")


class ProductRepository(Repository):
    model = Product
    resource_name = "product"

    def find_one_by_name(self, name: str) -> Optional[Product]:
        return self.find_one_by({"name": name})


class ProductVariantRepository(Repository):
    model = ProductVariant
    resource_name = "product_variant"

    def find_one_by_product_and_name(self, product: Product, name: str) -> Optional[ProductVariant]:
        return self.find_one_by({"product": product, "name": name})


class ReviewRepository(Repository):
    model = ProductReview
    resource_name = "product_review"


class OrderRepository(Repository):
    model = Order
    resource_name = "order"
