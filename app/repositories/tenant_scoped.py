"""Base repository for tenant-owned models."""

from typing import Generic, TypeVar

from sqlalchemy.orm import Query, Session

from app.models.base import Base

ModelT = TypeVar("ModelT", bound=Base)


class TenantScopedRepository(Generic[ModelT]):
    """
    Repository bound to one tenant for its whole lifetime.

    Every read filters on ``tenant_id`` and every insert stamps it, so a
    repository built from a session identity cannot see or write another
    tenant's rows. Lookups for foreign ids return None, never the row.

    Subclasses set ``model``.
    """

    model: type[ModelT]

    def __init__(self, db: Session, tenant_id: int):
        self.db = db
        self.tenant_id = tenant_id

    def _query(self) -> Query:
        return self.db.query(self.model).filter(self.model.tenant_id == self.tenant_id)

    def get(self, entity_id: int) -> ModelT | None:
        """Get entity by id, None if missing or owned by another tenant"""
        return self._query().filter(self.model.id == entity_id).first()

    def get_many(self, entity_ids: list[int]) -> list[ModelT]:
        """Entities among ``entity_ids`` owned by this tenant; foreign ids are dropped"""
        if not entity_ids:
            return []
        return self._query().filter(self.model.id.in_(entity_ids)).all()

    def get_all(self) -> list[ModelT]:
        return self._query().order_by(self.model.id).all()

    def count(self) -> int:
        return self._query().count()

    def add(self, entity: ModelT) -> ModelT:
        """Insert entity under this repository's tenant, overwriting any tenant_id it carries"""
        entity.tenant_id = self.tenant_id
        self.db.add(entity)
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def update(self, entity: ModelT) -> ModelT:
        self.db.commit()
        self.db.refresh(entity)
        return entity

    def delete(self, entity: ModelT) -> None:
        self.db.delete(entity)
        self.db.commit()
