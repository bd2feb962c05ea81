from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from app.models.counter import Counter

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CounterRepository:
    """Per-tenant sequences advanced by a single atomic upsert"""

    def __init__(self, db: Session, tenant_id: int):
        self.db = db
        self.tenant_id = tenant_id

    def next_value(self, key: str) -> int:
        """
        Increment the ``key`` counter of this tenant and return the new value.

        The first call for a key creates the row with seq=1. The statement
        runs inside the caller's transaction; the caller commits.
        """
        insert = _DIALECT_INSERTS[self.db.get_bind().dialect.name]
        stmt = (
            insert(Counter)
            .values(tenant_id=self.tenant_id, key=key, seq=1)
            .on_conflict_do_update(
                index_elements=[Counter.tenant_id, Counter.key],
                set_={"seq": Counter.seq + 1},
            )
            .returning(Counter.seq)
        )
        return self.db.execute(stmt).scalar_one()
