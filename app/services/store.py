from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError

from app.core.errors import StoreError
from app.models.record import record_table


def upsert_statement(table, dialect_name: str, values: dict):
    """Single INSERT that overwrites the row already stored under the same id."""
    if dialect_name in ("sqlite", "postgresql"):
        dialect_insert = sqlite.insert if dialect_name == "sqlite" else postgresql.insert
        stmt = dialect_insert(table).values(**values)
        return stmt.on_conflict_do_update(
            index_elements=[table.c.id],
            set_={"item": stmt.excluded.item, "stored_at": stmt.excluded.stored_at},
        )
    if dialect_name in ("mysql", "mariadb"):
        stmt = mysql.insert(table).values(**values)
        return stmt.on_duplicate_key_update(item=stmt.inserted.item, stored_at=stmt.inserted.stored_at)
    raise StoreError(f"Record upserts are not supported on {dialect_name}")


def _store_message(error: SQLAlchemyError) -> str:
    # driver message only, without the SQL statement and bound parameters
    orig = getattr(error, "orig", None)
    return str(orig) if orig is not None else str(error)


class SqlRecordStore:
    """Key-value record table backed by SQLAlchemy.

    ``put`` is last-write-wins on the record id; every call uses its own session.
    """

    def __init__(self, session_factory, table_name: str):
        self._session_factory = session_factory
        self.table = record_table(table_name)

    @property
    def table_name(self) -> str:
        return self.table.name

    def ensure_table(self, engine) -> None:
        try:
            self.table.metadata.create_all(engine, checkfirst=True)
        except SQLAlchemyError as e:
            raise StoreError(f"Could not create table {self.table_name}: {_store_message(e)}") from e

    def put(self, item: dict) -> str:
        record_id = item["id"]
        stored_at = datetime.now(timezone.utc)
        session = self._session_factory()
        try:
            dialect_name = session.get_bind().dialect.name
            session.execute(
                upsert_statement(self.table, dialect_name, {"id": record_id, "item": item, "stored_at": stored_at})
            )
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise StoreError(_store_message(e)) from e
        finally:
            session.close()
        return record_id

    def get(self, record_id: str) -> dict | None:
        session = self._session_factory()
        try:
            return session.execute(
                select(self.table.c.item).where(self.table.c.id == record_id)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise StoreError(_store_message(e)) from e
        finally:
            session.close()
