"""
Generic CRUD + query access to the storefront's named collections.

The storefront core never talks to SQLAlchemy directly: it lists, creates,
updates and deletes plain dict records through a ``CollectionClient``.
``SqlCollectionClient`` is the implementation backed by the application
database; tests and alternative stores can provide their own.
"""

import time
from typing import Any, Dict, List, Optional

from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from starlette.concurrency import run_in_threadpool

import models
from core.exceptions import CollectionError
from utils.logger import get_logger, log_database_query

logger = get_logger(__name__)

PRODUCTS = "products"
CATEGORIES = "categories"
CART_ITEMS = "cartItems"
USERS = "users"
ORDERS = "orders"
ORDER_ITEMS = "orderItems"
REVIEWS = "reviews"

Record = Dict[str, Any]


class CollectionClient:
    """
    Interface consumed by the storefront core.

    ``where`` maps a field to a value (equality) or to ``{"in": [...]}``
    (membership). ``order_by`` maps a field to ``"asc"`` or ``"desc"``;
    several keys are applied in insertion order.
    """

    async def list(self, collection: str, where: Optional[Dict[str, Any]] = None,
                   order_by: Optional[Dict[str, str]] = None, limit: Optional[int] = None) -> List[Record]:
        raise NotImplementedError

    async def create(self, collection: str, record: Record) -> Record:
        raise NotImplementedError

    async def update(self, collection: str, record_id: str, fields: Record) -> Record:
        raise NotImplementedError

    async def delete(self, collection: str, record_id: str) -> None:
        raise NotImplementedError


class SqlCollectionClient(CollectionClient):
    """Collection client over the SQLAlchemy models; one session per operation."""

    MODELS = {
        PRODUCTS: models.Product,
        CATEGORIES: models.Category,
        CART_ITEMS: models.CartItem,
        USERS: models.User,
        ORDERS: models.Order,
        ORDER_ITEMS: models.OrderItem,
        REVIEWS: models.Review,
    }

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def _model(self, collection: str):
        try:
            return self.MODELS[collection]
        except KeyError:
            raise CollectionError(f"Unknown collection '{collection}'")

    @staticmethod
    def _column(model, field: str):
        if field not in inspect(model).column_attrs:
            raise CollectionError(f"Unknown field '{field}' on {model.__tablename__}")
        return getattr(model, field)

    @staticmethod
    def _to_record(row) -> Record:
        return {attr.key: getattr(row, attr.key) for attr in inspect(row).mapper.column_attrs}

    def _list_rows(self, stmt) -> List[Record]:
        with self._session_factory() as session:
            return [self._to_record(row) for row in session.scalars(stmt).all()]

    def _insert_row(self, model, record: Record) -> Record:
        with self._session_factory() as session:
            row = model(**record)
            session.add(row)
            session.commit()
            session.refresh(row)
            return self._to_record(row)

    def _update_row(self, model, collection: str, record_id: str, fields: Record) -> Record:
        with self._session_factory() as session:
            row = session.get(model, record_id)
            if row is None:
                raise CollectionError(f"{collection} record '{record_id}' not found")

            for field, value in fields.items():
                setattr(row, field, value)

            session.commit()
            session.refresh(row)
            return self._to_record(row)

    def _delete_row(self, model, record_id: str) -> int:
        with self._session_factory() as session:
            row = session.get(model, record_id)
            if row is None:
                return 0
            session.delete(row)
            session.commit()
            return 1

    # Sessions are synchronous; every public operation runs its session work
    # on the threadpool.

    async def list(self, collection, where=None, order_by=None, limit=None):
        model = self._model(collection)
        stmt = select(model)

        for field, condition in (where or {}).items():
            column = self._column(model, field)
            if isinstance(condition, dict) and "in" in condition:
                stmt = stmt.where(column.in_(list(condition["in"])))
            else:
                stmt = stmt.where(column == condition)

        for field, direction in (order_by or {}).items():
            column = self._column(model, field)
            if direction not in ("asc", "desc"):
                raise CollectionError(f"Invalid sort direction '{direction}' for {field}")
            stmt = stmt.order_by(column.desc() if direction == "desc" else column.asc())

        if limit is not None:
            stmt = stmt.limit(limit)

        start = time.perf_counter()
        try:
            records = await run_in_threadpool(self._list_rows, stmt)
        except SQLAlchemyError as e:
            raise CollectionError(f"Failed to list {collection}: {str(e)}") from e

        log_database_query(logger, "SELECT", model.__tablename__,
                           (time.perf_counter() - start) * 1000, rows_affected=len(records))
        return records

    async def create(self, collection, record):
        model = self._model(collection)
        for field in record:
            self._column(model, field)

        start = time.perf_counter()
        try:
            created = await run_in_threadpool(self._insert_row, model, record)
        except SQLAlchemyError as e:
            raise CollectionError(f"Failed to create {collection} record: {str(e)}") from e

        log_database_query(logger, "INSERT", model.__tablename__,
                           (time.perf_counter() - start) * 1000, rows_affected=1)
        return created

    async def update(self, collection, record_id, fields):
        model = self._model(collection)
        for field in fields:
            self._column(model, field)

        start = time.perf_counter()
        try:
            updated = await run_in_threadpool(self._update_row, model, collection, record_id, fields)
        except SQLAlchemyError as e:
            raise CollectionError(f"Failed to update {collection} record '{record_id}': {str(e)}") from e

        log_database_query(logger, "UPDATE", model.__tablename__,
                           (time.perf_counter() - start) * 1000, rows_affected=1)
        return updated

    async def delete(self, collection, record_id):
        model = self._model(collection)

        start = time.perf_counter()
        try:
            deleted = await run_in_threadpool(self._delete_row, model, record_id)
        except SQLAlchemyError as e:
            raise CollectionError(f"Failed to delete {collection} record '{record_id}': {str(e)}") from e

        log_database_query(logger, "DELETE", model.__tablename__,
                           (time.perf_counter() - start) * 1000, rows_affected=deleted)
