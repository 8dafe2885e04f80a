"""
SQLAlchemy storage backend.

Rows are converted to the pydantic models at the session boundary, so
nothing outside this module ever holds an ORM object.
"""

import enum
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Generator, List, Optional, Sequence

from loguru import logger
from sqlalchemy import case, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from bizassist.infra.database import Database
from bizassist.models.catalog import Order, OrderCreate, Product, ProductCreate, ProductStatus
from bizassist.models.chat import Conversation, Message
from bizassist.models.domain import ConversationRecord, OrderRecord, ProductRecord
from bizassist.storage.base import Storage, check_conversation_fields, validate_message
from bizassist.utils.errors import ConflictError, StorageError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; everything stored is UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _column_value(value: Any) -> Any:
    if isinstance(value, enum.Enum):
        return value.value
    return value


def _to_product(record: ProductRecord) -> Product:
    return Product(
        id=record.id,
        name=record.name,
        sku=record.sku,
        description=record.description,
        price=record.price,
        quantity=record.quantity,
        status=record.status,
        category=record.category,
        reorder_point=record.reorder_point,
        next_restock=_as_utc(record.next_restock),
        image_url=record.image_url,
        created_at=_as_utc(record.created_at),
        updated_at=_as_utc(record.updated_at),
    )


def _to_order(record: OrderRecord) -> Order:
    return Order(
        id=record.id,
        order_number=record.order_number,
        status=record.status,
        total=record.total,
        customer_name=record.customer_name,
        customer_email=record.customer_email,
        items=record.items or [],
        created_at=_as_utc(record.created_at),
        updated_at=_as_utc(record.updated_at),
    )


def _to_conversation(record: ConversationRecord) -> Conversation:
    return Conversation(
        id=record.id,
        user_id=record.user_id,
        intent=record.intent,
        messages=record.messages or [],
        active=record.active,
        created_at=_as_utc(record.created_at),
        updated_at=_as_utc(record.updated_at),
    )


def _message_json(message: Message) -> Dict[str, Any]:
    return validate_message(message).model_dump(mode="json")


class SQLStorage(Storage):
    """
    Storage interface over a SQLAlchemy database

    Read-modify-write methods run under a process-wide lock as well as a row
    lock (FOR UPDATE on server databases, BEGIN IMMEDIATE on SQLite files),
    so concurrent requests in one worker never interleave their writes.
    """

    def __init__(self, database: Optional[Database] = None, create_tables: bool = True):
        self.db = database or Database()
        self._write_lock = threading.RLock()
        if create_tables:
            self.db.create_all()

    @contextmanager
    def _session(self) -> Generator[Session, None, None]:
        try:
            with self.db.session_scope() as session:
                yield session
        except IntegrityError as e:
            raise ConflictError(f"Duplicate or invalid row: {e.orig}") from e
        except SQLAlchemyError as e:
            raise StorageError(f"Database operation failed: {e}") from e

    # Products

    def get_products(self) -> List[Product]:
        with self._session() as session:
            records = session.scalars(select(ProductRecord).order_by(ProductRecord.id)).all()
            return [_to_product(r) for r in records]

    def get_product(self, product_id: int) -> Optional[Product]:
        with self._session() as session:
            record = session.get(ProductRecord, product_id)
            return _to_product(record) if record else None

    def get_product_by_sku(self, sku: str) -> Optional[Product]:
        with self._session() as session:
            record = session.scalars(select(ProductRecord).where(ProductRecord.sku == sku)).first()
            return _to_product(record) if record else None

    def search_products(self, query: str) -> List[Product]:
        stmt = (
            select(ProductRecord)
            .where(
                ProductRecord.name.icontains(query, autoescape=True)
                | ProductRecord.sku.icontains(query, autoescape=True)
                | ProductRecord.description.icontains(query, autoescape=True)
            )
            .order_by(ProductRecord.id)
        )
        with self._session() as session:
            return [_to_product(r) for r in session.scalars(stmt).all()]

    def get_products_by_category(self, category: str) -> List[Product]:
        stmt = (
            select(ProductRecord)
            .where(func.lower(ProductRecord.category) == category.lower())
            .order_by(ProductRecord.id)
        )
        with self._session() as session:
            return [_to_product(r) for r in session.scalars(stmt).all()]

    def create_product(self, product: ProductCreate) -> Product:
        data = {k: _column_value(v) for k, v in product.model_dump().items()}
        with self._session() as session:
            record = ProductRecord(**data)
            session.add(record)
            session.flush()
            return _to_product(record)

    def update_product(self, product_id: int, **fields) -> Optional[Product]:
        with self._write_lock, self._session() as session:
            record = session.get(ProductRecord, product_id, with_for_update=True)
            if record is None:
                return None
            for key, value in fields.items():
                setattr(record, key, _column_value(value))
            record.updated_at = _utcnow()
            session.flush()
            return _to_product(record)

    def adjust_stock(self, product_id: int, delta: int) -> Optional[Product]:
        new_quantity = ProductRecord.quantity + delta
        clamped = case((new_quantity > 0, new_quantity), else_=0)
        stmt = (
            update(ProductRecord)
            .where(ProductRecord.id == product_id)
            .values(
                quantity=clamped,
                status=case(
                    (new_quantity <= 0, ProductStatus.OUT_OF_STOCK.value),
                    (new_quantity <= ProductRecord.reorder_point, ProductStatus.LOW_STOCK.value),
                    else_=ProductStatus.IN_STOCK.value,
                ),
                updated_at=_utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        with self._write_lock, self._session() as session:
            if session.execute(stmt).rowcount == 0:
                return None
            record = session.get(ProductRecord, product_id, populate_existing=True)
            return _to_product(record)

    def delete_product(self, product_id: int) -> bool:
        with self._session() as session:
            record = session.get(ProductRecord, product_id)
            if record is None:
                return False
            session.delete(record)
            return True

    # Orders

    def get_orders(self) -> List[Order]:
        with self._session() as session:
            records = session.scalars(select(OrderRecord).order_by(OrderRecord.id)).all()
            return [_to_order(r) for r in records]

    def get_recent_orders(self, limit: int) -> List[Order]:
        stmt = select(OrderRecord).order_by(OrderRecord.created_at.desc(), OrderRecord.id.desc()).limit(limit)
        with self._session() as session:
            return [_to_order(r) for r in session.scalars(stmt).all()]

    def get_order(self, order_id: int) -> Optional[Order]:
        with self._session() as session:
            record = session.get(OrderRecord, order_id)
            return _to_order(record) if record else None

    def get_order_by_number(self, order_number: str) -> Optional[Order]:
        with self._session() as session:
            record = session.scalars(select(OrderRecord).where(OrderRecord.order_number == order_number)).first()
            return _to_order(record) if record else None

    def create_order(self, order: OrderCreate) -> Order:
        data = order.model_dump(mode="json")
        with self._session() as session:
            record = OrderRecord(
                order_number=order.order_number,
                status=order.status.value,
                total=order.total,
                customer_name=order.customer_name,
                customer_email=order.customer_email,
                items=data["items"],
            )
            session.add(record)
            session.flush()
            return _to_order(record)

    def update_order(self, order_id: int, **fields) -> Optional[Order]:
        with self._write_lock, self._session() as session:
            record = session.get(OrderRecord, order_id, with_for_update=True)
            if record is None:
                return None
            for key, value in fields.items():
                if key == "items":
                    value = [item.model_dump(mode="json") if hasattr(item, "model_dump") else item for item in value]
                setattr(record, key, _column_value(value))
            record.updated_at = _utcnow()
            session.flush()
            return _to_order(record)

    # Conversations

    def get_conversations(self) -> List[Conversation]:
        with self._session() as session:
            records = session.scalars(select(ConversationRecord).order_by(ConversationRecord.id)).all()
            return [_to_conversation(r) for r in records]

    def get_active_conversations(self) -> List[Conversation]:
        stmt = select(ConversationRecord).where(ConversationRecord.active.is_(True)).order_by(ConversationRecord.id)
        with self._session() as session:
            return [_to_conversation(r) for r in session.scalars(stmt).all()]

    def get_conversation(self, conversation_id: int) -> Optional[Conversation]:
        with self._session() as session:
            record = session.get(ConversationRecord, conversation_id)
            return _to_conversation(record) if record else None

    def create_conversation(
        self,
        user_id: Optional[int],
        intent: Optional[str],
        messages: Sequence[Message],
        active: bool = True,
    ) -> Conversation:
        with self._session() as session:
            record = ConversationRecord(
                user_id=user_id,
                intent=intent,
                messages=[_message_json(m) for m in messages],
                active=active,
            )
            session.add(record)
            session.flush()
            logger.debug(f"Created conversation {record.id} with {len(messages)} messages")
            return _to_conversation(record)

    def update_conversation(self, conversation_id: int, **fields) -> Optional[Conversation]:
        check_conversation_fields(fields)
        with self._write_lock, self._session() as session:
            record = session.get(ConversationRecord, conversation_id, with_for_update=True)
            if record is None:
                return None
            for key, value in fields.items():
                setattr(record, key, value)
            record.updated_at = _utcnow()
            session.flush()
            return _to_conversation(record)

    def add_message_to_conversation(self, conversation_id: int, message: Message) -> Optional[Conversation]:
        payload = _message_json(message)
        with self._write_lock, self._session() as session:
            record = session.get(ConversationRecord, conversation_id, with_for_update=True)
            if record is None:
                return None
            # Reassign so the JSON column registers the change
            record.messages = [*(record.messages or []), payload]
            record.updated_at = _utcnow()
            session.flush()
            return _to_conversation(record)
