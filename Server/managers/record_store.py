"""
FileDepot Server - File Record Store

This module is the metadata index of stored files:
- Inserting validated file records (assigns the id)
- Fetching a record by id, optionally eager-loading relationships
- Partial updates of selected columns
- Deleting records
- Filtered, ordered, paginated search

Records are returned detached from their session; the session factory uses
expire_on_commit=False so loaded attributes stay readable.
"""

import logging
from typing import Dict, Any, Iterable, Optional

from sqlalchemy import String, cast, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from exceptions import ModelPersistError, ValidationError
from managers.database_manager import DatabaseManager
from models.infrastructure.search_result import SearchResult

logger = logging.getLogger(__name__)


# Attributes matched by case-insensitive substring
TEXT_SEARCH_FIELDS = ('name', 'path', 'extension', 'filename', 'mime_type', 'hash')

# Timestamps matched by substring of their stored text, e.g. "2024-05"
DATE_SEARCH_FIELDS = ('created_at',)

# Attributes matched exactly
EXACT_SEARCH_FIELDS = ('id', 'byte_size')

SEARCH_FIELDS = TEXT_SEARCH_FIELDS + DATE_SEARCH_FIELDS + EXACT_SEARCH_FIELDS

# Attributes results can be ordered by
ORDER_FIELDS = SEARCH_FIELDS

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


# ==================== Create / Read ====================

def InsertRecord(db_manager: DatabaseManager, record) -> int:
    """
    Validate and insert a new file record

    Args:
        db_manager: DatabaseManager instance
        record: Unsaved file model instance

    Returns:
        int: id assigned to the record

    Raises:
        ValidationError: If the record fails validation (nothing is written)
        ModelPersistError: If the database rejects the record
    """
    errors = record.Validate()
    if errors:
        logger.warning(f"File record failed validation: {'; '.join(errors)}")
        raise ValidationError("Failed to save the file model", errors)

    session = db_manager.GetSession()

    try:
        session.add(record)
        session.flush()  # Get the id
        record_id = record.id
        session.commit()
        logger.debug(f"Inserted file record {record_id} ({record.name}.{record.extension})")
        return record_id

    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to insert file record {record.name}: {str(e)}")
        raise ModelPersistError("Failed to save the file model") from e
    finally:
        session.close()


def FindRecordById(db_manager: DatabaseManager, model_class, record_id,
                   eager: Optional[Iterable[str]] = None):
    """
    Fetch a file record by id

    Args:
        db_manager: DatabaseManager instance
        model_class: File model class
        record_id: Record id
        eager: Names of relationships to load together with the record

    Returns:
        File record, or None if no record has that id
    """
    session = db_manager.GetSession()

    try:
        query = session.query(model_class)
        for relationship_name in eager or ():
            query = query.options(selectinload(getattr(model_class, relationship_name)))

        return query.filter(model_class.id == record_id).first()

    finally:
        session.close()


# ==================== Update / Delete ====================

def UpdateRecordFields(db_manager: DatabaseManager, model_class, record_id,
                       fields: Dict[str, Any]) -> bool:
    """
    Update only the given columns of an existing record

    Args:
        db_manager: DatabaseManager instance
        model_class: File model class
        record_id: Record id
        fields: Mapping of attribute name to new value

    Returns:
        bool: True if a record was updated, False if no record has that id

    Raises:
        ModelPersistError: If the database rejects the update
    """
    session = db_manager.GetSession()

    try:
        updated = session.query(model_class).filter(
            model_class.id == record_id
        ).update(fields, synchronize_session=False)
        session.commit()

        if updated:
            logger.debug(f"Updated file record {record_id}: {', '.join(fields)}")
        return updated > 0

    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to update file record {record_id}: {str(e)}")
        raise ModelPersistError(f"Failed to update file model {record_id}") from e
    finally:
        session.close()


def DeleteRecord(db_manager: DatabaseManager, model_class, record_id) -> bool:
    """
    Delete a file record

    Args:
        db_manager: DatabaseManager instance
        model_class: File model class
        record_id: Record id

    Returns:
        bool: True if the record was deleted, False if no record has that id

    Raises:
        SQLAlchemyError: If the database rejects the delete
    """
    session = db_manager.GetSession()

    try:
        record = session.query(model_class).filter(model_class.id == record_id).first()
        if not record:
            return False

        session.delete(record)
        session.commit()
        logger.debug(f"Deleted file record {record_id}")
        return True

    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to delete file record {record_id}: {str(e)}")
        raise
    finally:
        session.close()


# ==================== Search ====================

def SearchRecords(db_manager: DatabaseManager, model_class, criteria: Optional[Dict[str, Any]] = None,
                  page: int = 1, page_size: int = DEFAULT_PAGE_SIZE,
                  order_by: Optional[str] = None) -> SearchResult:
    """
    Search file records

    Text attributes match case-insensitive substrings, created_at matches a
    substring of its "YYYY-MM-DD HH:MM:SS" form, ids and sizes match exactly. Empty criteria values are ignored.

    Args:
        db_manager: DatabaseManager instance
        model_class: File model class
        criteria: Mapping of attribute name to filter value
        page: 1-based page number
        page_size: Records per page (capped at MAX_PAGE_SIZE)
        order_by: Attribute to order by, prefixed with '-' for descending.
                  Defaults to insertion order.

    Returns:
        SearchResult: Matching records of the requested page

    Raises:
        ValidationError: If a criterion, the ordering or the paging is invalid
    """
    criteria = criteria or {}

    unknown = [key for key in criteria if key not in SEARCH_FIELDS]
    if unknown:
        raise ValidationError("Invalid search criteria", [f"Unknown attribute: {key}" for key in unknown])
    if page < 1 or page_size < 1:
        raise ValidationError("Invalid paging", ["page and page_size must be positive"])
    page_size = min(page_size, MAX_PAGE_SIZE)

    order_column = model_class.id
    if order_by:
        descending = order_by.startswith('-')
        order_field = order_by.lstrip('-')
        if order_field not in ORDER_FIELDS:
            raise ValidationError("Invalid ordering", [f"Cannot order by: {order_field}"])
        order_column = getattr(model_class, order_field)
        order_column = order_column.desc() if descending else order_column.asc()

    session = db_manager.GetSession()

    try:
        query = session.query(model_class)

        for key, value in criteria.items():
            if value is None or value == "":
                continue
            column = getattr(model_class, key)
            if key in TEXT_SEARCH_FIELDS:
                query = query.filter(column.icontains(str(value), autoescape=True))
            elif key in DATE_SEARCH_FIELDS:
                query = query.filter(cast(column, String).contains(str(value), autoescape=True))
            else:
                query = query.filter(column == value)

        total = query.order_by(None).with_entities(func.count(model_class.id)).scalar()

        items = query.order_by(order_column, model_class.id).offset(
            (page - 1) * page_size
        ).limit(page_size).all()

        return SearchResult(items=items, total=total, page=page, page_size=page_size)

    finally:
        session.close()


def IterateRecords(db_manager: DatabaseManager, model_class, batch_size: int = 500):
    """
    Yield every file record in id order, loading batch_size rows at a time

    Args:
        db_manager: DatabaseManager instance
        model_class: File model class
        batch_size: Rows fetched per query

    Yields:
        File records
    """
    last_id = None

    while True:
        session = db_manager.GetSession()
        try:
            query = session.query(model_class)
            if last_id is not None:
                query = query.filter(model_class.id > last_id)
            batch = query.order_by(model_class.id).limit(batch_size).all()
        finally:
            session.close()

        if not batch:
            return

        yield from batch
        last_id = batch[-1].id
