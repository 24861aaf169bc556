"""
Tests for the file record store in FileDepot Server
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

from exceptions import ValidationError
from managers.record_store import (
    InsertRecord, FindRecordById, UpdateRecordFields, DeleteRecord,
    SearchRecords, IterateRecords
)
from models.database import File


def make_file(name="report", extension="pdf", path=None, mime_type="application/pdf",
              byte_size=100, filename=None, created_at=None):
    return File(
        name=name,
        extension=extension,
        path=path,
        filename=filename or f"{name}.{extension}",
        mime_type=mime_type,
        byte_size=byte_size,
        created_at=created_at or datetime.now(timezone.utc)
    )


def test_insert_assigns_id(db_manager):
    """Inserting a record assigns an id and leaves the hash empty"""
    record = make_file()
    record_id = InsertRecord(db_manager, record)

    assert record_id == record.id
    loaded = FindRecordById(db_manager, File, record_id)
    assert loaded.name == "report"
    assert loaded.mime_type == "application/pdf"
    assert loaded.hash is None


def test_insert_rejects_invalid_record(db_manager):
    """Invalid records are rejected before anything is written"""
    record = make_file(name="", byte_size=-1)

    with pytest.raises(ValidationError) as excinfo:
        InsertRecord(db_manager, record)

    assert "name cannot be blank" in excinfo.value.errors
    assert "byte_size cannot be negative" in excinfo.value.errors
    assert SearchRecords(db_manager, File).total == 0


def test_validation_limits():
    """String and size limits are enforced"""
    assert make_file(name="x" * 255, filename="long.pdf").Validate() == []
    assert make_file(name="x" * 256, filename="long.pdf").Validate() == ["name is too long (maximum is 255 characters)"]
    assert make_file(byte_size=9_999_999_999).Validate() == []
    assert make_file(byte_size=10_000_000_000).Validate() == ["byte_size is too long (maximum is 10 digits)"]


def test_find_missing_record(db_manager):
    """Looking up an unknown id returns None"""
    assert FindRecordById(db_manager, File, 12345) is None


def test_update_only_given_fields(db_manager):
    """Partial updates leave other columns untouched"""
    record_id = InsertRecord(db_manager, make_file())

    assert UpdateRecordFields(db_manager, File, record_id, {'hash': "abc123"})
    loaded = FindRecordById(db_manager, File, record_id)
    assert loaded.hash == "abc123"
    assert loaded.name == "report"
    assert not UpdateRecordFields(db_manager, File, 999, {'hash': "abc123"})


def test_delete_record(db_manager):
    """Deleting returns False once the record is gone"""
    record_id = InsertRecord(db_manager, make_file())

    assert DeleteRecord(db_manager, File, record_id)
    assert FindRecordById(db_manager, File, record_id) is None
    assert not DeleteRecord(db_manager, File, record_id)


def test_ids_are_never_reused(db_manager):
    """The id of a deleted record is not handed out again"""
    InsertRecord(db_manager, make_file(name="first"))
    second_id = InsertRecord(db_manager, make_file(name="second"))
    DeleteRecord(db_manager, File, second_id)

    third_id = InsertRecord(db_manager, make_file(name="third"))
    assert third_id > second_id


def test_search_text_fields_match_substrings(db_manager):
    """Text criteria match case-insensitive substrings"""
    InsertRecord(db_manager, make_file(name="Holiday-Photo", extension="jpg", mime_type="image/jpeg"))
    InsertRecord(db_manager, make_file(name="photo-booth", extension="png", mime_type="image/png"))
    InsertRecord(db_manager, make_file(name="invoice", extension="pdf"))

    result = SearchRecords(db_manager, File, {'name': "photo"})
    assert [r.name for r in result.items] == ["Holiday-Photo", "photo-booth"]

    result = SearchRecords(db_manager, File, {'mime_type': "image/", 'extension': "png"})
    assert [r.name for r in result.items] == ["photo-booth"]


def test_search_wildcards_are_literal(db_manager):
    """LIKE wildcards in criteria are matched literally"""
    InsertRecord(db_manager, make_file(name="100_percent"))
    InsertRecord(db_manager, make_file(name="100Xpercent"))

    result = SearchRecords(db_manager, File, {'name': "100_"})
    assert [r.name for r in result.items] == ["100_percent"]


def test_search_identifiers_match_exactly(db_manager):
    """id and byte_size match exactly"""
    first_id = InsertRecord(db_manager, make_file(byte_size=10))
    InsertRecord(db_manager, make_file(byte_size=100))

    assert [r.id for r in SearchRecords(db_manager, File, {'id': first_id}).items] == [first_id]
    assert [r.byte_size for r in SearchRecords(db_manager, File, {'byte_size': 10}).items] == [10]


def test_search_ignores_empty_criteria(db_manager):
    """None and empty values do not filter"""
    InsertRecord(db_manager, make_file())
    assert SearchRecords(db_manager, File, {'name': None, 'path': ""}).total == 1


def test_search_pagination_and_ordering(db_manager):
    """Results come in insertion order by default and can be paged and reordered"""
    for index in range(5):
        InsertRecord(db_manager, make_file(name=f"file{index}", byte_size=index))

    page = SearchRecords(db_manager, File, page=2, page_size=2)
    assert [r.name for r in page.items] == ["file2", "file3"]
    assert page.total == 5
    assert page.page_count == 3
    assert page.HasMore()

    last = SearchRecords(db_manager, File, page=3, page_size=2)
    assert not last.HasMore()

    descending = SearchRecords(db_manager, File, order_by="-byte_size")
    assert [r.byte_size for r in descending.items] == [4, 3, 2, 1, 0]


def test_search_rejects_unknown_criteria(db_manager):
    """Unknown attributes, orderings and paging are validation errors"""
    with pytest.raises(ValidationError):
        SearchRecords(db_manager, File, {'owner': "someone"})
    with pytest.raises(ValidationError):
        SearchRecords(db_manager, File, order_by="owner")
    with pytest.raises(ValidationError):
        SearchRecords(db_manager, File, page=0)


def test_iterate_records_spans_batches(db_manager):
    """Iteration yields every record in id order across batches"""
    ids = [InsertRecord(db_manager, make_file(name=f"file{index}")) for index in range(7)]
    assert [r.id for r in IterateRecords(db_manager, File, batch_size=3)] == ids


def test_search_created_at_matches_partial_timestamp(db_manager):
    """Creation times match on any part of their date and time"""
    InsertRecord(db_manager, make_file(name="may", created_at=datetime(2024, 5, 17, 9, 30)))
    InsertRecord(db_manager, make_file(name="june", created_at=datetime(2024, 6, 1, 9, 30)))
    InsertRecord(db_manager, make_file(name="later", created_at=datetime(2025, 5, 17, 9, 30)))

    result = SearchRecords(db_manager, File, {'created_at': "2024-05"})
    assert [r.name for r in result.items] == ["may"]

    result = SearchRecords(db_manager, File, {'created_at': "05-17 09:30"})
    assert [r.name for r in result.items] == ["may", "later"]


def test_validation_rejects_escaping_path():
    """Paths stay inside the files directory"""
    for path in ("..", "../escaped", "docs/../../escaped", "docs\\..\\escaped"):
        assert "path cannot leave the files directory" in make_file(path=path).Validate()

    assert make_file(path="docs/2024..draft").Validate() == []
