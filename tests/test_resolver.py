"""Asset resolver: (property id, filename) to Photo, with uniform misses."""
import pytest
from sqlalchemy import event

from estate_photos.services import catalog
from estate_photos.services.resolver import (
    is_acceptable_filename,
    parse_property_id,
    resolve_photo,
)


@pytest.mark.parametrize("raw, expected", [
    ("1", 1),
    ("42", 42),
    ("007", 7),
    ("0", None),
    ("-1", None),
    ("+1", None),
    (" 1", None),
    ("1.0", None),
    ("abc", None),
    ("", None),
    ("١", None),  # Arabic-Indic digit one
    ("9" * 30, None),
])
def test_parse_property_id(raw, expected):
    assert parse_property_id(raw) == expected


@pytest.mark.parametrize("raw", ["", "\x00.jpg", "photo.jpg\x00.txt", "..", ".", "a/b.jpg"])
def test_unacceptable_filenames(raw):
    assert is_acceptable_filename(raw) is False


@pytest.mark.parametrize("raw", ["kitchen.jpg", "my kitchen (1).jpg", "back\\slash.jpg", "..jpg", "café.jpg"])
def test_acceptable_filenames(raw):
    assert is_acceptable_filename(raw) is True


def test_resolves_exact_filename(db, make_property):
    prop = make_property()
    photo = catalog.create_photo(db, prop.id, "kitchen.jpg", "image/jpeg", 100)
    assert resolve_photo(db, str(prop.id), "kitchen.jpg").id == photo.id


def test_match_is_case_sensitive_and_exact(db, make_property):
    prop = make_property()
    catalog.create_photo(db, prop.id, "kitchen.jpg", "image/jpeg", 100)
    assert resolve_photo(db, str(prop.id), "Kitchen.jpg") is None
    assert resolve_photo(db, str(prop.id), "kitchen.jpg ") is None
    assert resolve_photo(db, str(prop.id), "kitchen") is None


def test_unicode_filenames_are_preserved(db, make_property):
    prop = make_property()
    photo = catalog.create_photo(db, prop.id, "café.jpg", "image/jpeg", 100)
    assert resolve_photo(db, str(prop.id), "café.jpg").id == photo.id


def test_photo_of_another_property_is_not_found(db, make_property):
    a = make_property("House A")
    b = make_property("House B")
    catalog.create_photo(db, b.id, "only_b.jpg", "image/jpeg", 100)
    assert resolve_photo(db, str(a.id), "only_b.jpg") is None


def test_same_filename_resolves_within_its_property(db, make_property):
    a = make_property("House A")
    b = make_property("House B")
    pa = catalog.create_photo(db, a.id, "same.jpg", "image/jpeg", 100)
    pb = catalog.create_photo(db, b.id, "same.jpg", "image/jpeg", 100)
    assert resolve_photo(db, str(a.id), "same.jpg").id == pa.id
    assert resolve_photo(db, str(b.id), "same.jpg").id == pb.id


@pytest.mark.parametrize("pid", ["99999", "invalid", "-1", "0", ""])
def test_unknown_or_malformed_property(db, make_property, pid):
    make_property(photos=1)
    assert resolve_photo(db, pid, "photo_1.jpg") is None


def test_nul_byte_filename_is_not_found(db, make_property):
    prop = make_property(photos=1)
    assert resolve_photo(db, str(prop.id), "photo_1.jpg\x00.txt") is None


def test_resolution_after_cascade_delete(db, make_property):
    prop = make_property(photos=3)
    pid = str(prop.id)
    catalog.delete_property(db, prop.id)
    for n in (1, 2, 3):
        assert resolve_photo(db, pid, f"photo_{n}.jpg") is None


def test_two_queries_and_no_gallery_load(engine, session_factory, make_property):
    """One property lookup plus one scoped photo lookup, nothing else."""
    prop = make_property(photos=4)
    pid = str(prop.id)
    statements = []

    def _count(conn, cursor, statement, *args):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", _count)
    try:
        with session_factory() as session:
            photo = resolve_photo(session, pid, "photo_2.jpg")
    finally:
        event.remove(engine, "before_cursor_execute", _count)

    assert photo.position == 2
    assert len(statements) == 2
    assert "photos" in statements[1]
