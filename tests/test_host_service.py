import pytest
from sqlalchemy.orm import Query

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.db.models import Host
from app.services.host_service import create_host, list_active_hosts, list_all_hosts, set_host_active


def test_create_host_is_active_and_trimmed(db):
    host = create_host(db, "  Ada Lovelace ", " ada@example.com ")

    assert host.id is not None
    assert host.full_name == "Ada Lovelace"
    assert host.email == "ada@example.com"
    assert host.is_active is True


@pytest.mark.parametrize("full_name,email", [("", "a@example.com"), ("Ada", ""), ("   ", "a@example.com"), (None, None)])
def test_create_host_requires_name_and_email(db, full_name, email):
    with pytest.raises(ValidationError):
        create_host(db, full_name, email)

    assert db.query(Host).count() == 0


def test_duplicate_email_conflicts_and_keeps_one_row(db):
    create_host(db, "Ada", "ada@example.com")

    with pytest.raises(ConflictError):
        create_host(db, "Ada Again", "ada@example.com")

    rows = [h for h in list_all_hosts(db) if h.email == "ada@example.com"]
    assert len(rows) == 1
    assert rows[0].full_name == "Ada"


def test_email_uniqueness_is_case_sensitive(db):
    create_host(db, "Ada", "ada@example.com")
    create_host(db, "Ada Upper", "ADA@example.com")

    assert len(list_all_hosts(db)) == 2


def test_unique_index_rejects_insert_that_skips_precheck(db, monkeypatch):
    create_host(db, "Ada", "ada@example.com")

    # Simulate a concurrent writer that passed the existence check first.
    monkeypatch.setattr(Query, "first", lambda self: None)
    with pytest.raises(ConflictError):
        create_host(db, "Ada Twin", "ada@example.com")
    monkeypatch.undo()

    assert db.query(Host).filter(Host.email == "ada@example.com").count() == 1


def test_listings_are_newest_first_and_active_filtered(db):
    first = create_host(db, "First", "first@example.com")
    second = create_host(db, "Second", "second@example.com")
    third = create_host(db, "Third", "third@example.com")

    set_host_active(db, second.id, False)

    assert [h.id for h in list_all_hosts(db)] == [third.id, second.id, first.id]
    assert [h.id for h in list_active_hosts(db)] == [third.id, first.id]


def test_set_host_active_is_repeatable(db, host):
    set_host_active(db, host.id, False)
    set_host_active(db, host.id, False)
    assert host.id not in [h.id for h in list_active_hosts(db)]

    set_host_active(db, host.id, True)
    set_host_active(db, host.id, True)
    assert host.id in [h.id for h in list_active_hosts(db)]


def test_set_host_active_unknown_host(db):
    with pytest.raises(NotFoundError):
        set_host_active(db, 999, False)
