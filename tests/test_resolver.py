"""Get-or-create behaviour for tags and equipment."""

import pytest

from recipebox.enums import TagType
from recipebox.models import Tag, Equipment
from recipebox.services import resolver
from recipebox.services.resolver import get_or_create_tag, get_or_create_equipment


def test_equipment_matches_case_and_whitespace_insensitively(db_session):
    first = get_or_create_equipment(db_session, "Oven")
    second = get_or_create_equipment(db_session, "oven ")
    db_session.commit()

    assert first.id == second.id
    assert first.name == "Oven"
    assert db_session.query(Equipment).count() == 1


def test_new_equipment_keeps_trimmed_original_case(db_session):
    equipment = get_or_create_equipment(db_session, "  Cast Iron Skillet ")
    assert equipment.name == "Cast Iron Skillet"


def test_tag_identity_includes_type(db_session):
    cuisine = get_or_create_tag(db_session, "Thai", TagType.CUISINE)
    custom = get_or_create_tag(db_session, "thai", TagType.CUSTOM)
    again = get_or_create_tag(db_session, " THAI", TagType.CUISINE)
    db_session.commit()

    assert cuisine.id != custom.id
    assert again.id == cuisine.id
    assert db_session.query(Tag).count() == 2


def test_blank_name_rejected(db_session):
    with pytest.raises(ValueError):
        get_or_create_equipment(db_session, "   ")
    with pytest.raises(ValueError):
        get_or_create_tag(db_session, "", TagType.TYPE)


def test_soft_deleted_tag_is_not_reused(db_session):
    old = get_or_create_tag(db_session, "Italian", TagType.CUISINE)
    old.soft_delete()
    db_session.commit()

    new = get_or_create_tag(db_session, "Italian", TagType.CUISINE)
    db_session.commit()

    assert new.id != old.id
    assert db_session.query(Tag).count() == 2


def test_concurrent_equipment_insert_reuses_winner(db_session, monkeypatch):
    """Lookup misses, the insert collides with the unique index, the row is fetched again."""
    winner = get_or_create_equipment(db_session, "Oven")
    db_session.commit()

    real_find = resolver.find_equipment
    calls = []

    def stale_find(db, name):
        calls.append(name)
        if len(calls) == 1:
            return None
        return real_find(db, name)

    monkeypatch.setattr(resolver, "find_equipment", stale_find)

    result = get_or_create_equipment(db_session, "OVEN")
    db_session.commit()

    assert result.id == winner.id
    assert len(calls) == 2
    assert db_session.query(Equipment).count() == 1


def test_concurrent_tag_insert_reuses_winner(db_session, monkeypatch):
    winner = get_or_create_tag(db_session, "Soup", TagType.TYPE)
    db_session.commit()

    real_find = resolver.find_tag
    calls = []

    def stale_find(db, name, tag_type):
        calls.append(name)
        return None if len(calls) == 1 else real_find(db, name, tag_type)

    monkeypatch.setattr(resolver, "find_tag", stale_find)

    result = get_or_create_tag(db_session, "soup", TagType.TYPE)

    assert result.id == winner.id
    assert db_session.query(Tag).count() == 1
