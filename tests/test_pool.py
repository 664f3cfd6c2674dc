"""Tests for candidate pool filtering."""

from datetime import datetime, timezone

import pytest

from funnelcraft.core.items import Item
from funnelcraft.core.pool import (
    ALL,
    FilterCriteria,
    Sender,
    filter_pool,
    unique_categories,
    unique_senders,
)


def make_item(item_id, sender_email, subject, sender_name=None, category=None, day=1):
    return Item(
        id=item_id,
        sender_email=sender_email,
        sender_name=sender_name,
        subject=subject,
        category=category,
        timestamp=datetime(2025, 3, day, 9, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def catalog():
    """Newest first, as the catalog source delivers it."""
    return [
        make_item("1", "news@acme.com", "Big Spring Sale", "Acme", "promotion", day=5),
        make_item("2", "hello@beta.io", "Welcome aboard", None, "welcome", day=4),
        make_item("3", "news@acme.com", "Tips for week one", "Acme Team", "educational", day=3),
        make_item("4", "digest@gamma.org", "Weekly digest", "Gamma", None, day=2),
        make_item("5", "hello@beta.io", "Last chance offer", "Beta", "promotion", day=1),
    ]


class TestFilterPool:
    def test_no_criteria_returns_all_unselected(self, catalog):
        result = filter_pool(catalog, [], FilterCriteria())
        assert [i.id for i in result] == ["1", "2", "3", "4", "5"]

    def test_excludes_selected(self, catalog):
        result = filter_pool(catalog, ["2", "4"], FilterCriteria())
        assert [i.id for i in result] == ["1", "3", "5"]

    def test_text_matches_subject_case_insensitive(self, catalog):
        result = filter_pool(catalog, [], FilterCriteria(text="SALE"))
        assert [i.id for i in result] == ["1"]

    def test_text_matches_sender_email(self, catalog):
        result = filter_pool(catalog, [], FilterCriteria(text="beta.io"))
        assert [i.id for i in result] == ["2", "5"]

    def test_text_matches_sender_name(self, catalog):
        result = filter_pool(catalog, [], FilterCriteria(text="gamma"))
        assert [i.id for i in result] == ["4"]

    def test_text_with_missing_sender_name(self, catalog):
        result = filter_pool(catalog, [], FilterCriteria(text="welcome"))
        assert [i.id for i in result] == ["2"]

    def test_sender_filter_exact(self, catalog):
        result = filter_pool(catalog, [], FilterCriteria(sender_email="news@acme.com"))
        assert [i.id for i in result] == ["1", "3"]

    def test_category_filter_exact(self, catalog):
        result = filter_pool(catalog, [], FilterCriteria(category="promotion"))
        assert [i.id for i in result] == ["1", "5"]

    def test_all_sentinel_is_unrestricted(self, catalog):
        result = filter_pool(catalog, [], FilterCriteria(sender_email=ALL, category=ALL))
        assert len(result) == 5

    def test_combined_criteria(self, catalog):
        criteria = FilterCriteria(text="offer", sender_email="hello@beta.io", category="promotion")
        result = filter_pool(catalog, ["1"], criteria)
        assert [i.id for i in result] == ["5"]

    def test_does_not_mutate_catalog(self, catalog):
        before = list(catalog)
        filter_pool(catalog, ["1"], FilterCriteria(text="x"))
        assert catalog == before

    def test_never_returns_selected_items(self, catalog):
        selected = ["1", "3", "5"]
        for text in ["", "a", "e", "digest"]:
            result = filter_pool(catalog, selected, FilterCriteria(text=text))
            assert not {i.id for i in result} & set(selected)


class TestFilterCriteria:
    def test_default_is_inactive(self):
        assert FilterCriteria().is_active is False

    def test_whitespace_text_is_inactive(self):
        assert FilterCriteria(text="   ").is_active is False

    def test_sender_makes_active(self):
        assert FilterCriteria(sender_email="a@b.com").is_active is True

    def test_dict_roundtrip(self):
        criteria = FilterCriteria(text="sale", category="promotion")
        assert FilterCriteria.from_dict(criteria.to_dict()) == criteria

    def test_from_empty_dict(self):
        assert FilterCriteria.from_dict({}) == FilterCriteria()


class TestListingHelpers:
    def test_unique_senders_first_seen_name(self, catalog):
        assert unique_senders(catalog) == [
            Sender("news@acme.com", "Acme"),
            Sender("hello@beta.io", "hello@beta.io"),
            Sender("digest@gamma.org", "Gamma"),
        ]

    def test_unique_categories_skips_null(self, catalog):
        assert unique_categories(catalog) == ["promotion", "welcome", "educational"]

    def test_empty_catalog(self):
        assert unique_senders([]) == []
        assert unique_categories([]) == []
