"""
Unit tests for the pagination window.
"""
from teamkeys.core.pagination import Pagination


def test_next_path_when_more_rows():
    page = Pagination(offset=0, limit=25).with_total(60, "/api/apiKeys.list")

    assert page.total == 60
    assert page.next_path == "/api/apiKeys.list?offset=25&limit=25"


def test_no_next_path_on_last_page():
    page = Pagination(offset=50, limit=25).with_total(60, "/api/apiKeys.list")

    assert page.next_path is None


def test_no_next_path_when_page_ends_exactly():
    page = Pagination(offset=0, limit=10).with_total(10, "/api/apiKeys.list")

    assert page.next_path is None


def test_serializes_camel_case():
    page = Pagination(offset=0, limit=10).with_total(20, "/p")

    assert page.model_dump(by_alias=True) == {
        "offset": 0,
        "limit": 10,
        "total": 20,
        "nextPath": "/p?offset=10&limit=10",
    }
