import pytest

from recipebox.core.pagination import PageInfo
from recipebox.services.errors import InvalidPageError


def test_page_meta_middle_page():
    page = PageInfo(total_count=25, page_number=2, page_size=10)
    assert page.offset == 10
    assert page.total_pages == 3
    assert page.has_previous_page is True
    assert page.has_next_page is True


def test_page_meta_last_page():
    page = PageInfo(total_count=25, page_number=3, page_size=10)
    assert page.has_previous_page is True
    assert page.has_next_page is False


def test_exact_multiple_of_page_size():
    assert PageInfo(total_count=20, page_number=1, page_size=10).total_pages == 2


def test_empty_result():
    page = PageInfo(total_count=0, page_number=1, page_size=10)
    assert page.total_pages == 0
    assert page.has_previous_page is False
    assert page.has_next_page is False


def test_page_beyond_end_is_allowed():
    page = PageInfo(total_count=5, page_number=4, page_size=10)
    assert page.offset == 30
    assert page.has_next_page is False
    assert page.has_previous_page is True


@pytest.mark.parametrize("page_number,page_size", [(1, 0), (1, -5), (0, 10)])
def test_invalid_page_arguments(page_number, page_size):
    with pytest.raises(InvalidPageError):
        PageInfo(total_count=10, page_number=page_number, page_size=page_size)


def test_as_dict():
    assert PageInfo(total_count=11, page_number=1, page_size=5).as_dict() == {
        "total_count": 11,
        "page_number": 1,
        "page_size": 5,
        "total_pages": 3,
        "has_previous_page": False,
        "has_next_page": True,
    }
