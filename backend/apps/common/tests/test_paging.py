import pytest

from apps.common.paging import DESC, Page, PageRequest, SortOrder


def test_page_request_ordering_appends_id_tiebreaker():
    request = PageRequest(page=1, size=5, sort=(SortOrder("name", DESC),))
    assert request.ordering() == ["-name", "id"]


def test_page_request_ordering_keeps_explicit_id_sort():
    request = PageRequest(sort=(SortOrder("id", DESC),))
    assert request.ordering() == ["-id"]


@pytest.mark.parametrize("page,size", [(-1, 10), (0, 0)])
def test_page_request_rejects_out_of_range_values(page, size):
    with pytest.raises(ValueError):
        PageRequest(page=page, size=size)


def test_page_metadata_for_middle_page():
    page = Page.of(["a", "b", "c", "d", "e"], PageRequest(page=1, size=2))
    assert page.content == ["c", "d"]
    assert page.total_elements == 5
    assert page.total_pages == 3
    assert page.number_of_elements == 2
    assert not page.first
    assert not page.last
    assert not page.empty


def test_last_page_may_be_partial():
    page = Page.of(["a", "b", "c", "d", "e"], PageRequest(page=2, size=2))
    assert page.content == ["e"]
    assert page.last


def test_page_past_the_end_is_empty_and_last():
    page = Page.of(["a", "b", "c"], PageRequest(page=4, size=10))
    assert page.empty
    assert page.last
    assert page.total_elements == 3
    assert page.total_pages == 1


def test_huge_page_index_is_empty():
    page = Page.of(["a"], PageRequest(page=10**30, size=20))
    assert page.empty
    assert page.total_elements == 1


def test_empty_result_has_no_pages():
    page = Page.of([], PageRequest())
    assert page.total_pages == 0
    assert page.first
    assert page.last
    assert page.empty


def test_page_map_preserves_metadata():
    page = Page.of([1, 2, 3, 4, 5, 6, 7], PageRequest(page=0, size=3))
    mapped = page.map(lambda n: n * 10)
    assert mapped.content == [10, 20, 30]
    assert mapped.total_elements == 7
    assert mapped.total_pages == 3
    assert mapped.first
