import pytest
from django.test import override_settings
from rest_framework.exceptions import ValidationError
from rest_framework.request import Request
from rest_framework.test import APIRequestFactory

from apps.api.paging import PageRequestPagination
from apps.common.paging import ASC, DESC, Page, PageRequest, SortOrder

factory = APIRequestFactory()


class PeoplePagination(PageRequestPagination):
    sort_fields = {"id": "id", "firstName": "first_name"}


def _request(query=""):
    return Request(factory.get(f"/users?{query}"))


def test_defaults_when_no_params():
    page_request = PeoplePagination().get_page_request(_request())
    assert page_request == PageRequest(page=0, size=20, sort=())


def test_sort_wire_names_are_translated():
    page_request = PeoplePagination().get_page_request(
        _request("page=2&size=5&sort=firstName,desc&sort=id")
    )
    assert page_request.page == 2
    assert page_request.size == 5
    assert page_request.sort == (SortOrder("first_name", DESC), SortOrder("id", ASC))


@pytest.mark.parametrize(
    "query",
    ["page=-1", "size=0", "size=abc", "size=101", "sort=password", "sort=id,sideways"],
)
def test_invalid_params_raise_validation_error(query):
    with pytest.raises(ValidationError):
        PeoplePagination().get_page_request(_request(query))


@override_settings(PAGE_SIZE_DEFAULT=5, PAGE_SIZE_MAX=10)
def test_size_limits_follow_settings():
    paginator = PeoplePagination()
    assert paginator.page_size == 5
    assert paginator.max_page_size == 10
    assert paginator.get_page_request(_request()).size == 5
    with pytest.raises(ValidationError):
        paginator.get_page_request(_request("size=11"))


def test_paginated_response_uses_wire_names():
    page_request = PageRequest(page=0, size=2, sort=(SortOrder("first_name", DESC),))
    page = Page.of([{"id": 1}, {"id": 2}, {"id": 3}], page_request)
    paginator = PeoplePagination()
    content = paginator.paginate_page(page)
    response = paginator.get_paginated_response([{"id": item["id"]} for item in content])
    body = response.data
    assert body["content"] == [{"id": 1}, {"id": 2}]
    assert body["totalElements"] == 3
    assert body["totalPages"] == 2
    assert body["number"] == 0
    assert body["size"] == 2
    assert body["numberOfElements"] == 2
    assert body["first"] is True
    assert body["last"] is False
    assert body["empty"] is False
    assert body["sort"] == [{"property": "firstName", "direction": "DESC"}]
