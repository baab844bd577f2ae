from apps.api.paging import PageRequestPagination


class UserPagination(PageRequestPagination):
    sort_fields = {
        "id": "id",
        "firstName": "first_name",
        "lastName": "last_name",
        "email": "email",
    }
