from django.urls import reverse
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer, paged_response, paging_parameters
from apps.api.utils import created_response
from apps.common import get_logger
from .container import build_user_service
from .mappers import user_from_payload, user_insert_from_payload
from .pagination import UserPagination
from .serializers import UserInsertSerializer, UserSerializer

logger = get_logger(__name__).bind(component="users", layer="view")


@extend_schema(tags=["Users"])
class UserListView(APIView):
    permission_classes = [AllowAny]
    pagination_class = UserPagination
    service = build_user_service()
    log = logger.bind(view="UserListView")

    @extend_schema(
        operation_id="users_list",
        summary="List users",
        parameters=paging_parameters(UserPagination.sort_fields),
        responses={
            200: paged_response(UserSerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        paginator = self.pagination_class()
        page_request = paginator.get_page_request(request)
        self.log.debug(
            "Listing users via API", page=page_request.page, size=page_request.size
        )
        page = self.service.find_all_paged(page_request)
        content = paginator.paginate_page(page)
        return paginator.get_paginated_response(UserSerializer(content, many=True).data)

    @extend_schema(
        summary="Create user",
        request=UserInsertSerializer,
        responses={
            201: UserSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = UserInsertSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info(
            "Creating user via API", email=serializer.validated_data.get("email")
        )
        dto = self.service.insert(user_insert_from_payload(serializer.validated_data))
        self.log.info("User created via API", user_id=dto.id)
        return created_response(
            request,
            UserSerializer(dto).data,
            reverse("api-users-detail", args=[dto.id]),
        )


@extend_schema(tags=["Users"])
class UserDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_user_service()
    log = logger.bind(view="UserDetailView")

    @extend_schema(
        summary="Get user by ID",
        parameters=[OpenApiParameter("user_id", int, OpenApiParameter.PATH)],
        responses={
            200: UserSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, user_id: int):
        self.log.debug("Fetching user via API", user_id=user_id)
        dto = self.service.find_by_id(user_id)
        return Response(UserSerializer(dto).data)

    @extend_schema(
        summary="Update user",
        request=UserSerializer,
        responses={
            200: UserSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def put(self, request, user_id: int):
        serializer = UserSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info("Updating user via API", user_id=user_id)
        dto = self.service.update(user_id, user_from_payload(serializer.validated_data))
        return Response(UserSerializer(dto).data)

    @extend_schema(
        summary="Delete user",
        responses={
            204: None,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request, user_id: int):
        self.log.info("Deleting user via API", user_id=user_id)
        self.service.delete(user_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
