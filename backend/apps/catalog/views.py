from django.urls import reverse
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.api.schemas import ErrorResponseSerializer, paged_response, paging_parameters
from apps.api.utils import created_response
from apps.common import get_logger
from .container import build_category_service, build_product_service
from .mappers import CategoryMapper, ProductMapper
from .pagination import CategoryPagination, ProductPagination
from .serializers import CategorySerializer, ProductFilterSerializer, ProductSerializer

logger = get_logger(__name__).bind(component="catalog", layer="view")


@extend_schema(tags=["Categories"])
class CategoryListView(APIView):
    permission_classes = [AllowAny]
    pagination_class = CategoryPagination
    service = build_category_service()
    log = logger.bind(view="CategoryListView")

    @extend_schema(
        operation_id="categories_list",
        summary="List categories",
        parameters=paging_parameters(CategoryPagination.sort_fields),
        responses={
            200: paged_response(CategorySerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        paginator = self.pagination_class()
        page_request = paginator.get_page_request(request)
        self.log.debug(
            "Handling category list request",
            page=page_request.page,
            size=page_request.size,
        )
        page = self.service.find_all_paged(page_request)
        content = paginator.paginate_page(page)
        return paginator.get_paginated_response(
            CategorySerializer(content, many=True).data
        )

    @extend_schema(
        summary="Create category",
        request=CategorySerializer,
        responses={
            201: CategorySerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = CategorySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dto = self.service.insert(CategoryMapper.from_payload(serializer.validated_data))
        self.log.info("Category created via API", category_id=dto.id)
        return created_response(
            request,
            CategorySerializer(dto).data,
            reverse("api-categories-detail", args=[dto.id]),
        )


@extend_schema(tags=["Categories"])
class CategoryDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_category_service()
    log = logger.bind(view="CategoryDetailView")

    @extend_schema(
        summary="Get category",
        parameters=[OpenApiParameter("category_id", int, OpenApiParameter.PATH)],
        responses={
            200: CategorySerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, category_id: int):
        self.log.debug("Fetching category detail", category_id=category_id)
        dto = self.service.find_by_id(category_id)
        return Response(CategorySerializer(dto).data)

    @extend_schema(
        summary="Update category",
        request=CategorySerializer,
        responses={
            200: CategorySerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def put(self, request, category_id: int):
        serializer = CategorySerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info("Updating category via API", category_id=category_id)
        dto = self.service.update(
            category_id, CategoryMapper.from_payload(serializer.validated_data)
        )
        return Response(CategorySerializer(dto).data)

    @extend_schema(
        summary="Delete category",
        responses={
            204: None,
            404: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request, category_id: int):
        self.log.info("Deleting category via API", category_id=category_id)
        self.service.delete(category_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema(tags=["Products"])
class ProductListView(APIView):
    permission_classes = [AllowAny]
    pagination_class = ProductPagination
    service = build_product_service()
    log = logger.bind(view="ProductListView")

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description="Paged via ?page, ?size and ?sort; filter with ?categoryId and ?name.",
        parameters=paging_parameters(ProductPagination.sort_fields)
        + [
            OpenApiParameter("categoryId", int, description="Only products in this category"),
            OpenApiParameter("name", str, description="Case-insensitive name fragment"),
        ],
        responses={
            200: paged_response(ProductSerializer),
            400: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        paginator = self.pagination_class()
        page_request = paginator.get_page_request(request)
        filters = ProductFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        category_id = filters.validated_data.get("categoryId")
        name = (filters.validated_data.get("name") or "").strip()
        self.log.debug(
            "Handling product list request",
            page=page_request.page,
            size=page_request.size,
            category_id=category_id,
        )
        page = self.service.find_all_paged(
            page_request, category_id=category_id, name=name
        )
        content = paginator.paginate_page(page)
        return paginator.get_paginated_response(
            ProductSerializer(content, many=True).data
        )

    @extend_schema(
        summary="Create product",
        request=ProductSerializer,
        responses={
            201: ProductSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = ProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info(
            "Creating product via API", name=serializer.validated_data.get("name")
        )
        dto = self.service.insert(ProductMapper.from_payload(serializer.validated_data))
        self.log.info("Product created via API", product_id=dto.id)
        return created_response(
            request,
            ProductSerializer(dto).data,
            reverse("api-products-detail", args=[dto.id]),
        )


@extend_schema(tags=["Products"])
class ProductDetailView(APIView):
    permission_classes = [AllowAny]
    service = build_product_service()
    log = logger.bind(view="ProductDetailView")

    @extend_schema(
        operation_id="products_retrieve",
        summary="Get product",
        parameters=[OpenApiParameter("product_id", int, OpenApiParameter.PATH)],
        responses={
            200: ProductSerializer,
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def get(self, request, product_id: int):
        self.log.debug("Fetching product detail", product_id=product_id)
        dto = self.service.find_by_id(product_id)
        return Response(ProductSerializer(dto).data)

    @extend_schema(
        summary="Update product",
        request=ProductSerializer,
        responses={
            200: ProductSerializer,
            400: OpenApiResponse(response=ErrorResponseSerializer),
            404: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def put(self, request, product_id: int):
        serializer = ProductSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.log.info("Updating product via API", product_id=product_id)
        dto = self.service.update(
            product_id, ProductMapper.from_payload(serializer.validated_data)
        )
        return Response(ProductSerializer(dto).data)

    @extend_schema(
        summary="Delete product",
        responses={
            204: None,
            404: OpenApiResponse(response=ErrorResponseSerializer),
            409: OpenApiResponse(response=ErrorResponseSerializer),
        },
    )
    def delete(self, request, product_id: int):
        self.log.info("Deleting product via API", product_id=product_id)
        self.service.delete(product_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
