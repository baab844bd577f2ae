import unittest
from decimal import Decimal
from unittest.mock import patch

from django.core.exceptions import ObjectDoesNotExist
from django.db.models import ProtectedError

from apps.api.exceptions import DatabaseIntegrityError, ResourceNotFoundError
from apps.catalog.dtos import CategoryDTO, ProductDTO
from apps.catalog.services import CategoryService, ProductService
from apps.common.paging import Page, PageRequest, SortOrder, DESC


class DummyAtomic:
    def __call__(self, *args, **kwargs):
        return self

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False


class DoesNotExist(ObjectDoesNotExist):
    pass


class StubCategory:
    def __init__(self, category_id=None, name=""):
        self.id = category_id
        self.name = name


class StubCategoryManager:
    def __init__(self, categories=None):
        self._categories = list(categories or [])

    def all(self):
        return list(self._categories)

    def set(self, categories):
        self._categories = list(categories)


class StubProduct:
    def __init__(self, product_id=None, name="", price=Decimal("0")):
        self.id = product_id
        self.name = name
        self.description = ""
        self.price = price
        self.img_url = ""
        self.date = None
        self.categories = StubCategoryManager()


class FakeCategoryRepository:
    def __init__(self):
        self._categories = {}
        self._pk = 1
        self.protected = set()

    def add(self, name):
        category = StubCategory(self._pk, name)
        self._categories[self._pk] = category
        self._pk += 1
        return category

    def new(self, **fields):
        return StubCategory(**fields)

    def find_all(self):
        return sorted(self._categories.values(), key=lambda c: c.id)

    def find_all_paged(self, page_request):
        items = self.find_all()
        return Page.of(items, page_request)

    def find_by_id(self, pk):
        return self._categories.get(pk)

    def save(self, category):
        if category.id is None:
            category.id = self._pk
            self._pk += 1
        self._categories[category.id] = category
        return category

    def delete_by_id(self, pk):
        if pk not in self._categories:
            raise DoesNotExist(pk)
        if pk in self.protected:
            raise ProtectedError("referenced", set())
        del self._categories[pk]


class FakeProductRepository:
    def __init__(self):
        self._products = {}
        self._pk = 1
        self.last_filters = None

    def new(self, **fields):
        return StubProduct(**fields)

    def find_all_paged(self, page_request, *, category_id=None, name=None):
        self.last_filters = {"category_id": category_id, "name": name}
        items = sorted(self._products.values(), key=lambda p: p.id)
        if category_id is not None:
            items = [
                p for p in items if any(c.id == category_id for c in p.categories.all())
            ]
        if name:
            items = [p for p in items if name.lower() in p.name.lower()]
        return Page.of(items, page_request)

    def find_by_id(self, pk):
        return self._products.get(pk)

    def save(self, product):
        if product.id is None:
            product.id = self._pk
            self._pk += 1
        self._products[product.id] = product
        return product

    def set_categories(self, product, categories):
        product.categories.set(categories)

    def delete_by_id(self, pk):
        if pk not in self._products:
            raise DoesNotExist(pk)
        del self._products[pk]



class CategoryServiceUnitTests(unittest.TestCase):
    def setUp(self):
        self.repo = FakeCategoryRepository()
        self.atomic_patcher = patch(
            "apps.catalog.services.transaction.atomic", DummyAtomic()
        )
        self.atomic_patcher.start()
        self.service = CategoryService(categories=self.repo)

    def tearDown(self):
        self.atomic_patcher.stop()

    def test_find_by_id_returns_dto_with_requested_id(self):
        existing = self.repo.add("Books")
        dto = self.service.find_by_id(existing.id)
        self.assertEqual(dto, CategoryDTO(id=existing.id, name="Books"))

    def test_find_by_id_unknown_raises_not_found(self):
        with self.assertRaises(ResourceNotFoundError) as ctx:
            self.service.find_by_id(42)
        self.assertEqual(ctx.exception.status_code, 404)
        self.assertEqual(ctx.exception.details, {"id": "42"})

    def test_find_all_is_ordered_by_id(self):
        self.repo.add("B")
        self.repo.add("A")
        self.assertEqual([c.name for c in self.service.find_all()], ["B", "A"])

    def test_find_all_paged_maps_content_and_metadata(self):
        for name in ("A", "B", "C"):
            self.repo.add(name)
        page = self.service.find_all_paged(PageRequest(page=1, size=2))
        self.assertEqual([c.name for c in page.content], ["C"])
        self.assertIsInstance(page.content[0], CategoryDTO)
        self.assertEqual(page.total_elements, 3)
        self.assertEqual(page.total_pages, 2)
        self.assertTrue(page.last)

    def test_insert_ignores_client_id_and_assigns_new_one(self):
        self.repo.add("Existing")
        dto = self.service.insert(CategoryDTO(id=99, name="Electronics"))
        self.assertEqual(dto.id, 2)
        self.assertEqual(self.service.find_by_id(dto.id).name, "Electronics")
        self.assertIsNone(self.repo.find_by_id(99))

    def test_update_overwrites_name(self):
        existing = self.repo.add("Old")
        dto = self.service.update(existing.id, CategoryDTO(id=None, name="New"))
        self.assertEqual(dto, CategoryDTO(id=existing.id, name="New"))
        self.assertEqual(self.repo.find_by_id(existing.id).name, "New")

    def test_update_unknown_raises_not_found_without_mutation(self):
        self.repo.add("Books")
        with self.assertRaises(ResourceNotFoundError):
            self.service.update(7, CategoryDTO(id=None, name="X"))
        self.assertEqual([c.name for c in self.repo.find_all()], ["Books"])

    def test_delete_unreferenced_category(self):
        existing = self.repo.add("Temp")
        self.service.delete(existing.id)
        with self.assertRaises(ResourceNotFoundError):
            self.service.find_by_id(existing.id)

    def test_delete_unknown_raises_not_found(self):
        with self.assertRaises(ResourceNotFoundError):
            self.service.delete(5)

    def test_delete_referenced_category_raises_integrity_error(self):
        existing = self.repo.add("Books")
        self.repo.protected.add(existing.id)
        with self.assertRaises(DatabaseIntegrityError) as ctx:
            self.service.delete(existing.id)
        self.assertEqual(ctx.exception.status_code, 409)
        self.assertIsNotNone(self.repo.find_by_id(existing.id))


class ProductServiceUnitTests(unittest.TestCase):
    def setUp(self):
        self.category_repo = FakeCategoryRepository()
        self.product_repo = FakeProductRepository()
        self.atomic_patcher = patch(
            "apps.catalog.services.transaction.atomic", DummyAtomic()
        )
        self.atomic_patcher.start()
        self.service = ProductService(
            products=self.product_repo,
            categories=self.category_repo,
        )
        self.books = self.category_repo.add("Books")
        self.computers = self.category_repo.add("Computers")

    def tearDown(self):
        self.atomic_patcher.stop()

    def _dto(self, name="Phone", categories=None, **overrides):
        data = dict(
            id=None,
            name=name,
            description="Good phone",
            price=Decimal("800.00"),
            img_url="https://img.com/img.png",
            categories=categories if categories is not None else [CategoryDTO(self.books.id, "")],
        )
        data.update(overrides)
        return ProductDTO(**data)

    def test_insert_links_categories_and_returns_new_id(self):
        dto = self.service.insert(
            self._dto(categories=[CategoryDTO(self.books.id, ""), CategoryDTO(self.computers.id, "")])
        )
        self.assertEqual(dto.id, 1)
        self.assertEqual(dto.name, "Phone")
        self.assertEqual(dto.price, Decimal("800.00"))
        self.assertEqual([c.name for c in dto.categories], ["Books", "Computers"])

    def test_insert_then_find_by_id_yields_inserted_content(self):
        created = self.service.insert(self._dto())
        found = self.service.find_by_id(created.id)
        self.assertEqual(found.name, "Phone")
        self.assertEqual(found.description, "Good phone")
        self.assertEqual(found.img_url, "https://img.com/img.png")
        self.assertEqual([c.id for c in found.categories], [self.books.id])

    def test_insert_deduplicates_category_refs(self):
        dto = self.service.insert(
            self._dto(categories=[CategoryDTO(self.books.id, ""), CategoryDTO(self.books.id, "")])
        )
        self.assertEqual(len(dto.categories), 1)

    def test_insert_with_unknown_category_creates_nothing(self):
        with self.assertRaises(ResourceNotFoundError) as ctx:
            self.service.insert(self._dto(categories=[CategoryDTO(404, "")]))
        self.assertEqual(ctx.exception.details, {"categoryId": "404"})
        page = self.product_repo.find_all_paged(PageRequest())
        self.assertEqual(page.total_elements, 0)

    def test_find_by_id_unknown_raises_not_found(self):
        with self.assertRaises(ResourceNotFoundError):
            self.service.find_by_id(1000)

    def test_update_replaces_fields_and_category_set(self):
        created = self.service.insert(self._dto())
        updated = self.service.update(
            created.id,
            self._dto(
                name="Updated",
                price=Decimal("10.50"),
                categories=[CategoryDTO(self.computers.id, "")],
            ),
        )
        self.assertEqual(updated.id, created.id)
        self.assertEqual(updated.name, "Updated")
        self.assertEqual(updated.price, Decimal("10.50"))
        self.assertEqual([c.id for c in updated.categories], [self.computers.id])

    def test_update_unknown_product_raises_not_found(self):
        with self.assertRaises(ResourceNotFoundError):
            self.service.update(1000, self._dto())

    def test_update_with_unknown_category_leaves_product_untouched(self):
        created = self.service.insert(self._dto())
        with self.assertRaises(ResourceNotFoundError):
            self.service.update(
                created.id, self._dto(name="Changed", categories=[CategoryDTO(404, "")])
            )
        self.assertEqual(self.service.find_by_id(created.id).name, "Phone")

    def test_delete_existing_then_unknown(self):
        created = self.service.insert(self._dto())
        self.service.delete(created.id)
        with self.assertRaises(ResourceNotFoundError):
            self.service.find_by_id(created.id)
        with self.assertRaises(ResourceNotFoundError):
            self.service.delete(created.id)

    def test_find_all_paged_passes_filters_and_sort(self):
        self.service.insert(self._dto(name="Macbook", categories=[CategoryDTO(self.computers.id, "")]))
        self.service.insert(self._dto(name="Novel"))
        request = PageRequest(page=0, size=10, sort=(SortOrder("name", DESC),))
        page = self.service.find_all_paged(
            request, category_id=self.computers.id, name="mac"
        )
        self.assertEqual(
            self.product_repo.last_filters,
            {"category_id": self.computers.id, "name": "mac"},
        )
        self.assertEqual([p.name for p in page.content], ["Macbook"])
        self.assertEqual(page.sort, request.sort)
