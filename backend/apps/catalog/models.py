from django.db import models
from django.utils import timezone


class Category(models.Model):
    name = models.CharField(max_length=255)

    class Meta:
        db_table = "categories"
        indexes = [
            models.Index(fields=["name"], name="category_name_idx"),
        ]

    def __str__(self):
        return self.name


class Product(models.Model):
    name = models.CharField(max_length=255)
    description = models.TextField()
    price = models.DecimalField(max_digits=12, decimal_places=2)
    img_url = models.TextField(blank=True, default="")
    date = models.DateTimeField(default=timezone.now)
    categories = models.ManyToManyField(
        Category, related_name="products", through="ProductCategory"
    )

    class Meta:
        db_table = "products"
        indexes = [
            models.Index(fields=["name"], name="product_name_idx"),
        ]

    def __str__(self):
        return self.name


class ProductCategory(models.Model):
    # Removing a product drops its links; a linked category cannot be removed.
    product = models.ForeignKey(Product, on_delete=models.CASCADE)
    category = models.ForeignKey(Category, on_delete=models.PROTECT)

    class Meta:
        unique_together = ("product", "category")
        db_table = "product_categories"
        indexes = [
            models.Index(fields=["product", "category"], name="prod_cat_combo_idx"),
        ]
