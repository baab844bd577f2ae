from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.catalog.models import Category, Product, ProductCategory
from apps.users.models import Role, User, UserRole
from apps.users.repositories import RoleRepository

ROLES = ["ROLE_OPERATOR", "ROLE_ADMIN"]

CATEGORIES = ["Books", "Electronics", "Computers"]

PRODUCTS = [
    (
        "The Lord of the Rings",
        Decimal("90.50"),
        "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor incididunt ut labore et dolore magna aliqua.",
        "https://raw.githubusercontent.com/devsuperior/dscatalog-resources/master/backend/img/1-big.jpg",
        ["Books"],
    ),
    (
        "Smart TV",
        Decimal("2190.00"),
        "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor incididunt ut labore et dolore magna aliqua.",
        "https://raw.githubusercontent.com/devsuperior/dscatalog-resources/master/backend/img/2-big.jpg",
        ["Electronics", "Computers"],
    ),
    (
        "Macbook Pro",
        Decimal("1250.00"),
        "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor incididunt ut labore et dolore magna aliqua.",
        "https://raw.githubusercontent.com/devsuperior/dscatalog-resources/master/backend/img/3-big.jpg",
        ["Computers"],
    ),
    (
        "PC Gamer",
        Decimal("1200.00"),
        "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor incididunt ut labore et dolore magna aliqua.",
        "https://raw.githubusercontent.com/devsuperior/dscatalog-resources/master/backend/img/4-big.jpg",
        ["Computers"],
    ),
    (
        "PC Gamer X",
        Decimal("1350.00"),
        "Lorem ipsum dolor sit amet, consectetur adipiscing elit, sed do eiusmod tempor incididunt ut labore et dolore magna aliqua.",
        "https://raw.githubusercontent.com/devsuperior/dscatalog-resources/master/backend/img/5-big.jpg",
        ["Computers"],
    ),
]

USERS = [
    {
        "first_name": "Alex",
        "last_name": "Brown",
        "email": "alex@gmail.com",
        "password": "123456",
        "roles": ["ROLE_OPERATOR"],
    },
    {
        "first_name": "Maria",
        "last_name": "Green",
        "email": "maria@gmail.com",
        "password": "123456",
        "roles": ["ROLE_OPERATOR", "ROLE_ADMIN"],
    },
]


class Command(BaseCommand):
    help = "Seed the demo catalog: roles, categories, products and users."

    def add_arguments(self, parser):
        parser.add_argument(
            "--flush", action="store_true", help="Delete existing data before seeding"
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options["flush"]:
            self.stdout.write("Flushing existing data...")
            UserRole.objects.all().delete()
            User.objects.all().delete()
            Role.objects.all().delete()
            ProductCategory.objects.all().delete()
            Product.objects.all().delete()
            Category.objects.all().delete()

        self.stdout.write("Seeding roles...")
        roles = RoleRepository()
        authority_to_role = {}
        for authority in ROLES:
            role = roles.find_by_authority(authority) or roles.save(
                roles.new(authority=authority)
            )
            authority_to_role[authority] = role

        self.stdout.write("Seeding categories...")
        name_to_cat = {}
        for name in CATEGORIES:
            cat, _ = Category.objects.get_or_create(name=name)
            name_to_cat[name] = cat

        self.stdout.write("Seeding products...")
        for name, price, desc, img_url, cat_names in PRODUCTS:
            product, _ = Product.objects.update_or_create(
                name=name,
                defaults=dict(price=price, description=desc, img_url=img_url),
            )
            product.categories.set([name_to_cat[c] for c in cat_names])

        self.stdout.write("Seeding users...")
        for payload in USERS:
            user = User.objects.filter(email=payload["email"]).first()
            if user is None:
                user = User.objects.create_user(
                    payload["email"],
                    payload["password"],
                    first_name=payload["first_name"],
                    last_name=payload["last_name"],
                )
            else:
                user.first_name = payload["first_name"]
                user.last_name = payload["last_name"]
                user.set_password(payload["password"])
                user.save()
            user.roles.set([authority_to_role[a] for a in payload["roles"]])

        self.stdout.write(self.style.SUCCESS("DSCatalog seed completed."))
