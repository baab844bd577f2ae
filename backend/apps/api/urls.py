from django.urls import include, path

# Resource routes are mounted without trailing slashes: /categories, /products/{id}, ...
urlpatterns = [
    path("", include("apps.catalog.urls")),
    path("", include("apps.users.urls")),
]
