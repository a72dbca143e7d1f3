"""Product URL configuration.

A ``SimpleRouter`` per module: the modules share the ``api/v1/`` prefix, so
none of them publishes an API root view.
"""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.products.views import ProductViewSet

router = SimpleRouter(trailing_slash=True)
router.register("products", ProductViewSet, basename="product")

urlpatterns = router.urls
