"""Custom repository for the Product aggregate.

The base repository supplies `add` and `get`; the queries below add the
soft-delete gate and pagination on top of the provider's query layer.
"""

from protean.exceptions import ObjectNotFoundError

from store.domain import store
from store.pagination import Page, PageRequest
from store.product.product import Product
from store.product.search import SORTABLE_FIELDS, ProductSearchCriteria


@store.repository(part_of=Product)
class ProductRepository:
    def get_active(self, product_id) -> Product:
        """Fetch a product that has not been soft-deleted."""
        product = self.get(product_id)
        if product.deleted:
            raise ObjectNotFoundError(f"Product not found with ID: {product_id}")
        return product

    def search(self, criteria: ProductSearchCriteria, request: PageRequest) -> Page:
        request = request.checked(SORTABLE_FIELDS)
        result = (
            self._dao.query.filter(**criteria.to_lookups())
            .order_by(request.order_by)
            .offset(request.offset)
            .limit(request.size)
            .all()
        )
        return Page.from_result_set(result, request)

    def list_active(self, request: PageRequest) -> Page:
        return self.search(ProductSearchCriteria(), request)

    def by_category(self, category_id, request: PageRequest, subcategory_id=None) -> Page:
        request = request.checked(SORTABLE_FIELDS)
        lookups = {"deleted": False, "category_id": category_id}
        if subcategory_id is not None:
            lookups["subcategory_id"] = subcategory_id

        result = (
            self._dao.query.filter(**lookups)
            .order_by(request.order_by)
            .offset(request.offset)
            .limit(request.size)
            .all()
        )
        return Page.from_result_set(result, request)

    def top_rated(self, limit: int) -> list[Product]:
        result = (
            self._dao.query.filter(deleted=False, active=True, quantity__gt=0).order_by("-rating").limit(limit).all()
        )
        return list(result.items)

    def all_live(self) -> list[Product]:
        """Every product that is not soft-deleted; used for catalogue-wide figures."""
        return list(self._dao.query.filter(deleted=False).all().items)
