"""Product search criteria and their translation into repository lookups."""

from dataclasses import dataclass

SORTABLE_FIELDS = frozenset({"id", "name", "price", "rating", "created_at", "quantity"})


@dataclass(frozen=True)
class ProductSearchCriteria:
    """Optional filters; every filter that is set narrows the result (logical AND)."""

    name: str | None = None
    category: str | None = None
    brand: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    available: bool | None = None
    min_rating: float | None = None

    def to_lookups(self) -> dict:
        """Build the keyword lookups understood by the repository query layer.

        Soft-deleted products are always excluded. `available=False` does not
        filter; only an explicit request for available products narrows.
        """
        lookups = {"deleted": False}

        if self.name:
            lookups["name__icontains"] = self.name
        if self.category:
            lookups["category_id"] = self.category
        if self.brand:
            lookups["brand"] = self.brand
        if self.min_price is not None:
            lookups["price__gte"] = self.min_price
        if self.max_price is not None:
            lookups["price__lte"] = self.max_price
        if self.available:
            lookups["active"] = True
            lookups["quantity__gt"] = 0
        if self.min_rating is not None:
            lookups["rating__gte"] = self.min_rating

        return lookups
