"""Domain events for the Category aggregate."""

from protean.fields import Identifier, String

from store.domain import store


@store.event(part_of="Category")
class CategoryCreated:
    __version__ = 1

    category_id = Identifier(required=True)
    name = String(required=True)
    parent_id = Identifier()
