"""Category aggregate root.

Categories may nest through `parent_id`; nothing prevents cycles and names
are not unique. Like products, categories are soft-deleted.
"""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Identifier, String

from store.domain import store


@store.aggregate
class Category:
    name = String(required=True, max_length=100)
    description = String(max_length=1000)
    parent_id = Identifier()
    active = Boolean(default=True)
    deleted = Boolean(default=False)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, name, description=None, parent_id=None):
        from store.category.events import CategoryCreated

        now = datetime.now(UTC)
        category = cls(
            name=name,
            description=description,
            parent_id=parent_id,
            created_at=now,
            updated_at=now,
        )
        category.raise_(
            CategoryCreated(
                category_id=str(category.id),
                name=name,
                parent_id=parent_id,
            )
        )
        return category
