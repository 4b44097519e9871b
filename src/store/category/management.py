"""Category creation and listing."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from shared.logging import get_logger
from store.category.category import Category
from store.domain import store

logger = get_logger(__name__)


@store.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    description: String(max_length=1000)
    parent_id: Identifier()


@store.command_handler(part_of=Category)
class CreateCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        if command.parent_id:
            parent = repo.get(command.parent_id)
            if parent.deleted:
                raise ObjectNotFoundError(f"Category not found with ID: {command.parent_id}")

        category = Category.create(
            name=command.name,
            description=command.description,
            parent_id=command.parent_id,
        )
        repo.add(category)
        logger.info("Category created", category_id=str(category.id), name=category.name)
        return str(category.id)


def list_categories() -> list[Category]:
    """Every category that has not been soft-deleted, ordered by name."""
    repo = current_domain.repository_for(Category)
    return sorted(repo._dao.query.filter(deleted=False).all().items, key=lambda c: c.name.lower())
