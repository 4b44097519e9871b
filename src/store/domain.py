"""Store bounded context: product catalogue, carts, wishlists and orders.

Every aggregate is a standard CQRS aggregate persisted through the provider
configured in `domain.toml`. Authentication is delegated to the identity
service through `store.auth`.
"""

from protean.domain import Domain
from shared.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
store = Domain(name="store")
