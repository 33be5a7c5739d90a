from .transient import KeyValueStore, InMemoryTransientStore
from .order_meta import OrderMetaStore

__all__ = ["KeyValueStore", "InMemoryTransientStore", "OrderMetaStore"]
