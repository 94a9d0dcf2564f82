"""Storage media for the durable store.

``RedisStorage`` lives in ``fetchcache.infrastructure.storage.redis`` and
needs the ``redis`` extra.
"""

from fetchcache.infrastructure.storage.file import FileStorage
from fetchcache.infrastructure.storage.memory import MemoryStorage

__all__ = ["FileStorage", "MemoryStorage"]
