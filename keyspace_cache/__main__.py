"""
Keyspace Cache - Demo Runner

Walks through put / get / delete / get_all / delete_by_pattern against the
store selected by the environment (memory unless STORE_NODES is set).

    STORE_NODES=redis://localhost:6379 CACHE_NAMESPACE=Testing_ python -m keyspace_cache
"""

import asyncio
import logging
import sys

from .cache import NamespacedCache
from .config import load_config
from .errors import KeyspaceError
from .logging_config import configure_logging

logger = logging.getLogger(__name__)


async def run_demo(cache: NamespacedCache, key: str = "Demo", value: str = "Demo Value") -> dict[str, bool]:
    """Exercise every cache operation once and return the pattern-delete outcome."""
    await cache.put(key, value)

    fetched = await cache.get(key)
    logger.info("GET %s yielded: %s", key, fetched)

    deleted = await cache.delete_one(key)
    logger.info("Deleted successfully = %s", deleted)

    after_delete = (await cache.get_multiple([key]))[0]
    logger.info("GET %s now yields: %s", key, after_delete)

    logger.info("All values = %s", await cache.get_all())

    deleted_map = await cache.delete_by_pattern(key)
    logger.info("Delete for all keys matching %s*, results: %s", key, deleted_map)
    return deleted_map


async def _main() -> None:
    config = load_config()
    configure_logging(config.log_level.value, config.log_format.value)
    logger.info("Running with config: %s", config.model_dump(mode="json"))

    async with NamespacedCache.from_config(config) as cache:
        await run_demo(cache)


def main() -> None:
    try:
        asyncio.run(_main())
    except KeyboardInterrupt:
        print("\nStopped.")
    except KeyspaceError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
