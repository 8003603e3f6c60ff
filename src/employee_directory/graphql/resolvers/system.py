import strawberry

from ..types.system import CacheStats

# No response cache exists; these are the values clients have always received.
CACHE_MAX_SIZE = 100


async def resolve_cache_stats(info: strawberry.Info) -> CacheStats:
    _ = info  # Unused but required by GraphQL interface
    return CacheStats(size=0, max_size=CACHE_MAX_SIZE, keys=[])
