# inkwell/api/deps.py

"""
Shared collaborators for the routers.

The cache, LLM client and post store are built once per app in
create_app() and hung on app.state; handlers reach them through
FastAPI dependencies, so tests can hand in fakes.
"""

import logging

from fastapi import Request

from inkwell import config
from inkwell.memory.cache import ExpiringCache
from inkwell.memory.redis_cache import RedisCache, connect_redis

logger = logging.getLogger(__name__)


def build_default_cache():
    if config.CACHE_BACKEND == "redis":
        client = connect_redis()
        if client is not None:
            logger.info("[CACHE] redis backend (%s:%s)", config.REDIS_HOST, config.REDIS_PORT)
            return RedisCache(client)
        logger.warning("[CACHE] redis requested but unreachable, using in-memory cache")

    return ExpiringCache(max_entries=config.CACHE_MAX_ENTRIES)


# ============================================================
# DEPENDENCIES
# ============================================================

def get_cache(request: Request):
    return request.app.state.cache


def get_llm(request: Request):
    return request.app.state.llm


def get_post_store(request: Request):
    return request.app.state.posts
