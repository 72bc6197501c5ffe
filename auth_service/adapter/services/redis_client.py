"""
Redis clients for the notification bus.

Requests and the inbound consumer get separate clients: a blocking BLPOP
holds its connection for the whole poll, so its read timeout has to
outlast the poll while request-path commands keep a short one.
"""

from typing import Optional

from redis.asyncio import Redis


def create_redis_client(
    url: str, timeout: float, read_timeout: Optional[float] = None
) -> Redis:
    return Redis.from_url(
        url,
        decode_responses=True,
        socket_connect_timeout=timeout,
        socket_timeout=read_timeout if read_timeout is not None else timeout,
    )
