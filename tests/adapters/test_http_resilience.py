from __future__ import annotations

import asyncio

import httpx

from setsync.adapters.http_resilience import ResilientClient, build_retry
from setsync.config.http_resilience import RateLimit, ResilienceConfig, RetryPolicy


def test_default_headers_are_sent_with_every_request() -> None:
    client = ResilientClient(
        ResilienceConfig(
            name="graph-test",
            base_url="https://graph.test",
            default_headers={"Authorization": "Bearer secret-token"},
        )
    )

    headers = client._client.headers  # noqa: SLF001  # type: ignore[reportPrivateUsage]

    assert headers["Authorization"] == "Bearer secret-token"
    assert str(client._client.base_url) == "https://graph.test"  # noqa: SLF001  # type: ignore[reportPrivateUsage]


def test_request_goes_through_rate_limiter() -> None:
    seen: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request.url.path)
        return httpx.Response(200, json={"success": True})

    async def exercise() -> int:
        async with ResilientClient(
            ResilienceConfig(name="graph-test", ratelimit=RateLimit(max_calls=5, per_seconds=1.0))
        ) as client:
            await client.aclose()
            client._client = httpx.AsyncClient(  # noqa: SLF001  # type: ignore[reportPrivateUsage]
                base_url="https://graph.test",
                transport=httpx.MockTransport(handler),
            )
            response = await client.request("DELETE", "/v21.0/777")
            return response.status_code

    assert asyncio.run(exercise()) == 200
    assert seen == ["/v21.0/777"]


def test_retry_policy_never_replays_post() -> None:
    retry = build_retry(RetryPolicy())

    assert retry.is_retryable_method("GET")
    assert retry.is_retryable_method("DELETE")
    assert not retry.is_retryable_method("POST")
