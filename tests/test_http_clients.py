"""Tests for the FoodData Central HTTP client."""

import asyncio
import json

import httpx
import pytest

from intake_tracker.adapters.fdc_client import HttpxFdcClient


def _client(handler) -> HttpxFdcClient:  # type: ignore[no-untyped-def]
    transport = httpx.MockTransport(handler)
    return HttpxFdcClient(
        api_key="key",
        base_url="https://api.test",
        http_client=httpx.AsyncClient(transport=transport),
    )


def test_fdc_client_search_and_get() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params["api_key"] == "key"
        if request.url.path.endswith("/foods/search"):
            assert json.loads(request.content.decode()) == {
                "query": "rice",
                "pageSize": 10,
            }
            return httpx.Response(200, json={"foods": []})
        return httpx.Response(200, json={"fdcId": 1, "foodNutrients": []})

    client = _client(handler)

    search = asyncio.run(client.search_foods("rice"))
    food = asyncio.run(client.get_food(1))

    assert search == {"foods": []}
    assert food["fdcId"] == 1


def test_fdc_client_get_foods_batches_ids() -> None:
    batches: list[list[int]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        ids = json.loads(request.content.decode())["fdcIds"]
        batches.append(ids)
        return httpx.Response(200, json=[{"fdcId": fdc_id} for fdc_id in ids])

    client = _client(handler)

    foods = asyncio.run(client.get_foods(list(range(45))))

    assert [len(batch) for batch in batches] == [20, 20, 5]
    assert [food["fdcId"] for food in foods] == list(range(45))


def test_fdc_client_raises_on_error_status() -> None:
    client = _client(lambda request: httpx.Response(404, json={}))

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.get_food(404))
