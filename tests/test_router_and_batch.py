"""출처 라우팅, 수집 사이클, 배치 트리거 테스트"""

from unittest.mock import AsyncMock, MagicMock

import pytest
import requests

from boss_assistant import batch_manager, config, router
from boss_assistant.database import supabase_client
from boss_assistant.jobs import naver_news, orchestrator


def test_resolve_crawler():
    assert router.resolve_crawler("naver") is naver_news.run
    assert router.resolve_crawler("shopnews") is None
    assert router.resolve_crawler(None) is None


@pytest.mark.asyncio
async def test_crawl_all_dedupes_across_sources(monkeypatch, make_policy):
    shared = make_policy("소상공인 지원금 확대", url="https://example.com/shared")
    other = make_policy("골목상권 활성화 대책", url="https://example.com/other", source="mss")
    monkeypatch.setattr(router, "ROUTES", [
        ("naver", AsyncMock(return_value=[shared])),
        ("mss", AsyncMock(return_value=[other, shared])),
    ])

    assert await router.crawl_all() == [shared, other]


@pytest.mark.asyncio
async def test_crawl_all_survives_failing_source(monkeypatch, make_policy):
    policy = make_policy("소상공인 지원금 확대")
    monkeypatch.setattr(router, "ROUTES", [
        ("naver", AsyncMock(side_effect=RuntimeError("blocked"))),
        ("mss", AsyncMock(return_value=[policy])),
    ])

    assert await router.crawl_all() == [policy]


@pytest.mark.asyncio
async def test_crawl_all_filters_sources(monkeypatch, make_policy):
    mss = AsyncMock(return_value=[])
    monkeypatch.setattr(router, "ROUTES", [
        ("naver", AsyncMock(return_value=[make_policy("소상공인 지원금 확대")])),
        ("mss", mss),
    ])

    result = await router.crawl_all(["naver"])

    assert len(result) == 1
    mss.assert_not_awaited()


@pytest.mark.asyncio
async def test_orchestrator_returns_without_saving_when_unconfigured(monkeypatch, make_policy):
    policy = make_policy("소상공인 지원금 확대")
    save = MagicMock()
    monkeypatch.setattr(orchestrator, "crawl_all", AsyncMock(return_value=[policy]))
    monkeypatch.setattr(supabase_client, "save_policies", save)

    assert await orchestrator.run() == [policy]
    save.assert_not_called()


@pytest.mark.asyncio
async def test_orchestrator_propagates_save_errors(monkeypatch, make_policy):
    monkeypatch.setattr(orchestrator, "crawl_all", AsyncMock(return_value=[make_policy("소상공인 소식")]))
    monkeypatch.setattr(supabase_client, "is_configured", lambda: True)
    monkeypatch.setattr(supabase_client, "save_policies", MagicMock(side_effect=RuntimeError("db down")))

    with pytest.raises(RuntimeError):
        await orchestrator.run()


def test_batch_posts_with_api_key(monkeypatch):
    monkeypatch.setattr(config, "CRAWL_API_KEY", "secret")
    response = MagicMock(status_code=200)
    response.json.return_value = {"success": True, "count": 7}
    post = MagicMock(return_value=response)
    monkeypatch.setattr(batch_manager.requests, "post", post)

    result = batch_manager.run_batch(analyze=True)

    assert result == {"status": "SUCCESS", "count": 7}
    assert post.call_args.kwargs["headers"]["x-api-key"] == "secret"
    assert post.call_args.kwargs["params"] == {"analyze": "true"}


def test_batch_reports_http_error(monkeypatch):
    response = MagicMock(status_code=401)
    response.json.return_value = {"error": "Unauthorized"}
    monkeypatch.setattr(batch_manager.requests, "post", MagicMock(return_value=response))

    result = batch_manager.run_batch()

    assert result["status"] == "ERROR"
    assert result["statusCode"] == 401


def test_batch_never_raises_on_connection_error(monkeypatch):
    monkeypatch.setattr(
        batch_manager.requests, "post", MagicMock(side_effect=requests.ConnectionError("refused"))
    )

    assert batch_manager.run_batch()["status"] == "ERROR"
