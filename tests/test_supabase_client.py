"""Supabase 저장/조회 래퍼 테스트"""

from unittest.mock import MagicMock

import pytest

from boss_assistant import config
from boss_assistant.database import supabase_client


@pytest.fixture
def fake_client(monkeypatch):
    monkeypatch.setattr(config, "SUPABASE_URL", "https://project.supabase.co")
    monkeypatch.setattr(config, "SUPABASE_ANON_KEY", "anon-key")
    client = MagicMock()
    monkeypatch.setattr(supabase_client, "_supabase", client)
    return client


def test_not_configured_without_env():
    assert supabase_client.is_configured() is False
    with pytest.raises(RuntimeError):
        supabase_client.get_client()


def test_save_policies_upserts_on_url(fake_client, make_policy):
    policy = make_policy("소상공인 지원금 확대", url="https://example.com/a")
    table = fake_client.table.return_value
    table.upsert.return_value.execute.return_value.data = [{"url": "https://example.com/a"}]

    data = supabase_client.save_policies([policy])

    fake_client.table.assert_called_once_with("policies")
    records, = table.upsert.call_args.args
    assert records[0]["url"] == "https://example.com/a"
    assert "id" not in records[0]
    assert table.upsert.call_args.kwargs == {"on_conflict": "url"}
    assert data == [{"url": "https://example.com/a"}]


def test_save_policies_skips_empty_batch(fake_client):
    assert supabase_client.save_policies([]) == []
    fake_client.table.assert_not_called()


def test_save_policies_reraises(fake_client, make_policy):
    fake_client.table.return_value.upsert.return_value.execute.side_effect = RuntimeError("db down")

    with pytest.raises(RuntimeError, match="db down"):
        supabase_client.save_policies([make_policy("소상공인 소식")])


def test_get_policies_orders_by_publish_date(fake_client):
    query = fake_client.table.return_value.select.return_value.order.return_value.limit.return_value
    query.execute.return_value.data = [
        {
            "id": 7,
            "title": "소상공인 지원금 확대",
            "source": "naver",
            "category": "뉴스",
            "summary": None,
            "url": "https://example.com/a",
            "published_at": "2026-10-19",
            "created_at": "2026-10-19T01:02:03+00:00",
        }
    ]

    policies = supabase_client.get_policies(5)

    fake_client.table.return_value.select.assert_called_once_with("*")
    fake_client.table.return_value.select.return_value.order.assert_called_once_with("published_at", desc=True)
    fake_client.table.return_value.select.return_value.order.return_value.limit.assert_called_once_with(5)
    assert policies[0].title == "소상공인 지원금 확대"
    assert policies[0].published_at.isoformat() == "2026-10-19"


def test_get_policies_reraises(fake_client):
    query = fake_client.table.return_value.select.return_value.order.return_value.limit.return_value
    query.execute.side_effect = RuntimeError("timeout")

    with pytest.raises(RuntimeError):
        supabase_client.get_policies()


def test_get_policies_skips_invalid_rows(fake_client):
    query = fake_client.table.return_value.select.return_value.order.return_value.limit.return_value
    query.execute.return_value.data = [
        {"title": "소상공인 지원금 확대", "source": "naver", "url": "https://example.com/a"},
        {"title": "알 수 없는 출처 기사", "source": "kosbi", "url": "https://example.com/b"},
        {"title": "", "source": "mss", "url": "https://example.com/c"},
    ]

    policies = supabase_client.get_policies()

    assert [p.url for p in policies] == ["https://example.com/a"]
