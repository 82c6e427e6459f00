"""테스트 설정"""

from datetime import date, datetime

import pytest

from boss_assistant import config
from boss_assistant.models import Policy, UserProfile


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """외부 서비스(DB, Gemini, 렌더링 브라우저)를 끈 상태로 테스트"""
    monkeypatch.setattr(config, "SUPABASE_URL", None)
    monkeypatch.setattr(config, "SUPABASE_ANON_KEY", None)
    monkeypatch.setattr(config, "GEMINI_API_KEY", None)
    monkeypatch.setattr(config, "CRAWL_API_KEY", None)
    monkeypatch.setattr(config, "DYNAMIC_FETCH_ENABLED", False)
    monkeypatch.setattr(config, "REGION_MATCH_POLICY", "negative")
    monkeypatch.setattr(config, "RECENCY_DAYS", 3)
    monkeypatch.setattr(config, "MAX_CRAWL_ITEMS", 20)


@pytest.fixture
def now():
    return datetime(2026, 10, 19, 12, 0, tzinfo=config.TIMEZONE)


@pytest.fixture
def make_policy():
    """테스트용 정책 팩토리. url은 호출마다 달라진다."""
    counter = iter(range(1, 10_000))

    def _factory(title: str, summary: str | None = None, published_at: date | None = None, **kwargs):
        return Policy(
            title=title,
            summary=summary,
            published_at=published_at,
            source=kwargs.pop("source", "naver"),
            url=kwargs.pop("url", f"https://example.com/news/{next(counter)}"),
            **kwargs,
        )

    return _factory


@pytest.fixture
def incheon_profile():
    return UserProfile(business_type="음식점", location="인천", interests=["지원금"])


@pytest.fixture
def neutral_profile():
    """지역/업종/관심사 가산점이 없는 프로필"""
    return UserProfile(business_type="", location="전국", interests=[])
