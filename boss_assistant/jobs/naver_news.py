from __future__ import annotations

import asyncio
import logging

from boss_assistant import config
from boss_assistant.engine.dynamic_fetcher import fetch_dynamic
from boss_assistant.engine.static_fetcher import fetch_static
from boss_assistant.models import Policy
from boss_assistant.parser.custom.naver_news import parse_naver_news_regex, parse_naver_news_soup
from boss_assistant.utils.helpers import dedupe_policies, today_kst

LOG = logging.getLogger(__name__)

# 네이버 뉴스 검색 URL (소상공인 키워드)
NAVER_NEWS_URL = "https://search.naver.com/search.naver?where=news&query=%EC%86%8C%EC%83%81%EA%B3%B5%EC%9D%B8"


def crawl_naver_news() -> list[Policy]:
    """정규식 기반 수집. 실패하면 빈 리스트."""
    try:
        result = fetch_static(NAVER_NEWS_URL)
        if not result.ok:
            LOG.warning("[Naver News] fetch failed: %s", result.error)
            return []
        policies = dedupe_policies(parse_naver_news_regex(result.text, today_kst()))
    except Exception as exc:
        LOG.exception("[Naver News] Crawl error: %s", exc)
        return []
    LOG.info("[Naver News] Crawled %s articles", len(policies))
    return policies[: config.MAX_CRAWL_ITEMS]


async def crawl_naver_news_soup() -> list[Policy]:
    """
    BeautifulSoup 기반 수집.
    정적 페이지에서 기사를 못 찾으면 Playwright 렌더링 결과로 한 번 더 시도합니다.
    """
    try:
        result = await asyncio.to_thread(fetch_static, NAVER_NEWS_URL)
        policies = parse_naver_news_soup(result.text, today_kst()) if result.ok else []

        if not policies and config.DYNAMIC_FETCH_ENABLED:
            LOG.warning("⚠️ 정적 수집 결과 없음, 동적으로 전환: %s", NAVER_NEWS_URL)
            content = await fetch_dynamic(NAVER_NEWS_URL)
            if content:
                policies = parse_naver_news_soup(content, today_kst())

        policies = dedupe_policies(policies)
    except Exception as exc:
        LOG.exception("[Naver News Soup] Crawl error: %s", exc)
        return []
    LOG.info("[Naver News Soup] Crawled %s articles", len(policies))
    return policies[: config.MAX_CRAWL_ITEMS]


async def run() -> list[Policy]:
    return await crawl_naver_news_soup()
