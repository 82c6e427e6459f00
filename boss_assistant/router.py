from __future__ import annotations

import asyncio
import json
import logging
from typing import Awaitable, Callable

from boss_assistant import config
from boss_assistant.jobs import naver_news
from boss_assistant.models import Policy
from boss_assistant.utils.helpers import dedupe_policies

LOG = logging.getLogger("router")

SourceCrawler = Callable[[], Awaitable[list[Policy]]]

# 출처 태그 -> 수집기. 새 출처는 여기에 등록한다.
ROUTES: list[tuple[str, SourceCrawler]] = [
    ("naver", naver_news.run),
]


def resolve_crawler(source: str | None) -> SourceCrawler | None:
    for name, crawler in ROUTES:
        if name == source:
            return crawler
    return None


async def crawl_all(sources: list[str] | None = None) -> list[Policy]:
    """등록된 출처를 모두 수집해 합칩니다. 출처 하나가 실패해도 나머지는 살린다."""
    results: list[Policy] = []
    for name, crawler in ROUTES:
        if sources and name not in sources:
            continue
        try:
            results.extend(await crawler())
        except Exception as exc:
            LOG.exception("Crawler error for %s: %s", name, exc)
    results = dedupe_policies(results)
    LOG.info("[Crawler] Total: %s policies", len(results))
    return results


if __name__ == "__main__":
    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))
    policies = asyncio.run(crawl_all())
    print(json.dumps([p.to_record() for p in policies], ensure_ascii=False, indent=2))
