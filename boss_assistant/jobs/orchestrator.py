import asyncio
import logging
from typing import Optional

from boss_assistant.database import supabase_client as store
from boss_assistant.models import Policy
from boss_assistant.parser.ai_parser import analyze_policies
from boss_assistant.router import crawl_all

LOG = logging.getLogger(__name__)


async def run(sources: Optional[list[str]] = None, analyze: bool = False) -> list[Policy]:
    """
    수집 -> (선택) Gemini 분석 -> 저장 한 사이클.

    저장 실패는 그대로 올려보낸다 (호출한 쪽이 500으로 응답).
    DB 환경변수가 없으면 저장은 건너뛰고 수집 결과만 돌려준다.
    """
    LOG.info("🚀 수집 사이클 시작")

    # 1. 등록된 출처 수집
    policies = await crawl_all(sources)

    # 2. AI 분석 (관련 없는 항목 제외, 카테고리/요약 보강)
    if analyze and policies:
        policies = await analyze_policies(policies)
        LOG.info(f"🤖 분석 후 {len(policies)}건 남음")

    if not policies:
        return []

    # 3. 저장
    if store.is_configured():
        await asyncio.to_thread(store.save_policies, policies)
        LOG.info(f"✅ Saved {len(policies)} policies to database")
    else:
        LOG.warning("⚠️ DB 미설정, 저장 생략")

    return policies
