import asyncio
import logging
import sys
import traceback
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Header, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

# [1. 최상단 고정] Windows에서 Playwright 브라우저 실행을 위한 루프 정책 설정
if sys.platform == 'win32':
    asyncio.set_event_loop_policy(asyncio.WindowsProactorEventLoopPolicy())

# [2. 내부 모듈 임포트] 루프 정책 설정 후에 진행
from boss_assistant import config
from boss_assistant.database import supabase_client as store
from boss_assistant.filter.relevance import (
    DEFAULT_MAX_COUNT,
    DEFAULT_USER_PROFILE,
    filter_policies_for_user,
    generate_alert_message,
)
from boss_assistant.jobs import orchestrator
from boss_assistant.jobs.quiz import MAX_CONTEXT_POLICIES, generate_quizzes, get_fallback_quizzes
from boss_assistant.models import Policy, UserProfile
from boss_assistant.router import resolve_crawler
from boss_assistant.utils.helpers import source_name

# 로깅 설정
logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))
LOG = logging.getLogger(__name__)

DB_NOT_CONFIGURED = "Database not configured. Set SUPABASE_URL and SUPABASE_ANON_KEY."
RESPONSE_SAMPLE_SIZE = 10

app = FastAPI(
    title="사장님 비서 API",
    servers=[{"url": "http://localhost:8080", "description": "로컬 테스트용"}],
    root_path=""
)

# [3. CORS 미들웨어]
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "x-api-key"],
)


def build_profile(
    business_type: Optional[str],
    location: Optional[str],
    interests: Optional[str],
    business_size: Optional[str],
) -> UserProfile:
    """쿼리 파라미터로 프로필을 만든다. 빠진 값은 기본 프로필 값으로 채운다."""
    interest_list = [i.strip() for i in (interests or "").split(",") if i.strip()]
    return UserProfile(
        business_type=business_type or DEFAULT_USER_PROFILE.business_type,
        location=location or DEFAULT_USER_PROFILE.location,
        interests=interest_list or list(DEFAULT_USER_PROFILE.interests),
        business_size=business_size or DEFAULT_USER_PROFILE.business_size,
    )


def _dump(policies: list[Policy]) -> list[dict]:
    return [p.model_dump(mode="json") for p in policies]


@app.get("/health")
async def health():
    return {"status": "ok"}


# --- 엔드포인트: 크롤링 실행 및 저장 ---
@app.api_route("/api/crawl", methods=["GET", "POST"])
async def handle_crawl(
    analyze: bool = False,
    source: Optional[str] = None,
    x_api_key: Optional[str] = Header(None),
):
    # API 키가 설정된 경우에만 검사 (설정 안 하면 그냥 통과)
    if config.CRAWL_API_KEY and x_api_key != config.CRAWL_API_KEY:
        return JSONResponse(status_code=401, content={"error": "Unauthorized"})

    if source and resolve_crawler(source) is None:
        return JSONResponse(status_code=400, content={"success": False, "error": f"Unknown source: {source}"})

    try:
        LOG.info("🚀 [Crawl API] Starting crawl...")
        policies = await orchestrator.run([source] if source else None, analyze=analyze)

        if not policies:
            return {"success": True, "message": "No new policies found", "count": 0}

        return {
            "success": True,
            "message": f"Crawled {len(policies)} policies",
            "count": len(policies),
            "policies": _dump(policies[:RESPONSE_SAMPLE_SIZE]),
        }
    except Exception as e:
        LOG.error(f"💥 [Crawl API] Error: {traceback.format_exc()}")
        return JSONResponse(status_code=500, content={"success": False, "error": str(e) or "Unknown error"})


# --- 엔드포인트: 정책 조회 ---
@app.get("/api/policies")
async def handle_policies(
    limit: int = Query(20, ge=1, le=100),
    source: Optional[str] = None,
    personalized: bool = False,
    max_count: int = Query(DEFAULT_MAX_COUNT, alias="maxCount", ge=1, le=50),
    business_type: Optional[str] = Query(None, alias="businessType"),
    location: Optional[str] = None,
    interests: Optional[str] = None,
    business_size: Optional[str] = Query(None, alias="businessSize"),
):
    try:
        policies = await asyncio.to_thread(store.get_policies, limit)
    except Exception as e:
        # DB 연결 실패 시 빈 배열 반환
        LOG.warning(f"⚠️ [Policies API] read failed, returning empty list: {e}")
        return {"success": True, "count": 0, "policies": [], "message": DB_NOT_CONFIGURED}

    if source:
        policies = [p for p in policies if p.source == source]

    if personalized:
        profile = build_profile(business_type, location, interests, business_size)
        policies = filter_policies_for_user(policies, profile, max_count)

    return {"success": True, "count": len(policies), "policies": _dump(policies)}


# --- 엔드포인트: 맞춤 알림 ---
@app.get("/api/alerts")
async def handle_alerts(
    limit: int = Query(20, ge=1, le=100),
    max_count: int = Query(DEFAULT_MAX_COUNT, alias="maxCount", ge=1, le=50),
    business_type: Optional[str] = Query(None, alias="businessType"),
    location: Optional[str] = None,
    interests: Optional[str] = None,
    business_size: Optional[str] = Query(None, alias="businessSize"),
):
    profile = build_profile(business_type, location, interests, business_size)
    try:
        policies = await asyncio.to_thread(store.get_policies, limit)
    except Exception as e:
        LOG.warning(f"⚠️ [Alerts API] read failed, returning empty list: {e}")
        return {"success": True, "count": 0, "alerts": [], "message": DB_NOT_CONFIGURED}

    alerts = [
        {
            "title": p.title,
            "url": p.url,
            "category": p.category or "정책",
            "sourceName": source_name(p.source),
            "message": generate_alert_message(p, profile),
            "urgent": "마감" in f"{p.title} {p.summary or ''}",
        }
        for p in filter_policies_for_user(policies, profile, max_count)
    ]
    return {"success": True, "count": len(alerts), "alerts": alerts}


# --- 엔드포인트: OX 퀴즈 ---
@app.get("/api/quiz")
async def handle_quiz(
    business_type: Optional[str] = Query(None, alias="businessType"),
    location: Optional[str] = None,
    interests: Optional[str] = None,
    business_size: Optional[str] = Query(None, alias="businessSize"),
):
    profile = None
    if business_type or location or interests:
        profile = build_profile(business_type, location, interests, business_size)

    try:
        policies: list[Policy] = []
        try:
            policies = await asyncio.to_thread(store.get_policies, MAX_CONTEXT_POLICIES)
        except Exception:
            LOG.info("[Quiz API] Database not available, using fallback")

        # Gemini 호출은 블로킹이라 스레드에서 돌린다
        quizzes, fallback = await asyncio.to_thread(generate_quizzes, policies, profile)
        return {
            "success": True,
            "count": len(quizzes),
            "generatedAt": datetime.now(config.TIMEZONE).isoformat(),
            "quizzes": [q.model_dump() for q in quizzes],
            "fallback": fallback,
        }
    except Exception:
        LOG.error(f"💥 [Quiz API] Error: {traceback.format_exc()}")
        quizzes = get_fallback_quizzes()
        return {
            "success": True,
            "count": len(quizzes),
            "quizzes": [q.model_dump() for q in quizzes],
            "fallback": True,
        }


# --- 에러 핸들러 및 실행 ---
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(exc.errors())})


if __name__ == "__main__":
    import uvicorn
    # 💡 Windows에서 NotImplementedError를 방지하기 위해 loop='asyncio'를 명시합니다.
    uvicorn.run("boss_assistant.main:app", host="0.0.0.0", port=8080, reload=True, loop="asyncio")
