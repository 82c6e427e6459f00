from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from boss_assistant.models import Policy, Quiz, UserProfile
from boss_assistant.parser.ai_parser import extract_json_array, generate_text, get_client

LOG = logging.getLogger(__name__)

MAX_QUIZZES = 5
MAX_CONTEXT_POLICIES = 10
FALLBACK_PATH = Path(__file__).resolve().parent.parent / "data" / "fallback_quizzes.json"

QUIZ_PROMPT = """당신은 소상공인 정책 전문가입니다. 아래 정책 정보를 바탕으로 소상공인/자영업자를 위한 OX 퀴즈 5개를 만들어주세요.

[정책 정보]
{policy_context}
{profile_context}
[요구사항]
1. 소상공인이 실제로 알아야 할 유용한 정보를 퀴즈로 만들어주세요.
2. 정답이 O인 것 3개, X인 것 2개로 균형있게 만들어주세요.
3. 설명은 친근하고 이해하기 쉽게 작성해주세요.
4. 팁은 실용적인 조언을 담아주세요.

[출력 형식 - 반드시 이 JSON 형식으로만 응답하세요]
[
  {{
    "question": "퀴즈 질문 (O 또는 X로 답할 수 있는 형식)",
    "answer": true 또는 false,
    "explanation": "정답 설명",
    "tip": "실용적인 팁",
    "relatedPolicy": "관련 정책명"
  }}
]

JSON 배열만 출력하세요. 다른 텍스트는 포함하지 마세요."""


@lru_cache(maxsize=1)
def load_fallback_asset() -> dict:
    with open(FALLBACK_PATH, "r", encoding="utf-8") as fallback_file:
        return json.load(fallback_file)


def get_fallback_quizzes() -> list[Quiz]:
    return [Quiz.model_validate(q) for q in load_fallback_asset()["quizzes"]]


def build_quiz_prompt(policies: list[Policy], profile: Optional[UserProfile] = None) -> str:
    policy_context = "\n".join(f"- {p.title} (출처: {p.source})" for p in policies[:MAX_CONTEXT_POLICIES])
    profile_context = ""
    if profile is not None:
        profile_context = (
            "\n[사장님 정보]\n"
            f"- 업종: {profile.business_type or '미입력'}\n"
            f"- 지역: {profile.location or '미입력'}\n"
            f"- 관심사: {', '.join(profile.interests) or '미입력'}\n"
        )
    return QUIZ_PROMPT.format(policy_context=policy_context, profile_context=profile_context)


def generate_quizzes(
    policies: list[Policy],
    profile: Optional[UserProfile] = None,
) -> tuple[list[Quiz], bool]:
    """
    Gemini로 OX 퀴즈를 만듭니다. 두 번째 값은 폴백 여부.
    키가 없거나 호출/파싱이 실패하면 정적 폴백 세트를 돌려준다 (재시도 없음).
    """
    if get_client() is None:
        LOG.info("[Quiz API] Gemini API key not configured, using fallback")
        return get_fallback_quizzes(), True

    try:
        text = generate_text(build_quiz_prompt(policies, profile), temperature=0.7, max_output_tokens=2048)
    except Exception as e:
        LOG.error(f"[Quiz API] Gemini request failed: {e}")
        return get_fallback_quizzes(), True

    if not text:
        LOG.error("[Quiz API] No text in Gemini response")
        return get_fallback_quizzes(), True

    items = extract_json_array(text)
    if not items:
        return get_fallback_quizzes(), True

    try:
        quizzes = [Quiz.model_validate(item) for item in items[:MAX_QUIZZES]]
    except ValidationError as e:
        LOG.error(f"[Quiz API] invalid quiz shape: {e}")
        return get_fallback_quizzes(), True

    LOG.info(f"[Quiz API] Generated {len(quizzes)} quizzes with Gemini")
    return quizzes, False
