import asyncio
import json
import logging
import re
from typing import Any, Optional

from google import genai
from google.genai import types
from pydantic import ValidationError

from boss_assistant import config
from boss_assistant.models import Policy, PolicyAnalysis

LOG = logging.getLogger(__name__)

FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)
ARRAY_RE = re.compile(r"\[.*\]", re.DOTALL)

_client: Optional[genai.Client] = None


def get_client() -> Optional[genai.Client]:
    """GEMINI_API_KEY가 없으면 None (AI 분석 생략)"""
    global _client
    if not config.GEMINI_API_KEY:
        return None
    if _client is None:
        _client = genai.Client(api_key=config.GEMINI_API_KEY)
    return _client


def generate_text(prompt: str, temperature: Optional[float] = None, max_output_tokens: Optional[int] = None) -> str:
    client = get_client()
    if client is None:
        raise RuntimeError("GEMINI_API_KEY is not set")
    response = client.models.generate_content(
        model=config.GEMINI_MODEL,
        contents=prompt,
        config=types.GenerateContentConfig(temperature=temperature, max_output_tokens=max_output_tokens),
    )
    return response.text or ""


def strip_fences(text: str) -> str:
    # ```json ... ``` 형식 처리
    match = FENCE_RE.search(text)
    return (match.group(1) if match else text).strip()


def extract_json_array(text: str) -> Optional[list]:
    """모델 응답에서 JSON 배열을 꺼냅니다. 못 찾거나 깨져 있으면 None."""
    if not text:
        return None
    body = strip_fences(text)
    match = ARRAY_RE.search(body)
    if not match:
        return None
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError:
        LOG.error("JSON 배열 파싱 실패: %s", body[:200])
        return None
    return data if isinstance(data, list) else None


ANALYSIS_PROMPT = """
다음 뉴스/공지사항이 "소상공인, 자영업자"에게 실질적으로 도움이 되는 정책이나 정보인지 분석해줘.

제목: {title}
내용요약: {summary}

다음 JSON 형식으로만 응답해줘. 마크다운 없이 JSON만.
{{
  "isRelevant": boolean, // 광고, 단순 사건사고, 주식 등은 false. 실질적 혜택, 제도 변경, 지원 사업은 true
  "category": string, // "지원금", "대출", "세금", "노무", "위생", "마케팅", "기타" 중 하나
  "summary": string, // 핵심 내용 1줄 요약 (친절한 톤으로)
  "targetIndustries": string[], // 특정 업종에 한정된다면 해당 업종명 리스트. 전체 대상이면 빈 배열.
  "targetLocations": string[] // 특정 지역에 한정된다면 해당 지역명 리스트. 전국 대상이면 빈 배열.
}}
"""


def analyze_policy_with_gemini(title: str, raw_summary: str) -> PolicyAnalysis:
    if get_client() is None:
        LOG.warning("GEMINI_API_KEY is not set. Skipping AI analysis.")
        return PolicyAnalysis(isRelevant=True)  # API 키 없으면 기본 통과

    try:
        text = generate_text(ANALYSIS_PROMPT.format(title=title, summary=raw_summary))
        data: Any = json.loads(strip_fences(text))
        analysis = PolicyAnalysis.model_validate(data)
    except (ValidationError, ValueError) as e:
        LOG.error(f"[Gemini] 응답 형식 오류 ({title}): {e}")
        return PolicyAnalysis(isRelevant=True)
    except Exception as e:
        LOG.error(f"[Gemini] Analysis failed ({title}): {e}")
        return PolicyAnalysis(isRelevant=True)  # 에러 시 일단 통과

    LOG.info(f"🤖 [Gemini] Analyzed \"{title}\": relevant={analysis.isRelevant}, category={analysis.category}")
    return analysis


async def analyze_policies(policies: list[Policy]) -> list[Policy]:
    """항목별 분석을 동시에 돌리고 모두 끝나면 관련 없는 항목을 걸러냅니다."""
    analyses = await asyncio.gather(
        *(asyncio.to_thread(analyze_policy_with_gemini, p.title, p.summary or "") for p in policies)
    )
    analyzed = []
    for policy, analysis in zip(policies, analyses):
        if not analysis.isRelevant:
            LOG.info(f"🗑️ 관련 없음으로 제외: {policy.title}")
            continue
        updates = {k: v for k, v in (("category", analysis.category), ("summary", analysis.summary)) if v}
        analyzed.append(policy.model_copy(update=updates))
    return analyzed
