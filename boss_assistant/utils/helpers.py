from datetime import date, datetime
from typing import Iterable

from boss_assistant import config
from boss_assistant.models import Policy

SOURCE_NAMES = {
    "naver": "네이버 뉴스",
    "mss": "중소벤처기업부",
    "shopnews": "소상공인 뉴스",
}


def today_kst() -> date:
    return datetime.now(config.TIMEZONE).date()


def source_name(source: str) -> str:
    """출처 태그를 화면에 보여줄 이름으로 바꿉니다."""
    return SOURCE_NAMES.get(source, source)


def dedupe_policies(policies: Iterable[Policy]) -> list[Policy]:
    """url 기준 중복 제거. 처음 나온 항목만 순서대로 남긴다."""
    seen: set[str] = set()
    unique = []
    for policy in policies:
        if policy.url in seen:
            continue
        seen.add(policy.url)
        unique.append(policy)
    return unique
