from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterable, Sequence

from boss_assistant import config
from boss_assistant.filter.keywords import (
    BUSINESS_KEYWORDS,
    CATEGORY_EMOJI,
    DEFAULT_EMOJI,
    HIGH_INTEREST_KEYWORDS,
    NATIONWIDE,
    NATIONWIDE_KEYWORDS,
    REGIONS,
)
from boss_assistant.models import Policy, ScoredPolicy, UserProfile

LOG = logging.getLogger(__name__)

REGION_POLICIES = ("negative", "simple")
EXCLUSION_THRESHOLD = -10
MISMATCH_PENALTY = -100
DEFAULT_MAX_COUNT = 5

# 기본 사용자 프로필 (시연용)
DEFAULT_USER_PROFILE = UserProfile(
    business_type="음식점",
    location="인천",
    interests=("지원금", "대출", "세제 혜택", "위생"),
    business_size="5인 미만",
)


def _search_text(policy: Policy) -> str:
    return f"{policy.title.lower()} {(policy.summary or '').lower()}"


def _region_score(content: str, location: str, policy_name: str) -> int:
    if not location:
        return 0

    if policy_name == "simple":
        return 3 if location.lower() in content else 0

    if location == NATIONWIDE:
        return 0

    user_loc = location[:2]  # 앞 2글자만 비교 (예: 대전광역시 -> 대전)
    if user_loc in content:
        return 5

    other = next(
        (r for r in REGIONS if r in content and not r.startswith(user_loc) and r not in user_loc),
        None,
    )
    if other and not any(k in content for k in NATIONWIDE_KEYWORDS):
        LOG.debug("[AI Filter] mismatch region: user=%s found=%s", user_loc, other)
        return MISMATCH_PENALTY
    return 0


def calculate_relevance_score(
    policy: Policy,
    profile: UserProfile,
    region_policy: str | None = None,
) -> int:
    """
    키워드 부분 문자열 매칭으로 관련성 점수를 계산합니다.

    - 업종 키워드 +2, 관심사 +2, 공통 관심 키워드 +1
    - 지역: negative 정책이면 내 지역 +5 / 타 지역만 언급되면 -100,
      simple 정책이면 지역명이 있을 때 +3
    """
    policy_name = (region_policy or config.REGION_MATCH_POLICY).lower()
    if policy_name not in REGION_POLICIES:
        raise ValueError(f"unknown region policy: {policy_name}")

    content = _search_text(policy)
    score = 0

    for keyword in BUSINESS_KEYWORDS.get(profile.business_type, ()):
        if keyword in content:
            score += 2

    score += _region_score(content, profile.location, policy_name)

    for interest in profile.interests:
        if interest.lower() in content:
            score += 2

    for keyword in HIGH_INTEREST_KEYWORDS:
        if keyword in content:
            score += 1

    return score


def rank_policies(
    policies: Iterable[Policy],
    profile: UserProfile,
    region_policy: str | None = None,
) -> list[ScoredPolicy]:
    scored = [ScoredPolicy(p, calculate_relevance_score(p, profile, region_policy)) for p in policies]
    # sort는 stable이라 동점이면 원래 순서 유지
    scored.sort(key=lambda item: item.score, reverse=True)
    return scored


def filter_policies_for_user(
    policies: Sequence[Policy],
    profile: UserProfile | None = None,
    max_count: int = DEFAULT_MAX_COUNT,
    now: datetime | None = None,
    region_policy: str | None = None,
) -> list[Policy]:
    profile = profile or DEFAULT_USER_PROFILE
    now = now or datetime.now(config.TIMEZONE)
    cutoff = (now - timedelta(days=config.RECENCY_DAYS)).date()

    relevant: list[Policy] = []
    for item in rank_policies(policies, profile, region_policy):
        if len(relevant) >= max_count:
            break
        if item.score <= EXCLUSION_THRESHOLD:
            LOG.info("[AI Filter] Excluding '%s' (score %s)", item.policy.title, item.score)
            continue
        is_recent = item.policy.published_at is not None and item.policy.published_at >= cutoff
        if item.score >= 1 or is_recent:
            relevant.append(item.policy)

    LOG.info(
        "[AI Filter] Filtered %s/%s policies for user (%s)",
        len(relevant), len(policies), profile.location,
    )
    return relevant


def get_user_profile(user_id: str) -> UserProfile:
    # 서버에는 프로필을 저장하지 않으므로 시연용 기본 프로필을 돌려준다.
    LOG.debug("profile lookup for %s -> default profile", user_id)
    return DEFAULT_USER_PROFILE


def generate_alert_message(policy: Policy, profile: UserProfile) -> str:
    emoji = CATEGORY_EMOJI.get(policy.category or "정책", DEFAULT_EMOJI)
    return f"{emoji} [{profile.business_type} 사장님 맞춤] {policy.title}"
