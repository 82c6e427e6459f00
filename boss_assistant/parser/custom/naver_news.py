import logging
import re
from datetime import date

from bs4 import BeautifulSoup

from boss_assistant.models import Policy

LOG = logging.getLogger(__name__)

NAVER_SUMMARY = "네이버 뉴스 - 소상공인 관련"
NAVER_CATEGORY = "뉴스"
MIN_TITLE_LENGTH = 5

# 제목 링크: data-heatmap-target=".tit" 속성이 붙은 a 태그
TITLE_LINK_RE = re.compile(
    r'href="(https?://[^"]+)"\s+class="[^"]*"[^>]*target="_blank"[^>]*data-heatmap-target="\.tit"[^>]*>'
    r'\s*<span[^>]*>([^<]+(?:<mark>[^<]+</mark>[^<]*)*)</span>'
)
MARK_RE = re.compile(r"</?mark>")


def _to_policy(title: str, url: str, published: date) -> Policy:
    return Policy(
        title=title,
        source="naver",
        category=NAVER_CATEGORY,
        url=url,
        published_at=published,
        summary=NAVER_SUMMARY,
    )


def parse_naver_news_regex(html: str, published: date) -> list[Policy]:
    """
    정규식으로 검색 결과 제목 링크를 뽑습니다.
    검색어 하이라이트용 <mark> 태그는 제목에서 제거합니다.
    """
    policies = []
    for match in TITLE_LINK_RE.finditer(html):
        url = match.group(1)
        title = MARK_RE.sub("", match.group(2)).strip()
        if len(title) > MIN_TITLE_LENGTH and "more" not in url:
            policies.append(_to_policy(title, url, published))
    return policies


def parse_naver_news_soup(html: str, published: date) -> list[Policy]:
    """BeautifulSoup 기반 파싱 (마크업이 조금 바뀌어도 더 안정적)"""
    soup = BeautifulSoup(html, "html.parser")
    policies = []
    for link_tag in soup.select('a[data-heatmap-target=".tit"]'):
        url = link_tag.get("href") or ""
        title = link_tag.get_text().strip()
        if len(title) > MIN_TITLE_LENGTH and url.startswith("http"):
            policies.append(_to_policy(title, url, published))
    return policies
