from dataclasses import dataclass
from typing import Optional
import logging

import requests

from boss_assistant import config

LOG = logging.getLogger(__name__)
session = requests.Session()
session.headers.update({
    "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36",
    "Accept-Language": "ko-KR,ko;q=0.9",
})


@dataclass(frozen=True)
class FetchResult:
    """수집 결과. 실패(upstream 오류)와 빈 결과를 구분할 수 있게 남겨둔다."""
    url: str
    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.text is not None


def fetch_static(url: str) -> FetchResult:
    try:
        resp = session.get(url, timeout=config.HTTP_TIMEOUT)
        resp.encoding = 'utf-8'
        resp.raise_for_status()
        return FetchResult(url=url, text=resp.text)
    except requests.RequestException as e:
        LOG.error(f"정적 수집 중 에러: {e}")
        return FetchResult(url=url, error=str(e))
