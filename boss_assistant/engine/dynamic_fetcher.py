import logging
from typing import Optional

from playwright.async_api import async_playwright

LOG = logging.getLogger(__name__)


async def fetch_dynamic(url: str) -> Optional[str]:
    """검색 결과가 스크립트로 그려지는 경우를 위한 렌더링 수집."""
    try:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True)
            try:
                page = await browser.new_page(locale="ko-KR")
                await page.goto(url, wait_until="domcontentloaded", timeout=30000)
                await page.wait_for_timeout(3000)  # 3초만 딱 더 기다리기
                return await page.content()
            finally:
                await browser.close()
    except Exception as e:
        LOG.error(f"Playwright 에러: {e}")
        return None
