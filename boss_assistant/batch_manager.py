import logging
from typing import Any

import requests

from boss_assistant import config

LOG = logging.getLogger(__name__)
BATCH_TIMEOUT = 60


def run_batch(analyze: bool = False) -> dict[str, Any]:
    """
    스케줄러(cron, Cloud Scheduler 등)가 주기적으로 부르는 크롤링 트리거.
    배포된 /api/crawl 을 호출하고 결과만 로그로 남긴다.
    """
    headers = {"Content-Type": "application/json"}
    if config.CRAWL_API_KEY:
        headers["x-api-key"] = config.CRAWL_API_KEY

    LOG.info(f"📡 크롤링 요청 중... ({config.CRAWL_URL})")
    try:
        response = requests.post(
            config.CRAWL_URL,
            params={"analyze": "true"} if analyze else None,
            headers=headers,
            timeout=BATCH_TIMEOUT,
        )
    except requests.RequestException as e:
        LOG.error(f"❌ 에러: {e}")
        return {"status": "ERROR", "message": str(e)}

    try:
        body = response.json()
    except ValueError:
        body = {"raw": response.text[:300]}

    if response.status_code != 200:
        LOG.error(f"❌ 크롤링 실패 ({response.status_code}): {body}")
        return {"status": "ERROR", "statusCode": response.status_code, "body": body}

    LOG.info(f"✅ 결과: {response.status_code}, {body.get('count', 0)}건")
    return {"status": "SUCCESS", "count": body.get("count", 0)}


if __name__ == "__main__":
    logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))
    run_batch()
