import os
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

load_dotenv()  # .env 파일을 읽어서 환경변수로 등록


def _env_bool(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
TIMEZONE = ZoneInfo("Asia/Seoul")

# Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")
POLICIES_TABLE = os.getenv("POLICIES_TABLE", "policies")

# Gemini
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")

# 크롤링
CRAWL_API_KEY = os.getenv("CRAWL_API_KEY")
CRAWL_URL = os.getenv("CRAWL_URL", "http://localhost:8080/api/crawl")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "15"))
MAX_CRAWL_ITEMS = int(os.getenv("MAX_CRAWL_ITEMS", "20"))
DYNAMIC_FETCH_ENABLED = _env_bool("DYNAMIC_FETCH_ENABLED")

# 맞춤 필터
REGION_MATCH_POLICY = os.getenv("REGION_MATCH_POLICY", "negative").strip().lower()
RECENCY_DAYS = int(os.getenv("RECENCY_DAYS", "3"))
