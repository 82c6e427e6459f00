import logging
from typing import Optional

from pydantic import ValidationError
from supabase import create_client, Client

from boss_assistant import config
from boss_assistant.models import Policy

LOG = logging.getLogger(__name__)

_supabase: Optional[Client] = None


def is_configured() -> bool:
    return bool(config.SUPABASE_URL and config.SUPABASE_ANON_KEY)


def get_client() -> Client:
    global _supabase
    if not is_configured():
        raise RuntimeError("Database not configured. Set SUPABASE_URL and SUPABASE_ANON_KEY.")
    if _supabase is None:
        _supabase = create_client(config.SUPABASE_URL, config.SUPABASE_ANON_KEY)
    return _supabase


def save_policies(policies: list[Policy]):
    """url 기준 upsert. 같은 url이면 나중에 쓴 값이 남는다."""
    if not policies:
        return []
    try:
        res = (
            get_client()
            .table(config.POLICIES_TABLE)
            .upsert([p.to_record() for p in policies], on_conflict="url")
            .execute()
        )
    except Exception as e:
        LOG.error(f"❌ Error saving policies: {e}")
        raise
    return res.data


def get_policies(limit: int = 20) -> list[Policy]:
    try:
        res = (
            get_client()
            .table(config.POLICIES_TABLE)
            .select("*")
            .order("published_at", desc=True)
            .limit(limit)
            .execute()
        )
    except Exception as e:
        LOG.error(f"❌ Error fetching policies: {e}")
        raise
    policies = []
    for row in res.data or []:
        try:
            policies.append(Policy.model_validate(row))
        except ValidationError as e:
            # 형식이 맞지 않는 행만 건너뛰고 나머지는 살린다
            LOG.warning(f"⚠️ Skipping invalid policy row ({row.get('url')}): {e}")
    return policies
