# boss_assistant/models.py
from datetime import date, datetime
from typing import List, Literal, NamedTuple, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

PolicySource = Literal["shopnews", "mss", "naver"]


class Policy(BaseModel):
    id: Optional[Union[int, str]] = None
    title: str = Field(min_length=1)
    source: PolicySource
    category: Optional[str] = None
    summary: Optional[str] = None
    url: str
    published_at: Optional[date] = None
    created_at: Optional[datetime] = None

    def to_record(self) -> dict:
        """Supabase upsert용 dict (id/created_at은 DB가 채운다)"""
        return self.model_dump(mode="json", exclude={"id", "created_at"})


class UserProfile(BaseModel):
    """온보딩에서 받은 사장님 프로필. 프론트엔드의 camelCase 키도 그대로 받는다."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    business_type: str = Field("", alias="businessType")
    location: str = ""
    interests: Tuple[str, ...] = ()
    business_size: Optional[str] = Field(None, alias="businessSize")


class ScoredPolicy(NamedTuple):
    policy: Policy
    score: int


class PolicyAnalysis(BaseModel):
    isRelevant: bool = True
    category: Optional[str] = None
    summary: Optional[str] = None
    targetIndustries: List[str] = Field(default_factory=list)
    targetLocations: List[str] = Field(default_factory=list)


class Quiz(BaseModel):
    question: str
    answer: bool
    explanation: str
    tip: str
    relatedPolicy: str
