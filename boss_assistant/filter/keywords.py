"""
맞춤 필터에서 쓰는 고정 키워드 테이블.

점수 로직은 이 테이블만 읽으므로 업종/지역을 늘릴 때는 여기만 수정하면 된다.
"""
from types import MappingProxyType

# 전국 대상 (지역 제한 없음)
NATIONWIDE = "전국"

_FOOD = ("음식", "외식", "식당", "요식", "배달", "위생", "식품")
_RETAIL = ("소매", "유통", "판매", "매장", "상점")

# 업종 -> 관련 키워드 (온보딩 화면의 업종 라벨도 함께 등록)
BUSINESS_KEYWORDS = MappingProxyType({
    "음식점": _FOOD,
    "음식점/카페": _FOOD + ("카페",),
    "소매업": _RETAIL,
    "소매점/편의점": _RETAIL + ("편의점",),
    "서비스업": ("서비스", "프리랜서", "용역"),
    "미용/뷰티": ("미용", "뷰티", "헤어", "네일"),
    "제조업": ("제조", "생산", "공장", "산업"),
})

# 주요 행정구역
REGIONS = (
    "서울", "부산", "대구", "인천", "광주", "대전", "울산", "세종",
    "경기", "강원", "충북", "충남", "전북", "전남", "경북", "경남", "제주",
    "수원", "성남", "고양", "용인", "부천", "안산", "안양", "남양주", "화성",
    "청주", "천안", "전주", "포항", "창원", "김해",
)

# 타 지역 감점을 면제하는 전국 대상 키워드
NATIONWIDE_KEYWORDS = ("전국", "정부", "방방곡곡")

# 공통 높은 관심 키워드
HIGH_INTEREST_KEYWORDS = ("소상공인", "지원", "신청", "마감", "혜택", "무료")

CATEGORY_EMOJI = MappingProxyType({
    "지원금": "💰",
    "대출": "🏦",
    "세금": "📋",
    "노무": "👥",
    "위생": "🧹",
    "뉴스": "📰",
    "정책": "📢",
})
DEFAULT_EMOJI = "📌"
