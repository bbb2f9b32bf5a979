"""
Region taxonomy for location scoring.

``METRO_CLUSTERS`` groups city / province names into metropolitan regions.
Two locations are "nearby" when each contains (as a substring, lower-cased)
a name from the same cluster, so ``"서울 강남구"`` and ``"경기 성남시"`` both
land in the capital region.  Romanized names are listed next to the Hangul
ones so English-language profiles cluster the same way.

``REMOTE_TAGS`` is the fixed set of tag synonyms that mark a candidate as
able to work remotely.

This module has NO imports from any other ``expert_matcher`` package.
"""

METRO_CLUSTERS: dict[str, tuple[str, ...]] = {
    "capital":    ("서울", "경기", "인천", "seoul", "gyeonggi", "incheon"),
    "busan":      ("부산", "울산", "경남", "busan", "ulsan", "gyeongnam"),
    "daegu":      ("대구", "경북", "daegu", "gyeongbuk"),
    "gwangju":    ("광주", "전남", "gwangju", "jeonnam"),
    "daejeon":    ("대전", "세종", "충남", "daejeon", "sejong", "chungnam"),
    "gangwon":    ("강원", "춘천", "원주", "gangwon", "chuncheon", "wonju"),
}

REMOTE_TAGS: frozenset[str] = frozenset({"원격", "리모트", "remote"})
