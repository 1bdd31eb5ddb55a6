from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple
from pydantic import BaseModel, ConfigDict
from supplement_advisor.core.errors import ConfigurationError
from supplement_advisor.utils.logger_config import setup_logger

logger = setup_logger('ingredient_lexicon')


class IngredientKeyword(BaseModel):
    """제품명에서 찾을 키워드 변형 하나와 그 표준 성분명"""
    model_config = ConfigDict(frozen=True)

    keyword: str
    canonical: str
    order: int


class IngredientLexicon:
    """키워드 변형 -> 표준 성분명 사전 (불변)

    프로세스 시작 시 한 번 만들어지고 이후 읽기 전용으로 공유됩니다.
    """

    __slots__ = ('_keywords', '_mapping', '_by_specificity')

    def __init__(self, entries: Mapping[str, List[str]]):
        keywords: List[IngredientKeyword] = []
        mapping: Dict[str, str] = {}

        for canonical, variants in entries.items():
            canonical = str(canonical).strip()
            if not canonical:
                raise ConfigurationError("성분 사전에 빈 표준 성분명이 있습니다.")
            for variant in variants or []:
                keyword = str(variant).strip().lower()
                if not keyword:
                    continue
                existing = mapping.get(keyword)
                if existing is not None:
                    if existing != canonical:
                        raise ConfigurationError(
                            f"키워드 '{keyword}'가 '{existing}'와 '{canonical}'에 중복 매핑되어 있습니다."
                        )
                    continue
                mapping[keyword] = canonical
                keywords.append(IngredientKeyword(keyword=keyword, canonical=canonical, order=len(keywords)))

        if not keywords:
            raise ConfigurationError("성분 사전이 비어 있습니다.")

        object.__setattr__(self, '_keywords', tuple(keywords))
        object.__setattr__(self, '_mapping', MappingProxyType(mapping))
        # 긴 키워드 우선, 길이가 같으면 선언 순서
        object.__setattr__(
            self,
            '_by_specificity',
            tuple(sorted(keywords, key=lambda k: (-len(k.keyword), k.order)))
        )

    def __setattr__(self, name, value):
        raise AttributeError("IngredientLexicon은 변경할 수 없습니다.")

    def __len__(self) -> int:
        return len(self._keywords)

    def __contains__(self, keyword: str) -> bool:
        return keyword.lower() in self._mapping

    @property
    def keywords(self) -> Tuple[IngredientKeyword, ...]:
        return self._keywords

    def keywords_by_specificity(self) -> Tuple[IngredientKeyword, ...]:
        return self._by_specificity

    def resolve(self, keyword: str) -> Optional[str]:
        """키워드 변형의 표준 성분명 (없으면 None)"""
        return self._mapping.get(keyword.lower())

    def canonical_names(self) -> List[str]:
        seen = []
        for entry in self._keywords:
            if entry.canonical not in seen:
                seen.append(entry.canonical)
        return seen


def build_default_lexicon() -> IngredientLexicon:
    """ingredient_lexicon.yaml 로부터 기본 사전을 생성합니다."""
    from supplement_advisor.config.config_loader import CONFIG

    lexicon = IngredientLexicon(CONFIG.get_ingredient_keywords())
    logger.info(
        f"[LEXICON] 성분 사전 로드 완료: 표준 성분 {len(lexicon.canonical_names())}개, 키워드 {len(lexicon)}개"
    )
    return lexicon
