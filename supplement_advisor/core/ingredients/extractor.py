import re
from typing import FrozenSet, List, Optional, Pattern, Tuple
from supplement_advisor.core.ingredients.lexicon import IngredientKeyword, IngredientLexicon
from supplement_advisor.models.interaction import Product
from supplement_advisor.utils.logger_config import setup_logger

logger = setup_logger('ingredient_extractor')

# 이미 매칭된 키워드 자리를 가리는 문자 (어떤 키워드에도 포함되지 않음)
_MASK = '\x00'
_LATIN = re.compile(r'[a-z]')


def _keyword_pattern(keyword: str) -> Pattern:
    """영문자로 시작/끝나는 키워드는 다른 영문자와 붙어 있으면 매칭하지 않음

    'ala'가 'balance'에, 'vita'가 'vitafusion'에 걸리지 않게 합니다.
    숫자나 한글과 붙어 있는 경우('vitamin d3', '비타민d')는 그대로 매칭됩니다.
    """
    prefix = r'(?<![a-z])' if _LATIN.match(keyword[0]) else ''
    suffix = r'(?![a-z])' if _LATIN.match(keyword[-1]) else ''
    return re.compile(prefix + re.escape(keyword) + suffix)


class IngredientExtractor:
    """제품명에서 표준 성분명을 추출하는 키워드 매처"""

    def __init__(self, lexicon: IngredientLexicon):
        self.lexicon = lexicon
        self._patterns: List[Tuple[IngredientKeyword, Pattern]] = [
            (entry, _keyword_pattern(entry.keyword)) for entry in lexicon.keywords_by_specificity()
        ]

    def extract_ordered(self, product_name: Optional[str]) -> List[str]:
        """발견 순서대로 표준 성분명 목록을 반환합니다.

        긴 키워드부터 검사하고, 매칭된 키워드는 작업 문자열에서 가려서
        그 안에 포함된 짧은 키워드(예: 'b12' 안의 'b1')가 다시 매칭되지 않게 합니다.
        매칭이 없으면 빈 목록을 반환합니다.
        """
        if not product_name or not product_name.strip():
            return []

        text = product_name.lower()
        found: List[str] = []

        for entry, pattern in self._patterns:
            if entry.keyword not in text:
                continue
            text, count = pattern.subn(lambda match: _MASK * len(match.group()), text)
            if count and entry.canonical not in found:
                found.append(entry.canonical)

        return found

    def extract(self, product_name: Optional[str]) -> FrozenSet[str]:
        return frozenset(self.extract_ordered(product_name))

    def to_product(self, product_name: Optional[str]) -> Optional[Product]:
        """성분이 하나도 없으면 제품으로 취급하지 않음 (None)"""
        ingredients = self.extract_ordered(product_name)
        if not ingredients:
            return None
        return Product(name=product_name.strip(), ingredients=ingredients)
