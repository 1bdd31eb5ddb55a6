import pytest
from supplement_advisor.core.errors import ConfigurationError
from supplement_advisor.core.ingredients.extractor import IngredientExtractor
from supplement_advisor.core.ingredients.lexicon import IngredientLexicon


@pytest.mark.parametrize("product_name", [
    "솔가 vitamin d 1000IU",
    "종근당 비타민d",
    "NOW vitD 5000",
    "Vitamin D3 드롭",
    "비타민 D 츄어블",
])
def test_vitamin_d_synonyms_resolve_to_one_canonical(extractor, product_name):
    assert extractor.extract(product_name) == {"비타민D"}


def test_b12_does_not_trigger_generic_vitamin_b(extractor):
    assert extractor.extract("비타민 b12") == {"비타민B12"}
    assert extractor.extract("Jarrow Vitamin B12 메틸코발라민") == {"비타민B12"}


def test_synonyms_are_deduplicated(extractor):
    result = extractor.extract_ordered("오메가3 omega-3 rTG DHA EPA")
    assert result == ["오메가3"]


def test_unknown_product_returns_empty_set(extractor):
    assert extractor.extract("아무 관련 없는 제품") == frozenset()
    assert extractor.extract("") == frozenset()
    assert extractor.extract("   ") == frozenset()
    assert extractor.extract(None) == frozenset()


def test_case_insensitive_matching(extractor):
    assert extractor.extract("MAGNESIUM GLYCINATE") == {"마그네슘"}


def test_longer_keyword_wins_over_contained_one(extractor):
    assert extractor.extract("뉴트리코어 철분") == {"철분"}
    assert extractor.extract("센트룸 종합비타민") == {"종합비타민"}
    assert extractor.extract("Centrum Multivitamin") == {"종합비타민"}


def test_multiple_ingredients_in_one_name(extractor):
    result = extractor.extract("뉴트리디데이 칼슘 마그네슘 아연 비타민D")
    assert result == {"칼슘", "마그네슘", "아연", "비타민D"}


def test_extract_ordered_follows_specificity(extractor):
    # 긴 키워드가 먼저 검사되므로 '마그네슘'(4자)이 '아연'(2자)보다 먼저 나온다
    assert extractor.extract_ordered("아연 마그네슘") == ["마그네슘", "아연"]


def test_lexicon_rejects_conflicting_keyword():
    with pytest.raises(ConfigurationError):
        IngredientLexicon({"비타민C": ["vit c"], "비타민D": ["VIT C"]})


def test_lexicon_rejects_empty_table():
    with pytest.raises(ConfigurationError):
        IngredientLexicon({})


def test_lexicon_is_immutable(lexicon):
    with pytest.raises(AttributeError):
        lexicon._mapping = {}


def test_lexicon_ties_keep_declaration_order():
    lexicon = IngredientLexicon({"A": ["ab"], "B": ["cd"]})
    assert [k.keyword for k in lexicon.keywords_by_specificity()] == ["ab", "cd"]
    assert IngredientExtractor(lexicon).extract_ordered("cd ab") == ["A", "B"]


def test_default_lexicon_resolves_variants(lexicon):
    assert lexicon.resolve("COQ10") == "코엔자임Q10"
    assert lexicon.resolve("없는키워드") is None
    assert "vitamin c" in lexicon


def test_product_requires_at_least_one_ingredient(extractor):
    product = extractor.to_product(" 뉴트리코어 철분 ")
    assert product.name == "뉴트리코어 철분"
    assert product.ingredients == ["철분"]
    assert extractor.to_product("아무 관련 없는 제품") is None


@pytest.mark.parametrize("product_name, expected", [
    ("Nature's Balance 칼슘", {"칼슘"}),
    ("Vitafusion 구미", frozenset()),
    ("락토페린 300", frozenset()),
    ("ALA 600 알파리포산", {"알파리포산"}),
    ("vita 100", {"비타민A"}),
    ("종근당 락토핏 골드", {"유산균"}),
])
def test_short_keywords_do_not_match_inside_other_words(extractor, product_name, expected):
    assert extractor.extract(product_name) == expected
