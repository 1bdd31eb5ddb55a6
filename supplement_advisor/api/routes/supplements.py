from fastapi import APIRouter, Depends
from supplement_advisor.api.dependencies import (
    get_extractor, get_interaction_service, get_recommendation_service, get_supplement_info_service
)
from supplement_advisor.core.ingredients.extractor import IngredientExtractor
from supplement_advisor.core.services.interaction_service import InteractionService
from supplement_advisor.core.services.recommendation_service import RecommendationService
from supplement_advisor.core.services.supplement_info_service import SupplementInfoService
from supplement_advisor.models.requests import (
    CheckInteractionsRequest, ExtractIngredientsRequest, RecommendRequest, SupplementInfoRequest
)
from supplement_advisor.utils.logger_config import setup_logger

router = APIRouter()
logger = setup_logger('supplements_router')


@router.post("/recommend")
async def recommend(
    body: RecommendRequest,
    service: RecommendationService = Depends(get_recommendation_service)
):
    """증상 기반 영양제 추천 API"""
    report = await service.recommend(body.symptom)
    return report.model_dump(by_alias=True, mode="json")


@router.post("/extract-ingredients")
async def extract_ingredients(
    body: ExtractIngredientsRequest,
    extractor: IngredientExtractor = Depends(get_extractor)
):
    """제품명에서 영양 성분 추출 API (항상 200, 빈 목록은 '찾지 못함')"""
    logger.info(f"성분 추출 요청: {body.product_name}")
    product = extractor.to_product(body.product_name)
    ingredients = product.ingredients if product else []
    logger.info(f"추출된 성분: {', '.join(ingredients)}")

    return {
        "productName": body.product_name,
        "ingredients": ingredients,
        "message": (
            f"{len(ingredients)}개의 영양 성분을 찾았습니다."
            if ingredients
            else "영양 성분을 찾을 수 없습니다. 제품명을 다시 확인해주세요."
        )
    }


@router.post("/check-interactions")
async def check_interactions(
    body: CheckInteractionsRequest,
    service: InteractionService = Depends(get_interaction_service)
):
    """제품 간 상호작용 분석 API"""
    report = await service.check_interactions(body.supplements)
    return report.model_dump(by_alias=True, mode="json")


@router.post("/supplement-info")
async def supplement_info(
    body: SupplementInfoRequest,
    service: SupplementInfoService = Depends(get_supplement_info_service)
):
    """영양제 기본 정보 조회 API"""
    info = service.lookup(body.supplement)
    return {"supplement": body.supplement, "info": info.model_dump()}
