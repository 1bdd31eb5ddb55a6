from fastapi import APIRouter, Depends
from supplement_advisor.api.dependencies import get_auth_source, get_food_safety_source, get_naver_source
from supplement_advisor.core.data_source.auth_source import SupabaseAuthSource
from supplement_advisor.core.data_source.shopping_sources import FoodSafetySource, NaverShoppingSource
from supplement_advisor.models.requests import FoodSafetyRequest, NaverShoppingRequest, SignupRequest

router = APIRouter()


@router.post("/signup")
async def signup(
    body: SignupRequest,
    auth_source: SupabaseAuthSource = Depends(get_auth_source)
):
    """회원가입"""
    user = await auth_source.create_user(body.email, body.password, body.name)
    return {"success": True, "user": user}


@router.post("/naver-shopping")
async def naver_shopping(
    body: NaverShoppingRequest,
    source: NaverShoppingSource = Depends(get_naver_source)
):
    """네이버 쇼핑 검색 프록시"""
    return await source.search(body.query, body.display)


@router.post("/food-safety")
async def food_safety(
    body: FoodSafetyRequest,
    source: FoodSafetySource = Depends(get_food_safety_source)
):
    """식품안전나라 건강기능식품 정보 프록시"""
    return await source.search(body.product_name)
