import pytest
from fastapi.testclient import TestClient
from supplement_advisor.api import dependencies
from supplement_advisor.core.data_source.shopping_sources import FoodSafetySource, NaverShoppingSource
from supplement_advisor.core.errors import ExternalServiceError, ValidationError
from supplement_advisor.core.interactions.request_builder import InteractionRequestBuilder
from supplement_advisor.core.services.interaction_service import InteractionService
from supplement_advisor.core.services.recommendation_service import RecommendationService
from supplement_advisor.main.app import supplement_app
from tests.stubs import StubAuthSource, StubReasoningClient

PREFIX = "/api"
TOKEN = {"Authorization": "Bearer token-u"}


@pytest.fixture
def overrides():
    supplement_app.dependency_overrides.clear()
    yield supplement_app.dependency_overrides
    supplement_app.dependency_overrides.clear()


@pytest.fixture
def client(overrides, reminder_store):
    overrides[dependencies.get_reminder_store] = lambda: reminder_store
    overrides[dependencies.get_auth_source] = lambda: StubAuthSource(users={"token-u": "user-u"})
    return TestClient(supplement_app)


def test_root(client):
    assert client.get("/").json() == {"status": "supplement-advisor is running"}


class TestExtractIngredients:
    def test_found(self, client):
        response = client.post(f"{PREFIX}/extract-ingredients", json={"productName": "솔가 비타민D 1000IU"})
        assert response.status_code == 200
        assert response.json() == {
            "productName": "솔가 비타민D 1000IU",
            "ingredients": ["비타민D"],
            "message": "1개의 영양 성분을 찾았습니다."
        }

    def test_not_found_is_still_200(self, client):
        response = client.post(f"{PREFIX}/extract-ingredients", json={"productName": "알 수 없는 제품"})
        assert response.status_code == 200
        assert response.json()["ingredients"] == []
        assert "찾을 수 없습니다" in response.json()["message"]

    def test_missing_field_is_400(self, client):
        response = client.post(f"{PREFIX}/extract-ingredients", json={})
        assert response.status_code == 400
        assert "error" in response.json()


class TestCheckInteractions:
    def _use_reasoning(self, overrides, extractor, reasoning):
        overrides[dependencies.get_interaction_service] = lambda: InteractionService(
            InteractionRequestBuilder(extractor), reasoning
        )

    def test_caution_report(self, client, overrides, extractor, caution_response):
        self._use_reasoning(overrides, extractor, StubReasoningClient(response=caution_response))

        response = client.post(
            f"{PREFIX}/check-interactions",
            json={"supplements": ["센트룸 종합비타민", "뉴트리코어 철분"]}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["overallSafety"] == "caution"
        assert len(body["interactions"]) == 1
        assert body["interactions"][0]["severity"] == "medium"
        assert body["interactions"][0]["conflictIngredients"] == ["칼슘"]
        assert body["generalAdvice"] == "복용 시간을 분리하세요."

    def test_single_product_is_400(self, client, overrides, extractor):
        reasoning = StubReasoningClient(response={})
        self._use_reasoning(overrides, extractor, reasoning)

        response = client.post(f"{PREFIX}/check-interactions", json={"supplements": ["센트룸 종합비타민"]})

        assert response.status_code == 400
        assert response.json()["error"] == "최소 2개 이상의 제품이 필요합니다."
        assert reasoning.calls == []

    def test_malformed_reasoning_response_is_500(self, client, overrides, extractor):
        self._use_reasoning(
            overrides, extractor, StubReasoningClient(response={"interactions": [], "overallSafety": "unsafe"})
        )

        response = client.post(
            f"{PREFIX}/check-interactions",
            json={"supplements": ["센트룸 종합비타민", "뉴트리코어 철분"]}
        )

        assert response.status_code == 500
        assert response.json()["error"] == "AI 응답 형식이 올바르지 않습니다."

    def test_upstream_status_is_propagated(self, client, overrides, extractor):
        error = ExternalServiceError("OpenAI API error: 429", details="rate limited", status_code=429)
        self._use_reasoning(overrides, extractor, StubReasoningClient(error=error))

        response = client.post(
            f"{PREFIX}/check-interactions",
            json={"supplements": ["센트룸 종합비타민", "뉴트리코어 철분"]}
        )

        assert response.status_code == 429
        assert response.json() == {"error": "OpenAI API error: 429", "details": "rate limited"}


class TestRecommend:
    def test_recommend(self, client, overrides):
        reasoning = StubReasoningClient(response={
            "supplements": [{"name": "비타민B", "recommendedProducts": []}],
            "generalAdvice": "충분히 쉬세요.",
            "precautions": []
        })
        overrides[dependencies.get_recommendation_service] = lambda: RecommendationService(reasoning)

        response = client.post(f"{PREFIX}/recommend", json={"symptom": "만성 피로"})

        assert response.status_code == 200
        body = response.json()
        assert body["supplements"][0]["name"] == "비타민B"
        assert body["generalAdvice"] == "충분히 쉬세요."

    def test_missing_credential_is_500_with_hint(self, client, overrides):
        from supplement_advisor.utils.openai_client import OpenAIClient

        settings = {'api_key': None, 'chat': {'model': 'gpt-4o-mini', 'recommend_temperature': 0.7}}
        overrides[dependencies.get_recommendation_service] = lambda: RecommendationService(
            OpenAIClient(api_key="", settings=settings)
        )

        response = client.post(f"{PREFIX}/recommend", json={"symptom": "두통"})

        assert response.status_code == 500
        assert response.json()["error"] == "OpenAI API key not configured"
        assert "hint" in response.json()


class TestReminders:
    def test_requires_token(self, client):
        response = client.get(f"{PREFIX}/reminders")
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized - No token provided"}

    def test_invalid_token(self, client):
        response = client.get(f"{PREFIX}/reminders", headers={"Authorization": "Bearer wrong"})
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_create_list_delete(self, client):
        created = client.post(
            f"{PREFIX}/reminders",
            json={"supplement": "비타민D", "time": "09:00", "days": ["월", "수", "금"]},
            headers=TOKEN
        )
        assert created.status_code == 200
        reminder = created.json()["reminder"]
        assert created.json()["success"] is True
        assert reminder["id"]
        assert reminder["createdAt"]

        listed = client.get(f"{PREFIX}/reminders", headers=TOKEN).json()["reminders"]
        assert [(r["supplement"], r["time"], r["days"]) for r in listed] == [("비타민D", "09:00", ["월", "수", "금"])]

        for _ in range(2):
            deleted = client.delete(f"{PREFIX}/reminders/{reminder['id']}", headers=TOKEN)
            assert deleted.status_code == 200
            assert deleted.json() == {"success": True}

        assert client.get(f"{PREFIX}/reminders", headers=TOKEN).json() == {"reminders": []}

    def test_invalid_time_is_400(self, client):
        response = client.post(
            f"{PREFIX}/reminders",
            json={"supplement": "비타민D", "time": "9시", "days": ["월"]},
            headers=TOKEN
        )
        assert response.status_code == 400


class TestSignup:
    def test_success(self, client, overrides):
        auth = StubAuthSource(created_user={"id": "new-user", "email": "a@example.com"})
        overrides[dependencies.get_auth_source] = lambda: auth

        response = client.post(
            f"{PREFIX}/signup", json={"email": "a@example.com", "password": "secret12", "name": "홍길동"}
        )

        assert response.status_code == 200
        assert response.json() == {"success": True, "user": {"id": "new-user", "email": "a@example.com"}}
        assert auth.created[0]["name"] == "홍길동"

    def test_duplicate_email_is_400(self, client, overrides):
        overrides[dependencies.get_auth_source] = lambda: StubAuthSource(
            error=ValidationError("이미 사용 중인 이메일입니다.")
        )

        response = client.post(
            f"{PREFIX}/signup", json={"email": "a@example.com", "password": "secret12", "name": "홍길동"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "이미 사용 중인 이메일입니다."


class TestProxies:
    def test_naver_without_credentials_is_500(self, client, overrides):
        overrides[dependencies.get_naver_source] = lambda: NaverShoppingSource(
            client_id="", client_secret="", settings={'timeout_seconds': 1}
        )

        response = client.post(f"{PREFIX}/naver-shopping", json={"query": "비타민D"})

        assert response.status_code == 500
        assert response.json()["error"] == "Naver API credentials not configured"
        assert "NAVER_CLIENT_ID" in response.json()["hint"]

    def test_food_safety_without_key_is_500(self, client, overrides):
        overrides[dependencies.get_food_safety_source] = lambda: FoodSafetySource(
            api_key="", settings={'timeout_seconds': 1}
        )

        response = client.post(f"{PREFIX}/food-safety", json={"productName": "비타민D"})

        assert response.status_code == 500
        assert response.json()["error"] == "Food Safety API key not configured"


def test_supplement_info(client):
    response = client.post(f"{PREFIX}/supplement-info", json={"supplement": "오메가3 1000"})
    assert response.status_code == 200
    assert response.json()["info"]["benefits"][0] == "혈중 중성지방 개선"

    unknown = client.post(f"{PREFIX}/supplement-info", json={"supplement": "정체불명"}).json()
    assert unknown["info"]["description"] == "해당 영양제에 대한 정보를 찾을 수 없습니다."
