import os
import tempfile

# 테스트 로그는 임시 디렉토리에 기록
os.environ.setdefault("SUPPLEMENT_ADVISOR_LOG_DIR", tempfile.mkdtemp(prefix="supplement-advisor-logs-"))

import pytest

from supplement_advisor.core.ingredients.extractor import IngredientExtractor
from supplement_advisor.core.ingredients.lexicon import build_default_lexicon
from supplement_advisor.core.interactions.request_builder import InteractionRequestBuilder
from supplement_advisor.core.reminders.key_value_store import InMemoryKeyValueStore
from supplement_advisor.core.reminders.reminder_repository import ReminderRepository
from supplement_advisor.core.reminders.reminder_store import ReminderStore


@pytest.fixture(scope="session")
def lexicon():
    return build_default_lexicon()


@pytest.fixture
def extractor(lexicon):
    return IngredientExtractor(lexicon)


@pytest.fixture
def request_builder(extractor):
    return InteractionRequestBuilder(extractor)


@pytest.fixture
def kv_store():
    return InMemoryKeyValueStore()


@pytest.fixture
def reminder_store(kv_store):
    return ReminderStore(ReminderRepository(kv_store))


@pytest.fixture
def caution_response():
    return {
        "interactions": [
            {
                "supplement": "뉴트리코어 철분",
                "extractedIngredients": ["철분"],
                "conflicts": ["센트룸 종합비타민"],
                "conflictIngredients": ["칼슘"],
                "warning": "종합비타민의 칼슘이 철분 흡수를 방해할 수 있습니다.",
                "severity": "medium",
                "recommendation": "2시간 이상 간격을 두고 복용하세요."
            }
        ],
        "overallSafety": "caution",
        "generalAdvice": "복용 시간을 분리하세요."
    }
