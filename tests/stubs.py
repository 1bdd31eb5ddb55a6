from supplement_advisor.core.errors import UnauthorizedError
from supplement_advisor.models.reminder import AuthenticatedUser


class StubReasoningClient:
    """OpenAIClient 대체: 정해진 응답을 돌려주고 호출을 기록"""

    def __init__(self, response=None, error=None):
        self.settings = {
            'chat': {'model': 'stub', 'recommend_temperature': 0.7, 'interaction_temperature': 0.3}
        }
        self.response = response
        self.error = error
        self.calls = []

    async def complete_json(self, messages, temperature):
        self.calls.append({'messages': messages, 'temperature': temperature})
        if self.error is not None:
            raise self.error
        return self.response


class StubAuthSource:
    """SupabaseAuthSource 대체: 토큰 -> 사용자 ID"""

    def __init__(self, users=None, created_user=None, error=None):
        self.users = users or {}
        self.created_user = created_user
        self.error = error
        self.created = []

    async def get_user(self, access_token):
        if access_token not in self.users:
            raise UnauthorizedError()
        return AuthenticatedUser(id=self.users[access_token])

    async def create_user(self, email, password, name):
        self.created.append({'email': email, 'password': password, 'name': name})
        if self.error is not None:
            raise self.error
        return self.created_user
