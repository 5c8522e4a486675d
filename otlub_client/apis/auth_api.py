from __future__ import annotations

from otlub_client import endpoints
from otlub_client.http import RequestExecutor
from otlub_client.models import LoginRequest, LoginResponse, Outcome, RegisterRequest, User


class AuthApi:
    def __init__(self, executor: RequestExecutor):
        self._executor = executor

    async def login(self, email: str, password: str) -> Outcome[LoginResponse]:
        return await self._executor.execute(
            endpoints.LOGIN,
            LoginResponse.from_dict,
            body=LoginRequest(email, password).to_payload(),
        )

    async def register(self, token: str | None, request: RegisterRequest) -> Outcome[User]:
        return await self._executor.execute(
            endpoints.REGISTER,
            User.from_dict,
            body=request.to_payload(),
            token=token,
        )

    async def logout(self, token: str | None) -> Outcome[None]:
        return await self._executor.execute(endpoints.LOGOUT, token=token)
