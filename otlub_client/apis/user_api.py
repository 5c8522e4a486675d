from __future__ import annotations

from otlub_client import endpoints
from otlub_client.http import RequestExecutor
from otlub_client.models import Outcome, UpdateUserRequest, User


class UserApi:
    def __init__(self, executor: RequestExecutor):
        self._executor = executor

    async def get_current_user(self, token: str | None) -> Outcome[User]:
        return await self._executor.execute(endpoints.GET_CURRENT_USER, User.from_dict, token=token)

    async def update_user(self, token: str | None, request: UpdateUserRequest) -> Outcome[User]:
        return await self._executor.execute(
            endpoints.UPDATE_USER,
            User.from_dict,
            body=request.to_payload(),
            token=token,
        )
