from __future__ import annotations

from otlub_client import endpoints
from otlub_client.http import RequestExecutor
from otlub_client.models import HealthResponse, Outcome


class HealthApi:
    def __init__(self, executor: RequestExecutor):
        self._executor = executor

    async def health_check(self, token: str | None = None) -> Outcome[HealthResponse]:
        return await self._executor.execute(endpoints.HEALTH_CHECK, HealthResponse.from_dict, token=token)
