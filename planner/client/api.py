import logging
from typing import Any, Dict, List, Optional, Type

import httpx
from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from planner import schemas
from planner.config import get_settings
from planner.errors import NetworkFailure, NotFound, ValidationFailure

logger = logging.getLogger("planner.client.api")

RESOURCES: Dict[str, Type[BaseModel]] = {
    "projects": schemas.ProjectOut,
    "tasks": schemas.TaskOut,
    "journals": schemas.JournalOut,
}


def _error_detail(resp: httpx.Response) -> Any:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or None
    if isinstance(body, dict):
        return body.get("error") or body.get("detail") or body
    return body


class PlannerClient:
    """Async client for the planner REST API.

    Every call is a single round trip: no retries, no backoff. Failures are
    raised as ``ValidationFailure`` (400/422), ``NotFound`` (404) or
    ``NetworkFailure`` (anything else, transport errors included).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(timeout or settings.client_timeout_seconds),
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "PlannerClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # --- transport -------------------------------------------------------

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        if "json" in kwargs:
            kwargs["json"] = to_jsonable_python(kwargs["json"])
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise NetworkFailure(f"{method} {path} failed: {exc}") from exc

        if resp.is_success:
            return resp.json()

        detail = _error_detail(resp)
        logger.warning("%s %s -> %s | %s", method, path, resp.status_code, detail)
        if resp.status_code in (400, 422):
            raise ValidationFailure(str(detail), details=detail)
        if resp.status_code == 404:
            _, resource, entity_id = (path.split("/") + ["", ""])[:3]
            raise NotFound(resource.rstrip("s").capitalize() or "Resource", entity_id)
        raise NetworkFailure(
            f"{method} {path} returned {resp.status_code}",
            status_code=resp.status_code,
            details=detail,
        )

    # --- generic resource calls -------------------------------------------

    def _model(self, resource: str) -> Type[BaseModel]:
        try:
            return RESOURCES[resource]
        except KeyError:
            raise ValueError(f"unknown resource {resource!r}") from None

    async def list(self, resource: str, owner_id: str) -> List[BaseModel]:
        model = self._model(resource)
        data = await self._request("GET", f"/{resource}/{owner_id}")
        return [model.model_validate(item) for item in data]

    async def create(self, resource: str, payload: Dict[str, Any]) -> BaseModel:
        model = self._model(resource)
        data = await self._request("POST", f"/{resource}", json=payload)
        return model.model_validate(data)

    async def update(self, resource: str, entity_id: str, payload: Dict[str, Any]) -> BaseModel:
        model = self._model(resource)
        data = await self._request("PUT", f"/{resource}/{entity_id}", json=payload)
        return model.model_validate(data)

    async def delete(self, resource: str, entity_id: str) -> None:
        self._model(resource)
        await self._request("DELETE", f"/{resource}/{entity_id}")
