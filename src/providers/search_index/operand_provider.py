"""Operand semantic search provider implementing ISearchIndexProvider.

Talks to the Operand v3 API over its Connect JSON protocol: every call is
a ``POST {endpoint}/{service}/{method}`` with a JSON body and the API key
in the ``Authorization`` header.

Two methods are used:

* ``ObjectService/CreateObject``: index a text or image object, with
  ``properties.log`` holding the lifelog log id.
* ``OperandService/SearchContents``: natural-language search.  The
  response lists matching ``contents`` (each pointing at an ``objectId``)
  plus an ``objects`` map from which the ``log`` property is read back.
"""

from __future__ import annotations

from typing import Any

import httpx

from src.config.settings import Settings
from src.interfaces.search_index_provider import ISearchIndexProvider
from src.models.search import SearchHit
from src.utils.errors import IndexingError
from src.utils.logging import get_logger

_PROVIDER_NAME = "operand"
_CREATE_OBJECT_PATH = "operand.v1.ObjectService/CreateObject"
_SEARCH_CONTENTS_PATH = "operand.v1.OperandService/SearchContents"


class OperandIndexProvider(ISearchIndexProvider):
    """Semantic search index backed by Operand.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient``.
    settings:
        Supplies ``operand_api_key`` and ``operand_api_endpoint``.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._api_key = settings.operand_api_key
        self._endpoint = settings.operand_api_endpoint.rstrip("/")
        self._logger = get_logger(__name__)

    async def _call(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        headers = {
            "Authorization": self._api_key,
            "Content-Type": "application/json",
        }
        try:
            response = await self._http.post(f"{self._endpoint}/{path}", json=payload, headers=headers)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise IndexingError(
                message=f"{path} returned HTTP {exc.response.status_code}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise IndexingError(
                message=f"{path} request failed: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

    async def create_object(
        self,
        parent_id: str,
        object_type: str,
        metadata: dict[str, Any],
        properties: dict[str, Any] | None = None,
    ) -> str:
        body = await self._call(
            _CREATE_OBJECT_PATH,
            {
                "parentId": parent_id,
                "type": object_type,
                "metadata": metadata,
                "properties": properties or {},
            },
        )
        object_id = (body.get("object") or {}).get("id", "")
        self._logger.debug("operand_object_created", object_id=object_id, type=object_type)
        return object_id

    async def search_contents(
        self,
        parent_ids: list[str],
        query: str,
        max_results: int = 12,
    ) -> list[SearchHit]:
        body = await self._call(
            _SEARCH_CONTENTS_PATH,
            {"parentIds": parent_ids, "query": query, "max": max_results},
        )
        objects: dict[str, Any] = body.get("objects") or {}

        hits: list[SearchHit] = []
        for content in body.get("contents") or []:
            object_id = content.get("objectId")
            if not object_id:
                continue
            properties = (objects.get(object_id) or {}).get("properties") or {}
            log_id = properties.get("log")
            hits.append(
                SearchHit(
                    object_id=object_id,
                    log_id=str(log_id) if log_id is not None else None,
                    content=content.get("content"),
                    score=float(content.get("score") or 0.0),
                )
            )

        self._logger.info("operand_search_complete", query=query, hits=len(hits))
        return hits

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME
