# async HTTP client for the versioned chooser API
from typing import Any, Dict, List, Optional

import httpx

from .config import CHOOSER_API_URL


class ChooserAPIError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ChooserClient:
    """
    Thin wrapper over httpx.AsyncClient bound to `<base_url>/api/<version>`.
    Non-2xx responses raise ChooserAPIError with the server's `error` text.
    """

    def __init__(
        self,
        base_url: str = CHOOSER_API_URL,
        version: str = "v1",
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=f"{base_url.rstrip('/')}/api/{version}",
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ChooserClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, json: Any = None) -> Dict[str, Any]:
        resp = await self._client.request(method, path, json=json)
        try:
            data = resp.json()
        except ValueError:
            data = {"error": resp.text}

        if resp.is_error:
            message = data.get("error") if isinstance(data, dict) else None
            raise ChooserAPIError(resp.status_code, message or resp.reason_phrase)
        return data

    async def health(self) -> Dict[str, Any]:
        return await self._request("GET", "/health")

    async def templates(self) -> List[Dict[str, Any]]:
        data = await self._request("GET", "/templates")
        return data["templates"]

    async def create(
        self,
        template_slug: str,
        title: str,
        description: Optional[str] = None,
        selection_labels: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        body: Dict[str, Any] = {"template_slug": template_slug, "title": title}
        if description is not None:
            body["description"] = description
        if selection_labels is not None:
            body["selection_labels"] = selection_labels
        return await self._request("POST", "/choosers", json=body)

    async def get(self, chooser_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/choosers/{chooser_id}")

    async def replace_options(
        self, chooser_id: str, admin_id: str, options: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        return await self._request(
            "PUT",
            f"/choosers/{chooser_id}/options",
            json={"admin_id": admin_id, "options": options},
        )

    async def publish(self, chooser_id: str, admin_id: str) -> Dict[str, Any]:
        return await self._request(
            "PUT", f"/choosers/{chooser_id}/publish", json={"admin_id": admin_id}
        )

    async def submit(
        self, chooser_id: str, participant_name: str, selections: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        return await self._request(
            "POST",
            f"/choosers/{chooser_id}/selections",
            json={"participant_name": participant_name, "selections": selections},
        )

    async def results(self, chooser_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/choosers/{chooser_id}/results")
