"""Async data-access client for the AskIEP API.

Every accessor prefers the server. Network errors, timeouts and 5xx
responses are retried with exponential backoff; once retries are exhausted
reads fall back to the local cache and writes are kept locally as
``local_only`` records. 4xx responses are never retried and are raised.

Records that belong to a profile created offline (a ``local-`` child id)
live only in the local store until the profile is saved to the server.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Sequence

import httpx
from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from askiep.client.config import ClientSettings
from askiep.client.connectivity import ConnectivityMonitor, ConnectivityStatus
from askiep.client.local_store import (
    LOCAL_ID_PREFIX,
    LocalKeys,
    LocalStore,
    new_local_id,
    now_iso,
)
from askiep.core.errors import (
    InfrastructureError,
    MalformedAIResponse,
    NotFoundError,
    ValidationError,
)
from askiep.services import metrics_service
from askiep.services.ai_gateway import MEETING_APOLOGY, AIGateway
from askiep.services.ai_provider import ChatMessage
from askiep.services.http_service import is_retryable_status, request_with_retries

logger = logging.getLogger(__name__)

OWNER_HEADER = "X-Owner-Key"
MAX_BACKOFF_SECONDS = 4.0


def _jsonable(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    return to_jsonable_python(data)


def _is_local_id(value: Any) -> bool:
    return isinstance(value, str) and value.startswith(LOCAL_ID_PREFIX)


def _error_body(response: httpx.Response) -> tuple[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {response.status_code}", None
    if isinstance(body, dict):
        return str(body.get("error") or f"HTTP {response.status_code}"), body.get("details")
    return f"HTTP {response.status_code}", body


class IepApiClient:
    def __init__(
        self,
        base_url: str,
        *,
        owner_key: str = "default",
        local_store: LocalStore | None = None,
        connectivity: ConnectivityMonitor | None = None,
        timeout: float = 3.0,
        max_retries: int = 2,
        base_delay: float = 0.5,
        health_timeout: float = 2.0,
        ai_timeout: float = 60.0,
        ai_gateway: AIGateway | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.owner_key = owner_key
        self.local = local_store if local_store is not None else LocalStore()
        self.connectivity = connectivity or ConnectivityMonitor()
        self.timeout = timeout
        self.max_retries = max(0, max_retries)
        self.base_delay = base_delay
        self.health_timeout = health_timeout
        self.ai_timeout = ai_timeout
        self.ai_gateway = ai_gateway
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers={OWNER_HEADER: owner_key},
            timeout=max(timeout, ai_timeout),
            transport=transport,
        )
        self._background: set[asyncio.Task] = set()

    @classmethod
    def from_settings(
        cls, client_settings: ClientSettings | None = None, **overrides: Any
    ) -> "IepApiClient":
        s = client_settings or ClientSettings()
        options: dict[str, Any] = {
            "owner_key": s.OWNER_KEY,
            "local_store": LocalStore(s.LOCAL_STORE_PATH or None),
            "timeout": s.TIMEOUT_SECONDS,
            "max_retries": s.MAX_RETRIES,
            "base_delay": s.BASE_DELAY_SECONDS,
            "health_timeout": s.HEALTH_TIMEOUT_SECONDS,
            "ai_timeout": s.AI_TIMEOUT_SECONDS,
        }
        options.update(overrides)
        return cls(s.BASE_URL, **options)

    async def __aenter__(self) -> "IepApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.wait_for_background()
        await self._http.aclose()

    # =========================================================================
    # Transport
    # =========================================================================

    @property
    def status(self) -> ConnectivityStatus:
        return self.connectivity.status

    def _max_attempts(self) -> int:
        # Known-offline callers get one quick attempt instead of a backoff ladder
        if not self.connectivity.is_online:
            return 1
        return 1 + self.max_retries

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        write: bool = False,
        ai: bool = False,
    ) -> Any:
        """
        Send one logical request and return the decoded JSON body.

        Raises InfrastructureError when the server could not be reached (or
        kept failing), ValidationError/NotFoundError for client errors and
        MalformedAIResponse for a 502 from an AI endpoint. A 404 on a read
        returns None.
        """
        timeout = self.ai_timeout if ai else self.timeout

        async def attempt() -> httpx.Response:
            try:
                return await asyncio.wait_for(
                    self._http.request(method, path, json=json), timeout
                )
            except asyncio.TimeoutError as exc:
                raise httpx.ReadTimeout(f"{method} {path} timed out after {timeout}s") from exc

        def retry_status(code: int) -> bool:
            # Malformed model output is final
            if ai and code == 502:
                return False
            return is_retryable_status(code)

        try:
            response = await request_with_retries(
                attempt,
                max_attempts=self._max_attempts(),
                base_delay=self.base_delay,
                max_delay=MAX_BACKOFF_SECONDS,
                retry_status=retry_status,
            )
        except httpx.HTTPError as exc:
            raise InfrastructureError("API unreachable", details=type(exc).__name__) from exc

        code = response.status_code
        if ai and code == 502:
            message, details = _error_body(response)
            raise MalformedAIResponse(message, details=details)
        if code >= 500:
            message, details = _error_body(response)
            raise InfrastructureError(message, details=details)
        if code == 404:
            if not write:
                return None
            message, details = _error_body(response)
            raise NotFoundError(message, details=details)
        if code >= 400:
            message, details = _error_body(response)
            raise ValidationError(message, details=details)

        if code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise InfrastructureError("API returned invalid JSON") from exc

    async def check_health(self) -> ConnectivityStatus:
        """Race a ping against ``health_timeout`` and record the result."""
        started = time.perf_counter()
        try:
            response = await asyncio.wait_for(self._http.get("/health"), self.health_timeout)
        except asyncio.TimeoutError:
            return self.connectivity.record(False, error="timeout")
        except httpx.HTTPError as exc:
            return self.connectivity.record(False, error=type(exc).__name__)

        latency_ms = (time.perf_counter() - started) * 1000
        if response.status_code != 200:
            return self.connectivity.record(
                False, latency_ms=latency_ms, error=f"status {response.status_code}"
            )
        return self.connectivity.record(True, latency_ms=latency_ms)

    async def _read_list(self, path: str, key: str, child_id: Any) -> list[dict[str, Any]]:
        if _is_local_id(child_id):
            return self.local.for_child(key, child_id)
        try:
            data = await self._request("GET", path)
        except InfrastructureError as exc:
            logger.warning("Serving %s from local cache: %s", key, exc.message)
            return self.local.for_child(key, child_id)
        return data or []

    async def _write(
        self, path: str, key: str, payload: Any, *, stamp_fields: tuple[str, ...] = ()
    ) -> dict[str, Any]:
        body = _jsonable(payload)
        if _is_local_id(body.get("child_id")):
            return self.local.add(key, body, stamp_fields=stamp_fields)
        try:
            return await self._request("POST", path, json=body, write=True)
        except InfrastructureError as exc:
            logger.warning("Saving %s locally only: %s", key, exc.message)
            return self.local.add(key, body, stamp_fields=stamp_fields)

    # =========================================================================
    # Profile & documents
    # =========================================================================

    async def get_profile(self) -> dict[str, Any] | None:
        try:
            data = await self._request("GET", "/profile")
        except InfrastructureError as exc:
            logger.warning("Serving profile from local cache: %s", exc.message)
            return self.local.get(LocalKeys.PROFILE)
        # None means the server has no profile, so drop any stale copy
        self.local.set(LocalKeys.PROFILE, data)
        return data

    async def save_profile(self, profile: Any) -> dict[str, Any]:
        body = _jsonable(profile)
        payload = dict(body)
        if _is_local_id(payload.get("id")):
            payload.pop("id")
        try:
            data = await self._request("POST", "/profile", json=payload, write=True)
        except InfrastructureError as exc:
            logger.warning("Saving profile locally only: %s", exc.message)
            record = {
                **body,
                "id": body.get("id") or new_local_id(),
                "local_only": True,
            }
            record.setdefault("created_at", now_iso())
            self.local.set(LocalKeys.PROFILE, record)
            return record
        self.local.set(LocalKeys.PROFILE, data)
        return data

    async def get_documents(self, child_id: Any) -> list[dict[str, Any]]:
        if _is_local_id(child_id):
            return self.local.for_child(LocalKeys.DOCUMENTS, child_id)
        try:
            data = await self._request("GET", f"/documents/{child_id}")
        except InfrastructureError as exc:
            logger.warning("Serving documents from local cache: %s", exc.message)
            return self.local.for_child(LocalKeys.DOCUMENTS, child_id)
        data = data or []
        self.local.replace_for_child(LocalKeys.DOCUMENTS, child_id, data)
        return data

    async def get_latest_analysis(self, child_id: Any) -> dict[str, Any] | None:
        if not _is_local_id(child_id):
            try:
                return await self._request("GET", f"/analysis/latest/{child_id}")
            except InfrastructureError as exc:
                logger.warning("Serving analysis from local cache: %s", exc.message)
        cached = self.local.for_child(LocalKeys.ANALYSES, child_id)
        return cached[0] if cached else None

    # =========================================================================
    # Logs
    # =========================================================================

    async def get_compliance_logs(self, child_id: Any) -> list[dict[str, Any]]:
        return await self._read_list(f"/compliance/{child_id}", LocalKeys.COMPLIANCE, child_id)

    async def add_compliance_log(self, log: Any) -> dict[str, Any]:
        return await self._write("/compliance", LocalKeys.COMPLIANCE, log)

    async def get_goal_progress(self, child_id: Any) -> list[dict[str, Any]]:
        return await self._read_list(f"/progress/{child_id}", LocalKeys.PROGRESS, child_id)

    async def add_goal_progress(self, entry: Any) -> dict[str, Any]:
        return await self._write(
            "/progress", LocalKeys.PROGRESS, entry, stamp_fields=("last_updated",)
        )

    async def get_comm_logs(self, child_id: Any) -> list[dict[str, Any]]:
        return await self._read_list(f"/comms/{child_id}", LocalKeys.COMMS, child_id)

    async def add_comm_log(self, entry: Any) -> dict[str, Any]:
        return await self._write("/comms", LocalKeys.COMMS, entry)

    async def get_behavior_logs(self, child_id: Any) -> list[dict[str, Any]]:
        return await self._read_list(f"/behavior/{child_id}", LocalKeys.BEHAVIOR, child_id)

    async def add_behavior_log(self, log: Any) -> dict[str, Any]:
        return await self._write("/behavior", LocalKeys.BEHAVIOR, log)

    async def get_letters(self, child_id: Any) -> list[dict[str, Any]]:
        return await self._read_list(f"/letters/{child_id}", LocalKeys.LETTERS, child_id)

    async def save_letter(self, letter: Any) -> dict[str, Any]:
        """Append a draft, or update the draft named by ``id`` in place.

        A ``local-`` id was never seen by the server, so the draft is sent as
        new. Offline edits of a known draft overwrite its cached copy.
        """
        body = _jsonable(letter)
        if not _is_local_id(body.get("child_id")):
            payload = dict(body)
            if _is_local_id(payload.get("id")):
                payload.pop("id")
            try:
                return await self._request("POST", "/letters", json=payload, write=True)
            except InfrastructureError as exc:
                logger.warning("Saving letter locally only: %s", exc.message)
        return self._save_letter_locally(body)

    def _save_letter_locally(self, body: dict[str, Any]) -> dict[str, Any]:
        letter_id = body.get("id")
        if not letter_id:
            return self.local.add(LocalKeys.LETTERS, body, stamp_fields=("last_edited",))
        cached = next(
            (item for item in self.local.list(LocalKeys.LETTERS) if item.get("id") == letter_id),
            {},
        )
        return self.local.upsert(
            LocalKeys.LETTERS,
            {
                **cached,
                **body,
                "created_at": cached.get("created_at", now_iso()),
                "last_edited": now_iso(),
                "local_only": True,
            },
        )

    # =========================================================================
    # AI
    # =========================================================================

    async def analyze_iep(
        self, child_id: Any, text: str, filename: str | None = None
    ) -> dict[str, Any]:
        """
        Analyze IEP text for a child.

        With a direct gateway the result is cached locally and pushed to the
        server in the background; otherwise the server runs the analysis.
        AI failures are raised either way.
        """
        if self.ai_gateway is None:
            data = await self._request(
                "POST",
                "/analyze",
                json={"child_id": str(child_id), "text": text, "filename": filename},
                write=True,
                ai=True,
            )
            self.local.prepend(LocalKeys.ANALYSES, data)
            return data

        output = await self.ai_gateway.analyze_iep(text)
        analysis = self.local.add(
            LocalKeys.ANALYSES,
            {"child_id": str(child_id), **output.model_dump(mode="json")},
        )
        self.local.add(
            LocalKeys.DOCUMENTS,
            {
                "child_id": str(child_id),
                "filename": filename or "Pasted IEP Text",
                "analysis_id": analysis["id"],
            },
        )
        # A profile the server has never seen cannot own a synced analysis
        if not _is_local_id(child_id):
            self._spawn(
                self._sync_analysis(
                    {
                        "child_id": str(child_id),
                        "text": text,
                        "filename": filename,
                        "analysis": output.model_dump(mode="json"),
                    }
                )
            )
        return analysis

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.create_task(coro)
        self._background.add(task)
        task.add_done_callback(self._background_done)
        return task

    def _background_done(self, task: asyncio.Task) -> None:
        self._background.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Background sync failed: %s", exc)

    async def _sync_analysis(self, payload: dict[str, Any]) -> None:
        """Single fire-and-forget push of a locally computed analysis."""
        try:
            response = await asyncio.wait_for(
                self._http.post("/analyze", json=payload), self.timeout
            )
        except (asyncio.TimeoutError, httpx.HTTPError) as exc:
            logger.warning("Analysis sync failed: %s", type(exc).__name__)
            return
        if response.status_code >= 400:
            logger.warning("Analysis sync rejected with status %s", response.status_code)
            return
        logger.info("Analysis synced to server")

    async def wait_for_background(self) -> None:
        """Wait for pending background syncs (tests and shutdown)."""
        if self._background:
            await asyncio.gather(*list(self._background), return_exceptions=True)

    async def compare_ieps(self, old_text: str, new_text: str) -> dict[str, Any]:
        if self.ai_gateway is not None:
            output = await self.ai_gateway.compare_ieps(old_text, new_text)
            return output.model_dump(mode="json")
        return await self._request(
            "POST",
            "/ai/compare",
            json={"old_text": old_text, "new_text": new_text},
            write=True,
            ai=True,
        )

    async def _ai_text(self, path: str, body: dict[str, Any]) -> str:
        data = await self._request("POST", path, json=body, write=True, ai=True)
        return (data or {}).get("text", "")

    async def generate_letter(self, context: str, letter_type: str) -> str:
        if self.ai_gateway is not None:
            return await self.ai_gateway.draft_letter(context, letter_type)
        return await self._ai_text(
            "/ai/letters/draft", {"context": context, "letter_type": letter_type}
        )

    async def revise_letter(self, current_letter: str, instruction: str) -> str:
        if self.ai_gateway is not None:
            return await self.ai_gateway.revise_letter(current_letter, instruction)
        return await self._ai_text(
            "/ai/letters/revise",
            {"current_letter": current_letter, "instruction": instruction},
        )

    async def simulate_meeting(self, message: str, child_context: str = "") -> str:
        """One meeting role-play turn. Connection trouble yields an apology."""
        try:
            if self.ai_gateway is not None:
                return await self.ai_gateway.simulate_meeting(message, child_context)
            return await self._ai_text(
                "/ai/meeting", {"message": message, "child_context": child_context}
            )
        except InfrastructureError as exc:
            logger.warning("Meeting simulation unavailable: %s", exc.message)
            return MEETING_APOLOGY

    async def ask_legal(
        self, query: str, history: Sequence[dict[str, str]] | None = None
    ) -> str:
        turns = [
            {"role": turn["role"], "content": turn["content"]} for turn in history or []
        ]
        if self.ai_gateway is not None:
            return await self.ai_gateway.legal_chat(
                query, [ChatMessage(**turn) for turn in turns]
            )
        return await self._ai_text("/ai/legal", {"query": query, "history": turns})

    # =========================================================================
    # Aggregates
    # =========================================================================

    async def get_dashboard_stats(self, child_id: Any) -> dict[str, Any]:
        """Aggregates computed from the (possibly cached) log lists."""
        logs = await self.get_compliance_logs(child_id)
        progress = await self.get_goal_progress(child_id)
        return {
            "child_id": str(child_id),
            **metrics_service.build_dashboard(logs, progress),
        }
