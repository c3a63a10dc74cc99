"""Sentry REST API client.

This intentionally wraps requests to keep HTTP calls out of CLI code and make tests easy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Project:
    """Minimal project metadata returned from Sentry."""

    slug: str
    name: str
    platform: str | None = None
    status: str | None = None


@dataclass(frozen=True, slots=True)
class Issue:
    """Minimal issue metadata returned from Sentry."""

    id: str
    title: str
    status: str
    level: str
    culprit: str
    last_seen: str
    count: int
    user_count: int


@dataclass(frozen=True, slots=True)
class SentryApiError(Exception):
    """Raised when the Sentry API answers with a non-success status."""

    status_code: int
    body: str

    def __str__(self) -> str:
        return f"API request failed: {self.status_code} - {self.body}"


class SentryClient:
    """Small wrapper around the Sentry REST API for the calls the CLI needs."""

    def __init__(
        self,
        *,
        token: str,
        base_url: str = "https://sentry.io/api/0",
        session: requests.Session | None = None,
    ) -> None:
        if not token:
            raise ValueError("Sentry auth token is required")

        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
                "User-Agent": "sentry-explorer",
            }
        )

    def close(self) -> None:
        self._session.close()

    def _get(self, path: str, *, params: dict[str, str] | None = None) -> Any:
        url = f"{self._base_url}/{path.lstrip('/')}"
        resp = self._session.get(url, params=params, timeout=30)
        if not resp.ok:
            logger.warning(
                "Sentry API request failed", extra={"path": path, "status": resp.status_code}
            )
            raise SentryApiError(status_code=resp.status_code, body=resp.text)
        return resp.json()

    def list_projects(self, org_slug: str) -> list[Project]:
        """List every project of ``org_slug``, sorted by name (case-insensitive)."""

        data = self._get(
            f"organizations/{org_slug}/projects/",
            params={"all_projects": "1", "per_page": "100"},
        )
        projects = [
            Project(
                slug=str(item["slug"]),
                name=str(item.get("name") or item["slug"]),
                platform=item.get("platform"),
                status=item.get("status"),
            )
            for item in data
            if isinstance(item, dict)
        ]
        projects.sort(key=lambda p: p.name.lower())
        return projects

    def list_issues(self, org_slug: str, project_slug: str) -> list[Issue]:
        """List unresolved issues seen in the last 14 days, most recent first."""

        data = self._get(
            f"projects/{org_slug}/{project_slug}/issues/",
            params={"statsPeriod": "14d", "query": "is:unresolved", "sort": "date"},
        )
        return [
            Issue(
                id=str(item["id"]),
                title=str(item.get("title", "")),
                status=str(item.get("status", "")),
                level=str(item.get("level", "")),
                culprit=str(item.get("culprit") or ""),
                last_seen=str(item.get("lastSeen", "")),
                count=int(item.get("count", 0)),
                user_count=int(item.get("userCount", 0)),
            )
            for item in data
            if isinstance(item, dict)
        ]
