"""Minimal GitHub releases client used by ``pyspecify version --latest``."""

from __future__ import annotations

import logging
import os
import ssl
from dataclasses import dataclass

import httpx
import truststore

from pyspecify.core.config import GITHUB_API, GITHUB_OWNER, GITHUB_REPO, USER_AGENT
from pyspecify.errors import GitHubAPIError

logger = logging.getLogger(__name__)

ssl_context = truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)


def github_token(cli_token: str | None = None) -> str | None:
    """Return sanitized GitHub token (cli arg takes precedence) or None."""
    return ((cli_token or os.getenv("GH_TOKEN") or os.getenv("GITHUB_TOKEN") or "").strip()) or None


def auth_headers(cli_token: str | None = None) -> dict:
    """Return Authorization header dict only when a non-empty token exists."""
    token = github_token(cli_token)
    return {"Authorization": f"Bearer {token}"} if token else {}


def build_http_client(skip_tls: bool = False, timeout: float = 30.0) -> httpx.Client:
    verify = False if skip_tls else ssl_context
    if skip_tls:
        logger.warning("TLS verification disabled for GitHub requests")
    return httpx.Client(verify=verify, timeout=timeout, headers={"User-Agent": USER_AGENT})


@dataclass(frozen=True)
class Release:
    tag_name: str
    name: str
    published_at: str
    html_url: str
    assets: tuple[str, ...] = ()


def get_latest_release(
    client: httpx.Client,
    *,
    owner: str = GITHUB_OWNER,
    repo: str = GITHUB_REPO,
    token: str | None = None,
) -> Release:
    api_url = f"{GITHUB_API}/repos/{owner}/{repo}/releases/latest"
    logger.debug("Fetching %s", api_url)
    try:
        response = client.get(api_url, follow_redirects=True, headers=auth_headers(token))
    except httpx.HTTPError as exc:
        raise GitHubAPIError(f"request to {api_url} failed", exc) from exc

    if response.status_code != 200:
        logger.debug("GitHub response body (truncated): %s", response.text[:500])
        raise GitHubAPIError(f"GitHub API returned {response.status_code} for {api_url}")

    try:
        data = response.json()
    except ValueError as exc:
        raise GitHubAPIError("failed to parse release JSON", exc) from exc

    return Release(
        tag_name=data.get("tag_name", ""),
        name=data.get("name") or "",
        published_at=data.get("published_at") or "",
        html_url=data.get("html_url") or "",
        assets=tuple(asset.get("name", "?") for asset in data.get("assets", [])),
    )


__all__ = ["Release", "auth_headers", "build_http_client", "get_latest_release", "github_token"]
