"""HTTP probe for GitHub token validation."""

from __future__ import annotations

import requests

from ..constants import GITHUB_API_USER_URL, TOKEN_PROBE_TIMEOUT
from ..core.models import CheckResult


class GitHubAPI:
    """Minimal GitHub REST client used for credential checks."""

    USER_URL = GITHUB_API_USER_URL
    TIMEOUT = TOKEN_PROBE_TIMEOUT

    @staticmethod
    def check_token(username: str, token: str) -> CheckResult:
        """Basic-auth GET /user; success iff HTTP 200."""
        try:
            response = requests.get(
                GitHubAPI.USER_URL,
                auth=(username, token),
                headers={"Accept": "application/vnd.github+json"},
                timeout=GitHubAPI.TIMEOUT,
            )
        except requests.RequestException as exc:
            return CheckResult(ok=False, message=f"Request failed: {exc}")

        message = f"HTTP {response.status_code}"
        if response.status_code == 200:
            try:
                login = response.json().get("login")
            except ValueError:
                login = None
            if login:
                message += f" (authenticated as {login})"
        return CheckResult(ok=response.status_code == 200, message=message)
