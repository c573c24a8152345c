"""Where: src/snapdiff/platform/http/user_agent.py
What: Build the User-Agent string sent with every outbound request.
Why: Centralise identity logic shared by the uploader and remote targets.
"""

from __future__ import annotations

import os

from snapdiff.config.settings import APP_NAME, APP_VERSION


def format_user_agent(app_name: str, app_version: str, project: str | None = None) -> str:
    """Return ``App/Version (project)`` when a project name is available."""

    stripped = (project or "").strip()
    if stripped:
        return f"{app_name}/{app_version} ({stripped})"
    return f"{app_name}/{app_version}"


def resolve_user_agent(project: str | None = None) -> str:
    """Provide the user agent that outbound HTTP calls should send."""

    env = os.getenv("SNAPDIFF_USER_AGENT")
    if env:
        return env
    return format_user_agent(APP_NAME, APP_VERSION, project)


__all__ = ["format_user_agent", "resolve_user_agent"]
