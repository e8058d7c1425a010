"""
imagepub — Structured error catalog.

Every error has a code, human message, and suggested fix.
Surfaces (CLI, API) render these via to_dict(); raw tracebacks stay in the log.
"""

from __future__ import annotations

from typing import Any


class PublishError(Exception):
    """Base error with structured code + suggestion."""

    def __init__(self, code: str, message: str, suggestion: str = "", detail: Any = None):
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.detail = detail
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "error_code": self.code,
            "message": self.message,
        }
        if self.suggestion:
            d["suggestion"] = self.suggestion
        if self.detail:
            d["detail"] = self.detail
        return d


class InvalidModeError(PublishError):
    def __init__(self, mode: str):
        self.mode = mode
        super().__init__(
            code="INVALID_MODE",
            message=f"Unknown publish mode: {mode!r}",
            suggestion="Use 'nightly' (default) or 'release'.",
        )


class MissingVersionError(PublishError):
    def __init__(self, key: str = "version"):
        super().__init__(
            code="MISSING_VERSION",
            message=f"Release mode requires a version, but '{key}' is empty or missing",
            suggestion=f"Set {key}=<x.y.z> in the properties file before a release run.",
        )


class PropertiesNotFoundError(PublishError):
    def __init__(self, path: str):
        super().__init__(
            code="PROPERTIES_NOT_FOUND",
            message=f"Properties file not found: {path}",
            suggestion="Run from the repository root or set PUBLISH_PROPERTIES_FILE.",
        )


class MissingCredentialsError(PublishError):
    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            code="MISSING_CREDENTIALS",
            message=f"Missing registry credentials: {', '.join(missing)}",
            suggestion="Export the variables or add them to .env before publishing.",
            detail=missing,
        )


class ExternalToolFailure(PublishError):
    def __init__(
        self,
        tool: str,
        returncode: int,
        stderr: str = "",
        code: str | None = None,
        message: str | None = None,
        suggestion: str | None = None,
    ):
        self.tool = tool
        self.returncode = returncode
        super().__init__(
            code=code or f"{tool.upper().replace('-', '_')}_FAILED",
            message=message or f"{tool} exited with status {returncode}",
            suggestion=suggestion or f"Inspect the {tool} output above; the run was aborted at this step.",
            detail=stderr[-2000:] if stderr else None,
        )


class ToolNotFoundError(ExternalToolFailure):
    def __init__(self, tool: str):
        super().__init__(
            tool,
            returncode=127,
            code="TOOL_NOT_FOUND",
            message=f"Executable not found on PATH: {tool}",
            suggestion=f"Install {tool} on the runner image.",
        )


class ToolTimeoutError(ExternalToolFailure):
    def __init__(self, tool: str, timeout_s: float):
        super().__init__(
            tool,
            returncode=-1,
            code="TOOL_TIMEOUT",
            message=f"{tool} timed out after {timeout_s:.0f}s",
            suggestion="Raise PUBLISH_TOOL_TIMEOUT or check the runner for stalls.",
        )


class RegistryQueryError(PublishError):
    def __init__(self, url: str, status: int, body: str = ""):
        super().__init__(
            code="REGISTRY_QUERY_FAILED",
            message=f"Registry lookup {url} returned HTTP {status}",
            suggestion="Check registry availability and retry the run.",
            detail=body[:500] if body else None,
        )


class ReleaseTagExistsError(PublishError):
    def __init__(self, tag: str):
        super().__init__(
            code="RELEASE_TAG_EXISTS",
            message=f"Release tag already published: {tag}",
            suggestion="Release tags are immutable. Bump the version or pass --allow-overwrite.",
        )
