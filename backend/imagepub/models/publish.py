"""
imagepub — Typed publish request model.

The trigger's loosely-typed mode string is parsed into PublishMode once,
at the boundary. Everything downstream works against PublishRequest.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, ConfigDict, Field

from imagepub.errors import InvalidModeError, MissingVersionError


class PublishMode(str, enum.Enum):
    NIGHTLY = "nightly"
    RELEASE = "release"

    @classmethod
    def parse(cls, raw: "str | PublishMode | None") -> "PublishMode":
        """Empty or missing input means nightly; anything but an exact member value is rejected."""
        if isinstance(raw, PublishMode):
            return raw
        if raw is None or raw == "":
            return cls.NIGHTLY
        try:
            return cls(raw)
        except ValueError:
            raise InvalidModeError(raw)


class PublishRequest(BaseModel):
    """One publish run's inputs. Built once, never mutated."""

    model_config = ConfigDict(frozen=True)

    mode: PublishMode = PublishMode.NIGHTLY
    version: str = ""
    push_enabled: bool = True

    @classmethod
    def create(
        cls,
        mode: "str | PublishMode | None",
        version: str | None = None,
        push_enabled: bool = True,
    ) -> "PublishRequest":
        parsed = PublishMode.parse(mode)
        version = (version or "").strip()
        if parsed is PublishMode.RELEASE and not version:
            raise MissingVersionError()
        return cls(mode=parsed, version=version, push_enabled=push_enabled)


class TagSelection(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: str = Field(min_length=1)
    push: bool = True

    @property
    def repository(self) -> str:
        return self.tag.rsplit(":", 1)[0]

    @property
    def reference(self) -> str:
        return self.tag.rsplit(":", 1)[1]


class ImageBuildSpec(BaseModel):
    """Arguments for one image build, handed to the docker collaborator."""

    context: str = "."
    dockerfile: str
    tags: list[str] = Field(min_length=1)
    build_args: dict[str, str] = Field(default_factory=dict)
    push: bool = False
