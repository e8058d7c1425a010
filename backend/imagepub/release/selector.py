"""
imagepub — Release tag selection.

  nightly (or empty) → <image>:cpu-nightly
  release            → <image>:<version>-cpu

Pure: no environment reads, no side effects.
"""

from __future__ import annotations

from imagepub.models.publish import PublishMode, PublishRequest, TagSelection

DEFAULT_IMAGE = "deepjavalibrary/djl-spark"
NIGHTLY_TAG = "cpu-nightly"
RELEASE_SUFFIX = "-cpu"
VERSION_BUILD_ARG = "DJL_VERSION"


def select_tag(
    mode: "str | PublishMode | None",
    version: str | None = None,
    image: str = DEFAULT_IMAGE,
) -> TagSelection:
    """
    Decide the image tag and whether to push it.

    Raises InvalidModeError for anything but '', 'nightly' or 'release',
    and MissingVersionError for a release without a version.
    """
    request = PublishRequest.create(mode, version)
    return select_for_request(request, image)


def select_for_request(request: PublishRequest, image: str = DEFAULT_IMAGE) -> TagSelection:
    if request.mode is PublishMode.RELEASE:
        tag = f"{image}:{request.version}{RELEASE_SUFFIX}"
    else:
        tag = f"{image}:{NIGHTLY_TAG}"
    return TagSelection(tag=tag, push=request.push_enabled)


def build_args_for(request: PublishRequest) -> dict[str, str]:
    """Release images are stamped with their version; nightlies are not."""
    if request.mode is PublishMode.RELEASE:
        return {VERSION_BUILD_ARG: request.version}
    return {}
