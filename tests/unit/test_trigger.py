"""Unit tests for trigger resolution and the repository guard."""

import json

from imagepub.release.trigger import load_event, mode_from_event, repository_allowed


class TestModeFromEvent:
    def test_schedule_is_nightly(self):
        assert mode_from_event("schedule", {"schedule": "0 15 * * *"}) == ""

    def test_dispatch_reads_input(self):
        assert mode_from_event("workflow_dispatch", {"inputs": {"mode": "release"}}) == "release"

    def test_dispatch_without_inputs(self):
        assert mode_from_event("workflow_dispatch", {}) == ""
        assert mode_from_event("workflow_dispatch", None) == ""

    def test_other_events_are_nightly(self):
        assert mode_from_event("push", {"inputs": {"mode": "release"}}) == ""


class TestLoadEvent:
    def test_reads_payload_file(self, tmp_path):
        path = tmp_path / "event.json"
        path.write_text(json.dumps({"inputs": {"mode": "release"}}), encoding="utf-8")
        event = load_event({
            "GITHUB_EVENT_NAME": "workflow_dispatch",
            "GITHUB_EVENT_PATH": str(path),
            "GITHUB_REPOSITORY": "deepjavalibrary/djl",
        })
        assert event.mode == "release"
        assert event.repository == "deepjavalibrary/djl"

    def test_empty_environment(self):
        event = load_event({})
        assert event.name == ""
        assert event.mode == ""
        assert event.payload == {}


class TestRepositoryGuard:
    def test_same_repository(self):
        assert repository_allowed("deepjavalibrary/djl", "deepjavalibrary/djl")

    def test_fork_blocked(self):
        assert not repository_allowed("someone/djl", "deepjavalibrary/djl")

    def test_unset_never_blocks(self):
        assert repository_allowed("", "deepjavalibrary/djl")
        assert repository_allowed("someone/djl", "")
