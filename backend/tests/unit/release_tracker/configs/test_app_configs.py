"""Tests for loading the release checklist from the environment."""

import pytest

from release_tracker.configs.app_configs import _load_release_steps
from release_tracker.configs.constants import DEFAULT_RELEASE_STEPS


class TestLoadReleaseSteps:
    def test_defaults_when_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("RELEASE_CHECKLIST_STEPS", raising=False)

        assert _load_release_steps() == DEFAULT_RELEASE_STEPS
        assert len(DEFAULT_RELEASE_STEPS) == 7

    def test_reads_json_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RELEASE_CHECKLIST_STEPS", '["Build", " Ship "]')

        assert _load_release_steps() == ("Build", "Ship")

    @pytest.mark.parametrize("raw", ["[]", '"Build"', '["Build", ""]', "[1, 2]"])
    def test_rejects_invalid_lists(
        self, monkeypatch: pytest.MonkeyPatch, raw: str
    ) -> None:
        monkeypatch.setenv("RELEASE_CHECKLIST_STEPS", raw)

        with pytest.raises(ValueError):
            _load_release_steps()
