"""Tests for reading discovery options from the environment."""

from pathlib import Path

import pytest

from gitdiscover.environment import EnvironmentOptions, parse_git_bool
from gitdiscover.errors import InvalidEnvironmentValue
from gitdiscover.types import DiscoveryOptions


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("true", True),
        ("Yes", True),
        ("ON", True),
        ("1", True),
        ("-3", True),
        ("false", False),
        ("no", False),
        ("off", False),
        ("0", False),
        ("", False),
    ],
)
def test_parse_git_bool(value: str, expected: bool) -> None:
    assert parse_git_bool("SOME_VAR", value) is expected


def test_parse_git_bool_rejects_other_words() -> None:
    with pytest.raises(InvalidEnvironmentValue) as exc_info:
        parse_git_bool("SOME_VAR", "maybe")

    assert exc_info.value.name == "SOME_VAR"
    assert exc_info.value.value == "maybe"
    assert "bad value 'maybe' for SOME_VAR" in str(exc_info.value)


class TestEnvironmentOptions:
    """Tests for EnvironmentOptions."""

    def test_from_environ_reads_both_variables(self) -> None:
        env = EnvironmentOptions.from_environ(
            {
                "GIT_CEILING_DIRECTORIES": "/a:/b",
                "GIT_DISCOVERY_ACROSS_FILESYSTEM": "yes",
                "UNRELATED": "x",
            }
        )

        assert env.ceiling_directories == "/a:/b"
        assert env.across_filesystem == "yes"

    def test_unset_variables_mean_defaults(self) -> None:
        env = EnvironmentOptions.from_environ({})

        options = env.to_discovery_options(Path("/work"))

        assert len(options.ceilings) == 0
        assert options.cross_fs is False

    def test_cross_fs_invalid_value_raises(self) -> None:
        env = EnvironmentOptions(across_filesystem="sometimes")

        with pytest.raises(InvalidEnvironmentValue):
            env.cross_fs()

    def test_to_discovery_options_keeps_base_fields(self) -> None:
        env = EnvironmentOptions(ceiling_directories="/srv:relative", across_filesystem="1")
        base = DiscoveryOptions(require_ceiling_match=True, dot_git_only=True, max_symlinks=4)

        options = env.to_discovery_options(Path("/work"), base=base)

        assert options.ceilings.directories == (Path("/srv"), Path("/work/relative"))
        assert options.cross_fs is True
        assert options.require_ceiling_match is True
        assert options.dot_git_only is True
        assert options.max_symlinks == 4
