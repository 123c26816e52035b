"""Tests for ContextVar-based parse configuration.

Validates defaults, validation, thread isolation and context manager behavior.
"""

from threading import Thread

import pytest

from plantilla import (
    ConfigError,
    ParseConfig,
    Parser,
    get_parse_config,
    parse,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from plantilla.nodes import Text, Variable


class TestParseConfigDataclass:
    """Test ParseConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        """Default config uses the classic delimiters."""
        config = ParseConfig()
        assert (config.block_start, config.block_end) == ("{%", "%}")
        assert (config.variable_start, config.variable_end) == ("{{", "}}")
        assert (config.comment_start, config.comment_end) == ("{#", "#}")
        assert config.trim_tags is False
        assert config.max_depth == 128

    def test_immutability(self) -> None:
        """Config is frozen and cannot be modified."""
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.trim_tags = True  # type: ignore[misc]

    def test_hashable(self) -> None:
        assert hash(ParseConfig(trim_tags=True)) == hash(ParseConfig(trim_tags=True))

    @pytest.mark.parametrize("field", ["block_start", "variable_end", "comment_start"])
    def test_empty_delimiter_rejected(self, field: str) -> None:
        with pytest.raises(ConfigError, match=field):
            ParseConfig(**{field: ""})

    def test_non_positive_max_depth_rejected(self) -> None:
        with pytest.raises(ConfigError):
            ParseConfig(max_depth=0)

    def test_config_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            ParseConfig(block_end="")


class TestFromDict:
    """ParseConfig.from_dict accepts classic option names."""

    def test_upper_case_keys(self) -> None:
        config = ParseConfig.from_dict(
            {"BLOCK_START": "<%", "BLOCK_END": "%>", "TRIM_TAGS": True}
        )
        assert config.block_start == "<%"
        assert config.block_end == "%>"
        assert config.trim_tags is True

    def test_lower_case_keys(self) -> None:
        assert ParseConfig.from_dict({"max_depth": 5}).max_depth == 5

    def test_unknown_keys_ignored(self) -> None:
        assert ParseConfig.from_dict({"searchpath": "/tmp", "cache": False}) == ParseConfig()

    def test_invalid_value_still_validated(self) -> None:
        with pytest.raises(ConfigError):
            ParseConfig.from_dict({"VARIABLE_START": ""})


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        """Reset config after each test."""
        reset_parse_config()

    def test_default_config(self) -> None:
        """Default config is returned when not explicitly set."""
        assert get_parse_config() == ParseConfig()

    def test_set_and_get(self) -> None:
        """set_parse_config() changes the current config."""
        custom = ParseConfig(trim_tags=True)
        set_parse_config(custom)
        assert get_parse_config() is custom

    def test_reset(self) -> None:
        set_parse_config(ParseConfig(trim_tags=True))
        reset_parse_config()
        assert get_parse_config().trim_tags is False

    def test_parser_reads_context(self) -> None:
        set_parse_config(ParseConfig(variable_start="[[", variable_end="]]"))
        nodes = Parser("a [[ b ]] {{ c }}").parse()
        assert [type(n) for n in nodes] == [Text, Variable, Text]
        assert nodes[2].content == " {{ c }}"


class TestContextManager:
    """Test parse_config_context() context manager."""

    def test_restores_previous(self) -> None:
        outer = ParseConfig(max_depth=10)
        set_parse_config(outer)
        try:
            with parse_config_context(ParseConfig(trim_tags=True)):
                assert get_parse_config().trim_tags is True
            assert get_parse_config() is outer
        finally:
            reset_parse_config()

    def test_restores_on_exception(self) -> None:
        with pytest.raises(RuntimeError):
            with parse_config_context(ParseConfig(trim_tags=True)):
                raise RuntimeError("boom")
        assert get_parse_config().trim_tags is False

    def test_parse_config_argument_is_scoped(self) -> None:
        parse("{{ a }}", config=ParseConfig(trim_tags=True))
        assert get_parse_config() == ParseConfig()


class TestThreadIsolation:
    """Config set in one thread is invisible to others."""

    def test_thread_sees_default(self) -> None:
        seen: list[ParseConfig] = []
        set_parse_config(ParseConfig(trim_tags=True))
        try:
            thread = Thread(target=lambda: seen.append(get_parse_config()))
            thread.start()
            thread.join()
        finally:
            reset_parse_config()

        assert seen == [ParseConfig()]

    def test_threads_with_different_delimiters(self) -> None:
        results: dict[str, list[str]] = {}

        def worker(name: str, config: ParseConfig) -> None:
            with parse_config_context(config):
                nodes = Parser("<% x %>[[ y ]]{{ z }}").parse()
            results[name] = [type(n).__name__ for n in nodes]

        threads = [
            Thread(target=worker, args=("default", ParseConfig())),
            Thread(
                target=worker,
                args=("custom", ParseConfig(variable_start="[[", variable_end="]]")),
            ),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results["default"] == ["Text", "Variable"]
        assert results["custom"] == ["Text", "Variable", "Text"]
