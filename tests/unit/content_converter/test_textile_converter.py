"""Unit tests for content_converter.textile_converter module.

pandoc is replaced by FakeConverter, so these tests cover the pipeline
wiring and the rewrites around the converter, not pandoc itself.
"""

import threading
from unittest.mock import MagicMock, patch

import pytest

from textile2md.content_converter import textile_converter
from textile2md.content_converter.errors import ConversionProcessError
from textile2md.content_converter.sentinels import (
    FENCED_BLOCK_MARK,
    INLINE_CODE_MARK,
    SentinelRegistry,
)
from textile2md.content_converter.settings import ConverterSettings
from textile2md.content_converter.textile_converter import TextileConverter, convert
from tests.fixtures.sample_textile import (
    SAMPLE_TEXTILE_AT_CODE,
    SAMPLE_TEXTILE_CODE_BLOCK,
    SAMPLE_TEXTILE_LIST_WITH_PRE,
    SAMPLE_TEXTILE_PATHOLOGICAL,
)
from tests.helpers.fake_converter import FakeConverter, pandoc_like


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Default converter settings and no shared pipeline left from other tests."""
    for var in ('TEXTILE2MD_PANDOC_PATH', 'TEXTILE2MD_TARGET_FORMAT', 'TEXTILE2MD_TIMEOUT'):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(textile_converter, '_default_pipeline', None)
    with patch('textile2md.content_converter.settings.load_dotenv'):
        yield monkeypatch


class TestEmptyInput:
    """Empty documents never reach the converter."""

    @pytest.mark.parametrize("text", [None, ""])
    def test_empty_input_returns_empty_string(self, text):
        fake = FakeConverter()

        assert TextileConverter(converter=fake).convert(text) == ""
        assert not fake.called

    @patch('textile2md.content_converter.textile_converter.PandocConverter')
    def test_empty_input_does_not_create_pandoc(self, mock_pandoc):
        assert TextileConverter().convert("") == ""
        mock_pandoc.assert_not_called()


class TestConvert:
    """Test cases for TextileConverter.convert."""

    def test_at_code_span_becomes_backtick_code(self):
        fake = FakeConverter()

        result = TextileConverter(converter=fake).convert(SAMPLE_TEXTILE_AT_CODE)

        assert result == "Clone `git@github.com:org/repo.git` to start."
        assert "@git@github.com" not in fake.calls[0]

    def test_no_sentinel_in_output(self):
        """Sentinels are internal and never reach the caller."""
        text = SAMPLE_TEXTILE_AT_CODE + "\n\n" + SAMPLE_TEXTILE_LIST_WITH_PRE

        result = TextileConverter(converter=FakeConverter(transform=pandoc_like)).convert(text)

        assert INLINE_CODE_MARK not in result
        assert FENCED_BLOCK_MARK not in result

    def test_colspan_prefix_removed(self):
        result = TextileConverter(converter=FakeConverter()).convert("|\\2. a |")

        assert result.startswith("| ")
        assert "\\2." not in result

    def test_code_block_becomes_one_fence_with_language(self):
        fake = FakeConverter(transform=pandoc_like)

        result = TextileConverter(converter=fake).convert(SAMPLE_TEXTILE_CODE_BLOCK)

        assert fake.calls == ['<pre class="ruby">puts "hello"</pre>']
        assert result == '``` ruby\nputs "hello"\n```'
        assert result.count("```") == 2

    def test_mid_line_pre_becomes_plain_fence(self):
        """A <pre> after list text gets a fence without an info string."""
        fake = FakeConverter(transform=pandoc_like)

        result = TextileConverter(converter=fake).convert(SAMPLE_TEXTILE_LIST_WITH_PRE)

        assert "```\nmake install\n```" in result
        assert f'class="{FENCED_BLOCK_MARK}"' in fake.calls[0]

    def test_pathological_list_is_sanitized_before_converter(self):
        fake = FakeConverter()

        TextileConverter(converter=fake).convert(SAMPLE_TEXTILE_PATHOLOGICAL)

        assert fake.calls == ["* 3"]

    def test_custom_sentinels_are_used(self):
        sentinels = SentinelRegistry(inline_code_mark="code-mark", fenced_block_mark="fence-mark")
        fake = FakeConverter()

        result = TextileConverter(converter=fake, sentinels=sentinels).convert("@a@b@")

        assert fake.calls == ["code-marka@bcode-mark"]
        assert result == "`a@b`"

    def test_convert_is_not_idempotent(self):
        """Running Markdown through the pipeline again changes it."""
        def escape_backticks(text):
            return text.replace("`", "\\`")

        converter = TextileConverter(converter=FakeConverter(transform=escape_backticks))

        first = converter.convert("Use @a@b@ now")
        second = converter.convert(first)

        assert first == "Use `a@b` now"
        assert second != first


class TestConverterFailure:
    """Failures of the external converter."""

    @patch('textile2md.content_converter.textile_converter.post_process')
    def test_failure_raises_and_skips_post_processing(self, mock_post_process):
        fake = FakeConverter(diagnostics="boom", success=False)

        with pytest.raises(ConversionProcessError) as exc_info:
            TextileConverter(converter=fake).convert("h1. Title")

        assert exc_info.value.diagnostics == "boom"
        mock_post_process.assert_not_called()

    def test_module_convert_propagates_failure(self):
        with pytest.raises(ConversionProcessError):
            convert("text", converter=FakeConverter(diagnostics="bad", success=False))


class TestLazyConverter:
    """The default PandocConverter is created on first use."""

    @patch('textile2md.content_converter.textile_converter.PandocConverter')
    def test_pandoc_created_once_from_settings(self, mock_pandoc):
        mock_pandoc.return_value.run.return_value = MagicMock(
            markdown="out", diagnostics="", success=True, returncode=0,
        )
        settings = ConverterSettings(pandoc_path="/usr/bin/pandoc", target_format="gfm", timeout=5.0)
        converter = TextileConverter(settings=settings)

        mock_pandoc.assert_not_called()
        converter.convert("one")
        converter.convert("two")

        mock_pandoc.assert_called_once_with(
            pandoc_path="/usr/bin/pandoc", target_format="gfm", timeout=5.0,
        )

    @patch('textile2md.content_converter.textile_converter.PandocConverter')
    def test_concurrent_first_use_creates_one_converter(self, mock_pandoc):
        mock_pandoc.return_value.run.return_value = MagicMock(
            markdown="out", diagnostics="", success=True, returncode=0,
        )
        converter = TextileConverter()

        threads = [threading.Thread(target=converter.convert, args=("text",)) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=5)

        mock_pandoc.assert_called_once()

    @patch('textile2md.content_converter.textile_converter.PandocConverter')
    def test_default_settings_come_from_environment(self, mock_pandoc, clean_env):
        clean_env.setenv('TEXTILE2MD_PANDOC_PATH', '/opt/pandoc/bin/pandoc')
        clean_env.setenv('TEXTILE2MD_TIMEOUT', '5')
        mock_pandoc.return_value.run.return_value = MagicMock(
            markdown="out", diagnostics="", success=True, returncode=0,
        )

        TextileConverter().convert("text")

        mock_pandoc.assert_called_once_with(
            pandoc_path="/opt/pandoc/bin/pandoc", target_format="markdown_github", timeout=5.0,
        )

    @patch('textile2md.content_converter.textile_converter.PandocConverter')
    def test_module_convert_shares_one_pipeline(self, mock_pandoc, clean_env):
        clean_env.setenv('TEXTILE2MD_TARGET_FORMAT', 'gfm')
        mock_pandoc.return_value.run.return_value = MagicMock(
            markdown="out", diagnostics="", success=True, returncode=0,
        )

        assert convert("first") == "out"
        assert convert("second") == "out"

        mock_pandoc.assert_called_once_with(
            pandoc_path="pandoc", target_format="gfm", timeout=30.0,
        )


class TestConvertValues:
    """Test cases for TextileConverter.convert_values."""

    def test_converts_every_value(self):
        fake = FakeConverter(transform=str.upper)

        result = TextileConverter(converter=fake).convert_values({"en": "hello", "de": "", "fr": None})

        assert result == {"en": "HELLO", "de": "", "fr": ""}
        assert fake.calls == ["hello"]
