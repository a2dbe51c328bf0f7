"""Markdown rewrites applied to pandoc output.

These undo pandoc's defensive escaping where the target renderer needs the
raw syntax, and consume the sentinels injected by the pre-processor.
"""

import re
from functools import partial
from typing import List

from .pre_processor import Stage, apply_stages
from .sentinels import DEFAULT_SENTINELS, FENCED_BLOCK_MARK, INLINE_CODE_MARK, SentinelRegistry

# Run of "\*" / "\>" at the start of a line
ESCAPED_LINE_START_PATTERN = re.compile(r'^((?:\\[*>])+)', re.MULTILINE)

# Non-empty line not starting with "*", followed by a "*" line
LIST_WITHOUT_BLANK_LINE_PATTERN = re.compile(r'^([^*\n].*)\n\*', re.MULTILINE)

ESCAPED_BLOCKQUOTE_PATTERN = re.compile(r'^&gt; ', re.MULTILINE)


def unescape_line_start_markers(markdown: str) -> str:
    """Remove the backslash pandoc puts before "*" and ">" at line start."""
    return ESCAPED_LINE_START_PATTERN.sub(lambda m: m.group(1).replace('\\', ''), markdown)


def ensure_blank_line_before_lists(markdown: str) -> str:
    """Insert a blank line before a list that directly follows text.

    The target renderer only starts a list after a blank line.
    """
    return LIST_WITHOUT_BLANK_LINE_PATTERN.sub('\\1\n\n*', markdown)


def remove_fenced_block_marker(markdown: str, mark: str = FENCED_BLOCK_MARK) -> str:
    """Drop the sentinel class pandoc copied onto the code fence."""
    return markdown.replace(' ' + mark, '')


def restore_inline_code(markdown: str, mark: str = INLINE_CODE_MARK) -> str:
    """Turn the inline code sentinel into a real backtick."""
    return markdown.replace(mark, '`')


def unescape_wiki_links(markdown: str) -> str:
    """Un-escape "[[wiki page]]" links, pandoc does not know them."""
    return markdown.replace('\\[\\[', '[[').replace('\\]\\]', ']]')


def unescape_blockquote_marker(markdown: str) -> str:
    """Turn a line-start "&gt; " back into a "> " blockquote marker."""
    return ESCAPED_BLOCKQUOTE_PATTERN.sub('> ', markdown)


def build_post_processing_stages(sentinels: SentinelRegistry = DEFAULT_SENTINELS) -> List[Stage]:
    """Return the ordered post-processing stages for the given sentinels."""
    return [
        Stage('unescape_line_start_markers', unescape_line_start_markers),
        Stage('ensure_blank_line_before_lists', ensure_blank_line_before_lists),
        Stage('remove_fenced_block_marker',
              partial(remove_fenced_block_marker, mark=sentinels.fenced_block_mark)),
        Stage('restore_inline_code',
              partial(restore_inline_code, mark=sentinels.inline_code_mark)),
        Stage('unescape_wiki_links', unescape_wiki_links),
        Stage('unescape_blockquote_marker', unescape_blockquote_marker),
    ]


def post_process(markdown: str, sentinels: SentinelRegistry = DEFAULT_SENTINELS) -> str:
    """Fix up pandoc's Markdown output for the target renderer.

    Args:
        markdown: Markdown produced by pandoc

    Returns:
        Final Markdown text
    """
    return apply_stages(markdown, build_post_processing_stages(sentinels))
