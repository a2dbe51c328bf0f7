"""Textile rewrites applied before the text is handed to pandoc.

Each rule is a plain ``str -> str`` function. The order in
build_pre_processing_stages() matters: later rules assume the earlier ones
have already run (e.g. the <pre> rules expect <code> to be collapsed).
"""

import logging
import re
from functools import partial
from typing import Callable, List, NamedTuple

from .sentinels import DEFAULT_SENTINELS, FENCED_BLOCK_MARK, INLINE_CODE_MARK, SentinelRegistry

logger = logging.getLogger(__name__)


class Stage(NamedTuple):
    """A named text rewrite."""
    name: str
    transform: Callable[[str], str]


# "@git@github.com@": non-whitespace run with an inner "@", delimited by "@"
AT_CODE_SPAN_PATTERN = re.compile(r'@(\S+@\S+)@')

# "|\2. " or "|/2. " colspan/rowspan prefix (https://github.com/jgm/pandoc/issues/22)
CELL_SPAN_PATTERN = re.compile(r'\|[/\\]\d\. ')

# "|>. ", "|<. " or "|=. " alignment prefix
CELL_ALIGNMENT_PATTERN = re.compile(r'\|[<>=]\. ')

CODE_CLASS_PATTERN = re.compile(r'(<pre)(><code)( class="[^"]*")(>)')
CODE_OPEN_IN_PRE_PATTERN = re.compile(r'(<pre[^>]*>)<code>')
CODE_CLOSE_IN_PRE_PATTERN = re.compile(r'</code>(</pre>)')

BARE_PRE_MID_LINE_PATTERN = re.compile(r'([^\n]<pre)(>)')
PRE_MID_LINE_PATTERN = re.compile(r'([^\n])(<pre)')

# Makes pandoc's textile reader crawl (https://github.com/jgm/pandoc/issues/3020)
PATHOLOGICAL_LIST_PATTERN = re.compile(r'- {10,}# (\d+)')


def protect_inline_code(text: str, mark: str = INLINE_CODE_MARK) -> str:
    """Swap the "@" delimiters of code spans that contain "@" for a sentinel.

    Textile allows "@git@github.com@", pandoc does not. The inner content is
    left untouched and the sentinel becomes a backtick after conversion.
    """
    return AT_CODE_SPAN_PATTERN.sub(lambda m: f"{mark}{m.group(1)}{mark}", text)


def strip_cell_span_modifiers(text: str) -> str:
    """Drop colspan/rowspan cell notation, pandoc has no merged cells."""
    return CELL_SPAN_PATTERN.sub('| ', text)


def strip_cell_alignment_modifiers(text: str) -> str:
    """Drop cell alignment notation, pandoc does not support it in Textile."""
    return CELL_ALIGNMENT_PATTERN.sub('| ', text)


def relocate_code_language_class(text: str) -> str:
    """Move ``class`` from <code> to <pre>.

    Pandoc takes the fenced block language from the <pre> class only.
    """
    return CODE_CLASS_PATTERN.sub(r'\1\3\2\4', text)


def collapse_nested_code_tag(text: str) -> str:
    """Remove the <code> directly inside <pre>.

    Pandoc would otherwise keep it literally inside the code block.
    """
    text = CODE_OPEN_IN_PRE_PATTERN.sub(r'\1', text)
    return CODE_CLOSE_IN_PRE_PATTERN.sub(r'\1', text)


def force_fenced_code_blocks(text: str, mark: str = FENCED_BLOCK_MARK) -> str:
    """Inject a sentinel class into every bare <pre> that is not at line start.

    With a class pandoc always writes a fenced block. Without one it may pick
    an indented block, which inside a list needs an empty "<!-- -->" comment
    that the target renderer does not support.
    """
    return BARE_PRE_MID_LINE_PATTERN.sub(
        lambda m: f'{m.group(1)} class="{mark}"{m.group(2)}', text
    )


def ensure_blank_line_before_pre(text: str) -> str:
    """Put a blank line before every <pre> that is not at line start.

    Otherwise a list containing <pre> is not read as a list at all.
    """
    return PRE_MID_LINE_PATTERN.sub('\\1\n\n\\2', text)


def sanitize_pathological_list(text: str) -> str:
    """Rewrite "-          # 3" into the list item "* 3".

    Narrow fix for one known input shape that makes pandoc extremely slow.
    It is not a general defence against malformed input.
    """
    return PATHOLOGICAL_LIST_PATTERN.sub(r'* \1', text)


def build_pre_processing_stages(sentinels: SentinelRegistry = DEFAULT_SENTINELS) -> List[Stage]:
    """Return the ordered pre-processing stages for the given sentinels."""
    return [
        Stage('protect_inline_code',
              partial(protect_inline_code, mark=sentinels.inline_code_mark)),
        Stage('strip_cell_span_modifiers', strip_cell_span_modifiers),
        Stage('strip_cell_alignment_modifiers', strip_cell_alignment_modifiers),
        Stage('relocate_code_language_class', relocate_code_language_class),
        Stage('collapse_nested_code_tag', collapse_nested_code_tag),
        Stage('force_fenced_code_blocks',
              partial(force_fenced_code_blocks, mark=sentinels.fenced_block_mark)),
        Stage('ensure_blank_line_before_pre', ensure_blank_line_before_pre),
        Stage('sanitize_pathological_list', sanitize_pathological_list),
    ]


def apply_stages(text: str, stages: List[Stage]) -> str:
    """Run text through each stage in order."""
    for stage in stages:
        text = stage.transform(text)
        logger.debug(f"  stage {stage.name}: {len(text)} chars")
    return text


def pre_process(text: str, sentinels: SentinelRegistry = DEFAULT_SENTINELS) -> str:
    """Normalize raw Textile so pandoc converts it the way we want.

    Args:
        text: Raw, non-empty Textile text

    Returns:
        Normalized Textile text
    """
    return apply_stages(text, build_pre_processing_stages(sentinels))
