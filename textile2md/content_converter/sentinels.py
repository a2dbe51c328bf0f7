"""Sentinel tokens used to shield content across the pandoc call.

Pandoc mangles a few Textile constructs it does not understand. Before
conversion those constructs are marked with plain-prose tokens that pandoc
copies through untouched, and after conversion the tokens are turned back
into the intended Markdown.
"""

import re
from dataclasses import dataclass

from .errors import SentinelError

# Replaced with a backtick after conversion
INLINE_CODE_MARK = "pandoc-unescaped-single-backtick"

# Injected as a <pre> class so pandoc emits a fenced block, then removed
FENCED_BLOCK_MARK = "force-pandoc-to-output-fenced-code-block"

# Lowercase words joined by single hyphens, e.g. "some-marker-name"
_SENTINEL_PATTERN = re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)+$')


def validate_sentinel(name: str, token: str) -> None:
    """Check that a token is safe to use as a sentinel.

    A safe token is made of lowercase ASCII words joined by hyphens. None of
    those characters mean anything to Textile or Markdown in prose context,
    and the mandatory hyphen keeps the token from reading as an ordinary word.

    Args:
        name: Name of the sentinel (used in the error message)
        token: Token value to check

    Raises:
        SentinelError: If the token is empty or contains unsafe characters
    """
    if not token:
        raise SentinelError(name, token, "token cannot be empty")
    if not _SENTINEL_PATTERN.match(token):
        raise SentinelError(
            name,
            token,
            "token must be lowercase words joined by hyphens (a-z, 0-9, '-')"
        )


@dataclass(frozen=True)
class SentinelRegistry:
    """Pair of sentinel tokens used by one conversion pipeline.

    Both tokens are validated on construction, so a registry that exists is
    a registry that is safe to use.

    Attributes:
        inline_code_mark: Marks both ends of an @-delimited code span
        fenced_block_mark: Class injected into <pre> to force fenced output
    """
    inline_code_mark: str = INLINE_CODE_MARK
    fenced_block_mark: str = FENCED_BLOCK_MARK

    def __post_init__(self):
        validate_sentinel('inline_code_mark', self.inline_code_mark)
        validate_sentinel('fenced_block_mark', self.fenced_block_mark)

        if self.inline_code_mark == self.fenced_block_mark:
            raise SentinelError(
                'fenced_block_mark',
                self.fenced_block_mark,
                "must differ from inline_code_mark"
            )
        # Removing one token must never eat part of the other
        if (self.inline_code_mark in self.fenced_block_mark
                or self.fenced_block_mark in self.inline_code_mark):
            raise SentinelError(
                'fenced_block_mark',
                self.fenced_block_mark,
                "tokens must not contain each other"
            )

    @property
    def tokens(self):
        return (self.inline_code_mark, self.fenced_block_mark)


DEFAULT_SENTINELS = SentinelRegistry()
