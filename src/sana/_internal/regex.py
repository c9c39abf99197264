"""RE2 compilation shared by the pattern compiler and the type registry.

RE2 matches in time linear in the input, whatever the pattern, so a
hostile path cannot make dispatch backtrack.
"""

from typing import Any

import re2

RegexError = re2.error


def _options() -> Any:
    options = re2.Options()
    # "." also matches newlines, like re.DOTALL
    options.dot_nl = True
    # Failures surface as RegexError; RE2 would also print them to stderr
    options.log_errors = False
    return options


OPTIONS = _options()


def compile_regex(source: str) -> Any:
    """Compile *source* with RE2. Raises ``RegexError`` if it is invalid."""
    return re2.compile(source, OPTIONS)


def escape(text: str) -> str:
    """Escape *text* so RE2 matches it literally."""
    return re2.escape(text)
