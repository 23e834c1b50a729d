"""Text cleanup applied to assistant output before it is rendered as HTML.

The assistant is instructed to answer in plain HTML, but models still wrap
answers in Markdown code fences now and then. This is a textual cleanup,
not an HTML sanitizer: everything else is rendered verbatim.
"""

import re

# ```html\n...``` or ```\n...```
_FENCED_BLOCK = re.compile(r"```[a-zA-Z]*\n([\s\S]*?)```")
_FENCE = "```"


def sanitize_assistant(text: str | None) -> str:
    """Strip Markdown code fences while keeping the fenced text.

    The output never contains a triple backtick, so the function is
    idempotent and safe to re-run over a growing buffer.

    Args:
        text: Raw (possibly partial) assistant text.

    Returns:
        Text with fenced-block delimiters and stray fences removed.
    """
    if not text:
        return ""
    out = _FENCED_BLOCK.sub(r"\1", str(text))
    return out.replace(_FENCE, "")
