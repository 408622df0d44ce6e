"""Escaping of user text for the generated TSX module"""


def escape_jsx_content(text: str) -> str:
    """Escape text destined for a template literal: backslash, backtick and `$`."""
    return (
        text.replace('\\', '\\\\')
        .replace('`', '\\`')
        .replace('$', '\\$')
    )


def escape_jsx(text: str) -> str:
    """Like escape_jsx_content, but also escapes `{` and `}` for attribute-like contexts."""
    return escape_jsx_content(text).replace('{', '\\{').replace('}', '\\}')


def escape_jsx_text(text: str) -> str:
    """Replace characters that would open a JSX element or expression with HTML entities."""
    return (
        text.replace('<', '&lt;')
        .replace('>', '&gt;')
        .replace('{', '&#123;')
        .replace('}', '&#125;')
    )
