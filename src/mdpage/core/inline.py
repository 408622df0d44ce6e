"""Inline span formatting: an ordered cascade of pattern substitutions.

Rules run in the order of INLINE_RULES and each one sees the output of the
previous rule. The order is part of the output contract: the image rule must
run before the link rule (an image is a link prefixed with `!`) and bold+italic
before bold before italic. Markup that must stay intact (link targets, whole
image figures) is sealed into a NUL-delimited hex token by the rule that
emits it and unsealed after the last rule, so later rules never re-match it.
"""

import re
from dataclasses import dataclass
from functools import reduce
from typing import Callable, Iterator, Union

from mdpage.core.utils.escape import escape_jsx_text


Replacement = Union[str, Callable[[re.Match], str]]

IMAGE_RE = re.compile(r'!\[([^\]]*)\]\(([^)\s]+)(?:\s+"([^"]*)")?\)')
SEALED_RE = re.compile('\x00([0-9a-f]*)\x00')
# A link whose label may itself hold an image.
LINK_SPAN_RE = re.compile(r'\[(?:[^\[\]]|!\[[^\]]*\]\([^)]*\))*\]\([^)]+\)')

FIGCAPTION_STYLE = '{{ color: "var(--muted-color)", fontSize: "0.875rem", fontStyle: "italic" }}'
LINK_STYLE = '{{ color: "var(--link-color)" }}'
STRONG_STYLE = '{{ fontWeight: 600 }}'
CODE_STYLE = '{{ backgroundColor: "var(--code-bg)", fontFamily: "var(--code-font)", fontSize: "0.875em" }}'
MARK_STYLE = '{{ backgroundColor: "var(--blockquote-bg)", padding: "0.125em 0.25em", borderRadius: "3px" }}'


@dataclass(frozen=True)
class InlineRule:
    """A single matcher/replacer pair; `plain` is the replacement used when stripping."""
    name: str
    pattern: re.Pattern
    replacement: Replacement
    plain: str = r'\1'

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)

    def strip(self, text: str) -> str:
        return self.pattern.sub(self.plain, text)


def _attr(value: str) -> str:
    return value.replace('"', '&quot;')


def seal(markup: str) -> str:
    """Hide markup from later rules; it comes back out in unseal()."""
    return f'\x00{markup.encode("utf-8").hex()}\x00'


def unseal(text: str) -> str:
    return SEALED_RE.sub(lambda m: bytes.fromhex(m.group(1)).decode('utf-8'), text)


def in_code_span(text: str, pos: int) -> bool:
    """True when pos sits between an opening and closing backtick."""
    return text.count('`', 0, pos) % 2 == 1


def standalone_images(text: str) -> Iterator[re.Match]:
    """Image matches that are neither inside a code span nor inside a link label."""
    labels = [m.span() for m in LINK_SPAN_RE.finditer(text)]
    for m in IMAGE_RE.finditer(text):
        if in_code_span(text, m.start()):
            continue
        if any(start < m.start() and m.end() <= end for start, end in labels):
            continue
        yield m


def image_caption(alt: str, title: str | None) -> str:
    """Caption text for an image: the title when present, else the alt text."""
    return title or alt


def figure(url: str, alt: str, caption: str) -> str:
    """Standalone figure markup shared by inline images and ImageBlocks.

    Alt and caption are entity-escaped here, so raw block text and text that
    already went through format_inline are both safe.
    """
    img = (
        f'<img src="{_attr(url)}" alt="{_attr(escape_jsx_text(alt))}" '
        f'className="w-full rounded-lg shadow-sm" style={{{{ maxWidth: "100%" }}}} />'
    )
    cap = ''
    if caption:
        cap = (
            f'<figcaption className="text-center mt-3" style={FIGCAPTION_STYLE}>'
            f'{escape_jsx_text(caption)}</figcaption>'
        )
    return f'<figure className="my-8">{img}{cap}</figure>'


def _image(m: re.Match) -> str:
    if in_code_span(m.string, m.start()):
        return m.group(0)
    alt, url, title = m.group(1), m.group(2), m.group(3)
    # Break out of the enclosing paragraph, emit the figure, reopen.
    return f'</p>{seal(figure(url, alt, image_caption(alt, title)))}<p>'


def _link(m: re.Match) -> str:
    if in_code_span(m.string, m.start()):
        return m.group(0)
    # An image inside a label stays inside the anchor.
    label = re.sub('</p>(\x00[0-9a-f]*\x00)<p>', r'\1', m.group(1))
    return (
        f'<a href="{seal(_attr(m.group(2)))}" '
        f'className="underline underline-offset-4 decoration-1 transition-colors hover:opacity-70" '
        f'style={LINK_STYLE}>{label}</a>'
    )


INLINE_RULES: tuple[InlineRule, ...] = (
    InlineRule('image', IMAGE_RE, _image),
    InlineRule('link', re.compile(r'\[([^\]]+)\]\(([^)]+)\)'), _link),
    InlineRule('bold_italic', re.compile(r'\*\*\*(.+?)\*\*\*'), r'<strong><em>\1</em></strong>'),
    InlineRule('bold', re.compile(r'\*\*(.+?)\*\*'), rf'<strong style={STRONG_STYLE}>\1</strong>'),
    InlineRule('bold_underscore', re.compile(r'__(.+?)__'), rf'<strong style={STRONG_STYLE}>\1</strong>'),
    InlineRule('italic', re.compile(r'\*(.+?)\*'), r'<em>\1</em>'),
    InlineRule('italic_underscore', re.compile(r'_(.+?)_'), r'<em>\1</em>'),
    InlineRule(
        'code',
        re.compile(r'`([^`]+)`'),
        rf'<code className="px-1.5 py-0.5 rounded text-sm" style={CODE_STYLE}>\1</code>',
    ),
    InlineRule('strikethrough', re.compile(r'~~(.+?)~~'), r'<s>\1</s>'),
    InlineRule('highlight', re.compile(r'==(.+?)=='), rf'<mark style={MARK_STYLE}>\1</mark>'),
)


def format_inline(text: str) -> str:
    """Render a single inline run (paragraph, item, cell, quote, heading) to JSX."""
    text = escape_jsx_text(text.replace('\x00', ''))
    return unseal(reduce(lambda acc, rule: rule.apply(acc), INLINE_RULES, text))


def strip_inline(text: str) -> str:
    """Remove inline markers but keep their inner text (image -> alt, link -> label)."""
    return reduce(lambda acc, rule: rule.strip(acc), INLINE_RULES, text)
