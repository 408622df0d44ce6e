"""Block codegen: one styled JSX element per parsed block.

Colours and fonts are referenced through CSS custom properties
(`var(--text-color)` etc.) that the page shell binds to the active style.
"""

from functools import singledispatch

from mdpage.core.inline import figure, format_inline
from mdpage.core.models import (
    Block, BlockquoteBlock, CodeBlock, DiagramBlock, HeadingBlock, ImageBlock,
    ListBlock, ListItem, ParagraphBlock, RuleBlock, TableBlock,
)
from mdpage.core.utils.escape import escape_jsx_content, escape_jsx_text


BLOCK_SEPARATOR = "\n            "

HEADING_STYLES: dict[int, tuple[str, str]] = {
    1: ("font-bold first:mt-0 leading-tight",
        'fontFamily: "var(--heading-font)", fontSize: "clamp(2rem, 5vw, 2.75rem)", color: "var(--accent-color)", '
        'letterSpacing: "-0.02em", marginTop: "2.5rem", marginBottom: "0.75rem"'),
    2: ("font-semibold leading-snug",
        'fontFamily: "var(--heading-font)", fontSize: "clamp(1.4rem, 3.5vw, 1.85rem)", color: "var(--accent-color)", '
        'letterSpacing: "-0.015em", marginTop: "2.55rem", marginBottom: "0.8rem"'),
    3: ("font-semibold leading-snug",
        'fontFamily: "var(--heading-font)", fontSize: "clamp(1.15rem, 2.5vw, 1.35rem)", color: "var(--accent-color)", '
        'letterSpacing: "-0.01em", marginTop: "2rem", marginBottom: "0.6rem"'),
    4: ("font-medium uppercase tracking-wider",
        'fontFamily: "var(--heading-font)", fontSize: "0.85rem", color: "var(--muted-color)", '
        'marginTop: "1.5rem", marginBottom: "0.375rem"'),
    5: ("font-medium",
        'fontFamily: "var(--heading-font)", fontSize: "0.8rem", color: "var(--muted-color)", '
        'marginTop: "1.25rem", marginBottom: "0.375rem"'),
    6: ("font-normal uppercase tracking-widest",
        'fontFamily: "var(--heading-font)", fontSize: "0.75rem", color: "var(--muted-color)", '
        'marginTop: "1rem", marginBottom: "0.25rem"'),
}

CHECKED_BOX = "☑"
UNCHECKED_BOX = "☐"


def _style(body: str) -> str:
    """Wrap a JS object body as a JSX style attribute value."""
    return "{{ " + body + " }}"


@singledispatch
def render_block(block) -> str:
    raise TypeError(f"No renderer for block type {type(block).__name__}")


@render_block.register
def _(block: HeadingBlock) -> str:
    classes, style = HEADING_STYLES[block.level]
    tag = f"h{block.level}"
    return (
        f'<{tag} id="{block.id}" className="{classes}" style={_style(style)}>'
        f'{format_inline(block.text)}</{tag}>'
    )


@render_block.register
def _(block: ParagraphBlock) -> str:
    style = _style('color: "var(--text-color)", fontSize: "1.06rem", lineHeight: 1.82, '
                   'marginBottom: "1.45rem", maxWidth: "68ch"')
    return f'<p className="leading-relaxed" style={style}>{format_inline(block.text)}</p>'


def _render_item(item: ListItem) -> str:
    if item.is_task:
        box = CHECKED_BOX if item.checked else UNCHECKED_BOX
        opacity = 1 if item.checked else 0.4
        li_style = _style('listStyle: "none", marginLeft: "-1.5rem", marginBottom: "0.25rem"')
        box_style = _style('marginRight: "0.5rem", opacity: ' + str(opacity))
        return (
            f'<li className="leading-relaxed" style={li_style}>'
            f'<span style={box_style}>{box}</span>{format_inline(item.text)}</li>'
        )
    li_style = _style('marginBottom: "0.25rem"')
    return f'<li className="leading-relaxed" style={li_style}>{format_inline(item.text)}</li>'


@render_block.register
def _(block: ListBlock) -> str:
    tag = "ol" if block.ordered else "ul"
    list_class = "list-decimal" if block.ordered else "list-disc"
    style = _style('color: "var(--text-color)", marginBottom: "1.45rem", lineHeight: 1.72')
    items = "\n              ".join(_render_item(item) for item in block.items)
    return (
        f'<{tag} className="{list_class} pl-6 space-y-0.5" style={style}>\n'
        f'              {items}\n'
        f'            </{tag}>'
    )


@render_block.register
def _(block: BlockquoteBlock) -> str:
    quote_style = _style(
        'borderColor: "var(--blockquote-border)", backgroundColor: "var(--blockquote-bg)", marginLeft: 0, '
        'marginRight: 0, marginBottom: "1.5rem", borderRadius: "0 8px 8px 0", padding: "1.1rem 1.35rem"'
    )
    text_style = _style('color: "var(--muted-color)", fontSize: "1rem"')
    return (
        f'<blockquote className="border-l-[3px] pl-6 py-3 italic" style={quote_style}>\n'
        f'              <p className="leading-relaxed" style={text_style}>{format_inline(block.text)}</p>\n'
        f'            </blockquote>'
    )


@render_block.register
def _(block: CodeBlock) -> str:
    wrapper_style = _style(
        'backgroundColor: "var(--code-bg)", border: "1px solid var(--border-color)", '
        'marginTop: "1rem", marginBottom: "1.25rem"'
    )
    code_style = _style(
        'fontFamily: "var(--code-font)", fontSize: "0.85rem", lineHeight: 1.7, color: "var(--text-color)"'
    )
    lang_class = f" language-{block.language}" if block.language else ""
    label = ""
    if block.language:
        label_style = _style('color: "var(--muted-color)", borderBottom: "1px solid var(--border-color)"')
        label = (
            f'<div className="px-4 py-2 text-xs uppercase tracking-wider" style={label_style}>'
            f'{escape_jsx_text(block.language)}</div>'
        )
    return (
        f'<div className="rounded-lg overflow-hidden" style={wrapper_style}>\n'
        f'              {label}\n'
        f'              <pre className="p-5 overflow-x-auto{lang_class}"><code className="{lang_class.strip()}" '
        f'style={code_style}>{{`{escape_jsx_content(block.content)}`}}</code></pre>\n'
        f'            </div>'
    )


@render_block.register
def _(block: DiagramBlock) -> str:
    outer = _style('marginTop: "1rem", marginBottom: "1.25rem"')
    inner = _style('minHeight: "100px", width: "100%", display: "flex", justifyContent: "center", alignItems: "center"')
    loading = _style('color: "var(--muted-color)"')
    return (
        f'<div className="flex justify-center" style={outer}>\n'
        f'              <div className="mermaid-diagram" data-diagram={{`{escape_jsx_content(block.source)}`}} style={inner}>\n'
        f'                <p className="text-sm" style={loading}>Loading diagram...</p>\n'
        f'              </div>\n'
        f'            </div>'
    )


@render_block.register
def _(block: TableBlock) -> str:
    header_cells = "\n                    ".join(
        f'<th style={_style(_th_style(block.align(i).value))}>{format_inline(h)}</th>'
        for i, h in enumerate(block.headers)
    )
    body_rows = "\n                  ".join(
        "<tr>" + "".join(
            f'<td style={_style(_td_style(block.align(i).value))}>{format_inline(cell)}</td>'
            for i, cell in enumerate(row)
        ) + "</tr>"
        for row in block.rows
    )
    wrapper = _style('borderRadius: "10px", border: "1px solid var(--border-color)", marginTop: "1.1rem", marginBottom: "1.55rem"')
    table = _style('width: "100%", borderCollapse: "collapse", fontFamily: "var(--body-font)"')
    thead = _style('backgroundColor: "var(--surface-color)"')
    return (
        f'<div className="overflow-x-auto" style={wrapper}>\n'
        f'              <table style={table}>\n'
        f'                <thead style={thead}>\n'
        f'                  <tr>\n'
        f'                    {header_cells}\n'
        f'                  </tr>\n'
        f'                </thead>\n'
        f'                <tbody>\n'
        f'                  {body_rows}\n'
        f'                </tbody>\n'
        f'              </table>\n'
        f'            </div>'
    )


def _th_style(align: str) -> str:
    return (
        f'padding: "0.75rem 1rem", textAlign: "{align}", fontWeight: 600, fontSize: "0.85rem", '
        f'textTransform: "uppercase", letterSpacing: "0.05em", color: "var(--muted-color)", '
        f'borderBottom: "2px solid var(--border-color)"'
    )


def _td_style(align: str) -> str:
    return (
        f'padding: "0.75rem 1rem", textAlign: "{align}", '
        f'borderBottom: "1px solid var(--border-color)", fontSize: "0.95rem"'
    )


@render_block.register
def _(block: RuleBlock) -> str:
    style = _style('backgroundColor: "var(--border-color)", marginTop: "2rem", marginBottom: "2rem"')
    return f'<hr className="border-none h-px" style={style} />'


@render_block.register
def _(block: ImageBlock) -> str:
    return figure(block.url, block.alt, block.caption)


def render_blocks(blocks: list[Block]) -> str:
    """Render blocks in document order as the article body."""
    return BLOCK_SEPARATOR.join(render_block(b) for b in blocks)
