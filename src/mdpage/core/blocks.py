"""Line-by-line block parser.

The parser keeps exactly one open construct (paragraph, code fence, list,
blockquote or table) in `BlockParser.open`. A line that belongs to a different
construct flushes the open one first, so blocks never overlap and come out in
document order. Classification is total: anything unrecognized accumulates
into a paragraph, and no input raises.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional, Union

from mdpage.core.inline import image_caption, standalone_images, strip_inline
from mdpage.core.models import (
    Alignment, Block, BlockquoteBlock, CodeBlock, DiagramBlock, HeadingBlock,
    HeadingEntry, ImageBlock, ListBlock, ListItem, ParagraphBlock, ParseResult,
    RuleBlock, TableBlock,
)
from mdpage.core.utils.slug import SlugRegistry


logger = logging.getLogger(__name__)

FENCE = '```'
DIAGRAM_LANGUAGE = 'mermaid'

TABLE_ROW_RE = re.compile(r'^\|(.+)\|$')
ALIGN_CELL_RE = re.compile(r'^:?-+:?$')
HEADING_RE = re.compile(r'^(#{1,6})\s+(.+)$')
RULE_RE = re.compile(r'^(-{3,}|\*{3,}|_{3,})$')
UNORDERED_RE = re.compile(r'^\s*[-*+]\s+(.+)$')
ORDERED_RE = re.compile(r'^\s*\d+\.\s+(.+)$')
TASK_RE = re.compile(r'^\[([ xX])\]\s+(.*)')


@dataclass
class OpenParagraph:
    lines: list[str] = field(default_factory=list)


@dataclass
class OpenCode:
    language: str = ''
    lines: list[str] = field(default_factory=list)


@dataclass
class OpenList:
    ordered: bool
    items: list[ListItem] = field(default_factory=list)


@dataclass
class OpenQuote:
    lines: list[str] = field(default_factory=list)


@dataclass
class OpenTable:
    headers: Optional[list[str]] = None
    alignments: list[Alignment] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)


OpenConstruct = Union[OpenParagraph, OpenCode, OpenList, OpenQuote, OpenTable]


def parse_alignment(cell: str) -> Alignment:
    """Map a separator cell (`:--`, `:-:`, `--:`) to its column alignment."""
    if cell.startswith(':') and cell.endswith(':'):
        return Alignment.center
    if cell.endswith(':'):
        return Alignment.right
    return Alignment.left


def parse_list_item(text: str) -> ListItem:
    """Build a ListItem, recognizing a leading `[ ]` / `[x]` task marker."""
    m = TASK_RE.match(text)
    if m:
        return ListItem(text=m.group(2), checked=m.group(1) != ' ')
    return ListItem(text=text)


def split_images(text: str) -> list[Block]:
    """Split a paragraph run into paragraphs interrupted by standalone image figures."""
    blocks: list[Block] = []
    pos = 0
    for m in standalone_images(text):
        before = text[pos:m.start()].strip()
        if before:
            blocks.append(ParagraphBlock(text=before))
        alt = m.group(1)
        blocks.append(ImageBlock(alt=alt, url=m.group(2), caption=image_caption(alt, m.group(3))))
        pos = m.end()
    rest = text[pos:].strip()
    if rest:
        blocks.append(ParagraphBlock(text=rest))
    return blocks


class BlockParser:
    """Stateful classifier feeding one line at a time; call finish() for the result."""

    def __init__(self, skip_title: Optional[str] = None) -> None:
        self.skip_title = skip_title
        self.open: Optional[OpenConstruct] = None
        self.blocks: list[Block] = []
        self.headings: list[HeadingEntry] = []
        self.has_mermaid = False
        self.has_syntax_highlighting = False
        self._skipped_title = False
        self._slugs = SlugRegistry()

    # --- flushing ---

    def flush(self) -> None:
        """Emit the open construct (if any) and close it."""
        current, self.open = self.open, None
        if current is None:
            return
        if isinstance(current, OpenParagraph):
            self.blocks.extend(split_images(' '.join(current.lines)))
        elif isinstance(current, OpenCode):
            self._emit_code(current)
        elif isinstance(current, OpenList):
            self.blocks.append(ListBlock(ordered=current.ordered, items=current.items))
        elif isinstance(current, OpenQuote):
            self.blocks.append(BlockquoteBlock(text=' '.join(current.lines)))
        elif isinstance(current, OpenTable):
            # A separator row with no header row produces no table.
            if current.headers is not None:
                self.blocks.append(TableBlock(
                    headers=current.headers,
                    alignments=current.alignments,
                    rows=current.rows,
                ))

    def _flush_if(self, *kinds: type) -> None:
        if isinstance(self.open, kinds):
            self.flush()

    def _emit_code(self, code: OpenCode) -> None:
        content = '\n'.join(code.lines)
        if code.language == DIAGRAM_LANGUAGE:
            self.has_mermaid = True
            self.blocks.append(DiagramBlock(source=content))
            return
        if code.language:
            self.has_syntax_highlighting = True
        self.blocks.append(CodeBlock(language=code.language, content=content))

    # --- per-line classification ---

    def feed(self, line: str) -> None:
        if line.startswith(FENCE):
            if isinstance(self.open, OpenCode):
                self.flush()
            else:
                self.flush()
                self.open = OpenCode(language=line[len(FENCE):].strip())
            return

        if isinstance(self.open, OpenCode):
            self.open.lines.append(line)
            return

        if self._table_row(line):
            return
        self._flush_if(OpenTable)

        if self._quote_line(line):
            return
        self._flush_if(OpenQuote)

        heading = HEADING_RE.match(line)
        if heading:
            self.flush()
            self._heading(len(heading.group(1)), heading.group(2))
            return

        if RULE_RE.match(line.strip()):
            self.flush()
            self.blocks.append(RuleBlock())
            return

        item = UNORDERED_RE.match(line)
        if item:
            self._list_item(item.group(1), ordered=False)
            return

        item = ORDERED_RE.match(line)
        if item:
            self._list_item(item.group(1), ordered=True)
            return

        if not line.strip():
            self._flush_if(OpenParagraph)
            return

        if not isinstance(self.open, OpenParagraph):
            self.flush()
            self.open = OpenParagraph()
        self.open.lines.append(line)

    def _table_row(self, line: str) -> bool:
        m = TABLE_ROW_RE.match(line)
        if not m:
            return False
        if not isinstance(self.open, OpenTable):
            self.flush()
            self.open = OpenTable()
        cells = [c.strip() for c in m.group(1).split('|')]
        if all(ALIGN_CELL_RE.match(c) for c in cells):
            self.open.alignments = [parse_alignment(c) for c in cells]
        elif self.open.headers is None:
            self.open.headers = cells
        else:
            self.open.rows.append(cells)
        return True

    def _quote_line(self, line: str) -> bool:
        if line.startswith('> '):
            text = line[2:]
        elif isinstance(self.open, OpenQuote) and line.startswith('>'):
            text = line[1:].strip()
        else:
            return False
        if not isinstance(self.open, OpenQuote):
            self.flush()
            self.open = OpenQuote()
        self.open.lines.append(text)
        return True

    def _heading(self, level: int, raw: str) -> None:
        plain = strip_inline(raw)
        if level == 1 and self.skip_title and not self._skipped_title:
            if plain.strip().lower() == self.skip_title.lower():
                self._skipped_title = True
                return
        heading_id = self._slugs.claim(plain)
        self.headings.append(HeadingEntry(level=level, text=plain, id=heading_id))
        self.blocks.append(HeadingBlock(level=level, text=raw, id=heading_id))

    def _list_item(self, text: str, ordered: bool) -> None:
        if not (isinstance(self.open, OpenList) and self.open.ordered == ordered):
            self.flush()
            self.open = OpenList(ordered=ordered)
        self.open.items.append(parse_list_item(text))

    def finish(self) -> ParseResult:
        if isinstance(self.open, OpenCode):
            logger.debug("Unterminated code fence at end of input; keeping it as a code block")
            while self.open.lines and not self.open.lines[-1].strip():
                self.open.lines.pop()
        self.flush()
        return ParseResult(
            blocks=self.blocks,
            headings=self.headings,
            has_mermaid=self.has_mermaid,
            has_syntax_highlighting=self.has_syntax_highlighting,
        )


def parse_blocks(body: str, skip_title: Optional[str] = None) -> ParseResult:
    """Parse a markdown body into ordered blocks, a heading outline and feature flags."""
    parser = BlockParser(skip_title=skip_title)
    for line in body.split('\n'):
        parser.feed(line)
    result = parser.finish()
    logger.debug(
        "Parsed %d block(s), %d heading(s), mermaid=%s, highlighting=%s",
        len(result.blocks), len(result.headings),
        result.has_mermaid, result.has_syntax_highlighting,
    )
    return result
