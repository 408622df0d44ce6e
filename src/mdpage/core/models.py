"""Typed blocks, outline entries and compile results for the page pipeline"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class Alignment(str, Enum):
    left = "left"
    center = "center"
    right = "right"


class HeadingBlock(BaseModel):
    kind: Literal["heading"] = "heading"
    level: int = Field(ge=1, le=6)
    text: str                       # raw inline source; formatted at render time
    id: str


class ParagraphBlock(BaseModel):
    kind: Literal["paragraph"] = "paragraph"
    text: str


class ListItem(BaseModel):
    text: str
    checked: Optional[bool] = None  # None for plain items, bool for task items

    @property
    def is_task(self) -> bool:
        return self.checked is not None


class ListBlock(BaseModel):
    kind: Literal["list"] = "list"
    ordered: bool = False
    items: list[ListItem] = Field(default_factory=list)


class BlockquoteBlock(BaseModel):
    kind: Literal["blockquote"] = "blockquote"
    text: str


class CodeBlock(BaseModel):
    kind: Literal["code"] = "code"
    language: str = ""
    content: str


class DiagramBlock(BaseModel):
    """A mermaid fence; rendered client-side from its raw source."""
    kind: Literal["diagram"] = "diagram"
    source: str


class TableBlock(BaseModel):
    kind: Literal["table"] = "table"
    headers: list[str]
    alignments: list[Alignment] = Field(default_factory=list)
    rows: list[list[str]] = Field(default_factory=list)

    def align(self, column: int) -> Alignment:
        """Alignment for a column; columns without a separator cell are left-aligned."""
        if column < len(self.alignments):
            return self.alignments[column]
        return Alignment.left


class RuleBlock(BaseModel):
    kind: Literal["rule"] = "rule"


class ImageBlock(BaseModel):
    kind: Literal["image"] = "image"
    alt: str = ""
    url: str
    caption: str = ""               # already falls back to alt when no title was given


Block = Annotated[
    Union[
        HeadingBlock, ParagraphBlock, ListBlock, BlockquoteBlock,
        CodeBlock, DiagramBlock, TableBlock, RuleBlock, ImageBlock,
    ],
    Field(discriminator="kind"),
]


class HeadingEntry(BaseModel):
    """One table-of-contents entry; id matches the rendered heading element."""
    level: int
    text: str
    id: str


class ParseResult(BaseModel):
    blocks: list[Block] = Field(default_factory=list)
    headings: list[HeadingEntry] = Field(default_factory=list)
    has_mermaid: bool = False
    has_syntax_highlighting: bool = False


class DocumentMeta(BaseModel):
    title: str
    subtitle: str = ""
    author: str = ""
    date: str = ""
    word_count: int = 0
    reading_time: str = "1 min read"
    description: str = ""


class CompiledPage(BaseModel):
    """Public output contract: page code plus the metadata callers act on."""
    route_path: str
    title: str
    style: str
    public: bool = True
    code: str
    meta: DocumentMeta
    headings: list[HeadingEntry] = Field(default_factory=list)
    has_mermaid: bool = False
    has_syntax_highlighting: bool = False

    @property
    def slug(self) -> str:
        return self.route_path.strip('/').replace('/', '-') or 'index'

    def publish_payload(self) -> dict:
        """Payload in the shape the hosting side expects for route registration."""
        return {
            "routePath": self.route_path,
            "title": self.title,
            "style": self.style,
            "public": self.public,
            "code": self.code,
        }
