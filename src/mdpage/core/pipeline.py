"""Compile pipeline: frontmatter -> blocks -> metadata -> page code, plus file output"""

import json
import logging
import re
from pathlib import Path
from typing import Optional

from mdpage.core.blocks import parse_blocks
from mdpage.core.frontmatter import extract_frontmatter
from mdpage.core.models import CompiledPage, DocumentMeta
from mdpage.core.page import render_page
from mdpage.core.utils.slug import slugify
from mdpage.core.utils.text import count_words, reading_time, summarize
from mdpage.styles import StyleName, resolve_style


logger = logging.getLogger(__name__)

MD_EXTENSIONS = {'.md', '.markdown'}


def resolve_title(explicit: Optional[str], meta: dict[str, str], filename: str) -> str:
    """Explicit title, else frontmatter title, else the filename stem in title case."""
    if explicit:
        return explicit
    if meta.get('title'):
        return meta['title']
    stem = Path(filename).stem if Path(filename).suffix in MD_EXTENSIONS else filename
    return re.sub(r'\b\w', lambda m: m.group(0).upper(), stem.replace('-', ' '))


def resolve_route(explicit: Optional[str], title: str) -> str:
    """Explicit route (leading slash ensured), else `/<slug of title>`."""
    if explicit:
        return explicit if explicit.startswith('/') else f'/{explicit}'
    return f'/{slugify(title)}'


def build_meta(title: str, meta: dict[str, str], body: str) -> DocumentMeta:
    """Display metadata and derived reading stats for the hero block."""
    words = count_words(body)
    return DocumentMeta(
        title=title,
        subtitle=meta.get('subtitle') or meta.get('description') or '',
        author=meta.get('author', ''),
        date=meta.get('date', ''),
        word_count=words,
        reading_time=reading_time(words),
        description=summarize(body),
    )


def compile_document(
    raw: str,
    style_name: str = StyleName.editorial.value,
    *,
    title: Optional[str] = None,
    route: Optional[str] = None,
    filename: str = 'untitled',
    accent: Optional[str] = None,
    public: bool = True,
    ) -> CompiledPage:
    """Compile markdown text into page code and metadata. Pure; no I/O.

    Raises UnknownStyleError for a style outside the catalog. Content problems
    never raise: malformed markdown degrades to paragraph text.
    """
    resolve_style(style_name, accent)  # fail fast before doing any work
    text = raw.replace('\r\n', '\n')
    meta, body = extract_frontmatter(text)
    resolved_title = resolve_title(title, meta, filename)

    parsed = parse_blocks(body, skip_title=resolved_title)
    doc_meta = build_meta(resolved_title, meta, body)
    code = render_page(parsed, doc_meta, style_name, accent)

    return CompiledPage(
        route_path=resolve_route(route, resolved_title),
        title=resolved_title,
        style=style_name,
        public=public,
        code=code,
        meta=doc_meta,
        headings=parsed.headings,
        has_mermaid=parsed.has_mermaid,
        has_syntax_highlighting=parsed.has_syntax_highlighting,
    )


def compile_file(path: Path, style_name: str = StyleName.editorial.value, **kwargs) -> CompiledPage:
    """Read a markdown file and compile it. Raises FileNotFoundError if path is missing."""
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    raw = path.read_text(encoding='utf-8')
    return compile_document(raw, style_name, filename=path.name, **kwargs)


def build_sidecar(page: CompiledPage) -> dict:
    """Metadata sidecar: everything in the compile result except the page code."""
    return page.model_dump(exclude={'code'})


def write_page(page: CompiledPage, output_dir: Path) -> tuple[Path, Path]:
    """Write `<slug>.tsx` and `<slug>.json` to output_dir. Returns (code_path, json_path)."""
    output_dir.mkdir(parents=True, exist_ok=True)
    code_path = output_dir / f"{page.slug}.tsx"
    json_path = output_dir / f"{page.slug}.json"
    code_path.write_text(page.code, encoding='utf-8')
    json_path.write_text(json.dumps(build_sidecar(page), indent=2, ensure_ascii=False), encoding='utf-8')
    logger.info("Wrote %s and %s", code_path, json_path)
    return code_path, json_path
