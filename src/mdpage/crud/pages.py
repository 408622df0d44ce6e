"""Page registry persistence: upsert by route, lookup, listing and removal"""

import hashlib
from datetime import datetime

from sqlmodel import Session, select

from mdpage.core.models import CompiledPage
from mdpage.crud.models import Page


def code_hash(code: str) -> str:
    """Hex SHA-256 of the generated page code; fits the String(64) hash column."""
    return hashlib.sha256(code.encode("utf-8")).hexdigest()


def get_by_route(session: Session, route_path: str) -> Page | None:
    """Return the Page registered at route_path, or None if not found."""
    return session.exec(select(Page).where(Page.route_path == route_path)).one_or_none()


def list_pages(session: Session) -> list[Page]:
    """Return all registered pages ordered by route."""
    return list(session.exec(select(Page).order_by(Page.route_path)).all())


def upsert_page(session: Session, compiled: CompiledPage) -> tuple[Page, str]:
    """Insert or update the page at compiled.route_path.

    Returns (page, status) where status is 'created', 'updated', or 'unchanged'.
    A page is unchanged when its code hash and visibility match. Flushes but does
    not commit; the caller controls the transaction.
    """
    digest = code_hash(compiled.code)
    page = get_by_route(session, compiled.route_path)

    if page:
        if page.hash == digest and page.public == compiled.public:
            return page, 'unchanged'
        page.title = compiled.title
        page.style = compiled.style
        page.public = compiled.public
        page.hash = digest
        page.code = compiled.code
        page.word_count = compiled.meta.word_count
        page.updated_at = datetime.now()
        session.add(page)
        session.flush()
        return page, 'updated'

    page = Page(
        route_path=compiled.route_path,
        title=compiled.title,
        style=compiled.style,
        public=compiled.public,
        hash=digest,
        code=compiled.code,
        word_count=compiled.meta.word_count,
    )
    session.add(page)
    session.flush()
    return page, 'created'


def delete_page(session: Session, route_path: str) -> bool:
    """Remove the page at route_path. Returns False when nothing was registered there."""
    page = get_by_route(session, route_path)
    if page is None:
        return False
    session.delete(page)
    session.flush()
    return True
