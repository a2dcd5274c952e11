import logging

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.suggestion_term import SuggestionTerm

logger = logging.getLogger("astra.terms")

MAX_TERMS = 50


async def _terms_for(source: str, db: AsyncSession, limit: int) -> list[str]:
    result = await db.execute(
        select(SuggestionTerm.term)
        .where(SuggestionTerm.source == source)
        .order_by(SuggestionTerm.frequency.desc(), SuggestionTerm.term.asc())
        .limit(limit)
    )
    return [row[0] for row in result.all()]


async def get_trending_terms(db: AsyncSession, limit: int = MAX_TERMS) -> list[str]:
    """Trending terms by frequency, or the configured defaults when none are stored."""
    terms = await _terms_for("trending", db, limit)
    if not terms:
        return list(settings.default_trending_terms)
    return terms


async def get_smart_terms(db: AsyncSession, limit: int = MAX_TERMS) -> list[str]:
    return await _terms_for("smart", db, limit)


async def upsert_terms(terms: list[str], source: str, db: AsyncSession, frequency: int = 1):
    """Insert terms for a source, bumping frequency of ones already present."""
    for term in terms:
        term = term.strip()
        if len(term) < 2 or len(term) > 255:
            continue
        stmt = pg_insert(SuggestionTerm).values(term=term, frequency=frequency, source=source)
        stmt = stmt.on_conflict_do_update(
            index_elements=["term"],
            set_={"frequency": SuggestionTerm.frequency + frequency, "source": source},
        )
        await db.execute(stmt)
    await db.commit()
    logger.info("Upserted %d %s terms", len(terms), source)
