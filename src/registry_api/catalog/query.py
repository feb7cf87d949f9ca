"""Catalog listing query: normalized request parameters and SQL construction."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from math import ceil
from typing import Any, Optional

from sqlalchemy import String, and_, cast, exists, func, or_, select
from sqlalchemy.sql.elements import ColumnElement

from registry_api.db.models import (
    RegistryEntry,
    RegistryEntryOwner,
    RegistryUser,
    RegistryVersion,
    RegistryVersionContributor,
)

ENTRY_KINDS = ("package", "service")
CATEGORIES = ("server", "sandbox", "interceptor", "hook")
SORT_OPTIONS = ("relevance", "downloads", "newest", "oldest", "name-asc", "name-desc", "updated")
VERIFIED_OPTIONS = ("all", "verified", "unverified")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
# offsets are bound as signed 64-bit integers by the store
MAX_OFFSET = 2**63 - 1


def _to_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def max_page(limit: int) -> int:
    """Largest page whose offset plus limit still fits the store's integer range."""
    return (MAX_OFFSET - limit) // limit + 1


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


@dataclass(frozen=True)
class CatalogQuery:
    """One validated listing request.

    Out-of-range paging input is clamped and unknown enum values fall back to
    their defaults; nothing here raises.
    """

    kind: str
    text: Optional[str] = None
    sort: str = "relevance"
    verified: str = "all"
    category: str = "all"
    owner: Optional[str] = None
    contributor: Optional[str] = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    @classmethod
    def from_params(
        cls,
        kind: str,
        *,
        q: Optional[str] = None,
        sort: Optional[str] = None,
        verified: Optional[str] = None,
        category: Optional[str] = None,
        owner: Optional[str] = None,
        contributor: Optional[str] = None,
        page: Any = None,
        limit: Any = None,
        default_limit: int = DEFAULT_PAGE_SIZE,
        max_limit: int = MAX_PAGE_SIZE,
    ) -> "CatalogQuery":
        if kind not in ENTRY_KINDS:
            raise ValueError(f"unknown entry kind: {kind}")
        sort_value = (sort or "").strip().lower()
        verified_value = (verified or "").strip().lower()
        category_value = (category or "").strip().lower()
        limit_value = min(max_limit, max(1, _to_int(limit, default_limit)))
        return cls(
            kind=kind,
            text=_clean(q),
            sort=sort_value if sort_value in SORT_OPTIONS else "relevance",
            verified=verified_value if verified_value in VERIFIED_OPTIONS else "all",
            category=category_value if category_value in CATEGORIES else "all",
            owner=_clean(owner),
            contributor=_clean(contributor),
            page=min(max(1, _to_int(page, 1)), max_page(limit_value)),
            limit=limit_value,
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def echo(self) -> dict[str, Any]:
        """Normalized filters as returned to clients."""
        return {
            "query": self.text,
            "sort": self.sort,
            "verified": self.verified,
            "type": self.category,
            "owner": self.owner,
            "contributor": self.contributor,
        }

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


def pagination(query: CatalogQuery, total: int) -> dict[str, Any]:
    total_pages = ceil(total / query.limit) if total else 0
    return {
        "page": query.page,
        "limit": query.limit,
        "total": total,
        "totalPages": total_pages,
        "hasNextPage": query.page < total_pages,
        "hasPrevPage": query.page > 1,
    }


def _like_pattern(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def downloads_total():
    """Correlated sum of version downloads for the outer entry row."""
    return (
        select(func.coalesce(func.sum(RegistryVersion.downloads), 0))
        .where(RegistryVersion.entry_id == RegistryEntry.id)
        .correlate(RegistryEntry)
        .scalar_subquery()
    )


def _user_name_matches(name: str) -> ColumnElement[bool]:
    lowered = name.lower()
    return or_(
        func.lower(RegistryUser.username) == lowered,
        func.lower(RegistryUser.display_name) == lowered,
    )


def _owner_clause(name: str) -> ColumnElement[bool]:
    primary = exists().where(
        RegistryUser.id == RegistryEntry.primary_owner_id,
        _user_name_matches(name),
    )
    secondary = exists().where(
        RegistryEntryOwner.entry_id == RegistryEntry.id,
        RegistryUser.id == RegistryEntryOwner.user_id,
        _user_name_matches(name),
    )
    return or_(primary, secondary)


def _contributor_clause(username: str) -> ColumnElement[bool]:
    lowered = username.lower()
    publisher = exists().where(
        RegistryVersion.entry_id == RegistryEntry.id,
        RegistryUser.id == RegistryVersion.publisher_id,
        func.lower(RegistryUser.username) == lowered,
    )
    credited = exists().where(
        RegistryVersionContributor.entry_id == RegistryEntry.id,
        RegistryUser.id == RegistryVersionContributor.user_id,
        func.lower(RegistryUser.username) == lowered,
    )
    return or_(publisher, credited)


def build_filters(query: CatalogQuery) -> list[ColumnElement[bool]]:
    """Predicates shared by the page query and the count query (ANDed)."""

    clauses: list[ColumnElement[bool]] = [RegistryEntry.kind == query.kind]
    if query.text:
        pattern = _like_pattern(query.text)
        clauses.append(
            or_(
                RegistryEntry.id.ilike(pattern, escape="\\"),
                RegistryEntry.name.ilike(pattern, escape="\\"),
                RegistryEntry.description.ilike(pattern, escape="\\"),
                RegistryEntry.keyword_text.ilike(pattern, escape="\\"),
            )
        )
    if query.verified == "verified":
        clauses.append(RegistryEntry.is_verified.is_(True))
    elif query.verified == "unverified":
        clauses.append(RegistryEntry.is_verified.is_(False))
    if query.category != "all":
        # categories is a JSON list; match the quoted member in its text form
        clauses.append(cast(RegistryEntry.categories, String).like(f'%"{query.category}"%'))
    if query.owner:
        clauses.append(_owner_clause(query.owner))
    if query.contributor:
        clauses.append(_contributor_clause(query.contributor))
    return clauses


def order_by(query: CatalogQuery, downloads=None) -> list[Any]:
    downloads = downloads if downloads is not None else downloads_total()
    if query.sort == "downloads":
        ordering = [downloads.desc()]
    elif query.sort == "newest":
        ordering = [RegistryEntry.created_at.desc()]
    elif query.sort == "oldest":
        ordering = [RegistryEntry.created_at.asc()]
    elif query.sort == "name-asc":
        ordering = [RegistryEntry.name.asc()]
    elif query.sort == "name-desc":
        ordering = [RegistryEntry.name.desc()]
    elif query.sort == "updated":
        ordering = [RegistryEntry.updated_at.desc()]
    else:
        ordering = [RegistryEntry.is_verified.desc(), RegistryEntry.updated_at.desc()]
    # stable paging across equal sort values
    ordering.append(RegistryEntry.id.asc())
    return ordering


def page_statement(query: CatalogQuery):
    downloads = downloads_total().label("total_downloads")
    return (
        select(RegistryEntry, downloads)
        .where(and_(*build_filters(query)))
        .order_by(*order_by(query, downloads_total()))
        .offset(query.offset)
        .limit(query.limit)
    )


def count_statement(query: CatalogQuery):
    return select(func.count()).select_from(RegistryEntry).where(and_(*build_filters(query)))


__all__ = [
    "CATEGORIES",
    "CatalogQuery",
    "ENTRY_KINDS",
    "SORT_OPTIONS",
    "MAX_OFFSET",
    "VERIFIED_OPTIONS",
    "build_filters",
    "count_statement",
    "downloads_total",
    "max_page",
    "order_by",
    "page_statement",
    "pagination",
]
