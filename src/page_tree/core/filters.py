"""Typed predicates understood by every ``PageRepository`` adapter.

The set is closed on purpose: adapters translate exactly these classes, and
``matches`` gives the reference in-memory semantics they must agree with.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from page_tree.models import PageNode, is_equal_ids


@dataclass(frozen=True)
class LocaleEquals:
    """``locale == value``; ``None`` matches pages without a locale."""

    locale: str | None

    def matches(self, page: PageNode) -> bool:
        if self.locale is None:
            return not page.locale
        return page.locale == self.locale


@dataclass(frozen=True)
class MultiLocaleFlag:
    """``False`` also matches pages where the flag was never set."""

    value: bool = True

    def matches(self, page: PageNode) -> bool:
        return bool(page.is_multi_locale) is self.value


@dataclass(frozen=True)
class PrivateFlag:
    value: bool

    def matches(self, page: PageNode) -> bool:
        return bool(page.is_private) is self.value


@dataclass(frozen=True)
class IdIn:
    ids: tuple[str, ...]

    def matches(self, page: PageNode) -> bool:
        return any(is_equal_ids(page.id, i) for i in self.ids)


@dataclass(frozen=True)
class AllOf:
    clauses: tuple[PageFilter, ...]

    def matches(self, page: PageNode) -> bool:
        return all(c.matches(page) for c in self.clauses)


@dataclass(frozen=True)
class AnyOf:
    clauses: tuple[PageFilter, ...]

    def matches(self, page: PageNode) -> bool:
        return any(c.matches(page) for c in self.clauses)


PageFilter = LocaleEquals | MultiLocaleFlag | PrivateFlag | IdIn | AllOf | AnyOf


def locale_filter(locale: str, extra_ids: Iterable[str] = ()) -> PageFilter:
    """Pages of ``locale``, multi-locale pages, and pages with no locale at all."""
    clauses: list[PageFilter] = [
        LocaleEquals(locale),
        MultiLocaleFlag(True),
        AllOf((LocaleEquals(None), MultiLocaleFlag(False))),
    ]
    ids = tuple(str(i) for i in extra_ids)
    if ids:
        clauses.append(IdIn(ids))
    return AnyOf(tuple(clauses))


def visibility_filter(
    locale: str | None = None,
    authorized: bool = False,
    extra_ids: Iterable[str] = (),
) -> PageFilter | None:
    """Combine the locale and privacy rules, or ``None`` when nothing is filtered."""
    clauses: list[PageFilter] = []
    if locale:
        clauses.append(locale_filter(locale, extra_ids))
    if not authorized:
        clauses.append(PrivateFlag(False))
    if not clauses:
        return None
    if len(clauses) == 1:
        return clauses[0]
    return AllOf(tuple(clauses))


def is_locale_compatible(page: PageNode | object, locale: str | None) -> bool:
    if not locale:
        return True
    page_locale = getattr(page, "locale", None)
    multi = getattr(page, "is_multi_locale", False)
    return page_locale == locale or bool(multi) or (not page_locale and not multi)


def is_visible(page: PageNode | object, locale: str | None = None, authorized: bool = False) -> bool:
    """In-memory twin of ``visibility_filter`` that also works on ``FlatEntry``."""
    if not authorized and getattr(page, "is_private", False):
        return False
    return is_locale_compatible(page, locale)
