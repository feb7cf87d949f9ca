"""Semantic version parsing and precedence.

Ordering follows semver 2.0.0: ``major.minor.patch`` compare numerically,
a release ranks above any of its pre-releases, pre-release identifiers
compare pairwise (numeric below alphanumeric, numeric by value, alphanumeric
by ASCII), and a shorter identifier list ranks below a longer one sharing its
prefix. Build metadata never affects ordering.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Iterable, Optional, Union

_SEMVER_PATTERN = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


class InvalidVersion(ValueError):
    """Raised when a string is not a valid semantic version."""


Identifier = Union[int, str]


@dataclass(frozen=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[Identifier, ...] = ()
    build: tuple[str, ...] = ()

    @property
    def is_stable(self) -> bool:
        return not self.prerelease


def parse(value: str) -> SemVer:
    if not isinstance(value, str):
        raise InvalidVersion(f"Invalid version: {value!r}")
    match = _SEMVER_PATTERN.match(value.strip())
    if match is None:
        raise InvalidVersion(f"Invalid version: {value!r}")
    major, minor, patch, pre, build = match.groups()
    prerelease: tuple[Identifier, ...] = ()
    if pre:
        prerelease = tuple(int(part) if part.isdigit() else part for part in pre.split("."))
    return SemVer(
        major=int(major),
        minor=int(minor),
        patch=int(patch),
        prerelease=prerelease,
        build=tuple(build.split(".")) if build else (),
    )


def is_valid(value: str) -> bool:
    try:
        parse(value)
    except InvalidVersion:
        return False
    return True


def is_stable(value: str) -> bool:
    return parse(value).is_stable


def _cmp(left, right) -> int:
    return (left > right) - (left < right)


def _compare_identifiers(left: Identifier, right: Identifier) -> int:
    left_numeric = isinstance(left, int)
    right_numeric = isinstance(right, int)
    if left_numeric and right_numeric:
        return _cmp(left, right)
    if left_numeric:
        return -1
    if right_numeric:
        return 1
    return _cmp(left, right)


def compare_parsed(left: SemVer, right: SemVer) -> int:
    core = _cmp(
        (left.major, left.minor, left.patch),
        (right.major, right.minor, right.patch),
    )
    if core:
        return core
    if not left.prerelease or not right.prerelease:
        # a release outranks its pre-releases
        return _cmp(not left.prerelease, not right.prerelease)
    for left_id, right_id in zip(left.prerelease, right.prerelease):
        result = _compare_identifiers(left_id, right_id)
        if result:
            return result
    return _cmp(len(left.prerelease), len(right.prerelease))


def compare(v1: str, v2: str) -> int:
    """Return -1, 0 or 1 as ``v1`` ranks below, equal to or above ``v2``.

    Raises :class:`InvalidVersion` when either argument is not a valid version.
    """

    return compare_parsed(parse(v1), parse(v2))


sort_key = cmp_to_key(compare)


def sort_versions(values: Iterable[str], *, reverse: bool = False) -> list[str]:
    return sorted(values, key=sort_key, reverse=reverse)


def _valid_only(values: Iterable[str]) -> list[str]:
    return [value for value in values if is_valid(value)]


def max_version(values: Iterable[str]) -> Optional[str]:
    candidates = _valid_only(values)
    if not candidates:
        return None
    return max(candidates, key=sort_key)


def max_stable_version(values: Iterable[str]) -> Optional[str]:
    return max_version(value for value in values if is_valid(value) and is_stable(value))


__all__ = [
    "InvalidVersion",
    "SemVer",
    "compare",
    "compare_parsed",
    "is_stable",
    "is_valid",
    "max_stable_version",
    "max_version",
    "parse",
    "sort_key",
    "sort_versions",
]
