"""Natural version ordering (1.1 < 1.2 < 1.10) for metadata sorting.

Follows the Maven ComparableVersion rules: a version is split into numeric and
qualifier items on ".", "-" and digit/letter transitions; each "-" (or
transition) opens a nested list. Trailing null items ("0", "", "final", "ga",
"release") are dropped, so ``1 == 1.0 == 1.0.0-ga``.

Known qualifiers order as::

    alpha < beta < milestone < rc == cr < snapshot < "" == ga == final == release < sp

Unknown qualifiers sort after all known ones, lexically among themselves.
"""

import functools
import itertools
import string

from .models import MetadataVersion
from .models import SnapshotVersion

QUALIFIERS = ["alpha", "beta", "milestone", "rc", "snapshot", "", "sp"]
QUALIFIER_ALIASES = {"ga": "", "final": "", "release": "", "cr": "rc"}
SHORT_QUALIFIERS = {"a": "alpha", "b": "beta", "m": "milestone"}

RELEASE_VERSION_INDEX = str(QUALIFIERS.index(""))


def _cmp(left, right) -> int:
    return (left > right) - (left < right)


def _comparable_qualifier(qualifier: str) -> str:
    # Index as a string so unknown qualifiers ("7-foo") compare lexically after known ones
    if qualifier in QUALIFIERS:
        return str(QUALIFIERS.index(qualifier))
    return f"{len(QUALIFIERS)}-{qualifier}"


class _IntItem:
    def __init__(self, value: int):
        self.value = value

    def is_null(self) -> bool:
        return self.value == 0

    def compare_to(self, item) -> int:
        if item is None:
            return 0 if self.value == 0 else 1
        if isinstance(item, _IntItem):
            return _cmp(self.value, item.value)
        # 1.1 > 1-sp, 1.1 > 1-1
        return 1


class _StringItem:
    def __init__(self, value: str, followed_by_digit: bool):
        if followed_by_digit and len(value) == 1:
            value = SHORT_QUALIFIERS.get(value, value)
        self.value = QUALIFIER_ALIASES.get(value, value)

    def is_null(self) -> bool:
        return _comparable_qualifier(self.value) == RELEASE_VERSION_INDEX

    def compare_to(self, item) -> int:
        if item is None:
            # 1-rc < 1, 1-ga == 1
            return _cmp(_comparable_qualifier(self.value), RELEASE_VERSION_INDEX)
        if isinstance(item, _StringItem):
            return _cmp(_comparable_qualifier(self.value), _comparable_qualifier(item.value))
        return -1


class _ListItem(list):
    def is_null(self) -> bool:
        return len(self) == 0

    def normalize(self) -> None:
        for i in range(len(self) - 1, -1, -1):
            item = self[i]
            if item.is_null():
                del self[i]
            elif not isinstance(item, _ListItem):
                break

    def compare_to(self, item) -> int:
        if item is None:
            return self[0].compare_to(None) if self else 0
        if isinstance(item, _IntItem):
            return -1
        if isinstance(item, _StringItem):
            return 1

        for left, right in itertools.zip_longest(self, item):
            if left is None:
                result = 0 if right is None else -right.compare_to(None)
            else:
                result = left.compare_to(right)
            if result:
                return result
        return 0


def _parse_item(is_digit: bool, text: str):
    return _IntItem(int(text)) if is_digit else _StringItem(text, False)


def _parse(version: str) -> _ListItem:
    version = version.lower()
    root = current = _ListItem()
    stack = [root]
    is_digit = False
    start = 0

    def open_sublist(parent: _ListItem) -> _ListItem:
        child = _ListItem()
        parent.append(child)
        stack.append(child)
        return child

    for i, char in enumerate(version):
        if char in ".-":
            current.append(_IntItem(0) if i == start else _parse_item(is_digit, version[start:i]))
            start = i + 1
            if char == "-":
                current = open_sublist(current)
        elif char in string.digits:
            if not is_digit and i > start:
                current.append(_StringItem(version[start:i], True))
                start = i
                current = open_sublist(current)
            is_digit = True
        else:
            if is_digit and i > start:
                current.append(_parse_item(True, version[start:i]))
                start = i
                current = open_sublist(current)
            is_digit = False

    if len(version) > start:
        current.append(_parse_item(is_digit, version[start:]))

    # Innermost lists first so emptied sublists become null for their parents
    while stack:
        stack.pop().normalize()

    return root


@functools.total_ordering
class ComparableVersion:
    """
    Version string with natural multi-segment ordering.

    Example:
        >>> sorted(["1.10", "1.2", "1.2-SNAPSHOT"], key=ComparableVersion)
        ['1.2-SNAPSHOT', '1.2', '1.10']
    """

    def __init__(self, version: str):
        self.version = version
        self._items = _parse(version)

    def compare_to(self, other: "ComparableVersion") -> int:
        return self._items.compare_to(other._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComparableVersion):
            return NotImplemented
        return self.compare_to(other) == 0

    def __lt__(self, other: "ComparableVersion") -> bool:
        return self.compare_to(other) < 0

    def __hash__(self) -> int:
        return hash(self.canonical())

    def canonical(self) -> str:
        """Normalized form where equal versions share one representation."""
        return _render(self._items)

    def __repr__(self) -> str:
        return f"ComparableVersion({self.version!r})"


def _render(items: _ListItem) -> str:
    parts = []
    for item in items:
        if isinstance(item, _ListItem):
            parts.append(f"-{_render(item)}")
        else:
            separator = "." if parts else ""
            value = str(item.value) if isinstance(item, _IntItem) else item.value
            parts.append(f"{separator}{value}")
    return "".join(parts)


def compare_versions(left: str, right: str) -> int:
    """Compare two version strings, returning -1, 0 or 1."""
    return ComparableVersion(left).compare_to(ComparableVersion(right))


def compare_metadata_versions(left: MetadataVersion, right: MetadataVersion) -> int:
    """Order metadata versions by version string only (creation date is ignored)."""
    return compare_versions(left.version, right.version)


def compare_snapshot_versions(left: SnapshotVersion, right: SnapshotVersion) -> int:
    """Order snapshot builds by version, then classifier (none first), then extension."""
    result = compare_versions(left.version, right.version)
    if result:
        return result
    result = _cmp(left.classifier or "", right.classifier or "")
    if result:
        return result
    return _cmp(left.extension, right.extension)


metadata_version_key = functools.cmp_to_key(compare_metadata_versions)
snapshot_version_key = functools.cmp_to_key(compare_snapshot_versions)
