"""
=============================================================================
CASE-INSENSITIVE HEADER COLLECTION
=============================================================================

HTTP header names are case-insensitive (RFC 7230 §3.2), so
"Content-Length", "content-length" and "CONTENT-LENGTH" all name the
same header. Headers normalizes every name to lowercase ASCII when it
is stored AND when it is looked up:

    headers.set("X-Foo", "Bar")        stored as  {"x-foo": "Bar"}
    headers.get("x-FOO")               looks up   "x-foo"  →  "Bar"

=============================================================================
REPLACE ON CONFLICT
=============================================================================

There is never more than one entry per normalized name. Setting an
existing name drops the old entry first and then inserts the new one,
so the last write wins and the entry moves to the end:

    headers.set("A", "1")      [a: 1]
    headers.set("B", "2")      [a: 1, b: 2]
    headers.set("a", "3")      [b: 2, a: 3]

Iteration follows that order (insertion order of the surviving
entries). Serialization relies on it, so a response always renders its
headers in the order they were last set.
=============================================================================
"""

from typing import Dict, Iterator, Mapping, Optional, Tuple, Union


def normalize_name(name: str) -> str:
    """Lowercase a header name (ASCII only, per RFC 7230 tokens)."""
    return name.lower()


class Headers:
    """
    Mapping of header name → value with case-insensitive names.

    Supports the usual mapping protocol (``in``, ``len``, ``[]``,
    iteration over names) on top of the explicit set()/get() contract.
    """

    __slots__ = ("_entries",)

    def __init__(self, initial: Optional[Union[Mapping[str, str], "Headers"]] = None):
        self._entries: Dict[str, str] = {}
        if initial is not None:
            for name, value in initial.items():
                self.set(name, value)

    # =========================================================================
    # CORE CONTRACT
    # =========================================================================

    def set(self, name: str, value: str) -> None:
        """
        Store a header, replacing any entry with the same normalized name.

        Args:
            name: Header name in any case.
            value: Header value, stored as given.
        """
        key = normalize_name(name)
        # Drop first so the replacement lands at the end, not in the old slot.
        self._entries.pop(key, None)
        self._entries[key] = value

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        """Return the value for ``name`` (any case) or ``default``."""
        return self._entries.get(normalize_name(name), default)

    def remove(self, name: str) -> Optional[str]:
        """Remove ``name`` if present and return its old value."""
        return self._entries.pop(normalize_name(name), None)

    # =========================================================================
    # MAPPING PROTOCOL
    # =========================================================================

    def __getitem__(self, name: str) -> str:
        return self._entries[normalize_name(name)]

    def __setitem__(self, name: str, value: str) -> None:
        self.set(name, value)

    def __delitem__(self, name: str) -> None:
        del self._entries[normalize_name(name)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def keys(self):
        return self._entries.keys()

    def values(self):
        return self._entries.values()

    def items(self) -> list[Tuple[str, str]]:
        return list(self._entries.items())

    def copy(self) -> "Headers":
        clone = Headers()
        clone._entries = dict(self._entries)
        return clone

    def to_dict(self) -> Dict[str, str]:
        """Plain dict of lowercase name → value, in iteration order."""
        return dict(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Headers):
            return self._entries == other._entries
        if isinstance(other, Mapping):
            return self._entries == {normalize_name(k): v for k, v in other.items()}
        return NotImplemented

    def __repr__(self) -> str:
        return f"Headers({self._entries!r})"
