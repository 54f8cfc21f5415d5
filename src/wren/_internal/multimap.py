"""MultiValueMap — shared base for QueryParams and FormData.

A read-only string mapping where keys can have multiple values.
``__getitem__`` returns the first value for a key, ``get_list`` returns
all of them.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs


class MultiValueMap(Mapping[str, str]):
    """Immutable multi-valued string mapping.

    Accepts a raw ``application/x-www-form-urlencoded`` string (or bytes),
    a plain ``Mapping[str, str]``, or nothing.
    """

    _data: dict[str, list[str]]

    __slots__ = ("_data",)

    def __init__(self, source: str | bytes | Mapping[str, str] | None = None) -> None:
        if source is None:
            data: dict[str, list[str]] = {}
        elif isinstance(source, bytes):
            data = parse_qs(source.decode("latin-1"), keep_blank_values=True)
        elif isinstance(source, str):
            data = parse_qs(source, keep_blank_values=True)
        elif isinstance(source, MultiValueMap):
            data = {key: source.get_list(key) for key in source}
        else:
            data = {key: [value] for key, value in source.items()}
        object.__setattr__(self, "_data", data)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"{type(self).__name__}({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def to_dict(self) -> dict[str, str]:
        """Return a plain dict holding the first value of every key."""
        return {key: values[0] for key, values in self._data.items() if values}
