"""Immutable query string parameters.

Implements ``Mapping[str, str]`` with multi-value access via ``get_list``.
"""

from wren._internal.multimap import MultiValueMap


class QueryParams(MultiValueMap):
    """Immutable query string parameters.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.

    Query placeholders in route patterns are matched against this mapping,
    so a key that is present with an empty value still counts as present.
    """

    __slots__ = ()
