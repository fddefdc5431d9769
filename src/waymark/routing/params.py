"""Parameter sanitization for generated paths.

``#`` and ``?`` in a substituted value would otherwise be read as
fragment and query delimiters in the resulting path.
"""

import unicodedata
from collections.abc import Mapping

type ParamValue = str | int | None
type Params = Mapping[str, ParamValue]


def escape_path_text(value: str) -> str:
    """NFC-normalize *value* and escape ``#`` and ``?``."""
    return unicodedata.normalize("NFC", value).replace("#", "%23").replace("?", "%3F")


def sanitize_params(params: Params) -> dict[str, ParamValue]:
    """Return a copy of *params* with every string value escaped.

    Non-string values (ints, ``None``) pass through untouched.
    """
    return {
        key: escape_path_text(value) if isinstance(value, str) else value
        for key, value in params.items()
    }


def spread_key(name: str) -> str:
    """Strip the ``...`` marker from a spread parameter name."""
    return name[3:]
