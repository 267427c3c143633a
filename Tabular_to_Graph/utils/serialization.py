"""Utility helpers for JSON serialization of export artefacts.

`json_default` is passed to `json.dump(..., default=json_default)` by the JSON
writers. Numpy scalars (left over from pandas parsing) become their Python
value; anything else falls back to `str(obj)`.
"""

from typing import Any

import numpy as np

__all__ = ["json_default"]


def json_default(obj: Any):  # noqa: ANN401
    """Default handler for `json.dump`/`json.dumps`.

    Example
    -------
    >>> json.dumps(data, default=json_default)
    """
    if isinstance(obj, np.generic):
        return obj.item()
    return str(obj)
