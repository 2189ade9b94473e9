"""Request descriptor for Buffer API calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence, Union

# Form values are strings or lists of strings (repeated keys such as profile_ids[])
FormValue = Union[str, Sequence[str]]
FormBody = Mapping[str, FormValue]

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class RequestOptions:
    """Immutable description of a single HTTP call.

    `form_body` takes precedence over `json_body` when both are given.
    `timeout` is in seconds.
    """

    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)
    json_body: Any = None
    form_body: FormBody | None = None
    timeout: float = DEFAULT_TIMEOUT
