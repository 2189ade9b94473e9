"""Authenticated access to the Buffer API for a single CLI invocation."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping

import httpx

from ...api import RequestOptions, build_url, request, with_retry
from ...api.models import DEFAULT_TIMEOUT, FormBody
from ...auth import mask_token
from .console import print_info

# File-only logger configured by cli.app.setup_logging
_api_logger = logging.getLogger("buffer_api")


@dataclass(frozen=True)
class ApiSession:
    """Token plus request settings shared by the calls of one command.

    GET requests are retried with exponential backoff when max_retries > 0.
    POST requests are never retried since they are not idempotent.
    """

    token: str
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = 0
    retry_delay: float = 1.0
    verbose: bool = False
    client: httpx.AsyncClient | None = field(default=None, compare=False, repr=False)

    def _announce(self, method: str, url: str, form: FormBody | None = None) -> None:
        masked = mask_token(url, self.token)
        _api_logger.info(f"{method} {masked}")
        if self.verbose:
            print_info(f"{method} {masked}")
            if form is not None:
                print_info(f"Body: {json.dumps(dict(form), ensure_ascii=False)}")

    async def get(self, path: str, params: Mapping[str, str] | None = None) -> Any:
        """GET a Buffer endpoint and return the decoded JSON."""
        url = build_url(path, self.token, params)
        self._announce("GET", url)
        options = RequestOptions(timeout=self.timeout)

        async def _call() -> Any:
            return await request(url, options, client=self.client)

        try:
            if self.max_retries > 0:
                return await with_retry(_call, self.max_retries, self.retry_delay)
            return await _call()
        except Exception as e:
            _api_logger.error(f"GET {path} failed: {e!r}")
            raise

    async def post(self, path: str, form: FormBody | None = None) -> Any:
        """POST a form-encoded body to a Buffer endpoint."""
        url = build_url(path, self.token)
        self._announce("POST", url, form)
        options = RequestOptions(method="POST", form_body=form, timeout=self.timeout)
        try:
            return await request(url, options, client=self.client)
        except Exception as e:
            _api_logger.error(f"POST {path} failed: {e!r}")
            raise
