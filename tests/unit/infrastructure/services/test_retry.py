"""
===============================================================================
CRC — tests/unit/infrastructure/services/test_retry.py

Responsibilities:
    - Validar clasificación transitorio / permanente.
    - Validar retry con tenacity (falla transitoria → retry → éxito).
    - Validar fail-fast en errores permanentes y payloads inválidos.

Collaborators:
    - create_retry_decorator / is_transient_error (SUT)
===============================================================================
"""

from __future__ import annotations

import asyncio

import pytest

from cardsmith.crosscutting.exceptions import SegmentationResponseError
from cardsmith.infrastructure.services.retry import (
    RetryPolicy,
    create_retry_decorator,
    get_http_status_code,
    is_transient_error,
    no_retry,
)

pytestmark = pytest.mark.unit


class _HttpError(Exception):
    def __init__(self, code: int):
        super().__init__(f"http {code}")
        self.code = code


class TestClassification:
    @pytest.mark.parametrize("code", [408, 429, 500, 502, 503, 504])
    def test_transient_status_codes(self, code):
        assert is_transient_error(_HttpError(code))

    @pytest.mark.parametrize("code", [400, 401, 403, 404])
    def test_permanent_status_codes(self, code):
        assert not is_transient_error(_HttpError(code))

    def test_builtin_timeouts_are_transient(self):
        assert is_transient_error(TimeoutError())
        assert is_transient_error(ConnectionError())

    def test_message_heuristics(self):
        assert is_transient_error(RuntimeError("Rate limit reached"))
        assert not is_transient_error(RuntimeError("bad prompt"))

    def test_never_retries_cancellation_or_bad_payload(self):
        assert not is_transient_error(asyncio.CancelledError())
        assert not is_transient_error(SegmentationResponseError("timed out"))

    def test_status_code_from_response(self):
        class _Response:
            status_code = 503

        class _Err(Exception):
            response = _Response()

        assert get_http_status_code(_Err()) == 503


class TestRetryDecorator:
    def test_retries_transient_then_succeeds(self):
        calls = []

        @create_retry_decorator(max_attempts=3, base_delay=0, max_delay=0.01)
        def flaky():
            calls.append(1)
            if len(calls) < 3:
                raise TimeoutError("timed out")
            return "ok"

        assert flaky() == "ok"
        assert len(calls) == 3

    def test_permanent_error_fails_fast(self):
        calls = []

        @create_retry_decorator(max_attempts=3, base_delay=0, max_delay=0.01)
        def broken():
            calls.append(1)
            raise _HttpError(400)

        with pytest.raises(_HttpError):
            broken()
        assert len(calls) == 1

    def test_gives_up_after_max_attempts(self):
        calls = []

        @create_retry_decorator(max_attempts=2, base_delay=0, max_delay=0.01)
        def always_down():
            calls.append(1)
            raise _HttpError(503)

        with pytest.raises(_HttpError):
            always_down()
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_retries_coroutines(self):
        calls = []

        @create_retry_decorator(max_attempts=2, base_delay=0, max_delay=0.01)
        async def flaky():
            calls.append(1)
            if len(calls) < 2:
                raise ConnectionError("connection reset")
            return "ok"

        assert await flaky() == "ok"

    def test_rejects_invalid_policy(self):
        with pytest.raises(ValueError):
            create_retry_decorator(max_attempts=0, base_delay=0, max_delay=1)

    def test_no_retry_is_identity(self):
        def fn():
            return 1

        assert no_retry(fn) is fn


class TestRetryPolicy:
    def test_defaults_come_from_settings(self, monkeypatch):
        monkeypatch.setenv("RETRY_MAX_ATTEMPTS", "5")

        policy = RetryPolicy.from_settings()

        assert policy.max_attempts == 5
        assert policy.base_delay == 1.0

    def test_partial_overrides_keep_settings_for_the_rest(self, monkeypatch):
        monkeypatch.setenv("RETRY_MAX_ATTEMPTS", "2")
        calls = []

        @create_retry_decorator(base_delay=0, max_delay=0.01)
        def always_down():
            calls.append(1)
            raise TimeoutError()

        with pytest.raises(TimeoutError):
            always_down()
        assert len(calls) == 2
