from contextlib import contextmanager

import pytest

from tccli.errors import CacheDecodeError, HTTPStatusError, TcCliError


@contextmanager
def cleanup(log):
    try:
        yield
    finally:
        log.append("closed")


def test_error_passes_through_context_manager_unchanged():
    log = []
    error = HTTPStatusError("Bad (!= 200) status code 500", url="https://x.example.com", status_code=500)

    with pytest.raises(HTTPStatusError) as exc_info:
        with cleanup(log):
            raise error

    assert exc_info.value is error
    assert exc_info.value.__traceback__ is not None
    assert log == ["closed"]


def test_error_message_and_fields():
    cause = ValueError("bad json")
    error = CacheDecodeError("Invalid cache file", cause=cause)

    assert isinstance(error, TcCliError)
    assert str(error) == "Invalid cache file"
    assert error.cause is cause
    assert error.path is None


def test_errors_compare_by_identity():
    first = HTTPStatusError("boom", url="https://x.example.com", status_code=500)
    second = HTTPStatusError("boom", url="https://x.example.com", status_code=500)

    assert first != second
    assert len({first, second}) == 2
