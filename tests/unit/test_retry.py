"""Unit tests for the transient-error retry policy."""

import os
from unittest.mock import Mock, patch

import pytest

from partialsum.core.exceptions import (
    ErrorStage,
    MalformedRecordLineError,
    OpenError,
    ReadError,
    SeekError,
)
from partialsum.services.retry import RetryPolicy, compute_hash_with_retry
from partialsum.utils.hashing import partial_file_hash


def _read_error(stage=ErrorStage.READ_MIDDLE):
    return ReadError("/data/x.bin", stage, "Input/output error")


class TestRetryPolicy:
    def test_success_first_try(self):
        op = Mock(return_value="digest")

        assert RetryPolicy().run(op, "/data/x.bin") == "digest"
        assert op.call_count == 1

    def test_recovers_after_transient_errors(self, log_messages):
        op = Mock(side_effect=[_read_error(), SeekError("/x", ErrorStage.SEEK_LAST, "EIO"), "digest"])

        assert RetryPolicy().run(op, "/data/x.bin") == "digest"
        assert op.call_count == 3
        retries = [m for m in log_messages if m.startswith("Retrying file '/data/x.bin'")]
        assert len(retries) == 2

    def test_gives_up_after_three_attempts(self):
        errors = [_read_error(ErrorStage.READ_FIRST), _read_error(), _read_error(ErrorStage.READ_LAST)]
        op = Mock(side_effect=errors)

        with pytest.raises(ReadError) as exc_info:
            RetryPolicy().run(op, "/data/x.bin")

        assert op.call_count == 3
        # Last error, with its original classification
        assert exc_info.value is errors[-1]
        assert exc_info.value.stage is ErrorStage.READ_LAST

    @pytest.mark.parametrize(
        "error",
        [
            OpenError("/data/x.bin", "Permission denied"),
            MalformedRecordLineError("garbage"),
            ValueError("boom"),
        ],
    )
    def test_non_transient_not_retried(self, error, log_messages):
        op = Mock(side_effect=error)

        with pytest.raises(type(error)):
            RetryPolicy().run(op, "/data/x.bin")

        assert op.call_count == 1
        assert not any(m.startswith("Retrying") for m in log_messages)

    def test_zero_retries(self):
        op = Mock(side_effect=_read_error())

        with pytest.raises(ReadError):
            RetryPolicy(retries=0).run(op, "/data/x.bin")

        assert op.call_count == 1


def test_compute_hash_with_retry_matches_single_attempt(make_file):
    path = make_file("data.bin", os.urandom(4096))

    assert compute_hash_with_retry(path, partial_bytes=64) == partial_file_hash(path, 64)


def test_compute_hash_with_retry_recovers_flaky_read(make_file):
    path = make_file("data.bin", os.urandom(4096))
    expected = partial_file_hash(path, 64)
    real = partial_file_hash
    calls = {"n": 0}

    def flaky(p, partial_bytes, include_modtime):
        calls["n"] += 1
        if calls["n"] == 1:
            raise _read_error()
        return real(p, partial_bytes, include_modtime)

    with patch("partialsum.services.retry.partial_file_hash", side_effect=flaky):
        assert compute_hash_with_retry(path, partial_bytes=64) == expected

    assert calls["n"] == 2
