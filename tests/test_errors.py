def test_custom_exceptions_inheritance():
    """Test that custom exceptions inherit from base exception."""
    from commitsmith.errors import (
        CommitsmithError,
        EmptyResponseError,
        EncodingError,
        InvalidResponseError,
        MalformedCommitError,
        MissingCredentialError,
        NoChangesError,
        TransportError,
        UpstreamError,
        VcsInvocationError,
    )

    for error in (
        NoChangesError,
        VcsInvocationError,
        MissingCredentialError,
        TransportError,
        UpstreamError,
        EmptyResponseError,
        MalformedCommitError,
        InvalidResponseError,
    ):
        assert issubclass(error, CommitsmithError)

    assert issubclass(EncodingError, VcsInvocationError)
    assert issubclass(CommitsmithError, Exception)


def test_upstream_error_carries_status_and_body():
    from commitsmith.errors import UpstreamError

    error = UpstreamError(429, '{"error": "rate limited"}')

    assert error.status == 429
    assert error.body == '{"error": "rate limited"}'
    assert "429" in str(error)
    assert "rate limited" in str(error)


def test_malformed_commit_error_keeps_raw_text():
    from commitsmith.errors import MalformedCommitError

    error = MalformedCommitError("not json", "invalid JSON")

    assert error.raw == "not json"
    assert error.reason == "invalid JSON"
    assert "'not json'" in str(error)


def test_vcs_invocation_error_records_command():
    from commitsmith.errors import VcsInvocationError

    error = VcsInvocationError(
        "git failed", command=["git", "push"], returncode=128, stderr="no remote"
    )

    assert error.command == ("git", "push")
    assert error.returncode == 128
    assert error.stderr == "no remote"
