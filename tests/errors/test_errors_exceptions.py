import unittest

from docsync.errors.exceptions import (
    AccessFilteredError,
    AuthError,
    DocSyncError,
    EndpointUnavailableError,
    HttpErrorInfo,
    RemoteApiError,
    TransientRemoteError,
    ValidationError,
    map_http_error,
)


class TestExceptions(unittest.TestCase):
    def test_base_error_keeps_details_and_cause(self) -> None:
        cause = RuntimeError("root")
        err = DocSyncError("msg", details={"k": "v"}, cause=cause)
        self.assertEqual(str(err), "msg")
        self.assertEqual(err.details["k"], "v")
        self.assertIs(err.cause, cause)

    def test_validation_error_exposes_rule(self) -> None:
        err = ValidationError("too big", rule="too_large", details={"size": 1})
        self.assertEqual(err.rule, "too_large")
        self.assertEqual(err.details, {"rule": "too_large", "size": 1})

    def test_map_http_error_basic(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=404, message="not found"))
        self.assertIsInstance(err, EndpointUnavailableError)

        err = map_http_error(HttpErrorInfo(status_code=403, message="filtered"))
        self.assertIsInstance(err, AccessFilteredError)

        err = map_http_error(HttpErrorInfo(status_code=401, message="auth"))
        self.assertIsInstance(err, AuthError)

    def test_map_http_error_other_is_remote_api_error(self) -> None:
        for status in (400, 418, 500, 503):
            err = map_http_error(HttpErrorInfo(status_code=status))
            self.assertIsInstance(err, RemoteApiError)
            self.assertEqual(err.details["status_code"], status)

    def test_all_mapped_errors_are_transient(self) -> None:
        for status in (401, 403, 404, 500):
            self.assertIsInstance(
                map_http_error(HttpErrorInfo(status_code=status)), TransientRemoteError
            )

    def test_default_message_mentions_status(self) -> None:
        err = map_http_error(HttpErrorInfo(status_code=502))
        self.assertIn("502", str(err))


if __name__ == "__main__":
    unittest.main()
