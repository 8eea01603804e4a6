import io
import json
import unittest
from datetime import datetime, timezone
from unittest.mock import Mock

from gdrivesync.controller.drive_controller import (
    GoogleDriveController,
    _file_dict_to_file_info,
)
from gdrivesync.errors import (
    ApiError,
    InvalidArgumentError,
    NetworkError,
    QuotaExceededError,
    RateLimitError,
)


def _http_error(status, reason, body=None):
    from googleapiclient.errors import HttpError

    resp = Mock()
    resp.status = status
    resp.reason = reason
    content = json.dumps(body or {}).encode("utf-8")
    return HttpError(resp=resp, content=content)


class TestDriveControllerHelpers(unittest.TestCase):
    def test_file_dict_to_file_info_parses_fields(self) -> None:
        data = {
            "id": "R1",
            "name": "report.txt",
            "mimeType": "application/octet-stream",
            "parents": ["F1"],
            "size": "10",
            "createdTime": "2025-01-01T00:00:00Z",
        }
        info = _file_dict_to_file_info(data)
        self.assertEqual(info.file_id, "R1")
        self.assertEqual(info.parents, ["F1"])
        self.assertEqual(info.size, 10)
        self.assertEqual(info.created_time, datetime(2025, 1, 1, tzinfo=timezone.utc))

    def test_file_dict_without_id_is_api_error(self) -> None:
        with self.assertRaises(ApiError):
            _file_dict_to_file_info({"name": "x"})


class TestDriveControllerUpload(unittest.TestCase):
    def _controller(self):
        service = Mock()
        files_resource = Mock()
        request = Mock()
        service.files.return_value = files_resource
        files_resource.create.return_value = request
        return GoogleDriveController.from_service(service), files_resource, request

    def test_upload_stream_creates_file_under_parent(self) -> None:
        controller, files_resource, request = self._controller()
        request.execute.return_value = {"id": "R1", "name": "report.txt", "parents": ["F1"]}

        info = controller.upload_stream(io.BytesIO(b"0123456789"), "report.txt", "F1")

        self.assertEqual(info.file_id, "R1")
        kwargs = files_resource.create.call_args.kwargs
        self.assertEqual(kwargs["body"], {"name": "report.txt", "parents": ["F1"]})
        self.assertTrue(kwargs.get("supportsAllDrives"))
        self.assertEqual(kwargs["media_body"].mimetype(), "application/octet-stream")
        self.assertEqual(kwargs["media_body"].size(), 10)

    def test_upload_stream_without_all_drives(self) -> None:
        service = Mock()
        service.files.return_value.create.return_value.execute.return_value = {"id": "R1"}
        controller = GoogleDriveController.from_service(service, supports_all_drives=False)

        controller.upload_stream(io.BytesIO(b"x"), "a.bin", "F1")

        kwargs = service.files.return_value.create.call_args.kwargs
        self.assertNotIn("supportsAllDrives", kwargs)

    def test_upload_stream_rejects_empty_name(self) -> None:
        controller, files_resource, _ = self._controller()
        with self.assertRaises(InvalidArgumentError):
            controller.upload_stream(io.BytesIO(b"x"), "", "F1")
        files_resource.create.assert_not_called()

    def test_quota_error_is_mapped(self) -> None:
        controller, _, request = self._controller()
        body = {
            "error": {
                "message": "The user's Drive storage quota has been exceeded.",
                "errors": [{"domain": "usageLimits", "reason": "storageQuotaExceeded"}],
            }
        }
        request.execute.side_effect = _http_error(403, "Forbidden", body)

        with self.assertRaises(QuotaExceededError) as ctx:
            controller.upload_stream(io.BytesIO(b"x"), "a.bin", "F1")

        self.assertEqual(ctx.exception.details["status_code"], 403)
        self.assertIn("quota", str(ctx.exception))

    def test_rate_limit_is_not_retried(self) -> None:
        controller, _, request = self._controller()
        request.execute.side_effect = _http_error(429, "Too Many Requests")

        with self.assertRaises(RateLimitError):
            controller.upload_stream(io.BytesIO(b"x"), "a.bin", "F1")

        self.assertEqual(request.execute.call_count, 1)

    def test_os_error_maps_to_network_error(self) -> None:
        controller, _, request = self._controller()
        request.execute.side_effect = ConnectionResetError("reset by peer")

        with self.assertRaises(NetworkError) as ctx:
            controller.upload_stream(io.BytesIO(b"x"), "a.bin", "F1")

        self.assertIsInstance(ctx.exception.cause, ConnectionResetError)

    def test_unknown_error_maps_to_api_error(self) -> None:
        controller, _, request = self._controller()
        request.execute.side_effect = RuntimeError("boom")

        with self.assertRaises(ApiError):
            controller.upload_stream(io.BytesIO(b"x"), "a.bin", "F1")


if __name__ == "__main__":
    unittest.main()
