import logging
import os
import tempfile
import threading
import time
import unittest
from pathlib import Path

from gdrivesync.errors import InvalidArgumentError, NetworkError
from gdrivesync.models import FileEvent, FileInfo
from gdrivesync.dispatcher import UploadDispatcher


class FakeUploader:
    def __init__(self) -> None:
        self.calls = []
        self.failures = {}
        self.timeline = None

    def upload_stream(self, stream, name, parent_id, *, mime_type="application/octet-stream"):
        content = stream.read()
        self.calls.append(
            {
                "name": name,
                "parent_id": parent_id,
                "content": content,
                "mime_type": mime_type,
                "at": time.monotonic(),
            }
        )
        if self.timeline is not None:
            self.timeline.append(("upload", name))
        if name in self.failures:
            raise self.failures[name]
        return FileInfo(file_id=f"R-{name}", name=name, mime_type=mime_type, parents=[parent_id])


class TestUploadDispatcher(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        self.uploader = FakeUploader()
        self.sleeps = []
        self.logger = logging.getLogger("gdrivesync.test_dispatcher")
        self.dispatcher = UploadDispatcher(
            self.uploader,
            "F1",
            logger=self.logger,
            sleep=self.sleeps.append,
        )

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _file(self, name: str, content: bytes = b"0123456789") -> str:
        path = self.dir / name
        path.write_bytes(content)
        return str(path)

    def test_uploads_file_with_name_parent_and_content(self) -> None:
        path = self._file("report.txt")

        results = self.dispatcher.handle_event(FileEvent.created([path]))

        self.assertEqual(len(self.uploader.calls), 1)
        call = self.uploader.calls[0]
        self.assertEqual(call["name"], "report.txt")
        self.assertEqual(call["parent_id"], "F1")
        self.assertEqual(call["content"], b"0123456789")
        self.assertEqual(call["mime_type"], "application/octet-stream")
        self.assertEqual(results[0].remote_id, "R-report.txt")
        self.assertEqual(results[0].status, "success")

    def test_settle_delay_precedes_upload(self) -> None:
        timeline = []
        self.uploader.timeline = timeline
        dispatcher = UploadDispatcher(
            self.uploader,
            "F1",
            settle_delay_sec=2.0,
            logger=self.logger,
            sleep=lambda sec: timeline.append(("sleep", sec)),
        )
        a, b = self._file("a.txt"), self._file("b.txt")

        dispatcher.handle_event(FileEvent.created([a, b]))

        self.assertEqual(
            timeline,
            [("sleep", 2.0), ("upload", "a.txt"), ("sleep", 2.0), ("upload", "b.txt")],
        )

    def test_settle_delay_in_real_time(self) -> None:
        dispatcher = UploadDispatcher(self.uploader, "F1", settle_delay_sec=0.2)
        path = self._file("slow.txt")

        received = time.monotonic()
        dispatcher.handle_event(FileEvent.created([path]))

        self.assertGreaterEqual(self.uploader.calls[0]["at"] - received, 0.2)

    def test_directories_and_vanished_paths_are_skipped(self) -> None:
        sub = self.dir / "subdir"
        sub.mkdir()
        gone = str(self.dir / "gone.txt")

        with self.assertLogs(self.logger, level="INFO") as logs:
            results = self.dispatcher.handle_event(FileEvent.created([str(sub), gone]))

        self.assertEqual(results, [])
        self.assertEqual(self.uploader.calls, [])
        self.assertEqual(self.sleeps, [])
        detected = [line for line in logs.output if "New file detected" in line]
        self.assertEqual(len(detected), 2)
        self.assertIn("subdir", detected[0])
        self.assertIn("gone.txt", detected[1])

    def test_open_failure_is_logged_and_dropped(self) -> None:
        victim = self._file("victim.txt")
        survivor = self._file("survivor.txt")

        def sleep_and_delete(sec: float) -> None:
            if os.path.exists(victim):
                os.remove(victim)

        dispatcher = UploadDispatcher(
            self.uploader, "F1", logger=self.logger, sleep=sleep_and_delete
        )

        with self.assertLogs(self.logger, level="ERROR") as logs:
            results = dispatcher.handle_event(FileEvent.created([victim, survivor]))

        self.assertIn("Failed to open file", logs.output[0])
        self.assertIn("victim.txt", logs.output[0])
        self.assertEqual([c["name"] for c in self.uploader.calls], ["survivor.txt"])
        self.assertEqual(results[0].error_kind, "FileNotFoundError")
        self.assertEqual(results[1].status, "success")

    def test_failed_upload_does_not_block_next_file(self) -> None:
        a, b = self._file("a.txt"), self._file("b.txt")
        c = self._file("c.txt")
        self.uploader.failures["a.txt"] = NetworkError("connection reset")

        with self.assertLogs(self.logger, level="INFO") as logs:
            first = self.dispatcher.handle_event(FileEvent.created([a, b]))
            second = self.dispatcher.handle_event(FileEvent.created([c]))

        self.assertEqual([c["name"] for c in self.uploader.calls], ["a.txt", "b.txt", "c.txt"])
        self.assertEqual(first[0].error_kind, "NetworkError")
        self.assertEqual(first[1].remote_id, "R-b.txt")
        self.assertEqual(second[0].remote_id, "R-c.txt")
        errors = [line for line in logs.output if line.startswith("ERROR")]
        self.assertEqual(len(errors), 1)
        self.assertIn("Failed to upload 'a.txt'", errors[0])
        self.assertIn("connection reset", errors[0])

    def test_unexpected_exception_is_isolated(self) -> None:
        a, b = self._file("a.txt"), self._file("b.txt")
        self.uploader.failures["a.txt"] = RuntimeError("bug")

        with self.assertLogs(self.logger, level="ERROR"):
            results = self.dispatcher.handle_event(FileEvent.created([a, b]))

        self.assertEqual(len(results), 1)
        self.assertEqual(results[0].file_name, "b.txt")

    def test_run_stops_before_next_item(self) -> None:
        stop = threading.Event()
        a, b = self._file("a.txt"), self._file("b.txt")

        def events():
            yield FileEvent.created([a])
            stop.set()
            yield FileEvent.created([b])

        self.dispatcher.run(events(), stop_event=stop)

        self.assertEqual([c["name"] for c in self.uploader.calls], ["a.txt"])

    def test_run_consumes_whole_sequence(self) -> None:
        paths = [self._file(f"f{i}.bin") for i in range(3)]

        self.dispatcher.run(FileEvent.created([p]) for p in paths)

        self.assertEqual(len(self.uploader.calls), 3)

    def test_invalid_arguments(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            UploadDispatcher(self.uploader, "")
        with self.assertRaises(InvalidArgumentError):
            UploadDispatcher(self.uploader, "F1", settle_delay_sec=-1)


if __name__ == "__main__":
    unittest.main()
