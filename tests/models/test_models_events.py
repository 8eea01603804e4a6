import unittest

from gdrivesync.models import EventKind, FileEvent


class TestFileEvent(unittest.TestCase):
    def test_created_factory_keeps_order(self) -> None:
        event = FileEvent.created(["/d/b.txt", "/d/a.txt"])
        self.assertIs(event.kind, EventKind.CREATED)
        self.assertEqual(event.paths, ("/d/b.txt", "/d/a.txt"))

    def test_empty_paths_rejected(self) -> None:
        with self.assertRaises(ValueError):
            FileEvent.created([])

    def test_kind_must_be_enum(self) -> None:
        with self.assertRaises(TypeError):
            FileEvent(kind="created", paths=("/d/a",))  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
