import unittest

from gdrivesync.auth import AuthInfo


class TestAuthInfo(unittest.TestCase):
    def test_auth_info_valid_service_account(self) -> None:
        info = AuthInfo(
            kind="service_account",
            data={"credentials_file": "/tmp/credentials.json"},
        )
        self.assertEqual(info.kind, "service_account")
        self.assertEqual(info.credentials_file, "/tmp/credentials.json")

    def test_auth_info_factory(self) -> None:
        info = AuthInfo.service_account("/tmp/credentials.json")
        self.assertEqual(info.data, {"credentials_file": "/tmp/credentials.json"})

    def test_auth_info_invalid_kind(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(kind="oauth", data={"credentials_file": "x"})

    def test_auth_info_missing_keys(self) -> None:
        with self.assertRaises(ValueError):
            AuthInfo(kind="service_account", data={})

    def test_auth_info_data_must_be_dict(self) -> None:
        with self.assertRaises(TypeError):
            AuthInfo(kind="service_account", data=["credentials_file"])  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
