import pytest

from certify.services.credential_hasher import CredentialHasher


class TestBcryptScheme:
    @pytest.fixture
    def hasher(self):
        return CredentialHasher("bcrypt", rounds=4)

    def test_hash_is_salted(self, hasher):
        first = hasher.hash("pw1")
        second = hasher.hash("pw1")

        assert first != "pw1"
        assert first != second
        assert hasher.verify("pw1", first)
        assert hasher.verify("pw1", second)

    def test_wrong_password(self, hasher):
        assert not hasher.verify("pw2", hasher.hash("pw1"))

    def test_plaintext_entry_does_not_verify(self, hasher):
        assert not hasher.verify("pw1", "pw1")


class TestPlainScheme:
    def test_stores_password_as_is(self):
        hasher = CredentialHasher("plain")

        assert hasher.hash("pw1") == "pw1"
        assert hasher.verify("pw1", "pw1")
        assert not hasher.verify("PW1", "pw1")


def test_unknown_scheme():
    with pytest.raises(ValueError):
        CredentialHasher("md5")
