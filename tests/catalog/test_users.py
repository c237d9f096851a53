"""
Unit tests for the credential registry.
"""

import threading

import pytest

from catalog.errors import DuplicateUser, InvalidUsername
from catalog.users import CredentialRegistry, is_valid_username


class TestRegister:
    """Test cases for user registration."""

    def test_register(self, registry):
        user = registry.register("alice", "pw1")

        assert user.username == "alice"
        assert len(registry) == 1

    def test_register_twice(self, registry):
        """Test that the second registration of a name fails."""
        registry.register("alice", "pw1")

        with pytest.raises(DuplicateUser):
            registry.register("alice", "other")

        assert len(registry) == 1
        assert registry.verify("alice", "pw1")

    @pytest.mark.parametrize("username", ["", "   ", "\t\n", None, 123, ["alice"]])
    def test_invalid_username(self, registry, username):
        with pytest.raises(InvalidUsername):
            registry.register(username, "pw1")

        assert len(registry) == 0

    def test_no_password_policy(self, registry):
        registry.register("alice", "x")

        assert registry.verify("alice", "x")

    def test_concurrent_duplicate_registration(self):
        """Test that racing registrations of one name admit exactly one."""
        registry = CredentialRegistry()
        outcomes = []
        barrier = threading.Barrier(8)

        def register():
            barrier.wait()
            try:
                registry.register("alice", "pw1")
                outcomes.append("ok")
            except DuplicateUser:
                outcomes.append("duplicate")

        threads = [threading.Thread(target=register) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert outcomes.count("ok") == 1
        assert outcomes.count("duplicate") == 7


class TestVerify:
    """Test cases for credential verification."""

    def test_exact_match(self, registry):
        registry.register("alice", "pw1")

        assert registry.verify("alice", "pw1") is True

    def test_wrong_password(self, registry):
        registry.register("alice", "pw1")

        assert registry.verify("alice", "pw2") is False

    def test_case_sensitive(self, registry):
        registry.register("alice", "pw1")

        assert registry.verify("Alice", "pw1") is False
        assert registry.verify("alice", "PW1") is False

    def test_unknown_user(self, registry):
        assert registry.verify("nobody", "pw1") is False

    def test_non_string_username(self, registry):
        assert registry.verify(None, "pw1") is False


def test_is_valid_username():
    assert is_valid_username("alice")
    assert is_valid_username(" alice ")
    assert not is_valid_username("  ")
    assert not is_valid_username(42)
