"""Tests for the account store."""

import pytest

from debug_buddy.accounts import (
    ACCOUNTS_KEY,
    CURRENT_ACCOUNT_KEY,
    AccountStore,
    PasswordHasher,
)
from debug_buddy.errors import (
    AuthError,
    ConflictError,
    NotAuthenticatedError,
    NotFoundError,
    ValidationError,
)
from debug_buddy.models import Session


class TestPasswordHasher:
    def test_hash_is_salted(self, fast_hasher):
        assert fast_hasher.hash("secret1") != fast_hasher.hash("secret1")

    def test_verify(self, fast_hasher):
        encoded = fast_hasher.hash("secret1")
        assert fast_hasher.verify("secret1", encoded)
        assert not fast_hasher.verify("secret2", encoded)

    def test_plaintext_never_stored(self, fast_hasher):
        assert "secret1" not in fast_hasher.hash("secret1")

    def test_malformed_encoding_rejected(self, fast_hasher):
        assert not fast_hasher.verify("secret1", "secret1")
        assert not fast_hasher.verify("secret1", "md5$1$00$00")

    def test_iterations_read_from_encoding(self):
        encoded = PasswordHasher(iterations=3).hash("pw1234")
        assert PasswordHasher(iterations=1).verify("pw1234", encoded)


class TestRegister:
    def test_success_logs_in(self, account_store, session):
        account = account_store.register(session, "alice", "alice@example.com", "secret1")
        assert account.username == "alice"
        assert account.analyses_count == 0
        assert account.average_score == 0.0
        assert session.is_authenticated
        assert session.account.id == account.id

    def test_secret_is_hashed_in_storage(self, account_store, session, storage):
        account_store.register(session, "alice", "alice@example.com", "secret1")
        stored = storage.get(ACCOUNTS_KEY)
        assert len(stored) == 1
        assert stored[0]["credential_secret"].startswith("pbkdf2_sha256$")
        assert "secret1" not in stored[0]["credential_secret"]

    @pytest.mark.parametrize(
        "username, email, password",
        [
            ("", "a@b.c", "secret1"),
            ("bob", "", "secret1"),
            ("bob", "a@b.c", ""),
        ],
    )
    def test_empty_fields(self, account_store, session, username, email, password):
        with pytest.raises(ValidationError, match="required"):
            account_store.register(session, username, email, password)
        assert not session.is_authenticated

    def test_password_length_boundary(self, account_store, session):
        with pytest.raises(ValidationError):
            account_store.register(session, "bob", "bob@example.com", "12345")
        account = account_store.register(session, "bob", "bob@example.com", "123456")
        assert account.username == "bob"

    def test_email_needs_at_sign(self, account_store, session):
        with pytest.raises(ValidationError, match="email"):
            account_store.register(session, "bob", "bob.example.com", "secret1")

    def test_duplicate_username_case_insensitive(self, account_store, logged_in):
        with pytest.raises(ConflictError, match="Username"):
            account_store.register(Session(), "ALICE", "other@example.com", "secret1")

    def test_duplicate_email_case_insensitive(self, account_store, logged_in):
        with pytest.raises(ConflictError, match="Email"):
            account_store.register(Session(), "alice2", "Alice@Example.COM", "secret1")

    def test_accounts_appended(self, account_store, logged_in):
        account_store.register(Session(), "bob", "bob@example.com", "secret1")
        assert [a.username for a in account_store.list_accounts()] == ["alice", "bob"]


class TestLogin:
    def test_case_insensitive_username(self, account_store, logged_in):
        fresh = Session()
        account = account_store.login(fresh, "Alice", "secret1")
        assert account.username == "alice"
        assert fresh.user_id == account.id

    def test_unknown_user(self, account_store, session):
        with pytest.raises(NotFoundError):
            account_store.login(session, "nobody", "secret1")
        assert not session.is_authenticated

    def test_wrong_password_leaves_session_unauthenticated(self, account_store, logged_in):
        fresh = Session()
        with pytest.raises(AuthError):
            account_store.login(fresh, "alice", "wrong-password")
        assert not fresh.is_authenticated
        assert fresh.account is None

    def test_remembers_last_user(self, account_store, logged_in, storage):
        assert storage.get(CURRENT_ACCOUNT_KEY) == logged_in.user_id


class TestLogoutAndRestore:
    def test_logout_clears_session_and_slot(self, account_store, logged_in, storage):
        account_store.logout(logged_in)
        assert not logged_in.is_authenticated
        assert storage.get(CURRENT_ACCOUNT_KEY) is None

    def test_logout_without_session_is_fine(self, account_store, session):
        account_store.logout(session)
        assert not session.is_authenticated

    def test_restore_session(self, account_store, logged_in):
        restored = Session()
        account = account_store.restore_session(restored)
        assert account is not None
        assert restored.user_id == logged_in.user_id

    def test_restore_after_logout(self, account_store, logged_in):
        account_store.logout(logged_in)
        assert account_store.restore_session(Session()) is None

    def test_restore_unknown_id_clears_slot(self, storage, fast_hasher):
        storage.set(CURRENT_ACCOUNT_KEY, "missing-id")
        store = AccountStore(storage, hasher=fast_hasher)
        assert store.restore_session(Session()) is None
        assert storage.get(CURRENT_ACCOUNT_KEY) is None


class TestRecordAnalysisStats:
    def test_requires_session(self, account_store, session):
        with pytest.raises(NotAuthenticatedError):
            account_store.record_analysis_stats(session, 1, 80.0)

    def test_updates_session_and_collection(self, account_store, logged_in):
        updated = account_store.record_analysis_stats(logged_in, 3, 72.5)
        assert updated.analyses_count == 3
        assert updated.average_score == 72.5
        assert logged_in.account.analyses_count == 3
        stored = account_store.get(logged_in.user_id)
        assert stored.analyses_count == 3
        assert stored.average_score == 72.5

    def test_other_accounts_untouched(self, account_store, logged_in):
        account_store.register(Session(), "bob", "bob@example.com", "secret1")
        account_store.record_analysis_stats(logged_in, 2, 90.0)
        bob = next(a for a in account_store.list_accounts() if a.username == "bob")
        assert bob.analyses_count == 0

    def test_credentials_survive_update(self, account_store, logged_in):
        account_store.record_analysis_stats(logged_in, 1, 50.0)
        assert account_store.login(Session(), "alice", "secret1").analyses_count == 1


class TestCorruptStorage:
    def test_unreadable_accounts_treated_as_empty(self, storage, fast_hasher):
        storage.set(ACCOUNTS_KEY, [{"unexpected": True}])
        store = AccountStore(storage, hasher=fast_hasher)
        assert store.list_accounts() == []

    def test_bad_record_does_not_hide_valid_ones(self, account_store, logged_in, storage):
        account_store.register(Session(), "bob", "bob@example.com", "secret1")
        storage.set(ACCOUNTS_KEY, storage.get(ACCOUNTS_KEY) + [{"username": "broken"}])
        names = [a.username for a in account_store.list_accounts()]
        assert names == ["alice", "bob"]

    def test_write_after_bad_record_keeps_valid_accounts(self, account_store, logged_in, storage):
        account_store.register(Session(), "bob", "bob@example.com", "secret1")
        storage.set(ACCOUNTS_KEY, storage.get(ACCOUNTS_KEY) + [{"username": "broken"}])
        account_store.register(Session(), "carol", "carol@example.com", "secret1")
        names = [a.username for a in account_store.list_accounts()]
        assert names == ["alice", "bob", "carol"]
        assert account_store.login(Session(), "alice", "secret1").username == "alice"

    def test_non_list_value_treated_as_empty(self, storage, fast_hasher):
        storage.set(ACCOUNTS_KEY, {"alice": "not a list"})
        assert AccountStore(storage, hasher=fast_hasher).list_accounts() == []
