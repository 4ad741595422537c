"""Pytest configuration and fixtures."""

import pytest

from debug_buddy.accounts import AccountStore, PasswordHasher
from debug_buddy.history import AnalysisStore
from debug_buddy.models import Session
from debug_buddy.storage import MemoryStore


@pytest.fixture
def storage():
    return MemoryStore()


@pytest.fixture
def fast_hasher():
    """Single-round hashing keeps the account tests fast."""
    return PasswordHasher(iterations=1)


@pytest.fixture
def account_store(storage, fast_hasher):
    return AccountStore(storage, hasher=fast_hasher)


@pytest.fixture
def analysis_store(storage):
    return AnalysisStore(storage)


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def logged_in(account_store, session):
    """A session logged in as a freshly registered 'alice'."""
    account_store.register(session, "alice", "alice@example.com", "secret1")
    return session


@pytest.fixture
def sample_source():
    """A small Swift-ish file that trips each rule once."""
    return "\n".join([
        "import Foundation",
        "let name = user?.name ?? \"anonymous\"",
        "let x = " + "a + " * 30 + "b",
        "    // a comment line that is definitely longer than fifty characters ok",
        "if let value = dictionary[key], value.isEmpty == false, other == nil { run() }",
        "",
    ])
