"""Shared pytest fixtures for flowtrack tests."""

import os
import tempfile
from decimal import Decimal

import pytest

from flowtrack.database.factories import create_sqlite_database
from flowtrack.domain.account import AccountService
from flowtrack.domain.budget import BudgetService
from flowtrack.domain.recurring import RecurringTransactionService
from flowtrack.domain.transaction import TransactionService
from flowtrack.domain.user import UserService
from flowtrack.notifications.base import Mailer


class FakeMailer(Mailer):
    """Mailer that records messages instead of sending them."""

    def __init__(self, deliver: bool = True):
        self.deliver = deliver
        self.sent = []

    def send(self, message):
        self.sent.append(message)
        return self.deliver


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def second_db(temp_db):
    """Open another handle on the temporary database, as a concurrent run would."""
    db = create_sqlite_database(database_path=temp_db.database_path)
    db.connect()

    yield db

    db.disconnect()


@pytest.fixture
def user_service(temp_db):
    return UserService(temp_db)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def recurring_service(temp_db):
    return RecurringTransactionService(temp_db)


@pytest.fixture
def budget_service(temp_db):
    return BudgetService(temp_db)


@pytest.fixture
def sample_user(user_service):
    """Create a sample user for testing."""
    user_id = user_service.create_user(name="Test User", email="test@example.com")
    return user_service.get_user(user_id)


@pytest.fixture
def sample_account(account_service, sample_user):
    """Create the sample user's default account with a balance of 1000."""
    account_id = account_service.create_account(
        user_id=sample_user.id,
        name="Test Account",
        balance=Decimal("1000"),
    )
    return account_service.get_account(account_id, sample_user.id)


@pytest.fixture
def mailer():
    return FakeMailer()


@pytest.fixture
def second_mailer():
    return FakeMailer()


@pytest.fixture
def undelivered_mailer():
    """Mailer whose deliveries all fail."""
    return FakeMailer(deliver=False)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's FLOWTRACK_* settings out of tests."""
    for name in list(os.environ):
        if name.startswith("FLOWTRACK_"):
            monkeypatch.delenv(name, raising=False)
