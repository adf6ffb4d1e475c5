import os
import pytest
from unittest.mock import AsyncMock

# Must be set before bookproject.storage builds its engine
os.environ.setdefault("SQLALCHEMY_DATABASE_URL", "sqlite://")

from bookproject.internal_message import NotificationDispatcher
from bookproject.security import PasswordEncoder


@pytest.fixture(scope="function")
def fake_dispatcher():
    return AsyncMock(spec=NotificationDispatcher)


@pytest.fixture(scope="session")
def password_encoder():
    # Lowest bcrypt cost keeps the suite fast
    return PasswordEncoder(rounds=4)
