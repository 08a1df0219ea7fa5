# tests/conftest.py

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest
from PySide6.QtCore import QCoreApplication

from services.session import Session, create_session

TODAY = date(2025, 4, 22)  # a Tuesday; the week started on Sunday 2025-04-20


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """Signals work without an event loop, but Qt wants an application object."""
    return QCoreApplication.instance() or QCoreApplication([])


@pytest.fixture()
def today() -> date:
    return TODAY


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Settings stand-in with the same attributes as config.Settings.

    Built by hand so tests never read the developer's environment or .env.
    """
    return SimpleNamespace(
        app_name="Taskboard",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        demo_email="demo@example.com",
        demo_password="password",
        seed_demo_data=False,
        due_soon_days=7,
        window_width=1200,
        window_height=760,
    )


@pytest.fixture()
def session(settings) -> Session:
    """Empty, logged-in session on a fixed clock."""
    s = Session(settings, clock=lambda: TODAY)
    assert s.auth.login(settings.demo_email, settings.demo_password)
    return s


@pytest.fixture()
def seeded_session(settings) -> Session:
    settings.seed_demo_data = True
    s = create_session(settings, clock=lambda: TODAY)
    assert s.auth.login(settings.demo_email, settings.demo_password)
    return s


