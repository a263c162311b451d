"""
Tests for the Streamlit admin page.

The app runs headless through Streamlit's AppTest harness against
in-memory storage.
"""

import pytest
from datetime import date
from pathlib import Path

from streamlit.testing.v1 import AppTest


APP_PATH = Path(__file__).parent.parent / "app" / "main.py"


@pytest.fixture
def admin(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.run()
    at.sidebar.radio[0].set_value("🛠️ Admin").run()
    return at


class TestAdminPaging:
    def test_page_survives_rerun(self, admin):
        admin.session_state["admin_page"] = 3
        admin.run()
        assert admin.session_state["admin_page"] == 3

    def test_new_date_range_starts_at_first_page(self, admin):
        """Changing either bound drops back to page 1."""
        admin.session_state["admin_page"] = 3
        admin.run()

        admin.date_input[0].set_value(date(2024, 3, 1)).run()
        assert admin.session_state["admin_page"] == 1

        admin.session_state["admin_page"] = 2
        admin.run()
        admin.date_input[1].set_value(date(2024, 3, 31)).run()
        assert admin.session_state["admin_page"] == 1
