import os

import pytest


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep RPNCALC_* variables from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("RPNCALC_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("RPNCALC_HISTORY_FILE", "")


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        print(f"TEST: {item.name} - {'PASSED' if report.passed else 'FAILED'}")
