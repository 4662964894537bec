"""Nox sessions for threadrite.

Run with: uv run nox [session]
"""

import shutil
from pathlib import Path

import nox

nox.options.default_venv_backend = "uv"
nox.options.stop_on_first_error = True
nox.options.error_on_external_run = True

# Format first (incl. lint), clean coverage, run tests, then report
nox.options.sessions = ["format", "lint", "cov-clean", "test", "cov-combine"]

PYTHON_VERSIONS = ["3.9", "3.10", "3.11", "3.12", "3.13", "3.14"]
TOOLS_PYTHON = PYTHON_VERSIONS[-1]

COVERAGE_OUTPUTS = ["htmlcov", "coverage.xml", "tests-results.xml"]
BUILD_OUTPUTS = ["build", "dist", "*.egg-info", ".pytest_cache", ".ruff_cache"]


def _remove(pattern):
    for path in Path(".").glob(pattern):
        if path.is_dir():
            shutil.rmtree(path, ignore_errors=True)
        else:
            path.unlink()


@nox.session(python=PYTHON_VERSIONS)
def test(session):
    """Run the test suite under coverage, one data file per Python version."""
    session.install(".[test]")
    junit_args = []
    if session.python == TOOLS_PYTHON:
        junit_args = ["--junit-xml=tests-results.xml"]
    session.run(
        "coverage",
        "run",
        "--parallel-mode",
        "--source",
        "threadrite",
        "-m",
        "pytest",
        "-qq",
        *junit_args,
        *(session.posargs or ["tests"]),
    )


@nox.session(python=TOOLS_PYTHON)
def lint(session):
    """Check linting and formatting with ruff, types with ty."""
    session.install("ruff", "ty")
    session.run("ruff", "check", ".")
    session.run("ruff", "format", "--check", ".")
    session.run("ty", "check", "threadrite")


@nox.session(python=TOOLS_PYTHON)
def format(session):
    """Apply ruff fixes and formatting."""
    session.install("ruff")
    session.run("ruff", "check", "--fix", ".")
    session.run("ruff", "format", ".")


@nox.session(python=TOOLS_PYTHON, name="cov-clean")
def cov_clean(session):
    """Remove coverage data and reports from earlier runs."""
    for pattern in [".coverage*", *COVERAGE_OUTPUTS]:
        _remove(pattern)


@nox.session(python=TOOLS_PYTHON, name="cov-combine")
def cov_combine(session):
    """Combine per-version coverage data and print the report."""
    session.install("coverage")
    session.run("coverage", "combine", "--keep", success_codes=[0, 1])
    session.run("coverage", "report", "-m")
    session.run("coverage", "xml")


@nox.session(python=False)
def clean(session):
    """Remove build artifacts, caches and coverage output."""
    for pattern in ["**/__pycache__", ".nox", ".coverage*", *COVERAGE_OUTPUTS]:
        _remove(pattern)
    for pattern in BUILD_OUTPUTS:
        _remove(pattern)
