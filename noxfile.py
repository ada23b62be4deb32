# topmark:header:start
#
#   project      : StampMark
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""StampMark project automation via Nox.

Sessions:
  - `qa`: Per-Python session that runs pytest (property tests excluded).
  - `property_test`: Long-running property tests (opt-in).
  - `lint`: Ruff lint and format check.

Common invocations:
  - `nox -s qa`
  - `nox -s lint`
"""

from __future__ import annotations

import nox

PYTHON_VERSIONS: list[str] = ["3.10", "3.11", "3.12", "3.13"]

nox.options.sessions = ["qa", "lint"]
nox.options.reuse_existing_virtualenvs = True


@nox.session(python=PYTHON_VERSIONS)
def qa(session: nox.Session) -> None:
    """Run the test suite (property tests excluded)."""
    session.install("-e", ".[test]")
    session.run("pytest", "-m", "not hypothesis_slow", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def property_test(session: nox.Session) -> None:
    """Run the long-running property-based tests."""
    session.install("-e", ".[test]")
    session.run("pytest", "-m", "hypothesis_slow", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def lint(session: nox.Session) -> None:
    """Run Ruff lint and format checks."""
    session.install("ruff")
    session.run("ruff", "check", "src", "tests", "noxfile.py")
    session.run("ruff", "format", "--check", "src", "tests", "noxfile.py")
