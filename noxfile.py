"""Nox sessions for the futebol bot."""

import nox

nox.options.sessions = ["tests", "lint"]
python_versions = ["3.11", "3.12"]
coverage_targets = ["--cov=bots", "--cov=team_bot"]
lint_paths = ["bots", "team_bot", "tests", "noxfile.py"]


@nox.session(python=python_versions)
def tests(session):
    """Run the test suite with coverage on every supported Python."""
    session.install("-e", ".[dev]")
    session.run(
        "pytest",
        *coverage_targets,
        "--cov-report=term-missing",
        "--cov-fail-under=80",
        *session.posargs,
    )


@nox.session(python=python_versions[0])
def balancer(session):
    """Run only the team balancing tests (no Discord mocks)."""
    session.install("-e", ".[dev]")
    session.run(
        "pytest",
        "tests/test_balancer.py",
        "tests/test_teams.py",
        "-v",
        *session.posargs,
    )


@nox.session(python=python_versions[0])
def lint(session):
    """Check style and formatting of the bot packages, tests and this file."""
    session.install("ruff>=0.1.0")
    session.run("ruff", "check", *lint_paths)
    session.run("ruff", "format", "--diff", *lint_paths)


@nox.session(name="format", python=python_versions[0])
def format_code(session):
    """Apply ruff fixes, then reformat."""
    session.install("ruff>=0.1.0")
    session.run("ruff", "check", "--fix", *lint_paths)
    session.run("ruff", "format", *lint_paths)
