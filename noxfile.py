import nox

PYTHON_VERSIONS = ["3.11", "3.12", "3.13"]

DOMAIN_TESTS = ["tests/identity/domain/", "tests/store/domain/"]
API_TESTS = ["tests/identity/integration/", "tests/store/integration/", "tests/integration/"]


def _install(session: nox.Session) -> None:
    """Install the project and its test group with poetry."""
    session.run("poetry", "install", "--with", "test", external=True)


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the whole suite. Extra arguments are passed through to pytest."""
    _install(session)
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_domain(session: nox.Session) -> None:
    """Aggregates, entities and value objects only."""
    _install(session)
    session.run("pytest", *DOMAIN_TESTS, *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_api(session: nox.Session) -> None:
    """HTTP surface of both services, including the cross-service journey."""
    _install(session)
    session.run("pytest", *API_TESTS, *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def tests_postgres(session: nox.Session) -> None:
    """Full suite against the PostgreSQL overlay in domain.toml."""
    _install(session)
    session.run("pytest", "--env", "production", *session.posargs)
