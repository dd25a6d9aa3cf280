"""
Shared pytest fixtures for the end-to-end suite.

This module contains fixtures that are shared across all test modules:
the active configuration, the sample data factory, notes API sessions
and accounts, and the retry policy for suites that talk to live
third-party targets.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Environment-driven configuration
- Test data factories with uniqueness salting
- Whole-test retries for tests against unstable remote services
"""

import logging
from collections.abc import Generator

import pytest
import requests
from faker import Faker

from config import Config, get_config
from shared.live_targets import require_target
from shared.notes_api import NotesApiClient, NotesApiError
from shared.test_data import (
    SEARCH_KEYWORDS,
    NoteData,
    SampleDataFactory,
    SearchKeywords,
    UserCredentials,
)

logger = logging.getLogger(__name__)


# Markers for suites that depend on remote targets
LIVE_MARKERS = ("api", "e2e", "smoke", "live")


# -----------------------------------------------------------------------------
# Configuration Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def settings() -> type[Config]:
    """
    Provide the configuration for the current environment.

    Returns:
        Configuration class selected by TEST_ENV / CI.
    """
    return get_config()


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def fake() -> Faker:
    """Provide a Faker instance for free-text fields."""
    return Faker()


@pytest.fixture
def data_factory(fake: Faker) -> SampleDataFactory:
    """
    Factory for uniqueness-salted users, products and notes.

    Example:
        def test_something(data_factory):
            user = data_factory.user()
            assert "@" in user.email
    """
    return SampleDataFactory(faker=fake)


@pytest.fixture
def search_keywords() -> SearchKeywords:
    """Provide the catalogue search keywords."""
    return SEARCH_KEYWORDS


# -----------------------------------------------------------------------------
# Retry Policy
# -----------------------------------------------------------------------------

def pytest_collection_modifyitems(config, items):
    """Retry live tests according to the configured RETRY_COUNT."""
    retries = get_config().RETRY_COUNT
    if retries <= 0:
        return

    for item in items:
        if any(item.get_closest_marker(name) for name in LIVE_MARKERS):
            item.add_marker(pytest.mark.flaky(reruns=retries))


# -----------------------------------------------------------------------------
# Notes API Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def api_base_url(settings: type[Config]) -> str:
    """Return the API root once its health check answers."""
    require_target(f"{settings.API_BASE_URL}/health-check", suite_name="notes API")
    return settings.API_BASE_URL


@pytest.fixture
def api_client(api_base_url: str, settings: type[Config]) -> Generator[NotesApiClient, None, None]:
    """Provide a client with its own HTTP session."""
    with requests.Session() as session:
        yield NotesApiClient(session, api_base_url, timeout=settings.HTTP_TIMEOUT_S)


def _delete_account(api_client: NotesApiClient, user: UserCredentials) -> None:
    """Delete a test account, trying the alternate password as well."""
    try:
        for password in (user.password, user.new_password):
            login_response = api_client.login(user.email, password)
            if login_response.status_code == 200:
                token = api_client.extract_token(login_response)
                response = api_client.delete_account(token)
                logger.info("Deleted test account %s: %s", user.email, response.status_code)
                return
    except (requests.RequestException, NotesApiError) as exc:
        logger.warning("Cleanup of test account %s failed: %s", user.email, exc)
        return
    logger.warning("Could not log in to delete test account %s", user.email)


@pytest.fixture
def registered_user(
    api_client: NotesApiClient, data_factory: SampleDataFactory
) -> Generator[UserCredentials, None, None]:
    """
    Register a fresh user and remove it after the test.

    Every test gets its own salted account, so tests never share users
    on the live service.
    """
    user = data_factory.user()
    response = api_client.register_user(user.email, user.name, user.password)
    assert response.status_code == 201, response.text

    yield user

    _delete_account(api_client, user)


@pytest.fixture
def account_cleanup(api_client: NotesApiClient) -> Generator[list[UserCredentials], None, None]:
    """
    Collect accounts a test registers itself and delete them afterwards.

    Example:
        def test_register(api_client, data_factory, account_cleanup):
            user = data_factory.user()
            api_client.register_user(user.email, user.name, user.password)
            account_cleanup.append(user)
    """
    accounts: list[UserCredentials] = []
    yield accounts
    for user in accounts:
        _delete_account(api_client, user)


@pytest.fixture
def auth_token(api_client: NotesApiClient, registered_user: UserCredentials) -> str:
    """Log the registered user in and return the token."""
    response = api_client.login(registered_user.email, registered_user.password)
    assert response.status_code == 200, response.text

    token = api_client.extract_token(response)
    assert token
    return token


@pytest.fixture
def note_data(data_factory: SampleDataFactory) -> NoteData:
    """Provide note fields for create/update requests."""
    return data_factory.note()


@pytest.fixture
def created_note_id(api_client: NotesApiClient, auth_token: str, note_data: NoteData) -> str:
    """Create a note for the authenticated user and return its id."""
    response = api_client.create_note(
        auth_token, note_data.title, note_data.description, note_data.category.value
    )
    assert response.status_code == 200, response.text
    return api_client.extract_note_id(response)
