"""
Tests for the smoke-test client, run against the app in-process.
"""

import httpx
import pytest

from api.database import CatalogService
from api.main import create_app
from catalog.database import CatalogStore
from catalog.tokens import TokenIssuer
from catalog.users import CredentialRegistry
from check_api import CHECKS, run_checks


@pytest.fixture
def app(api_settings):
    """Application with its service created directly, as ASGITransport skips the lifespan."""
    application = create_app(api_settings)
    application.state.service = CatalogService.from_config(api_settings)
    return application


@pytest.mark.asyncio
async def test_run_checks(app):
    results = await run_checks("http://testserver", transport=httpx.ASGITransport(app=app))

    assert set(results) == {name for name, _ in CHECKS}
    assert all(body["status"] == "success" for body in results.values())
    assert results["book by ISBN"]["book"]["title"] == "Things Fall Apart"
    assert len(results["books by author"]["books"]) == 1


@pytest.mark.asyncio
async def test_run_checks_fails_on_error_status(api_settings):
    application = create_app(api_settings)
    application.state.service = CatalogService(
        CatalogStore({}), CredentialRegistry(), TokenIssuer(secret="access")
    )

    with pytest.raises(httpx.HTTPStatusError):
        await run_checks("http://testserver", transport=httpx.ASGITransport(app=application))
