"""
Smoke tests to verify the test infrastructure is working correctly.

These tests verify:
- pytest is properly configured
- asyncio support works
- shared fixtures are accessible
- the package imports and exposes its public API
"""

import asyncio
from pathlib import Path

import pytest

import dualdraft
from dualdraft.models import Request


class TestInfrastructure:
    """Tests to verify the testing infrastructure itself."""

    def test_project_root(self):
        """Verify the project root holds the packaging file."""
        project_root = Path(__file__).parent.parent
        assert (project_root / "pyproject.toml").exists()

    def test_request_fixtures(self, example_request: Request, minimal_request: Request):
        """Verify request fixtures are accessible."""
        assert example_request.domain == "Consumer tech / fitness"
        assert minimal_request.domain is None

    def test_isolated_config(self, isolated_config: Path):
        """Verify the config isolation fixture switches directory."""
        assert Path.cwd() == isolated_config


class TestAsyncSupport:
    """Tests to verify async test support."""

    @pytest.mark.asyncio
    async def test_async_function(self):
        """Verify async test functions work."""
        await asyncio.sleep(0.001)


class TestPackage:
    """Tests for the top-level package."""

    def test_version(self):
        assert dualdraft.__version__ == "0.1.0"

    def test_public_api(self):
        for name in ("OrchestrationEngine", "Request", "TemplateHooks", "align", "synthesize"):
            assert hasattr(dualdraft, name), name
