import pytest
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def outline_document() -> str:
    """Document with nested and sibling headings interleaved with prose."""
    return "# Intro\n\nWelcome.\n\n## Setup\n### Install\n\nRun it.\n\n## Usage\n"
