"""Test configuration and fixtures."""

import tempfile
from pathlib import Path

import pytest

from dnav.config import ExtractionConfig, reset_config
from dnav.extract.models import PageText


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def settings():
    """Default extraction settings, independent of any dnav.yaml on disk."""
    return ExtractionConfig()


@pytest.fixture
def filing_pages():
    """Three pages of a shareholder letter with a running header and footer."""
    header = "Q4 2024 Update | Shareholder Deck"
    disclaimer = "Forward-looking statements involve risks and uncertainties."
    return [
        PageText(
            page_number=1,
            file_name="update.pdf",
            text=f"""{header}
Highlights
We will begin Cybertruck production ramp in Q2 2025 at Gigafactory Texas.
Revenue     25,167     24,927     25,707     96,773
{disclaimer}
1""",
        ),
        PageText(
            page_number=2,
            file_name="update.pdf",
            text=f"""{header}
We plan to expand Megafactory Shanghai output to 40 GWh by end of 2025.
The new platform includes upgraded seating and a larger display.
{disclaimer}
2""",
        ),
        PageText(
            page_number=3,
            file_name="update.pdf",
            text=f"""{header}
We plan to expand Megafactory Shanghai battery output to 40 GWh by end of 2025!
We are pleased to report another strong quarter.
{disclaimer}
3""",
        ),
    ]


@pytest.fixture
def sample_text_file(temp_dir, filing_pages):
    """Write the filing pages to a text file separated by form feeds."""
    path = temp_dir / "update.txt"
    path.write_text("\f".join(page.text for page in filing_pages))
    return path


@pytest.fixture(autouse=True)
def reset_globals():
    """Reset global state between tests."""
    yield
    reset_config()
