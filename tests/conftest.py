"""Shared fixtures: sample generation output and a stubbed generation service."""

import pytest

from itinerary_agent.llm import GenerationResponse


SAMPLE_MARKDOWN = """**Hari 1**
- **Temple A**: 09:00-17:00 | Estimasi Biaya: JPY 400 | [Cek Harga](https://x.example)
- **Park B**: Buka 24 jam | Estimasi Biaya: Gratis | [Cek Harga](#)
"""

TWO_DAY_MARKDOWN = """**Hari 1**
- **Kinkaku-ji**: 09:00 - 17:00 | Estimasi Biaya: JPY 400 | [Cek Harga](https://www.kinkaku.jp/en/info/)
- **Arashiyama Bamboo Grove**: Buka 24 jam | Estimasi Biaya: Gratis | [Cek Harga](#)

**Hari 2**
- **Tenryu-ji Temple**: 08:30 - 17:00 | Estimasi Biaya: JPY 500-800 | [Cek Harga](https://www.tenryuji.com/en/guidance/)
- **Nishiki Market**: 10:00 - 18:00 | Estimasi Biaya: JPY 1,500 | [Cek Harga](#)
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("DEEPSEEK_API_KEY", "DEFAULT_CURRENCY", "LLM_TEMPERATURE", "MAX_SESSIONS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def sample_markdown() -> str:
    return SAMPLE_MARKDOWN


@pytest.fixture
def two_day_markdown() -> str:
    return TWO_DAY_MARKDOWN


class StubGenerator:
    """Records calls and returns canned text or raises a canned error."""

    def __init__(self, text: str = TWO_DAY_MARKDOWN, error: Exception = None):
        self.text = text
        self.error = error
        self.calls = []

    def __call__(self, destination, duration_days, interests, api_key=None):
        self.calls.append((destination, duration_days, interests, api_key))
        if self.error is not None:
            raise self.error
        return GenerationResponse(text=self.text)


@pytest.fixture
def stub_generator() -> StubGenerator:
    return StubGenerator()
