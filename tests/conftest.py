"""Shared fixtures for FOLIO tests."""

from pathlib import Path

import pytest

from folio.contexts.templating import template_factory
from folio.contexts.templating.resume_data_structure import CoverLetterData, ResumeData
from folio.utils.llm import LLMResponse

FIXTURES_PATH = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def reset_template_factories():
    """Give every test fresh template factories."""
    template_factory._factories.clear()
    template_factory._registered.clear()
    yield
    template_factory._factories.clear()
    template_factory._registered.clear()


@pytest.fixture
def fixtures_path() -> Path:
    return FIXTURES_PATH


@pytest.fixture
def sample_resume() -> ResumeData:
    return ResumeData.from_file(FIXTURES_PATH / "sample_resume.yaml")


@pytest.fixture
def sample_cover_letter() -> CoverLetterData:
    return CoverLetterData.from_file(FIXTURES_PATH / "sample_cover_letter.yaml")


class FakeProvider:
    """Stand-in LLM provider returning canned content."""

    name = "fake/model"

    def __init__(self, content: str = "", error: Exception = None):
        self.content = content
        self.error = error
        self.calls = 0
        self.prompts = []

    def generate(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        self.calls += 1
        self.prompts.append(user_prompt)
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.content, model="model")


@pytest.fixture
def fake_provider_cls():
    return FakeProvider
