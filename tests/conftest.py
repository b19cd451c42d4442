from __future__ import annotations

import pytest

from tests.support import Bot, StubLanguageService


@pytest.fixture
def language_service():
    return StubLanguageService()


@pytest.fixture
def bot(tmp_path, language_service):
    return Bot(tmp_path, language_service=language_service)
