import httpx
import pytest

from core.backend import ArticlesBackend
from core.config import AdapterConfig

from tests.fakes import BASE_URL, FakeUpstream


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def config():
    return AdapterConfig(base_url=BASE_URL)


@pytest.fixture
def backend(upstream, config):
    return ArticlesBackend(config, transport=httpx.MockTransport(upstream.handler))
