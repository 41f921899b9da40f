import pytest
from fastapi.testclient import TestClient

from genai_fakes import FakeGenaiClient
from main import create_app
from utils.upload_dir import UploadDirectory


@pytest.fixture
def upload_dir(tmp_path) -> UploadDirectory:
    return UploadDirectory(tmp_path / "uploads")


@pytest.fixture
def genai_client() -> FakeGenaiClient:
    return FakeGenaiClient()


@pytest.fixture
def app(genai_client, upload_dir):
    return create_app(genai_client=genai_client, upload_dir=upload_dir, app_url="http://testserver")


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
