import base64
import io
from unittest import mock

import pytest
from PIL import Image

from models import model_setup


def make_image_bytes(width: int = 64, height: int = 64, color=(128, 128, 128)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color=color).save(buffer, format="PNG")
    return buffer.getvalue()


def make_data_uri(width: int = 64, height: int = 64, color=(128, 128, 128)) -> str:
    encoded = base64.b64encode(make_image_bytes(width, height, color)).decode("utf-8")
    return f"data:image/png;base64,{encoded}"


@pytest.fixture
def person_uri() -> str:
    return make_data_uri(color=(200, 150, 120))


@pytest.fixture
def clothing_uri() -> str:
    return make_data_uri(color=(20, 40, 160))


@pytest.fixture
def genai_client(monkeypatch):
    """A mock google.genai client returned by GeminiModelSetup.init."""
    client = mock.MagicMock(name="genai_client")
    monkeypatch.setattr(
        model_setup.GeminiModelSetup, "init", lambda *args, **kwargs: client
    )
    return client


@pytest.fixture
def prediction_client(monkeypatch):
    """A mock PredictionServiceClient returned by VtoModelSetup.init."""
    client = mock.MagicMock(name="prediction_client")
    endpoint = "projects/test-project/locations/us-central1/publishers/google/models/vto"
    monkeypatch.setattr(
        model_setup.VtoModelSetup, "init", lambda *args, **kwargs: (client, endpoint)
    )
    return client
