from types import SimpleNamespace

import pytest
from google.api_core.exceptions import ServiceUnavailable

from common.error_handling import GenerationError
from common.utils import parse_data_uri
from models import vto
from models.stylescene_models import GenerateRedressImageInput


@pytest.fixture(autouse=True)
def default_steps(monkeypatch):
    monkeypatch.setattr(vto.cfg, "VTO_BASE_STEPS", 32)


def test_build_vto_instance(person_uri, clothing_uri):
    instance = vto.build_vto_instance(person_uri, clothing_uri)

    assert instance["personImage"]["image"]["bytesBase64Encoded"] == parse_data_uri(person_uri)[1]
    assert instance["productImages"] == [
        {"image": {"bytesBase64Encoded": parse_data_uri(clothing_uri)[1]}}
    ]


def test_generate_redress_image(prediction_client, person_uri, clothing_uri):
    prediction_client.predict.return_value = SimpleNamespace(
        predictions=[{"bytesBase64Encoded": "cmVkcmVzc2Vk", "mimeType": "image/jpeg"}]
    )

    result = vto.generate_redress_image(
        GenerateRedressImageInput(person_data_uri=person_uri, clothing_data_uri=clothing_uri)
    )

    assert result.redressed_image_data_uri == "data:image/jpeg;base64,cmVkcmVzc2Vk"
    kwargs = prediction_client.predict.call_args.kwargs
    assert kwargs["endpoint"].endswith("/models/vto")
    assert kwargs["parameters"] == {"sampleCount": 1, "baseSteps": 32}
    assert len(kwargs["instances"]) == 1


def test_generate_redress_image_explicit_steps(prediction_client, person_uri, clothing_uri):
    prediction_client.predict.return_value = SimpleNamespace(
        predictions=[{"bytesBase64Encoded": "cmVkcmVzc2Vk"}]
    )

    result = vto.generate_redress_image(
        GenerateRedressImageInput(
            person_data_uri=person_uri, clothing_data_uri=clothing_uri, base_steps=12
        )
    )

    assert result.redressed_image_data_uri.startswith("data:image/png;base64,")
    assert prediction_client.predict.call_args.kwargs["parameters"]["baseSteps"] == 12


def test_generate_redress_image_no_predictions(prediction_client, person_uri, clothing_uri):
    prediction_client.predict.return_value = SimpleNamespace(predictions=[])

    with pytest.raises(GenerationError, match="no predictions"):
        vto.generate_redress_image(
            GenerateRedressImageInput(person_data_uri=person_uri, clothing_data_uri=clothing_uri)
        )


def test_generate_redress_image_missing_image_data(prediction_client, person_uri, clothing_uri):
    prediction_client.predict.return_value = SimpleNamespace(predictions=[{"mimeType": "image/png"}])

    with pytest.raises(GenerationError, match="no image data"):
        vto.generate_redress_image(
            GenerateRedressImageInput(person_data_uri=person_uri, clothing_data_uri=clothing_uri)
        )


def test_generate_redress_image_api_error(prediction_client, person_uri, clothing_uri):
    prediction_client.predict.side_effect = ServiceUnavailable("try later")

    with pytest.raises(GenerationError, match="Failed to generate image with Vertex AI."):
        vto.generate_redress_image(
            GenerateRedressImageInput(person_data_uri=person_uri, clothing_data_uri=clothing_uri)
        )
