# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging

from google.api_core.exceptions import GoogleAPIError

from common.error_handling import GenerationError
from common.utils import parse_data_uri
from config.default import Default
from models.model_setup import VtoModelSetup
from models.stylescene_models import (
    GenerateRedressImageInput,
    GenerateRedressImageOutput,
)

cfg = Default()


def build_vto_instance(person_data_uri: str, clothing_data_uri: str) -> dict:
    """Builds a Virtual Try-On predict instance from two data URIs."""
    _, person_b64 = parse_data_uri(person_data_uri)
    _, clothing_b64 = parse_data_uri(clothing_data_uri)
    return {
        "personImage": {"image": {"bytesBase64Encoded": person_b64}},
        "productImages": [{"image": {"bytesBase64Encoded": clothing_b64}}],
    }


def generate_redress_image(
    request: GenerateRedressImageInput,
) -> GenerateRedressImageOutput:
    """Dresses the person in the clothing using the Virtual Try-On model."""

    client, model_endpoint = VtoModelSetup.init()

    base_steps = request.base_steps
    if base_steps == 0:
        base_steps = cfg.VTO_BASE_STEPS

    logging.info(
        "VTO API request: endpoint=%s sample_count=1 base_steps=%d",
        model_endpoint,
        base_steps,
    )

    instance = build_vto_instance(request.person_data_uri, request.clothing_data_uri)
    parameters = {
        "sampleCount": 1,
        "baseSteps": base_steps,
    }

    try:
        response = client.predict(
            endpoint=model_endpoint, instances=[instance], parameters=parameters
        )
    except GoogleAPIError as e:
        logging.error("VTO API Error: %s", e)
        raise GenerationError("Failed to generate image with Vertex AI.") from e

    if not response.predictions:
        raise GenerationError("VTO API returned an unexpected response (no predictions).")

    prediction = response.predictions[0]
    encoded_image = prediction.get("bytesBase64Encoded")
    if not encoded_image:
        raise GenerationError("VTO API returned a prediction with no image data.")

    mime_type = prediction.get("mimeType") or "image/png"
    return GenerateRedressImageOutput(
        redressed_image_data_uri=f"data:{mime_type};base64,{encoded_image}"
    )
