# Copyright 2024 Google LLC
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
"""Gemini methods"""

import logging

from google.cloud.aiplatform import telemetry
from google.genai import types
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from common.error_handling import GenerationError
from common.utils import data_uri_to_bytes
from config.default import Default
from models.model_setup import GeminiModelSetup
from models.stylescene_models import (
    SceneDescription,
    SuggestSceneDescriptionInput,
    SuggestSceneDescriptionOutput,
)

cfg = Default()

SCENE_SUGGESTION_PROMPT = """You are a creative assistant helping users generate images of people wearing specific clothing in various scenes.

Based on the provided images of a person and clothing, suggest a scene description that would be suitable for generating a photorealistic image.

Consider the style and type of clothing when suggesting the scene. Keep the scene description concise and evocative.

Output only the scene description. Do not include any other text or formatting.
"""


@retry(
    wait=wait_exponential(multiplier=1, min=1, max=10),
    stop=stop_after_attempt(3),
    retry=retry_if_exception_type(Exception),
    reraise=True,
)
def _request_scene_description(
    person_mime: str,
    person_bytes: bytes,
    clothing_mime: str,
    clothing_bytes: bytes,
) -> SceneDescription:
    """Sends the person and clothing images to Gemini and parses the reply."""
    client = GeminiModelSetup.init()

    prompt_parts = [
        SCENE_SUGGESTION_PROMPT,
        "Person Image:",
        types.Part.from_bytes(data=person_bytes, mime_type=person_mime),
        "Clothing Image:",
        types.Part.from_bytes(data=clothing_bytes, mime_type=clothing_mime),
    ]

    config = types.GenerateContentConfig(
        response_mime_type="application/json",
        response_schema=SceneDescription.model_json_schema(),
        temperature=0.9,
    )

    with telemetry.tool_context_manager("stylescene"):
        logging.info("Requesting scene suggestion from %s", cfg.MODEL_ID)
        response = client.models.generate_content(
            model=cfg.MODEL_ID, contents=prompt_parts, config=config
        )

    if not response.text:
        raise GenerationError("Gemini returned an empty scene suggestion.")
    return SceneDescription.model_validate_json(response.text)


def suggest_scene_description(
    request: SuggestSceneDescriptionInput,
) -> SuggestSceneDescriptionOutput:
    """Suggests a scene for the person wearing the clothing.

    Args:
        request: The person and clothing images as data URIs.

    Returns:
        The suggested scene description.

    Raises:
        GenerationError: If Gemini fails or returns no usable description.
    """
    person_mime, person_bytes = data_uri_to_bytes(request.person_image_data_uri)
    clothing_mime, clothing_bytes = data_uri_to_bytes(request.clothing_image_data_uri)

    try:
        suggestion = _request_scene_description(
            person_mime, person_bytes, clothing_mime, clothing_bytes
        )
    except GenerationError:
        raise
    except ValidationError as e:
        logging.error("Scene suggestion did not match the schema: %s", e)
        raise GenerationError("Could not generate a scene description.") from e
    except Exception as e:
        logging.error("Error during Gemini scene suggestion: %s", e)
        raise GenerationError(f"Could not generate a scene description: {e}") from e

    scene_description = suggestion.scene_description.strip()
    if not scene_description:
        raise GenerationError("Gemini returned an empty scene suggestion.")
    return SuggestSceneDescriptionOutput(scene_description=scene_description)
