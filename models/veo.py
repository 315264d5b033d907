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
"""Veo image-to-video generation."""

import logging
import time

from google.api_core.exceptions import GoogleAPIError
from google.genai import errors as genai_errors
from google.genai import types

from common.error_handling import GenerationError
from common.utils import bytes_to_data_uri, data_uri_to_bytes
from config.default import Default
from models.model_setup import GeminiModelSetup
from models.stylescene_models import GenerateVideoInput, GenerateVideoOutput

cfg = Default()


def _wait_for_operation(client, operation):
    """Polls a long-running Veo operation until it is done or times out."""
    deadline = time.monotonic() + cfg.VEO_TIMEOUT_SECONDS
    while not operation.done:
        if time.monotonic() >= deadline:
            raise GenerationError(
                f"Video generation timed out after {cfg.VEO_TIMEOUT_SECONDS:.0f} seconds."
            )
        logging.info("Waiting for video operation %s", operation.name)
        time.sleep(cfg.VEO_POLL_INTERVAL_SECONDS)
        operation = client.operations.get(operation)
    return operation


def generate_video(request: GenerateVideoInput) -> GenerateVideoOutput:
    """Animates a still image into a short video clip with Veo.

    Args:
        request: The source image as a data URI plus a motion prompt.

    Returns:
        The first generated video as a data URI.

    Raises:
        GenerationError: If the operation fails, times out, or returns no video.
    """
    client = GeminiModelSetup.init()
    mime_type, image_bytes = data_uri_to_bytes(request.image_data_uri)

    logging.info(
        "Veo request: model=%s duration=%ss", cfg.VEO_MODEL_ID, cfg.VEO_DURATION_SECONDS
    )
    try:
        operation = client.models.generate_videos(
            model=cfg.VEO_MODEL_ID,
            prompt=request.prompt,
            image=types.Image(image_bytes=image_bytes, mime_type=mime_type),
            config=types.GenerateVideosConfig(
                number_of_videos=1,
                duration_seconds=cfg.VEO_DURATION_SECONDS,
                enhance_prompt=True,
            ),
        )
        operation = _wait_for_operation(client, operation)
    except (genai_errors.APIError, GoogleAPIError) as e:
        logging.error("Vertex AI Video Prediction Error: %s", e)
        raise GenerationError("Failed to generate video with Vertex AI.") from e

    if operation.error:
        logging.error("Veo operation failed: %s", operation.error)
        raise GenerationError(f"Failed to generate video with Vertex AI: {operation.error}")

    response = operation.response or getattr(operation, "result", None)
    videos = response.generated_videos if response else None
    if not videos or videos[0].video is None or not videos[0].video.video_bytes:
        raise GenerationError("No videos generated")

    video = videos[0].video
    return GenerateVideoOutput(
        video_data_uri=bytes_to_data_uri(video.video_bytes, video.mime_type or "video/mp4")
    )
