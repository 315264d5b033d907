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

"""Runs the StyleScene stages back to back, outside the UI."""

import logging
from typing import Optional

from config.default import Default
from models.gemini import suggest_scene_description
from models.image_models import generate_scene_image, outpaint_image
from models.stylescene_models import (
    GenerateRedressImageInput,
    GenerateSceneImageInput,
    GenerateVideoInput,
    OutpaintImageInput,
    SuggestSceneDescriptionInput,
)
from models.veo import generate_video
from models.vto import generate_redress_image

cfg = Default()


def run_stylescene_workflow(
    person_data_uri: str,
    clothing_data_uri: str,
    scene_description: Optional[str] = None,
    outpaint: bool = False,
    animate: bool = False,
) -> dict:
    """Runs redress, scene suggestion, scene generation and the optional stages.

    Args:
        person_data_uri: The person photo as a data URI.
        clothing_data_uri: The clothing photo as a data URI.
        scene_description: A scene to use. Gemini suggests one when omitted.
        outpaint: Extend the scene image to the configured outpaint ratio.
        animate: Turn the final image into a video.

    Returns:
        A dictionary with the result of every stage that ran. Stages that were
        skipped map to None.
    """
    results = {
        "redressed_image": None,
        "scene_description": scene_description,
        "scene_image": None,
        "outpainted_image": None,
        "video": None,
    }

    # --- STAGE 1: Redress ---
    redressed = generate_redress_image(
        GenerateRedressImageInput(
            person_data_uri=person_data_uri,
            clothing_data_uri=clothing_data_uri,
        )
    )
    results["redressed_image"] = redressed.redressed_image_data_uri

    # --- STAGE 2: Scene suggestion ---
    if not scene_description or not scene_description.strip():
        suggestion = suggest_scene_description(
            SuggestSceneDescriptionInput(
                person_image_data_uri=person_data_uri,
                clothing_image_data_uri=clothing_data_uri,
            )
        )
        results["scene_description"] = suggestion.scene_description
    logging.info("Scene: %s", results["scene_description"])

    # --- STAGE 3: Scene image ---
    scene = generate_scene_image(
        GenerateSceneImageInput(
            person_data_uri=results["redressed_image"],
            scene_description=results["scene_description"],
        )
    )
    results["scene_image"] = scene.generated_image_data_uri
    final_image = results["scene_image"]

    # --- STAGE 4: Outpaint ---
    if outpaint:
        outpainted = outpaint_image(
            OutpaintImageInput(
                image_data_uri=final_image,
                aspect_ratio=cfg.OUTPAINT_ASPECT_RATIO,
            )
        )
        results["outpainted_image"] = outpainted.image_data_uri
        final_image = results["outpainted_image"]

    # --- STAGE 5: Video ---
    if animate:
        video = generate_video(GenerateVideoInput(image_data_uri=final_image))
        results["video"] = video.video_data_uri

    return results
