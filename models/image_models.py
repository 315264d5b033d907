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
"""Imagen methods: clothing, person, scene, style and outpaint."""

import io
import logging
import math

from google.api_core.exceptions import GoogleAPIError
from google.genai import errors as genai_errors
from google.genai import types
from PIL import Image

from common.error_handling import GenerationError
from common.utils import bytes_to_data_uri, data_uri_to_bytes
from config.default import Default
from models.model_setup import GeminiModelSetup
from models.stylescene_models import (
    GenerateClothingImageInput,
    GenerateClothingImageOutput,
    GeneratePersonImageInput,
    GeneratePersonImageOutput,
    GenerateSceneImageInput,
    GenerateSceneImageOutput,
    GenerateStyleImageInput,
    GenerateStyleImageOutput,
    OutpaintImageInput,
    OutpaintImageOutput,
)

cfg = Default()

API_ERRORS = (genai_errors.APIError, GoogleAPIError)

CLOTHING_PROMPT = (
    "Generate a photorealistic image of this clothing item on a plain white "
    "background, suitable for a product catalog. The item should be the main "
    "focus. {description}"
)
PERSON_PROMPT = (
    "A full-body, photorealistic studio photograph of a person standing "
    "upright facing the camera, arms relaxed, on a plain light gray "
    "background with soft even lighting. {description}"
)
SCENE_PROMPT = (
    'Generate a photorealistic image of the person [1] from the reference '
    'image in this scene: "{scene}". The final image should be a coherent '
    "and high-quality photograph."
)
STYLE_PROMPT = (
    'Generate a photorealistic image of the person [1] from the reference '
    'image with this change: "{change}". The final image should be a '
    "coherent and high-quality photograph."
)
OUTPAINT_PROMPT = (
    "Extend the scene naturally beyond its borders. Keep the existing content "
    "unchanged and match its lighting, perspective and style."
)

# Sentinel accepted by the style step to skip the model call entirely.
NO_STYLE_CHANGE = "nothing"


def _to_genai_image(data_uri: str) -> types.Image:
    mime_type, image_bytes = data_uri_to_bytes(data_uri)
    return types.Image(image_bytes=image_bytes, mime_type=mime_type)


def _first_image_data_uri(generated_images, empty_message: str) -> str:
    """Returns the first generated image as a data URI.

    Raises GenerationError when the model returned nothing usable, including
    the case where every candidate was removed by the safety filter.
    """
    filtered_reasons = []
    for generated in generated_images or []:
        image = generated.image
        if image is not None and image.image_bytes:
            return bytes_to_data_uri(image.image_bytes, image.mime_type or "image/png")
        if getattr(generated, "rai_filtered_reason", None):
            filtered_reasons.append(generated.rai_filtered_reason)
    if filtered_reasons:
        raise GenerationError(f"{empty_message} Filtered: {'; '.join(filtered_reasons)}")
    raise GenerationError(empty_message)


def _generate_image(prompt: str, config: types.GenerateImagesConfig, empty_message: str) -> str:
    client = GeminiModelSetup.init()
    logging.info("Imagen generate with %s", cfg.IMAGEN_GENERATION_MODEL)
    try:
        response = client.models.generate_images(
            model=cfg.IMAGEN_GENERATION_MODEL,
            prompt=prompt,
            config=config,
        )
    except API_ERRORS as e:
        logging.error("Imagen generation error: %s", e)
        raise GenerationError("Failed to generate image with Vertex AI.") from e
    return _first_image_data_uri(response.generated_images, empty_message)


def _edit_image(
    prompt: str,
    reference_images: list,
    config: types.EditImageConfig,
    empty_message: str = "No images generated",
) -> str:
    client = GeminiModelSetup.init()
    logging.info(
        "Imagen edit with %s, mode %s, %d reference image(s)",
        cfg.IMAGEN_CAPABILITY_MODEL,
        config.edit_mode,
        len(reference_images),
    )
    try:
        response = client.models.edit_image(
            model=cfg.IMAGEN_CAPABILITY_MODEL,
            prompt=prompt,
            reference_images=reference_images,
            config=config,
        )
    except API_ERRORS as e:
        logging.error("Vertex AI Prediction Error: %s", e)
        raise GenerationError("Failed to generate image with Vertex AI.") from e
    return _first_image_data_uri(response.generated_images, empty_message)


def generate_clothing_image(
    request: GenerateClothingImageInput,
) -> GenerateClothingImageOutput:
    """Generates a catalog-style image of a clothing item from a description."""
    image_data_uri = _generate_image(
        prompt=CLOTHING_PROMPT.format(description=request.description),
        config=types.GenerateImagesConfig(
            number_of_images=1,
            aspect_ratio="1:1",
            output_mime_type="image/png",
        ),
        empty_message="No image was generated for the clothing description.",
    )
    return GenerateClothingImageOutput(image_data_uri=image_data_uri)


def generate_person_image(
    request: GeneratePersonImageInput,
) -> GeneratePersonImageOutput:
    """Generates a full-body photo of a person from a description."""
    image_data_uri = _generate_image(
        prompt=PERSON_PROMPT.format(description=request.description),
        config=types.GenerateImagesConfig(
            number_of_images=1,
            aspect_ratio="3:4",
            output_mime_type="image/png",
            person_generation="ALLOW_ADULT",
        ),
        empty_message="No image was generated for the person description.",
    )
    return GeneratePersonImageOutput(image_data_uri=image_data_uri)


def generate_scene_image(request: GenerateSceneImageInput) -> GenerateSceneImageOutput:
    """Places the person from the reference image into the described scene.

    Uses Imagen subject customization: the person image is sent as a
    SUBJECT_TYPE_PERSON reference with id 1, which the prompt refers to as
    "[1]".
    """
    reference_image = types.SubjectReferenceImage(
        reference_id=1,
        reference_image=_to_genai_image(request.person_data_uri),
        config=types.SubjectReferenceConfig(
            subject_description="the person",
            subject_type="SUBJECT_TYPE_PERSON",
        ),
    )
    generated = _edit_image(
        prompt=SCENE_PROMPT.format(scene=request.scene_description),
        reference_images=[reference_image],
        config=types.EditImageConfig(
            edit_mode="EDIT_MODE_DEFAULT",
            number_of_images=1,
            aspect_ratio=cfg.SCENE_ASPECT_RATIO,
        ),
    )
    return GenerateSceneImageOutput(generated_image_data_uri=generated)


def generate_style_image(request: GenerateStyleImageInput) -> GenerateStyleImageOutput:
    """Applies a free-text change to the person image.

    A description of exactly "nothing" returns the input image untouched.
    """
    if request.stylize_description == NO_STYLE_CHANGE:
        return GenerateStyleImageOutput(generated_image_data_uri=request.person_data_uri)

    reference_image = types.RawReferenceImage(
        reference_id=1,
        reference_image=_to_genai_image(request.person_data_uri),
    )
    generated = _edit_image(
        prompt=STYLE_PROMPT.format(change=request.stylize_description),
        reference_images=[reference_image],
        config=types.EditImageConfig(
            edit_mode="EDIT_MODE_DEFAULT",
            number_of_images=1,
            aspect_ratio=cfg.SCENE_ASPECT_RATIO,
        ),
    )
    return GenerateStyleImageOutput(generated_image_data_uri=generated)


def parse_aspect_ratio(aspect_ratio: str) -> tuple[int, int]:
    """Parses "W:H" into a pair of positive ints."""
    try:
        width_part, height_part = aspect_ratio.split(":")
        ratio_w, ratio_h = int(width_part), int(height_part)
    except (AttributeError, ValueError) as e:
        raise ValueError(f"Invalid aspect ratio '{aspect_ratio}', expected W:H.") from e
    if ratio_w <= 0 or ratio_h <= 0:
        raise ValueError(f"Invalid aspect ratio '{aspect_ratio}', expected W:H.")
    return ratio_w, ratio_h


def build_outpaint_canvas(image_bytes: bytes, aspect_ratio: str) -> tuple[bytes, bytes]:
    """Pads an image to the target aspect ratio and builds the outpaint mask.

    The source is centered on the smallest canvas of the target ratio that
    contains it. In the mask, white marks the area the model should fill and
    black marks the original pixels.

    Args:
        image_bytes: The encoded source image.
        aspect_ratio: Target ratio as "W:H".

    Returns:
        A (canvas_png, mask_png) tuple.
    """
    ratio_w, ratio_h = parse_aspect_ratio(aspect_ratio)
    source = Image.open(io.BytesIO(image_bytes)).convert("RGB")
    width, height = source.size

    if width * ratio_h >= height * ratio_w:
        canvas_w = width
        canvas_h = max(height, math.ceil(width * ratio_h / ratio_w))
    else:
        canvas_h = height
        canvas_w = max(width, math.ceil(height * ratio_w / ratio_h))

    left = (canvas_w - width) // 2
    top = (canvas_h - height) // 2

    canvas = Image.new("RGB", (canvas_w, canvas_h), (0, 0, 0))
    canvas.paste(source, (left, top))
    mask = Image.new("L", (canvas_w, canvas_h), 255)
    mask.paste(0, (left, top, left + width, top + height))

    canvas_buf = io.BytesIO()
    canvas.save(canvas_buf, format="PNG")
    mask_buf = io.BytesIO()
    mask.save(mask_buf, format="PNG")
    return canvas_buf.getvalue(), mask_buf.getvalue()


def outpaint_image(request: OutpaintImageInput) -> OutpaintImageOutput:
    """Extends the image canvas to the requested aspect ratio."""
    _, image_bytes = data_uri_to_bytes(request.image_data_uri)
    canvas_png, mask_png = build_outpaint_canvas(image_bytes, request.aspect_ratio)

    raw_reference = types.RawReferenceImage(
        reference_id=1,
        reference_image=types.Image(image_bytes=canvas_png, mime_type="image/png"),
    )
    mask_reference = types.MaskReferenceImage(
        reference_id=2,
        reference_image=types.Image(image_bytes=mask_png, mime_type="image/png"),
        config=types.MaskReferenceConfig(
            mask_mode="MASK_MODE_USER_PROVIDED",
            mask_dilation=0.03,
        ),
    )
    generated = _edit_image(
        prompt=request.prompt or OUTPAINT_PROMPT,
        reference_images=[raw_reference, mask_reference],
        config=types.EditImageConfig(
            edit_mode="EDIT_MODE_OUTPAINT",
            number_of_images=1,
        ),
        empty_message="No outpainted image was generated.",
    )
    return OutpaintImageOutput(image_data_uri=generated)
