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
"""Request and response records for the StyleScene model wrappers."""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field

from common.utils import is_data_uri

DATA_URI_DESCRIPTION = (
    "Media as a data URI that must include a MIME type and use Base64 "
    "encoding. Expected format: 'data:<mimetype>;base64,<encoded_data>'."
)


def _check_data_uri(value: str) -> str:
    if not is_data_uri(value):
        raise ValueError("must be a data URI of the form data:<mimetype>;base64,<data>")
    return value


def _check_not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


DataUri = Annotated[str, AfterValidator(_check_data_uri)]
NonBlankStr = Annotated[str, AfterValidator(_check_not_blank)]


class GenerateClothingImageInput(BaseModel):
    description: NonBlankStr = Field(
        ..., description="A text description of the clothing item."
    )


class GenerateClothingImageOutput(BaseModel):
    image_data_uri: DataUri = Field(..., description=DATA_URI_DESCRIPTION)


class GeneratePersonImageInput(BaseModel):
    description: NonBlankStr = Field(
        ..., description="A text description of the person."
    )


class GeneratePersonImageOutput(BaseModel):
    image_data_uri: DataUri = Field(..., description=DATA_URI_DESCRIPTION)


class GenerateRedressImageInput(BaseModel):
    person_data_uri: DataUri = Field(..., description=DATA_URI_DESCRIPTION)
    clothing_data_uri: DataUri = Field(..., description=DATA_URI_DESCRIPTION)
    base_steps: int = Field(
        default=0,
        ge=0,
        description="VTO sampling steps. 0 uses the configured default.",
    )


class GenerateRedressImageOutput(BaseModel):
    redressed_image_data_uri: DataUri = Field(..., description=DATA_URI_DESCRIPTION)


class SuggestSceneDescriptionInput(BaseModel):
    person_image_data_uri: DataUri = Field(..., description=DATA_URI_DESCRIPTION)
    clothing_image_data_uri: DataUri = Field(..., description=DATA_URI_DESCRIPTION)


class SuggestSceneDescriptionOutput(BaseModel):
    scene_description: str = Field(..., description="A suggested scene description.")


class SceneDescription(BaseModel):
    """Structured response schema for the scene suggester."""

    scene_description: str = Field(
        ...,
        description="A concise, evocative description of a scene for a photorealistic image.",
    )


class GenerateSceneImageInput(BaseModel):
    person_data_uri: DataUri = Field(..., description=DATA_URI_DESCRIPTION)
    scene_description: NonBlankStr = Field(
        ..., description="The description of the scene."
    )


class GenerateSceneImageOutput(BaseModel):
    generated_image_data_uri: DataUri = Field(..., description=DATA_URI_DESCRIPTION)


class GenerateStyleImageInput(BaseModel):
    person_data_uri: DataUri = Field(..., description=DATA_URI_DESCRIPTION)
    stylize_description: NonBlankStr = Field(
        ..., description="The description of the style change."
    )


class GenerateStyleImageOutput(BaseModel):
    generated_image_data_uri: DataUri = Field(..., description=DATA_URI_DESCRIPTION)


class OutpaintImageInput(BaseModel):
    image_data_uri: DataUri = Field(..., description=DATA_URI_DESCRIPTION)
    aspect_ratio: str = Field(
        default="16:9", pattern=r"^\d+:\d+$", description="Target W:H ratio."
    )
    prompt: str = Field(
        default="",
        description="Optional guidance for the content of the extended area.",
    )


class OutpaintImageOutput(BaseModel):
    image_data_uri: DataUri = Field(..., description=DATA_URI_DESCRIPTION)


class GenerateVideoInput(BaseModel):
    image_data_uri: DataUri = Field(..., description=DATA_URI_DESCRIPTION)
    prompt: NonBlankStr = Field(default="Animate this image with subtle motion.")


class GenerateVideoOutput(BaseModel):
    video_data_uri: DataUri = Field(
        ...,
        description="The generated video, as a data URI. Expected format: 'data:video/mp4;base64,<encoded_data>'.",
    )
