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
"""Model client setup"""

import logging
from typing import Optional

import google.auth
from google import genai
from google.auth.exceptions import DefaultCredentialsError
from google.cloud import aiplatform

from config.default import Default

cfg = Default()


def resolve_project_id(project_id: Optional[str] = None) -> str:
    """Returns the configured project, falling back to the ADC project."""
    if project_id:
        return project_id
    if cfg.PROJECT_ID:
        return cfg.PROJECT_ID
    try:
        _, adc_project = google.auth.default()
    except DefaultCredentialsError as e:
        raise ValueError(
            "No Google Cloud project configured. Set GOOGLE_CLOUD_PROJECT or "
            "configure Application Default Credentials."
        ) from e
    if not adc_project:
        raise ValueError(
            "Application Default Credentials do not name a project. "
            "Set GOOGLE_CLOUD_PROJECT."
        )
    return adc_project


class GeminiModelSetup:
    """Gemini / Imagen / Veo client setup"""

    @staticmethod
    def init(
        project_id: Optional[str] = None,
        location: Optional[str] = None,
    ) -> genai.Client:
        """Initializes a google.genai client pointed at Vertex AI."""
        project_id = resolve_project_id(project_id)
        location = location or cfg.LOCATION
        logging.info("Initializing genai client for %s in %s", project_id, location)
        return genai.Client(vertexai=True, project=project_id, location=location)


class VtoModelSetup:
    """Virtual Try-On prediction client setup"""

    @staticmethod
    def init(
        project_id: Optional[str] = None,
        location: Optional[str] = None,
    ) -> tuple[aiplatform.gapic.PredictionServiceClient, str]:
        """Returns a prediction client and the VTO publisher model endpoint."""
        project_id = resolve_project_id(project_id)
        location = location or cfg.LOCATION
        try:
            client_options = {"api_endpoint": f"{location}-aiplatform.googleapis.com"}
            client = aiplatform.gapic.PredictionServiceClient(
                client_options=client_options
            )
        except Exception as client_err:
            logging.error("Failed to create PredictionServiceClient: %s", client_err)
            raise ValueError(
                f"Configuration error: Failed to initialize prediction client. Details: {str(client_err)}"
            ) from client_err

        model_endpoint = f"projects/{project_id}/locations/{location}/publishers/google/models/{cfg.VTO_MODEL_ID}"
        return client, model_endpoint
