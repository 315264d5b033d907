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
"""Default configuration, read from the environment."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv(override=True)

CONFIG_DIR = Path(__file__).parent


@dataclass
class Default:
    """Defaults class"""

    # Gen AI
    PROJECT_ID: Optional[str] = field(
        default_factory=lambda: os.environ.get("GOOGLE_CLOUD_PROJECT")
        or os.environ.get("GCP_PROJECT")
    )
    LOCATION: str = field(
        default_factory=lambda: os.environ.get("LOCATION", "us-central1")
    )
    MODEL_ID: str = field(
        default_factory=lambda: os.environ.get("MODEL_ID", "gemini-2.5-flash")
    )

    # Imagen
    IMAGEN_GENERATION_MODEL: str = field(
        default_factory=lambda: os.environ.get(
            "IMAGEN_GENERATION_MODEL", "imagen-3.0-generate-002"
        )
    )
    IMAGEN_CAPABILITY_MODEL: str = field(
        default_factory=lambda: os.environ.get(
            "IMAGEN_CAPABILITY_MODEL", "imagen-3.0-capability-001"
        )
    )
    SCENE_ASPECT_RATIO: str = field(
        default_factory=lambda: os.environ.get("SCENE_ASPECT_RATIO", "16:9")
    )
    OUTPAINT_ASPECT_RATIO: str = field(
        default_factory=lambda: os.environ.get("OUTPAINT_ASPECT_RATIO", "16:9")
    )

    # Virtual Try-On
    VTO_MODEL_ID: str = field(
        default_factory=lambda: os.environ.get(
            "VTO_MODEL_ID", "virtual-try-on-preview-08-04"
        )
    )
    VTO_BASE_STEPS: int = field(
        default_factory=lambda: int(os.environ.get("VTO_BASE_STEPS", "32"))
    )

    # Veo
    VEO_MODEL_ID: str = field(
        default_factory=lambda: os.environ.get("VEO_MODEL_ID", "veo-2.0-generate-001")
    )
    VEO_DURATION_SECONDS: int = field(
        default_factory=lambda: int(os.environ.get("VEO_DURATION_SECONDS", "8"))
    )
    VEO_POLL_INTERVAL_SECONDS: float = field(
        default_factory=lambda: float(os.environ.get("VEO_POLL_INTERVAL_SECONDS", "5"))
    )
    VEO_TIMEOUT_SECONDS: float = field(
        default_factory=lambda: float(os.environ.get("VEO_TIMEOUT_SECONDS", "600"))
    )

    LOG_LEVEL: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )


def load_about_content() -> dict:
    """Loads the static page copy shown in the info dialog."""
    with open(CONFIG_DIR / "about_content.json", "r") as f:
        return json.load(f)
