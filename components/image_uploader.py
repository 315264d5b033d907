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
"""Image upload card with preview and remove button."""

from typing import Callable

import mesop as me

ACCEPTED_IMAGE_TYPES = ["image/jpeg", "image/png", "image/webp"]

IMAGE_BOX_STYLE = me.Style(
    width="100%",
    height=320,
    border=me.Border.all(
        me.BorderSide(width=2, style="dashed", color=me.theme_var("outline-variant")),
    ),
    border_radius=12,
    display="flex",
    align_items="center",
    justify_content="center",
    flex_direction="column",
    gap=8,
    position="relative",
    margin=me.Margin(top=16),
)


@me.component
def image_uploader(
    *,
    key: str,
    title: str,
    description: str,
    icon: str,
    image: str,
    on_upload: Callable[[me.UploadEvent], None],
    on_remove: Callable[[me.ClickEvent], None],
    is_loading: bool = False,
):
    """Renders an upload card.

    Args:
        key: Unique prefix for the child component keys.
        title: Card heading, e.g. "Person Image".
        description: Hint shown while no image is set.
        icon: Material icon name shown while no image is set.
        image: The current image as a data URI, or "".
        on_upload: Upload handler.
        on_remove: Remove button handler.
        is_loading: Show a spinner in place of the preview.
    """
    with me.box(
        style=me.Style(
            display="flex",
            flex_direction="column",
            align_items="center",
            width="100%",
        )
    ):
        with me.box(
            style=me.Style(
                display="flex", flex_direction="row", gap=8, align_items="center"
            )
        ):
            me.text(title, type="headline-6")
            me.uploader(
                label="Upload",
                accepted_file_types=ACCEPTED_IMAGE_TYPES,
                on_upload=on_upload,
                type="stroked",
                key=f"{key}_uploader",
            )
        with me.box(style=IMAGE_BOX_STYLE):
            if is_loading:
                me.progress_spinner()
            elif image:
                me.image(
                    src=image,
                    key=f"{key}_preview",
                    style=me.Style(
                        width="100%",
                        height="100%",
                        border_radius=12,
                        object_fit="contain",
                    ),
                )
                with me.box(
                    style=me.Style(position="absolute", top=8, right=8)
                ):
                    with me.content_button(
                        type="icon", on_click=on_remove, key=f"{key}_remove"
                    ):
                        me.icon("delete")
            else:
                me.icon(icon, style=me.Style(font_size=32, width="50px", height="60px"))
                me.text(description)
