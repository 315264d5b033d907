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

import mesop as me

from common.utils import bytes_to_data_uri
from components.dialog import dialog
from components.image_uploader import image_uploader
from config.default import Default, load_about_content
from models.gemini import suggest_scene_description
from models.image_models import (
    generate_clothing_image,
    generate_person_image,
    generate_scene_image,
    outpaint_image,
)
from models.stylescene_models import (
    GenerateClothingImageInput,
    GeneratePersonImageInput,
    GenerateRedressImageInput,
    GenerateSceneImageInput,
    GenerateVideoInput,
    OutpaintImageInput,
    SuggestSceneDescriptionInput,
)
from models.veo import generate_video
from models.vto import generate_redress_image

config = Default()

STYLESCENE_INFO = next(
    (s for s in load_about_content()["sections"] if s.get("id") == "stylescene"),
    None,
)

CARD_STYLE = me.Style(
    background=me.theme_var("surface-container-lowest"),
    border_radius=12,
    padding=me.Padding.all(16),
    display="flex",
    flex_direction="column",
    gap=12,
)


@me.stateclass
class PageState:
    """StyleScene Page State"""

    person_image: str = ""
    clothing_image: str = ""
    person_description: str = ""
    clothing_description: str = ""
    scene_description: str = ""

    redressed_image: str = ""
    generated_image: str = ""
    outpainted_image: str = ""
    generated_video: str = ""

    is_generating_person: bool = False
    is_generating_clothing: bool = False
    is_redressing: bool = False
    is_suggesting: bool = False
    is_generating: bool = False
    is_outpainting: bool = False
    is_animating: bool = False

    error_dialog_open: bool = False
    error_title: str = ""
    error_message: str = ""

    info_dialog_open: bool = False


def _show_error(state: PageState, title: str, message: str):
    state.error_title = title
    state.error_message = message
    state.error_dialog_open = True


def _clear_results(state: PageState):
    state.redressed_image = ""
    state.generated_image = ""
    state.outpainted_image = ""
    state.generated_video = ""


def _final_image(state: PageState) -> str:
    return state.outpainted_image or state.generated_image


def _upload_image(e: me.UploadEvent, field: str):
    state = me.state(PageState)
    try:
        setattr(state, field, bytes_to_data_uri(e.file.getvalue(), e.file.mime_type))
        _clear_results(state)
    except Exception as ex:
        logging.error("Image upload failed: %s", ex)
        _show_error(state, "Upload Failed", "Error uploading image.")


def on_upload_person(e: me.UploadEvent):
    """Upload person image handler."""
    _upload_image(e, "person_image")
    yield


def on_upload_clothing(e: me.UploadEvent):
    """Upload clothing image handler."""
    _upload_image(e, "clothing_image")
    yield


def on_remove_person(e: me.ClickEvent):
    state = me.state(PageState)
    state.person_image = ""
    _clear_results(state)
    yield


def on_remove_clothing(e: me.ClickEvent):
    state = me.state(PageState)
    state.clothing_image = ""
    _clear_results(state)
    yield


def on_person_description_blur(e: me.InputBlurEvent):
    me.state(PageState).person_description = e.value


def on_clothing_description_blur(e: me.InputBlurEvent):
    me.state(PageState).clothing_description = e.value


def on_scene_description_blur(e: me.InputBlurEvent):
    me.state(PageState).scene_description = e.value


def on_generate_person(e: me.ClickEvent):
    """Generate a person image from the text description."""
    state = me.state(PageState)
    if not state.person_description.strip():
        _show_error(state, "Missing Description", "Please describe the person to generate.")
        yield
        return

    state.is_generating_person = True
    yield

    try:
        result = generate_person_image(
            GeneratePersonImageInput(description=state.person_description)
        )
        state.person_image = result.image_data_uri
        _clear_results(state)
    except Exception as ex:
        logging.error("Person generation failed: %s", ex)
        _show_error(state, "Generation Failed", "Could not generate the person image.")
    finally:
        state.is_generating_person = False
        yield


def on_generate_clothing(e: me.ClickEvent):
    """Generate a clothing image from the text description."""
    state = me.state(PageState)
    if not state.clothing_description.strip():
        _show_error(state, "Missing Description", "Please describe the clothing to generate.")
        yield
        return

    state.is_generating_clothing = True
    yield

    try:
        result = generate_clothing_image(
            GenerateClothingImageInput(description=state.clothing_description)
        )
        state.clothing_image = result.image_data_uri
        _clear_results(state)
    except Exception as ex:
        logging.error("Clothing generation failed: %s", ex)
        _show_error(state, "Generation Failed", "Could not generate the clothing image.")
    finally:
        state.is_generating_clothing = False
        yield


def on_redress(e: me.ClickEvent):
    """Dress the person in the clothing."""
    state = me.state(PageState)
    if not state.person_image or not state.clothing_image:
        _show_error(
            state,
            "Missing Images",
            "Please upload both a person and a clothing image to try them on.",
        )
        yield
        return

    state.is_redressing = True
    _clear_results(state)
    yield

    try:
        result = generate_redress_image(
            GenerateRedressImageInput(
                person_data_uri=state.person_image,
                clothing_data_uri=state.clothing_image,
            )
        )
        state.redressed_image = result.redressed_image_data_uri
    except Exception as ex:
        logging.error("Redress failed: %s", ex)
        _show_error(state, "Try-On Failed", "Could not dress the person in the clothing.")
    finally:
        state.is_redressing = False
        yield


def on_suggest_scene(e: me.ClickEvent):
    """Ask Gemini for a scene description."""
    state = me.state(PageState)
    if not state.person_image or not state.clothing_image:
        _show_error(
            state,
            "Missing Images",
            "Please upload both a person and a clothing image to get a suggestion.",
        )
        yield
        return

    state.is_suggesting = True
    yield

    try:
        result = suggest_scene_description(
            SuggestSceneDescriptionInput(
                person_image_data_uri=state.person_image,
                clothing_image_data_uri=state.clothing_image,
            )
        )
        state.scene_description = result.scene_description
    except Exception as ex:
        logging.error("Scene suggestion failed: %s", ex)
        _show_error(state, "Suggestion Failed", "Could not generate a scene description.")
    finally:
        state.is_suggesting = False
        yield


def on_generate(e: me.ClickEvent):
    """Redress if needed, then place the dressed person into the scene."""
    state = me.state(PageState)
    if not state.person_image or not state.clothing_image or not state.scene_description.strip():
        _show_error(
            state,
            "Missing Information",
            "Please upload both images and provide a scene description.",
        )
        yield
        return

    state.is_generating = True
    state.generated_image = ""
    state.outpainted_image = ""
    state.generated_video = ""
    yield

    try:
        if not state.redressed_image:
            redressed = generate_redress_image(
                GenerateRedressImageInput(
                    person_data_uri=state.person_image,
                    clothing_data_uri=state.clothing_image,
                )
            )
            state.redressed_image = redressed.redressed_image_data_uri
            yield

        result = generate_scene_image(
            GenerateSceneImageInput(
                person_data_uri=state.redressed_image,
                scene_description=state.scene_description,
            )
        )
        state.generated_image = result.generated_image_data_uri
    except Exception as ex:
        logging.error("Scene generation failed: %s", ex)
        _show_error(
            state, "Generation Failed", "Could not generate the image. Please try again."
        )
    finally:
        state.is_generating = False
        yield


def on_outpaint(e: me.ClickEvent):
    """Widen the generated image to the configured aspect ratio."""
    state = me.state(PageState)
    if not state.generated_image:
        yield
        return

    state.is_outpainting = True
    yield

    try:
        result = outpaint_image(
            OutpaintImageInput(
                image_data_uri=state.generated_image,
                aspect_ratio=config.OUTPAINT_ASPECT_RATIO,
            )
        )
        state.outpainted_image = result.image_data_uri
        state.generated_video = ""
    except Exception as ex:
        logging.error("Outpaint failed: %s", ex)
        _show_error(state, "Outpaint Failed", "Could not extend the image.")
    finally:
        state.is_outpainting = False
        yield


def on_animate(e: me.ClickEvent):
    """Turn the final image into a short video."""
    state = me.state(PageState)
    source = _final_image(state)
    if not source:
        yield
        return

    state.is_animating = True
    state.generated_video = ""
    yield

    try:
        result = generate_video(GenerateVideoInput(image_data_uri=source))
        state.generated_video = result.video_data_uri
    except Exception as ex:
        logging.error("Video generation failed: %s", ex)
        _show_error(state, "Video Failed", "Could not generate the video. Please try again.")
    finally:
        state.is_animating = False
        yield


def on_clear(e: me.ClickEvent):
    state = me.state(PageState)
    state.person_image = ""
    state.clothing_image = ""
    state.person_description = ""
    state.clothing_description = ""
    state.scene_description = ""
    _clear_results(state)
    yield


def open_info_dialog(e: me.ClickEvent):
    me.state(PageState).info_dialog_open = True
    yield


def close_info_dialog(e: me.ClickEvent):
    me.state(PageState).info_dialog_open = False
    yield


def close_error_dialog(e: me.ClickEvent):
    me.state(PageState).error_dialog_open = False
    yield


def _download_link(data_uri: str, file_name: str, label: str):
    me.html(
        f'<a href="{data_uri}" download="{file_name}">{label}</a>',
        mode="sanitized",
    )


def _busy_button(label: str, on_click, is_busy: bool, disabled: bool, button_type: str = "flat"):
    with me.content_button(on_click=on_click, type=button_type, disabled=is_busy or disabled):
        with me.box(style=me.Style(display="flex", align_items="center", gap=8)):
            if is_busy:
                me.progress_spinner(diameter=18)
            me.text(label)


@me.page(path="/", title="StyleScene")
def page():
    state = me.state(PageState)

    if state.error_dialog_open:
        with dialog(is_open=state.error_dialog_open):  # pylint: disable=E1129
            me.text(state.error_title, type="headline-6")
            me.text(state.error_message)
            with me.box(style=me.Style(margin=me.Margin(top=16))):
                me.button("Close", on_click=close_error_dialog, type="flat")

    if state.info_dialog_open and STYLESCENE_INFO:
        with dialog(is_open=state.info_dialog_open):  # pylint: disable=E1129
            me.text(f'About {STYLESCENE_INFO["title"]}', type="headline-6")
            me.markdown(STYLESCENE_INFO["description"])
            me.divider()
            me.text("Current Settings", type="headline-6")
            me.text(f"Try-On Model: {config.VTO_MODEL_ID}")
            me.text(f"Scene Model: {config.IMAGEN_CAPABILITY_MODEL}")
            me.text(f"Suggestion Model: {config.MODEL_ID}")
            me.text(f"Video Model: {config.VEO_MODEL_ID}")
            with me.box(style=me.Style(margin=me.Margin(top=16))):
                me.button("Close", on_click=close_info_dialog, type="flat")

    with me.box(style=me.Style(padding=me.Padding.all(24), display="flex", flex_direction="column", gap=16)):
        with me.box(style=me.Style(display="flex", align_items="center", gap=8)):
            me.icon("palette")
            me.text("StyleScene", type="headline-5")
            with me.content_button(type="icon", on_click=open_info_dialog):
                me.icon("info")

        with me.box(style=me.Style(display="flex", flex_direction="row", gap=16, flex_wrap="wrap")):
            with me.box(style=me.Style(flex_grow=1, flex_basis=320, display="flex", flex_direction="column", gap=16)):
                with me.box(style=me.Style(display="flex", flex_direction="row", gap=16)):
                    with me.box(style=me.Style(width="calc(50% - 8px)")):
                        image_uploader(
                            key="person",
                            title="Person Image",
                            description="Upload a photo of a person.",
                            icon="person_outline",
                            image=state.person_image,
                            on_upload=on_upload_person,
                            on_remove=on_remove_person,
                            is_loading=state.is_generating_person,
                        )
                        me.textarea(
                            label="Or describe a person",
                            value=state.person_description,
                            on_blur=on_person_description_blur,
                            style=me.Style(width="100%", margin=me.Margin(top=8)),
                        )
                        me.button("Create Person", on_click=on_generate_person, type="stroked")

                    with me.box(style=me.Style(width="calc(50% - 8px)")):
                        image_uploader(
                            key="clothing",
                            title="Clothing Image",
                            description="Upload a photo of an outfit.",
                            icon="checkroom",
                            image=state.clothing_image,
                            on_upload=on_upload_clothing,
                            on_remove=on_remove_clothing,
                            is_loading=state.is_generating_clothing,
                        )
                        me.textarea(
                            label="Or describe the clothing",
                            value=state.clothing_description,
                            on_blur=on_clothing_description_blur,
                            style=me.Style(width="100%", margin=me.Margin(top=8)),
                        )
                        me.button("Create Clothing", on_click=on_generate_clothing, type="stroked")

                with me.box(style=CARD_STYLE):
                    me.text("Create Your Scene", type="headline-6")
                    me.text(
                        "Describe the scene where you want to place the person wearing the clothes. Or, let AI suggest one for you!"
                    )
                    me.textarea(
                        label="Scene description",
                        placeholder="e.g., walking through a neon-lit cyberpunk city at night, rain glistening on the pavement...",
                        value=state.scene_description,
                        on_blur=on_scene_description_blur,
                        rows=4,
                        style=me.Style(width="100%"),
                    )
                    has_images = bool(state.person_image and state.clothing_image)
                    with me.box(style=me.Style(display="flex", gap=8, flex_wrap="wrap")):
                        _busy_button(
                            "Suggest Scene",
                            on_suggest_scene,
                            state.is_suggesting,
                            not has_images,
                            button_type="stroked",
                        )
                        _busy_button(
                            "Try On",
                            on_redress,
                            state.is_redressing,
                            not has_images,
                            button_type="stroked",
                        )
                        _busy_button(
                            "Generate Image",
                            on_generate,
                            state.is_generating,
                            not has_images or not state.scene_description,
                        )
                        me.button("Clear", on_click=on_clear, type="stroked")

            with me.box(style=me.Style(flex_grow=1, flex_basis=320)):
                with me.box(style=CARD_STYLE):
                    me.text("Generated Image", type="headline-6")
                    if state.redressed_image and not state.generated_image:
                        me.text("Try-on preview", type="subtitle-2")
                        me.image(
                            src=state.redressed_image,
                            style=me.Style(width="100%", border_radius=12),
                        )
                    if state.is_generating:
                        me.progress_spinner()
                    elif _final_image(state):
                        me.image(
                            src=_final_image(state),
                            style=me.Style(width="100%", border_radius=12),
                        )
                        with me.box(style=me.Style(display="flex", gap=8, align_items="center")):
                            _busy_button(
                                f"Outpaint to {config.OUTPAINT_ASPECT_RATIO}",
                                on_outpaint,
                                state.is_outpainting,
                                bool(state.outpainted_image),
                                button_type="stroked",
                            )
                            _busy_button("Animate", on_animate, state.is_animating, False)
                            _download_link(
                                _final_image(state), "stylescene-image.png", "Download Image"
                            )
                    else:
                        me.icon("palette", style=me.Style(font_size=48, width="60px", height="60px"))
                        me.text("Your image awaits")

                    if state.generated_video:
                        me.video(
                            src=state.generated_video,
                            style=me.Style(width="100%", border_radius=12, margin=me.Margin(top=16)),
                        )
                        _download_link(
                            state.generated_video, "stylescene-video.mp4", "Download Video"
                        )
