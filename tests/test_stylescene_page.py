from types import SimpleNamespace
from unittest import mock

import pytest

from common.error_handling import GenerationError
from pages import stylescene
from tests.conftest import make_data_uri

REDRESSED = make_data_uri(color=(10, 200, 10))
SCENE = make_data_uri(color=(10, 10, 200))


@pytest.fixture
def state(monkeypatch):
    page_state = stylescene.PageState()
    monkeypatch.setattr(stylescene.me, "state", lambda cls: page_state)
    return page_state


@pytest.fixture
def loaded_state(state, person_uri, clothing_uri):
    state.person_image = person_uri
    state.clothing_image = clothing_uri
    return state


def _run(handler, event=None):
    for _ in handler(event):
        pass


def _upload_event(data: bytes = b"ABC", mime_type: str = "image/png"):
    return SimpleNamespace(file=SimpleNamespace(getvalue=lambda: data, mime_type=mime_type))


def test_upload_person_clears_results(state):
    state.generated_image = SCENE
    state.redressed_image = REDRESSED

    _run(stylescene.on_upload_person, _upload_event())

    assert state.person_image == "data:image/png;base64,QUJD"
    assert state.generated_image == ""
    assert state.redressed_image == ""


def test_upload_failure_shows_error(state):
    def unreadable():
        raise OSError("stream closed")

    event = SimpleNamespace(file=SimpleNamespace(getvalue=unreadable, mime_type="image/png"))

    _run(stylescene.on_upload_clothing, event)

    assert state.clothing_image == ""
    assert state.error_dialog_open
    assert state.error_title == "Upload Failed"
    assert state.error_message == "Error uploading image."


def test_remove_person_resets_derived_results(loaded_state):
    loaded_state.redressed_image = REDRESSED
    loaded_state.generated_image = SCENE
    loaded_state.generated_video = "data:video/mp4;base64,VklERU8="

    _run(stylescene.on_remove_person)

    assert loaded_state.person_image == ""
    assert loaded_state.clothing_image
    assert loaded_state.redressed_image == ""
    assert loaded_state.generated_image == ""
    assert loaded_state.generated_video == ""


def test_clear_resets_everything(loaded_state):
    loaded_state.scene_description = "a beach"
    loaded_state.outpainted_image = SCENE

    _run(stylescene.on_clear)

    assert loaded_state.person_image == ""
    assert loaded_state.clothing_image == ""
    assert loaded_state.scene_description == ""
    assert loaded_state.outpainted_image == ""


@pytest.mark.parametrize("handler", [stylescene.on_redress, stylescene.on_suggest_scene])
def test_missing_images_guard(state, monkeypatch, handler):
    redress = mock.Mock()
    suggest = mock.Mock()
    monkeypatch.setattr(stylescene, "generate_redress_image", redress)
    monkeypatch.setattr(stylescene, "suggest_scene_description", suggest)

    _run(handler)

    assert state.error_title == "Missing Images"
    assert state.error_dialog_open
    redress.assert_not_called()
    suggest.assert_not_called()


def test_generate_needs_scene_description(loaded_state, monkeypatch):
    scene = mock.Mock()
    monkeypatch.setattr(stylescene, "generate_scene_image", scene)

    _run(stylescene.on_generate)

    assert loaded_state.error_title == "Missing Information"
    scene.assert_not_called()


def test_suggest_scene_sets_description(loaded_state, monkeypatch):
    monkeypatch.setattr(
        stylescene,
        "suggest_scene_description",
        lambda request: SimpleNamespace(scene_description="a rainy Tokyo street"),
    )

    _run(stylescene.on_suggest_scene)

    assert loaded_state.scene_description == "a rainy Tokyo street"
    assert not loaded_state.is_suggesting
    assert not loaded_state.error_dialog_open


def test_suggest_scene_failure_clears_loading_flag(loaded_state, monkeypatch):
    def fail(request):
        raise GenerationError("Could not generate a scene description.")

    monkeypatch.setattr(stylescene, "suggest_scene_description", fail)

    _run(stylescene.on_suggest_scene)

    assert not loaded_state.is_suggesting
    assert loaded_state.error_dialog_open
    assert loaded_state.error_title == "Suggestion Failed"


def test_suggest_scene_sets_loading_flag_while_running(loaded_state, monkeypatch):
    monkeypatch.setattr(
        stylescene,
        "suggest_scene_description",
        lambda request: SimpleNamespace(scene_description="a beach"),
    )

    handler = stylescene.on_suggest_scene(None)
    next(handler)
    assert loaded_state.is_suggesting
    for _ in handler:
        pass
    assert not loaded_state.is_suggesting


def test_generate_redresses_first(loaded_state, monkeypatch):
    loaded_state.scene_description = "a beach at sunset"
    redress = mock.Mock(return_value=SimpleNamespace(redressed_image_data_uri=REDRESSED))
    scene = mock.Mock(return_value=SimpleNamespace(generated_image_data_uri=SCENE))
    monkeypatch.setattr(stylescene, "generate_redress_image", redress)
    monkeypatch.setattr(stylescene, "generate_scene_image", scene)

    _run(stylescene.on_generate)

    redress.assert_called_once()
    (scene_request,) = scene.call_args.args
    assert scene_request.person_data_uri == REDRESSED
    assert scene_request.scene_description == "a beach at sunset"
    assert loaded_state.redressed_image == REDRESSED
    assert loaded_state.generated_image == SCENE
    assert not loaded_state.is_generating


def test_generate_reuses_existing_redress(loaded_state, monkeypatch):
    loaded_state.scene_description = "a beach at sunset"
    loaded_state.redressed_image = REDRESSED
    redress = mock.Mock()
    scene = mock.Mock(return_value=SimpleNamespace(generated_image_data_uri=SCENE))
    monkeypatch.setattr(stylescene, "generate_redress_image", redress)
    monkeypatch.setattr(stylescene, "generate_scene_image", scene)

    _run(stylescene.on_generate)

    redress.assert_not_called()
    assert loaded_state.generated_image == SCENE


def test_generate_failure_shows_error(loaded_state, monkeypatch):
    loaded_state.scene_description = "a beach at sunset"
    loaded_state.redressed_image = REDRESSED
    monkeypatch.setattr(
        stylescene,
        "generate_scene_image",
        mock.Mock(side_effect=GenerationError("Failed to generate image with Vertex AI.")),
    )

    _run(stylescene.on_generate)

    assert not loaded_state.is_generating
    assert loaded_state.generated_image == ""
    assert loaded_state.error_title == "Generation Failed"


def test_redress_failure_shows_error(loaded_state, monkeypatch):
    monkeypatch.setattr(
        stylescene,
        "generate_redress_image",
        mock.Mock(side_effect=GenerationError("VTO API returned an unexpected response (no predictions).")),
    )

    _run(stylescene.on_redress)

    assert not loaded_state.is_redressing
    assert loaded_state.error_title == "Try-On Failed"


def test_animate_uses_outpainted_image(state, monkeypatch):
    state.generated_image = SCENE
    state.outpainted_image = REDRESSED
    video = mock.Mock(return_value=SimpleNamespace(video_data_uri="data:video/mp4;base64,VklERU8="))
    monkeypatch.setattr(stylescene, "generate_video", video)

    _run(stylescene.on_animate)

    (request,) = video.call_args.args
    assert request.image_data_uri == REDRESSED
    assert state.generated_video == "data:video/mp4;base64,VklERU8="
    assert not state.is_animating


def test_download_link_keeps_download_attribute(monkeypatch):
    html = mock.Mock()
    monkeypatch.setattr(stylescene.me, "html", html)

    stylescene._download_link(SCENE, "stylescene-image.png", "Download Image")

    (markup,) = html.call_args.args
    assert 'download="stylescene-image.png"' in markup
    assert f'href="{SCENE}"' in markup
    assert html.call_args.kwargs["mode"] == "sanitized"
