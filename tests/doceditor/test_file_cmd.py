import pytest
from vectorgraph.core.config import EditorConfig
from vectorgraph.core.shapes import Circle, Line, Point, Rectangle
from vectorgraph.doceditor.editor import SceneEditor


PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


@pytest.fixture
def editor(mocker):
    editor = SceneEditor(config=EditorConfig(), prompter=mocker.Mock())
    editor.scene.add(Rectangle(10, 10, 100, 50, name="box"))
    editor.scene.add(Line(0, 0, 30, 40))
    editor.scene.add(Circle(200, 100, 25))
    editor.scene.add(Point(5, 5, name="P3"))
    return editor


@pytest.fixture
def notifications(editor, mocker):
    handler = mocker.Mock()
    editor.notification_requested.connect(handler)
    return handler


def test_save_appends_extension(editor, tmp_path):
    written = editor.file.save(tmp_path / "drawing")
    assert written == tmp_path / "drawing.graph"
    assert written.exists()
    assert editor.file.file_path == written


def test_save_keeps_existing_extension(editor, tmp_path):
    written = editor.file.save(tmp_path / "drawing.graph")
    assert written == tmp_path / "drawing.graph"


def test_save_then_load(editor, tmp_path, mocker):
    editor.scene.select(editor.scene.objects[0])
    path = editor.file.save(tmp_path / "drawing")
    expected = [o.to_dict() for o in editor.scene.objects]

    other = SceneEditor(prompter=mocker.Mock())
    other.scene.add(Circle(0, 0, 3))
    other.snapshot()
    assert other.file.load(path) is True
    assert [o.to_dict() for o in other.get_objects()] == expected
    assert other.get_selection() == []
    assert not other.history_manager.can_undo()
    assert other.file.file_path == path


def test_save_failure_is_reported(editor, tmp_path, notifications):
    assert editor.file.save(tmp_path / "missing" / "drawing") is None
    assert editor.file.file_path is None
    notifications.assert_called_once()


@pytest.mark.parametrize(
    "content",
    [
        b"",
        b"objects: [unclosed",
        b"format: something-else\nversion: 1\nobjects: []\n",
        b"format: vectorgraph\nversion: 1\nobjects:\n  - type: hexagon\n",
    ],
)
def test_failed_load_leaves_scene_untouched(
    editor, tmp_path, notifications, content
):
    before = [o.to_dict() for o in editor.scene.objects]
    editor.snapshot()
    path = tmp_path / "broken.graph"
    path.write_bytes(content)

    assert editor.file.load(path) is False
    assert [o.to_dict() for o in editor.scene.objects] == before
    assert editor.history_manager.can_undo()
    notifications.assert_called_once()


def test_load_missing_file(editor, tmp_path, notifications):
    assert editor.file.load(tmp_path / "nope.graph") is False
    assert len(editor.scene) == 4
    notifications.assert_called_once()


def test_export_png(editor, tmp_path, notifications):
    written = editor.file.export_png(tmp_path / "out", 120, 80)
    assert written == tmp_path / "out.png"
    assert written.read_bytes().startswith(PNG_SIGNATURE)
    notifications.assert_called_once()


def test_export_png_defaults_to_viewport_size(editor, tmp_path):
    editor.viewport.set_size(64, 48)
    written = editor.file.export_png(tmp_path / "out.png")
    assert written == tmp_path / "out.png"
    assert written.exists()


def test_export_keeps_selection(editor, tmp_path):
    box = editor.scene.objects[0]
    editor.scene.select(box)
    editor.file.export_png(tmp_path / "out.png", 50, 50)
    assert editor.get_selection() == [box]


def test_export_invalid_size_is_reported(editor, tmp_path, notifications):
    assert editor.file.export_png(tmp_path / "out.png", 10, -5) is None
    assert not (tmp_path / "out.png").exists()
    notifications.assert_called_once()
