import pytest
from vectorgraph.core.scene import Scene
from vectorgraph.core.shapes import Circle, Rectangle
from vectorgraph.undo import HistoryManager


@pytest.fixture
def scene():
    return Scene([Rectangle(0, 0, 10, 10), Circle(5, 5, 3)])


@pytest.fixture
def history():
    return HistoryManager()


def _dump(objects):
    return [o.to_dict() for o in objects]


def test_empty_history(history, scene):
    assert not history.can_undo()
    assert not history.can_redo()
    assert history.undo(scene) is None
    assert history.redo(scene) is None


def test_undo_redo_inverse_law(history, scene):
    s0 = _dump(scene.objects)
    history.snapshot(scene)
    scene.objects[0].move(5, 5)
    scene.add(Circle(50, 50, 10))
    s1 = _dump(scene.objects)

    scene.restore(history.undo(scene))
    assert _dump(scene.objects) == s0
    assert history.can_redo()

    scene.restore(history.redo(scene))
    assert _dump(scene.objects) == s1
    assert history.can_undo()
    assert not history.can_redo()


def test_snapshot_clears_redo(history, scene):
    history.snapshot(scene)
    scene.objects[0].move(1, 1)
    scene.restore(history.undo(scene))
    assert history.can_redo()

    history.snapshot(scene)
    assert history.redo_stack == []
    assert not history.can_redo()


def test_snapshots_are_not_shared_with_the_scene(history, scene):
    history.snapshot(scene)
    snapshot = history.undo_stack[-1]
    assert all(a is not b for a, b in zip(snapshot, scene.objects))

    scene.objects[0].move(100, 100)
    assert snapshot[0].bounds() == (0, 0, 10, 10)


def test_push_records_an_earlier_state(history, scene):
    before = scene.snapshot()
    scene.objects[0].move(10, 0)
    history.push(before)

    restored = history.undo(scene)
    assert restored is before
    assert restored[0].bounds() == (0, 0, 10, 10)
    # The current state went to the redo stack
    assert history.redo_stack[-1][0].bounds() == (10, 0, 10, 10)


def test_changed_signal(history, scene, mocker):
    handler = mocker.Mock()
    history.changed.connect(handler)
    history.snapshot(scene)
    history.undo(scene)
    history.redo(scene)
    history.clear()
    assert handler.call_count == 4
    assert not history.can_undo()


def test_noop_undo_does_not_signal(history, scene, mocker):
    handler = mocker.Mock()
    history.changed.connect(handler)
    history.undo(scene)
    handler.assert_not_called()
