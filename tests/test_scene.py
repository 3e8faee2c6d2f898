import pytest

from shapedrag_core.events import down, move, up
from shapedrag_core.scene import Scene, default_scene
from shapedrag_core.shapes import DraggingWhole, Idle, ShapeKind


def test_default_scene_layout():
    scene = default_scene()
    assert scene.ids() == ["circle", "arc", "ellipse", "line"]
    assert scene.get("line").kind is ShapeKind.CURVE
    assert all(frame.drawable for frame in scene.frames().values())


def test_dispatch_reaches_every_shape_independently():
    scene = default_scene()
    result = scene.dispatch(down(250.0, 160.0))
    assert isinstance(result["line"].state, DraggingWhole)
    assert result["circle"].state == Idle(False)
    assert result["arc"].state == Idle(False)

    scene.dispatch(move(260.0, 170.0))
    scene.dispatch(up(260.0, 170.0))
    assert scene.get("line").points == ((210.0, 210.0), (310.0, 130.0))
    assert scene.get("line").state == Idle(True)
    assert scene.get("circle").points == ((100.0, 100.0), (150.0, 100.0))


def test_overlapping_handles_grab_both_shapes():
    # the circle edge and the ellipse's second vertex share (150, 100)
    scene = default_scene()
    result = scene.dispatch(down(150.0, 100.0))
    assert result["circle"].active_index == 1
    assert result["ellipse"].active_index == 2


def test_add_remove_and_ids():
    scene = Scene()
    first = scene.add("circle", [(0, 0), (5, 0)])
    second = scene.add("line", [(0, 0), (5, 5)])
    assert first == "circle-1"
    assert second == "curve-2"
    assert len(scene) == 2
    with pytest.raises(ValueError):
        scene.add("arc", [(0, 0), (1, 1), (2, 0)], shape_id=first)
    scene.remove(first)
    assert scene.ids() == [second]


def test_cancel_all_ends_drags():
    scene = default_scene()
    scene.dispatch(down(250.0, 160.0))
    scene.cancel_all()
    assert not any(shape.dragging for shape in scene.shapes())
    assert scene.get("line").selected
