"""
Tests for the SketchController state machine.

Covers:
- Commit: style/symmetry stamping, incremental rendering
- Undo/redo with tool resumption (three commits, two undos, one redo)
- Point-level undo for polygons
- Undo floor for startup content
- Reset, change_tool, symmetry updates and dynamic grid sizing
- Style updates and clamping
- Config file loading and recent files
"""
import json
import pytest

from constants import MAX_GRID_N, MAX_LINEWIDTH, TOUCH_HIT_RADIUS
from controller import SketchController
from models.input_events import KeyEvent, PointerEvent
from models.app_state import SymmetryParams
from models.operations import LineOp, PolyOp, PencilOp
from services.sketch_serializer import CorruptSketchError
from services.surfaces import RecordingSurface
from services.symmetry_transforms import UnknownSymmetryError


def _click(controller, x, y):
    controller.mouse_down(PointerEvent(x, y))
    controller.mouse_up(PointerEvent(x, y))


def _line(n):
    return LineOp((0, 0), (10 * n, 5 * n))


# ══════════════════════════════════════════════════════════════════════════
# Commit
# ══════════════════════════════════════════════════════════════════════════

class TestCommit:

    def test_commit_appends_and_renders_once(self, small_p4, surface):
        clears = surface.clear_count
        small_p4.commit(_line(1))
        assert len(small_p4.history) == 1
        assert len(surface.calls) == 1
        assert len(surface.calls[0].transforms) == 36
        assert surface.clear_count == clears

    def test_commit_is_incremental(self, controller, surface):
        controller.commit(_line(1))
        controller.commit(_line(2))
        assert len(surface.calls) == 2

    def test_commit_stamps_style_and_symmetry(self, small_p4):
        small_p4.update_style(line_width=3)
        stamped = small_p4.commit(_line(1))
        assert stamped.style.line_width == 3
        assert stamped.symmetry == small_p4.state.symmetry

    def test_committed_style_is_frozen(self, controller):
        controller.update_style(line_width=2)
        controller.commit(_line(1))
        controller.update_style(line_width=7)
        assert controller.history.entries[0].style.line_width == 2

    def test_commit_does_not_alias_input(self, controller):
        op = PencilOp([(0, 0), (1, 1)])
        controller.commit(op)
        op.add_point((5, 5))
        assert len(controller.history.entries[0].points) == 2

    def test_committed_ops_render_with_their_own_symmetry(self, small_p4, surface):
        small_p4.commit(_line(1))
        small_p4.update_symmetry(sym='none')
        small_p4.rerender()
        assert len(surface.calls[-1].transforms) == 36

    def test_commit_leaves_redo_stack(self, controller):
        controller.commit(_line(1))
        controller.commit(_line(2))
        controller.undo()
        controller.commit(_line(3))
        assert controller.history.can_redo()


# ══════════════════════════════════════════════════════════════════════════
# Undo / redo with resumption
# ══════════════════════════════════════════════════════════════════════════

class TestUndoRedo:

    def test_three_commits_two_undos_one_redo(self, controller):
        a, b, c = (controller.commit(_line(n)) for n in (1, 2, 3))

        controller.undo()
        assert [op.shape_id for op in controller.history.entries] == [a.shape_id]
        assert [op.shape_id for op in controller.history.redo_entries] == [c.shape_id]
        assert controller.tool.name == 'line'
        assert controller.tool.op.shape_id == b.shape_id

        controller.undo()
        assert controller.history.entries == []
        assert [op.shape_id for op in controller.history.redo_entries] == [c.shape_id, b.shape_id]
        assert controller.tool.op.shape_id == a.shape_id

        controller.redo()
        assert [op.shape_id for op in controller.history.entries] == [a.shape_id]
        assert [op.shape_id for op in controller.history.redo_entries] == [c.shape_id]
        assert controller.tool.op.shape_id == b.shape_id

    def test_undo_on_empty_history_is_noop(self, controller):
        controller.undo()
        assert len(controller.history) == 0
        assert not controller.history.can_redo()

    def test_redo_on_empty_stack_is_noop(self, controller):
        controller.commit(_line(1))
        controller.redo()
        assert len(controller.history) == 1

    def test_single_commit_undo_clears_live(self, controller, live_surface):
        controller.commit(_line(1))
        controller.undo()
        assert len(controller.history) == 0
        assert controller.tool.op is None
        assert live_surface.calls == []

    def test_undo_excludes_resumed_shape_from_replay(self, controller, surface):
        controller.commit(_line(1))
        controller.commit(_line(2))
        controller.commit(_line(3))
        controller.undo()
        assert [call.geometry for call in surface.calls] == [(('M', 0.0, 0.0), ('L', 10.0, 5.0))]

    def test_resume_restores_style_and_symmetry(self, controller):
        controller.update_style(line_width=2)
        controller.update_symmetry(sym='p3')
        controller.commit(_line(1))
        controller.update_style(line_width=5)
        controller.update_symmetry(sym='pmm')
        controller.commit(_line(2))

        controller.undo()
        assert controller.state.style.line_width == 2
        assert controller.state.symmetry.sym == 'p3'

    def test_ctrl_z_and_ctrl_y(self, controller):
        controller.commit(_line(1))
        controller.commit(_line(2))
        assert controller.key_down(KeyEvent('z', ctrl=True))
        assert len(controller.history.redo_entries) == 1
        assert controller.key_down(KeyEvent('y', ctrl=True))
        assert len(controller.history.redo_entries) == 0


class TestPolygonResume:

    def test_undo_retracts_one_vertex(self, controller):
        controller.change_tool('poly')
        for x, y in [(100, 100), (200, 100), (200, 200)]:
            _click(controller, x, y)

        assert len(controller.history) == 2
        assert controller.tool.op.points == [(100, 100), (200, 100), (200, 200)]

        controller.undo()
        assert controller.tool.name == 'poly'
        assert controller.tool.op.points == [(100.0, 100.0), (200.0, 100.0)]
        assert len(controller.history) == 1
        assert len(controller.history.redo_entries) == 1

    def test_finished_polygon_drawn_once(self, controller, surface):
        controller.change_tool('poly')
        for x, y in [(100, 100), (200, 100), (200, 200)]:
            _click(controller, x, y)
        controller.key_down(KeyEvent('Enter'))

        assert len(controller.history) == 3
        assert len(controller.history.visible_ops()) == 1
        assert len(surface.calls) == 1
        assert surface.calls[0].closed

    def test_checkpoints_not_drawn_while_editing(self, controller, surface):
        controller.change_tool('poly')
        for x, y in [(100, 100), (200, 100), (200, 200)]:
            _click(controller, x, y)
        assert surface.calls == []

    def test_continue_after_resume(self, controller):
        controller.change_tool('poly')
        for x, y in [(100, 100), (200, 100), (200, 200)]:
            _click(controller, x, y)
        controller.undo()
        _click(controller, 50, 300)
        assert controller.tool.op.points[-1] == (50.0, 300.0)
        assert len(controller.tool.op.points) == 3


# ══════════════════════════════════════════════════════════════════════════
# Floor, reset, serialization
# ══════════════════════════════════════════════════════════════════════════

class TestFloorAndReset:

    def test_startup_content_cannot_be_undone(self, surface, live_surface):
        startup = PolyOp([(0, 0), (50, 0), (50, 50)])
        controller = SketchController(surface, live_surface, startup_ops=[startup])
        assert controller.history.floor == 1
        assert len(surface.calls) == 1

        controller.undo()
        assert len(controller.history) == 1

    def test_undo_never_resumes_below_floor(self, surface, live_surface):
        controller = SketchController(surface, live_surface, startup_ops=[_line(1)])
        controller.commit(_line(2))
        controller.undo()
        assert len(controller.history) == 1
        assert controller.tool.op is None
        assert len(controller.history.redo_entries) == 1

    def test_reset_clears_everything(self, controller, surface):
        controller.commit(_line(1))
        controller.update_style(line_width=4)
        controller.update_symmetry(sym='p2')
        controller.reset()
        assert len(controller.history) == 0
        assert not controller.history.can_redo()
        assert controller.state.style.line_width == 1.0
        assert controller.state.symmetry.sym == 'p6m'
        assert surface.calls == []


class TestSerialization:

    def test_round_trip(self, controller, sample_sketch_json):
        controller.deserialize(sample_sketch_json)
        assert len(controller.history) == 5
        assert controller.history.floor == 0
        assert json.loads(controller.serialize()) == json.loads(sample_sketch_json)

    def test_corrupt_sketch_leaves_history(self, controller):
        controller.commit(_line(1))
        with pytest.raises(CorruptSketchError):
            controller.deserialize('[{"tool": "spiral"}]')
        assert len(controller.history) == 1

    def test_deserialize_renders_loaded_ops(self, controller, surface, sample_sketch_json):
        controller.deserialize(sample_sketch_json)
        assert len(surface.calls) == 5

    @pytest.mark.parametrize("symmetry", [
        "red",
        {"sym": "p4", "d": "abc"},
        {"sym": "p4", "nx": None},
    ])
    def test_malformed_symmetry_leaves_history(self, controller, symmetry):
        committed = controller.commit(_line(1))
        record = {"tool": "line", "start": [0, 0], "end": [5, 5], "symmetry": symmetry}
        with pytest.raises(CorruptSketchError):
            controller.deserialize(json.dumps([record]))
        assert controller.history.entries == [committed]

    def test_replay_failure_leaves_history(self, controller, sample_sketch_json, monkeypatch):
        committed = controller.commit(_line(1))

        def fail(symmetry):
            raise UnknownSymmetryError("p4")
        monkeypatch.setattr(controller, "transforms_for", fail)
        with pytest.raises(CorruptSketchError):
            controller.deserialize(sample_sketch_json)
        assert controller.history.entries == [committed]

    def test_loaded_grid_extent_bounded(self, controller, surface):
        record = {"tool": "line", "start": [0, 0], "end": [5, 5],
                  "symmetry": {"sym": "p4", "nx": 400, "ny": 400, "d": 10}}
        controller.deserialize(json.dumps([record]))
        assert controller.history.entries[0].symmetry.nx == MAX_GRID_N
        # 51 x 51 lattice points, four rotations each
        assert len(surface.calls[0].transforms) <= 51 * 51 * 4

    def test_transforms_for_clamps_snapshot(self, controller):
        wide = controller.transforms_for(SymmetryParams(sym="p4", nx=400, ny=400, d=10))
        limit = controller.transforms_for(SymmetryParams(sym="p4", nx=MAX_GRID_N, ny=MAX_GRID_N, d=10))
        assert len(wide) == len(limit)


# ══════════════════════════════════════════════════════════════════════════
# Parameters
# ══════════════════════════════════════════════════════════════════════════

class TestParameters:

    def test_dynamic_grid_size(self, controller):
        controller.update_symmetry(sym='p4', d=100)
        assert controller.state.symmetry.nx == 16
        assert controller.state.symmetry.ny == 12

    def test_dynamic_grid_size_clamped(self, controller):
        controller.update_symmetry(d=10)
        assert controller.state.symmetry.nx == MAX_GRID_N

    def test_explicit_grid_size_kept(self, small_p4):
        assert small_p4.state.symmetry.nx == 2
        assert len(small_p4.active_transforms) == 36

    def test_unknown_symmetry_rejected(self, controller):
        before = controller.state.symmetry
        with pytest.raises(UnknownSymmetryError):
            controller.update_symmetry(sym='p5')
        assert controller.state.symmetry == before

    def test_none_and_rosette(self, controller):
        controller.update_symmetry(sym='none')
        assert len(controller.active_transforms) == 1
        controller.update_symmetry(sym='rosette', n_rot=5, n_ref=1)
        assert len(controller.active_transforms) == 10

    def test_line_width_clamped(self, controller):
        controller.update_style(line_width=1000)
        assert controller.state.style.line_width == MAX_LINEWIDTH

    def test_bad_line_cap(self, controller):
        with pytest.raises(ValueError):
            controller.update_style(line_cap='pointy')

    def test_set_color(self, controller):
        controller.set_color('fill', 255, 0, 0, 0.25)
        assert controller.state.style.fill_style == 'rgba(255, 0, 0, 0.25)'

    def test_param_listener(self, controller):
        seen = []
        controller.add_param_listener(lambda state: seen.append(state.symmetry.sym))
        controller.update_symmetry(sym='p2')
        assert seen == ['p2']

    def test_touch_mode(self, controller):
        controller.set_touch_mode(True)
        assert controller.state.options.hit_radius == TOUCH_HIT_RADIUS


class TestToolSwitching:

    def test_change_tool_commits_live_shape(self, controller):
        controller.change_tool('line')
        controller.mouse_down(PointerEvent(10, 10))
        controller.mouse_move(PointerEvent(80, 40))
        controller.mouse_up(PointerEvent(80, 40))
        assert len(controller.history) == 0

        controller.change_tool('circle')
        assert len(controller.history) == 1
        assert controller.state.current_tool == 'circle'

    def test_unknown_tool(self, controller):
        with pytest.raises(KeyError):
            controller.change_tool('airbrush')


class TestConfig:

    def test_loads_config_file(self, tmp_path, surface, live_surface):
        (tmp_path / 'config.json').write_text(json.dumps({
            'initial_symmetry': 'p4',
            'spacing': 50,
            'dynamic_grid_size': False,
            'hit_radius': 9,
        }))
        controller = SketchController(surface, live_surface, config_dir=str(tmp_path))
        assert controller.state.symmetry.sym == 'p4'
        assert controller.state.symmetry.d == 50
        assert controller.state.options.dynamic_grid_size is False
        assert controller.state.options.hit_radius == 9

    def test_recent_files_saved(self, tmp_path, surface, live_surface):
        controller = SketchController(surface, live_surface, config_dir=str(tmp_path))
        controller._add_to_recent_files('/tmp/a.json')
        controller._add_to_recent_files('/tmp/b.json')
        controller._add_to_recent_files('/tmp/a.json')
        saved = json.loads((tmp_path / 'config.json').read_text())
        assert saved['recent_files'] == ['/tmp/a.json', '/tmp/b.json']

    def test_missing_config_uses_defaults(self, tmp_path):
        controller = SketchController(RecordingSurface(), config_dir=str(tmp_path / 'nope'))
        assert controller.state.symmetry.sym == 'p6m'
