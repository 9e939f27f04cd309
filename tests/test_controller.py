import pytest

from conftest import FakeControl, FakeIndexer, FakePicker, FakeRegistry
from sessionizer.controller import SessionController, SessionState
from sessionizer.errors import InvalidTargetStateError
from sessionizer.models import InvocationMode, ResolvedTarget
from sessionizer.selector import Selector


class TestStateOf:
    def test_no_server(self, template):
        controller = SessionController(FakeControl(running=False), template, inside_client=False)
        assert controller.state_of("x") is SessionState.NO_SERVER

    def test_server_without_session(self, template):
        controller = SessionController(FakeControl(["other"]), template, inside_client=False)
        assert controller.state_of("x") is SessionState.SERVER_RUNNING_NO_SESSION

    def test_session_exists(self, template):
        controller = SessionController(FakeControl(["x"]), template, inside_client=False)
        assert controller.state_of("x") is SessionState.SESSION_EXISTS


class TestEnsureSession:
    def test_existing_session_is_reused(self, template):
        control = FakeControl(["proj_a"])
        controller = SessionController(control, template, inside_client=False)

        assert controller.ensure_session(ResolvedTarget.session("proj_a")) == "proj_a"
        assert control.created == []

    def test_creates_when_no_server(self, tmp_path, template):
        control = FakeControl(running=False)
        controller = SessionController(control, template, inside_client=False)

        controller.ensure_session(ResolvedTarget.for_path(f"{tmp_path}/"))

        assert control.created == [(tmp_path.name, f"{tmp_path}/", template)]

    def test_creates_when_session_missing(self, tmp_path, template):
        control = FakeControl(["other"])
        controller = SessionController(control, template, inside_client=False)

        controller.ensure_session(ResolvedTarget(name="work", path=str(tmp_path)))

        assert [c[0] for c in control.created] == ["work"]

    def test_existing_session_ignores_path(self, tmp_path, template):
        control = FakeControl(["work"])
        controller = SessionController(control, template, inside_client=False)

        controller.ensure_session(ResolvedTarget(name="work", path=str(tmp_path / "missing")))

        assert control.created == []

    def test_missing_path_is_invalid_state(self, template):
        control = FakeControl(["other"])
        controller = SessionController(control, template, inside_client=False)

        with pytest.raises(InvalidTargetStateError, match="no directory"):
            controller.ensure_session(ResolvedTarget(name="work", path=""))
        assert control.created == []

    def test_nonexistent_directory_is_invalid_state(self, tmp_path, template):
        control = FakeControl()
        controller = SessionController(control, template, inside_client=False)

        with pytest.raises(InvalidTargetStateError, match="does not exist"):
            controller.ensure_session(ResolvedTarget.for_path(str(tmp_path / "gone")))
        assert control.created == []

    def test_cancelled_target_rejected(self, template):
        controller = SessionController(FakeControl(), template, inside_client=False)
        with pytest.raises(InvalidTargetStateError):
            controller.ensure_session(ResolvedTarget.cancelled())


@pytest.mark.parametrize("inside,verb", [(False, "attach-session"), (True, "switch-client")])
def test_attach_command(template, inside, verb):
    controller = SessionController(FakeControl(["x"]), template, inside_client=inside)

    command = controller.attach_command("x")

    assert command.argv == ["tmux", verb, "-t", "=x"]
    assert command.switch is inside
    assert command.session_name == "x"


def test_open_twice_creates_once(tmp_path, template):
    control = FakeControl()
    controller = SessionController(control, template, inside_client=False)
    target = ResolvedTarget.for_path(f"{tmp_path}/")

    first = controller.open(target)
    second = controller.open(target)

    assert len(control.created) == 1
    assert first == second


class TestScenarios:
    def test_live_session_by_name_attaches_without_creating(self, template):
        control = FakeControl(["proj_a"])
        selector = Selector(
            InvocationMode.DIRECT, FakeRegistry(["proj_a"]), FakeIndexer(["/home/u/projects/proj_b/"]), FakePicker()
        )
        controller = SessionController(control, template, inside_client=False)

        target = selector.resolve(["proj_a"])
        command = controller.open(target)

        assert target == ResolvedTarget.session("proj_a")
        assert control.created == []
        assert command.argv == ["tmux", "attach-session", "-t", "=proj_a"]

    def test_picked_directory_creates_bootstrapped_session(self, tmp_path, template):
        proj_b = tmp_path / "projects" / "proj_b"
        proj_b.mkdir(parents=True)
        picked = f"{proj_b}/"
        control = FakeControl(running=False)
        selector = Selector(InvocationMode.DIRECT, FakeRegistry(), FakeIndexer([picked]), FakePicker(picked))
        controller = SessionController(control, template, inside_client=False)

        target = selector.resolve([])
        command = controller.open(target)

        assert target == ResolvedTarget(name="proj_b", path=picked)
        assert len(control.created) == 1
        name, path, windows = control.created[0]
        assert (name, path) == ("proj_b", picked)
        assert [w.name for w in windows] == ["code", "bash", "server"]
        assert windows[0].command == "nvim ."
        assert command.argv[-1] == "=proj_b"

    def test_unknown_name_with_cancelled_pick_fails(self, template):
        control = FakeControl(["other"])
        selector = Selector(InvocationMode.DIRECT, FakeRegistry(["other"]), FakeIndexer(["/p/"]), FakePicker(""))
        controller = SessionController(control, template, inside_client=False)

        target = selector.resolve(["work"])

        with pytest.raises(InvalidTargetStateError):
            controller.open(target)
        assert control.created == []
