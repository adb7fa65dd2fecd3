import pytest

tk = pytest.importorskip("tkinter")

from mststep.config import VisualizerConfig


@pytest.fixture
def stepper():
    try:
        root = tk.Tk()
    except tk.TclError:
        pytest.skip("no display available")
    root.withdraw()
    from mststep.app import MSTStepper

    app = MSTStepper(root, VisualizerConfig(graph_type="complete", node_count=4, seed=3, start_node="B"))
    yield app
    app.scheduler.pause()
    root.destroy()


def test_visualize_and_step(stepper):
    stepper.start_visualization()
    assert stepper.scheduler.is_playing
    stepper.step_forward()
    assert not stepper.scheduler.is_playing
    assert stepper.navigator.cursor == 1
    assert stepper.headline_var.get() == "Starting Prim's from node B"
    stepper.step_backward()
    assert stepper.navigator.cursor == 0
    assert stepper.status_var.get().startswith("Paused (Step 0/")


def test_kruskal_to_end(stepper):
    stepper.algorithm_var.set("kruskal")
    stepper.start_visualization()
    stepper.scheduler.pause()
    while stepper.navigator.step_forward():
        pass
    stepper.refresh()
    assert stepper.status_var.get() == "Algorithm complete!"
    assert "Total weight" in stepper.mst_var.get()


def test_start_node_accepts_id_or_label(stepper):
    stepper.start_var.set("2")
    assert stepper._start_node() == 2
    stepper.start_var.set("D")
    assert stepper._start_node() == 3
    stepper.start_var.set("nowhere")
    assert stepper._start_node() == -1
