import logging
import tkinter as tk
from tkinter import messagebox
from typing import Dict, Tuple

from .config import GRAPH_TYPES, VisualizerConfig
from .engine import Algorithm, run
from .errors import InvalidInput, MSTError
from .generate import generate
from .graph import Graph, NodeId
from .navigator import Navigator, Status
from .playback import MAX_SPEED, MIN_SPEED, PlaybackScheduler
from .render import describe_snapshot
from .steps import Action, PrimSnapshot

logger = logging.getLogger(__name__)


class MSTStepper:
    RADIUS = 16
    MARGIN = 60
    COLOR_BG = "#111927"
    COLOR_CANVAS = "#0b1220"
    COLOR_NODE = "#f59e0b"  # amber for visited nodes in Prim
    COLOR_NODE_IDLE = "#94a3b8"
    COLOR_EDGE = "#64748b"
    COLOR_EDGE_CURRENT = "#3b82f6"  # blue
    COLOR_EDGE_REJECT = "#ef4444"  # red
    COLOR_EDGE_MST = "#10b981"  # green
    COLOR_TEXT = "#e5e7eb"

    def __init__(self, root: tk.Tk, config: VisualizerConfig) -> None:
        self.root = root
        self.config = config
        self.root.title("MST Visualizer: Prim & Kruskal step by step")
        self.root.configure(bg=self.COLOR_BG)

        self.graph = Graph()
        self.navigator = Navigator(self.graph)
        # the Tk root provides after/after_cancel for auto-play ticks
        self.scheduler = PlaybackScheduler(self.navigator, self.root, speed=config.speed,
                                           on_tick=self.refresh, on_finish=self.refresh)

        self.canvas = tk.Canvas(self.root, width=900, height=600, bg=self.COLOR_CANVAS, highlightthickness=0)
        self.canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        self.canvas.bind("<Configure>", lambda _event: self.draw_graph())

        self.sidebar = tk.Frame(self.root, bg=self.COLOR_BG)
        self.sidebar.pack(side=tk.RIGHT, fill=tk.Y)
        self._build_sidebar()

        self.generate_graph()

    # --- Widgets ---

    def _label(self, parent, **kwargs) -> tk.Label:
        return tk.Label(parent, fg=self.COLOR_TEXT, bg=self.COLOR_BG, anchor="w", justify=tk.LEFT,
                        padx=12, **kwargs)

    def _build_sidebar(self) -> None:
        gen = tk.Frame(self.sidebar, bg=self.COLOR_BG)
        gen.pack(fill=tk.X, pady=(12, 4), padx=12)
        self.graph_type_var = tk.StringVar(value=self.config.graph_type)
        tk.OptionMenu(gen, self.graph_type_var, *GRAPH_TYPES).pack(side=tk.LEFT)
        self.node_count_var = tk.IntVar(value=self.config.node_count)
        tk.Spinbox(gen, from_=1, to=26, width=4, textvariable=self.node_count_var).pack(side=tk.LEFT, padx=6)
        self.btn_generate = tk.Button(gen, text="Generate", command=self.generate_graph)
        self.btn_generate.pack(side=tk.LEFT)

        algo = tk.Frame(self.sidebar, bg=self.COLOR_BG)
        algo.pack(fill=tk.X, pady=4, padx=12)
        self.algorithm_var = tk.StringVar(value=self.config.algorithm)
        for value, text in ((Algorithm.PRIM.value, "Prim"), (Algorithm.KRUSKAL.value, "Kruskal")):
            tk.Radiobutton(algo, text=text, value=value, variable=self.algorithm_var,
                           fg=self.COLOR_TEXT, bg=self.COLOR_BG, selectcolor=self.COLOR_CANVAS,
                           command=self.update_controls).pack(side=tk.LEFT)
        self.start_var = tk.StringVar(value="")
        self.start_menu = tk.OptionMenu(algo, self.start_var, "")
        self.start_menu.pack(side=tk.LEFT, padx=6)

        self.btn_run = tk.Button(self.sidebar, text="Visualize", command=self.start_visualization)
        self.btn_run.pack(pady=4, padx=12, fill=tk.X)

        nav = tk.Frame(self.sidebar, bg=self.COLOR_BG)
        nav.pack(fill=tk.X, pady=4, padx=12)
        self.btn_back = tk.Button(nav, text="◀ Step", command=self.step_backward)
        self.btn_back.pack(side=tk.LEFT, expand=True, fill=tk.X)
        self.btn_pause = tk.Button(nav, text="Pause", command=self.toggle_pause)
        self.btn_pause.pack(side=tk.LEFT, expand=True, fill=tk.X)
        self.btn_forward = tk.Button(nav, text="Step ▶", command=self.step_forward)
        self.btn_forward.pack(side=tk.LEFT, expand=True, fill=tk.X)

        self.speed_var = tk.IntVar(value=self.scheduler.speed)
        tk.Scale(self.sidebar, from_=MIN_SPEED, to=MAX_SPEED, orient=tk.HORIZONTAL, label="Speed",
                 variable=self.speed_var, command=self.on_speed, fg=self.COLOR_TEXT, bg=self.COLOR_BG,
                 highlightthickness=0).pack(fill=tk.X, padx=12)

        self.status_var = tk.StringVar(value="Ready to visualize")
        self._label(self.sidebar, textvariable=self.status_var).pack(fill=tk.X, pady=(8, 0))
        self.headline_var = tk.StringVar()
        self._label(self.sidebar, textvariable=self.headline_var,
                    font=("Segoe UI", 10, "bold")).pack(fill=tk.X, pady=(8, 0))
        self.narrative_var = tk.StringVar()
        self._label(self.sidebar, textvariable=self.narrative_var, wraplength=320).pack(fill=tk.X)

        self.ds_text = tk.Text(self.sidebar, width=40, height=14, fg=self.COLOR_TEXT, bg=self.COLOR_CANVAS,
                               relief=tk.FLAT, state=tk.DISABLED)
        self.ds_text.pack(padx=12, pady=8, fill=tk.BOTH, expand=True)
        self.mst_var = tk.StringVar()
        self._label(self.sidebar, textvariable=self.mst_var, wraplength=320).pack(fill=tk.X, pady=(0, 12))

    # --- Actions ---

    def generate_graph(self) -> None:
        self.scheduler.stop()
        try:
            graph = generate(self.graph_type_var.get(), int(self.node_count_var.get()),
                             self.config.edge_density, self.config.seed)
        except (MSTError, tk.TclError, ValueError) as exc:
            messagebox.showerror("Invalid graph", str(exc))
            return
        self.graph = graph
        self.navigator = Navigator(self.graph)
        self.scheduler.navigator = self.navigator

        menu = self.start_menu["menu"]
        menu.delete(0, "end")
        for node in self.graph.nodes:
            menu.add_command(label=f"Node {node.label}", command=lambda l=node.label: self.start_var.set(l))
        self.start_var.set(self.config.start_node or self.graph.nodes[0].label)
        self.status_var.set(f"Generated a new '{self.graph_type_var.get()}' graph.")
        self.refresh()

    def _start_node(self) -> NodeId:
        try:
            return self.graph.resolve(self.start_var.get())
        except InvalidInput:
            return -1  # run_prim substitutes the first node and records a warning

    def start_visualization(self) -> None:
        self.scheduler.stop()
        try:
            log = run(self.graph, self.algorithm_var.get(), self._start_node(), forest=self.config.forest)
        except MSTError as exc:
            messagebox.showerror("Cannot run", str(exc))
            return
        for warning in log.warnings:
            messagebox.showwarning("Start node", warning)
        self.navigator.load(log)
        self.scheduler.play()
        self.refresh()
        self.status_var.set("Visualization started!")

    def toggle_pause(self) -> None:
        self.scheduler.toggle()
        self.refresh()

    def step_forward(self) -> None:
        self.scheduler.step_forward()
        self.refresh()

    def step_backward(self) -> None:
        self.scheduler.step_backward()
        self.refresh()

    def on_speed(self, value: str) -> None:
        self.scheduler.speed = int(float(value))

    # --- Drawing ---

    def update_controls(self) -> None:
        has_steps = self.navigator.log is not None
        playing = self.scheduler.is_playing
        self.btn_back.config(state=tk.NORMAL if has_steps and not self.navigator.at_start else tk.DISABLED)
        self.btn_forward.config(state=tk.NORMAL if has_steps and not self.navigator.at_end else tk.DISABLED)
        self.btn_pause.config(state=tk.NORMAL if has_steps and not self.navigator.at_end else tk.DISABLED,
                              text="Pause" if playing else "Resume")
        self.btn_run.config(state=tk.DISABLED if playing else tk.NORMAL)
        self.btn_generate.config(state=tk.DISABLED if playing else tk.NORMAL)
        if self.algorithm_var.get() == Algorithm.PRIM.value:
            self.start_menu.pack(side=tk.LEFT, padx=6)
        else:
            self.start_menu.pack_forget()

    def refresh(self) -> None:
        view = self.navigator.current_view()
        if view.status is Status.IN_PROGRESS or (view.status is Status.NOT_STARTED and view.total):
            state = "Running" if self.scheduler.is_playing else "Paused"
            self.status_var.set(f"{state} (Step {view.index}/{view.total})")
        elif view.status is Status.COMPLETE:
            self.status_var.set("Completed (partial forest)" if view.partial else "Algorithm complete!")
        self.headline_var.set(view.headline)
        self.narrative_var.set(view.narrative)

        self.ds_text.config(state=tk.NORMAL)
        self.ds_text.delete("1.0", tk.END)
        self.ds_text.insert(tk.END, "\n".join(describe_snapshot(self.graph, view.snapshot)))
        self.ds_text.config(state=tk.DISABLED)

        mst = ", ".join(f"{self.graph.edge_name(e)} ({e.weight})" for e in view.mst_edges) or "none"
        self.mst_var.set(f"MST: {mst}\nTotal weight = {view.total_weight}")
        self.update_controls()
        self.draw_graph()

    def _screen_positions(self) -> Dict[NodeId, Tuple[float, float]]:
        width = max(self.canvas.winfo_width(), 2 * self.MARGIN + 1)
        height = max(self.canvas.winfo_height(), 2 * self.MARGIN + 1)
        xs = [node.x for node in self.graph.nodes] or [0.0]
        ys = [node.y for node in self.graph.nodes] or [0.0]
        span_x = (max(xs) - min(xs)) or 1.0
        span_y = (max(ys) - min(ys)) or 1.0
        return {
            node.id: (self.MARGIN + (node.x - min(xs)) / span_x * (width - 2 * self.MARGIN),
                      self.MARGIN + (max(ys) - node.y) / span_y * (height - 2 * self.MARGIN))
            for node in self.graph.nodes
        }

    def draw_graph(self) -> None:
        self.canvas.delete("all")
        view = self.navigator.current_view()
        positions = self._screen_positions()
        highlight = None
        if view.edge is not None and view.status is Status.IN_PROGRESS:
            highlight = {
                Action.CONSIDER_EDGE: self.COLOR_EDGE_CURRENT,
                Action.DISCARD_EDGE: self.COLOR_EDGE_REJECT,
                Action.ADD_EDGE: self.COLOR_EDGE_MST,
            }.get(view.action)

        for edge in self.graph.edges:
            x1, y1 = positions[edge.u]
            x2, y2 = positions[edge.v]
            color, width = (self.COLOR_EDGE_MST, 4) if edge.in_mst else (self.COLOR_EDGE, 2)
            if highlight is not None and edge.pair == view.edge.pair:
                color, width = highlight, 5
            self.canvas.create_line(x1, y1, x2, y2, fill=color, width=width)
            mx, my = (x1 + x2) / 2, (y1 + y2) / 2
            self.canvas.create_text(mx, my - 10, text=str(edge.weight), fill=self.COLOR_TEXT, font=("Segoe UI", 9))

        visited = set(view.snapshot.visited) if isinstance(view.snapshot, PrimSnapshot) else set()
        for node in self.graph.nodes:
            x, y = positions[node.id]
            fill = self.COLOR_NODE if node.id in visited else self.COLOR_NODE_IDLE
            self.canvas.create_oval(x - self.RADIUS, y - self.RADIUS, x + self.RADIUS, y + self.RADIUS,
                                    fill=fill, outline="#1f2937", width=2)
            self.canvas.create_text(x, y, text=node.label, fill="#0b1220", font=("Segoe UI", 10, "bold"))


def main(config: VisualizerConfig) -> None:
    root = tk.Tk()
    MSTStepper(root, config)
    root.mainloop()
