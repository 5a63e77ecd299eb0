"""
Gradient Editor Application
Tk window embedding the matplotlib gradient view.
"""

import logging
import tkinter as tk
from tkinter import messagebox, ttk
from typing import Optional

from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.figure import Figure

from .config import EditorSettings, load_settings
from .core.color_stops import ColorStopStore
from .core.drag_controller import DragState
from .host.gradient_view import GradientView
from .logging_config import init_logging
from .ui.stop_list import StopListPanel
from .utils.error_handling import ErrorHandlingSystem, ErrorRecord

logger = logging.getLogger(__name__)


class GradientEditorApp:
    """
    Top-level window wiring the store, the view and the status bar.
    """

    def __init__(self, settings: Optional[EditorSettings] = None):
        self.settings = settings or load_settings()
        self.error_handler = ErrorHandlingSystem()

        # the single store instance for this session
        self.store = ColorStopStore(self.settings.initial_colors(), self.error_handler)

        self.root = tk.Tk()
        self.root.title("Gradient Editor")
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)

        figure = Figure(figsize=(6, 6), dpi=100)
        self.canvas = FigureCanvasTkAgg(figure, master=self.root)
        axes = figure.add_subplot(111)

        self.view = GradientView(self.store, self.settings, axes=axes, error_handler=self.error_handler)

        self.stop_list = StopListPanel(self.root, self.store, self.error_handler, config=self.view.config['stop_list'])

        self.status_var = tk.StringVar(value=self._status_text(DragState.IDLE))
        status = ttk.Label(self.root, textvariable=self.status_var, anchor="w")

        status.pack(side="bottom", fill="x", padx=8, pady=4)
        self.stop_list.pack(side="right", fill="y", padx=8, pady=8)
        self.canvas.get_tk_widget().pack(side="top", fill="both", expand=True)

        self.view.controller.add_callback('state_changed', self._on_state_changed)
        self.store.add_callback('colors_changed', lambda colors: self._on_state_changed(
            self.view.controller.state, self.view.controller.target))
        self.error_handler.add_notification_callback(self._on_error)

        self.canvas.draw()
        logger.info("GradientEditorApp initialized")

    def _status_text(self, state: DragState) -> str:
        return f"{len(self.store.colors)} stops | {state.value}"

    def _on_state_changed(self, state, _target):
        self.status_var.set(self._status_text(state))

    def _on_error(self, record: ErrorRecord):
        self.status_var.set(record.user_friendly_message or record.message)

    def run(self):
        self.root.mainloop()

    def on_close(self):
        try:
            self.stop_list.close()
            self.view.close()
        finally:
            self.root.destroy()


def main():
    """Application entry point."""
    settings = load_settings()
    init_logging(settings.log_dir, settings.log_level, settings.console_log_level, settings.log_keep_count)
    try:
        app = GradientEditorApp(settings)
    except Exception as e:
        logger.error(f"Application error: {e}")
        messagebox.showerror("Application Error", f"Failed to start application: {str(e)}")
        raise
    app.run()


if __name__ == "__main__":
    main()
