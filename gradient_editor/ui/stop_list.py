"""
Stop List Panel Component
This module lists every color stop in render order with controls to recolor,
reposition and remove it.
"""

import logging
import tkinter as tk
from dataclasses import replace
from tkinter import colorchooser, ttk
from typing import Any, Callable, Dict, Optional

from ..config import get_view_config
from ..core.color_stops import MAX_OFFSET, MIN_OFFSET, ColorStop, ColorStopCollection, ColorStopStore
from ..utils.error_handling import ErrorCategory, ErrorHandlingSystem

logger = logging.getLogger(__name__)


class StopEditActions:
    """
    Store writes behind the stop list controls.
    """

    def __init__(self,
                 store: ColorStopStore,
                 error_handler: Optional[ErrorHandlingSystem] = None,
                 ask_color: Callable = colorchooser.askcolor):
        """
        Args:
            store: Color stop store to write through
            error_handler: Receives rejected input
            ask_color: Color dialog returning ((r, g, b), hex) or (None, None)
        """
        self.store = store
        self.error_handler = error_handler or store.error_handler
        self.ask_color = ask_color

    def set_offset(self, stop_id: str, text: str) -> bool:
        """
        Write an offset typed into a row.

        Returns:
            False when the text is not a number; the store is left untouched
        """
        try:
            offset = float(text)
        except (TypeError, ValueError) as e:
            self.error_handler.handle_error(
                e, component='StopListPanel', operation='set_offset',
                category=ErrorCategory.STORE,
                additional_data={'stop_id': stop_id, 'text': text})
            return False
        self.store.update_offset(stop_id, offset)
        return True

    def pick_color(self, stop_id: str, title: str = "Stop Color", parent=None) -> bool:
        """Open the color dialog and apply the chosen r, g, b; alpha is kept."""
        stop = self.store.colors.find(stop_id)
        if stop is None:
            logger.debug(f"pick_color ignored unknown stop {stop_id}")
            return False

        options = {'color': stop.rgba.to_hex(), 'title': title}
        if parent is not None:
            options['parent'] = parent
        rgb, _ = self.ask_color(**options)
        if rgb is None:
            return False

        r, g, b = (int(round(channel)) for channel in rgb)
        self.store.update_color(stop_id, replace(stop.rgba, r=r, g=g, b=b))
        return True

    def remove(self, stop_id: str):
        self.store.remove_color(stop_id)


class StopListPanel(ttk.LabelFrame):
    """
    Sidebar with one row per color stop: swatch, offset spinbox, remove button.
    Rows follow the store through its 'colors_changed' notifications.
    """

    def __init__(self,
                 parent,
                 store: ColorStopStore,
                 error_handler: Optional[ErrorHandlingSystem] = None,
                 config: Optional[Dict[str, Any]] = None,
                 ask_color: Callable = colorchooser.askcolor):
        self.panel_config = config or get_view_config()['stop_list']
        super().__init__(parent, text=self.panel_config['title'], padding=self.panel_config['padding'])

        self.store = store
        self.actions = StopEditActions(store, error_handler, ask_color)
        self.rows: Dict[str, Dict[str, Any]] = {}

        self.store.add_callback('colors_changed', self.refresh)
        self.refresh(store.colors)

        logger.info("StopListPanel initialized")

    def refresh(self, colors: ColorStopCollection):
        """Add, update, reorder and drop rows to match the collection."""
        for stop_id in list(self.rows):
            if stop_id not in colors:
                for widget in self.rows.pop(stop_id)['widgets']:
                    widget.destroy()

        for index, stop in enumerate(colors):
            row = self.rows.get(stop.id) or self._create_row(stop.id)
            self._update_row(row, stop, index)

    def _create_row(self, stop_id: str) -> Dict[str, Any]:
        swatch = tk.Button(self, width=self.panel_config['swatch_width'], relief='flat',
                           command=lambda: self._on_swatch(stop_id))

        offset_var = tk.StringVar(self)
        spinbox = ttk.Spinbox(self, from_=MIN_OFFSET, to=MAX_OFFSET,
                              increment=self.panel_config['offset_increment'],
                              width=self.panel_config['spinbox_width'],
                              textvariable=offset_var,
                              command=lambda: self._on_offset(stop_id))
        spinbox.bind('<Return>', lambda _event: self._on_offset(stop_id))
        spinbox.bind('<FocusOut>', lambda _event: self._on_offset(stop_id))

        remove = ttk.Button(self, text=self.panel_config['remove_label'],
                            command=lambda: self.actions.remove(stop_id))

        row = {
            'swatch': swatch,
            'spinbox': spinbox,
            'offset_var': offset_var,
            'remove': remove,
            'widgets': (swatch, spinbox, remove),
        }
        self.rows[stop_id] = row
        return row

    def _update_row(self, row: Dict[str, Any], stop: ColorStop, index: int):
        color = stop.rgba.to_hex()
        row['swatch'].configure(background=color, activebackground=color)
        row['offset_var'].set(f"{stop.offset:g}")
        for column, widget in enumerate(row['widgets']):
            widget.grid(row=index, column=column, padx=2, pady=2, sticky='w')

    def _on_offset(self, stop_id: str):
        row = self.rows.get(stop_id)
        if row is None:
            return
        if not self.actions.set_offset(stop_id, row['offset_var'].get()):
            # show the stored value again
            stop = self.store.colors.find(stop_id)
            if stop is not None:
                row['offset_var'].set(f"{stop.offset:g}")

    def _on_swatch(self, stop_id: str):
        self.actions.pick_color(stop_id, title=self.panel_config['picker_title'], parent=self)

    def close(self):
        self.store.remove_callback('colors_changed', self.refresh)
