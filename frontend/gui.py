#!/usr/bin/env python3
"""
Calculator GUI

Tkinter front end for the four-function calculator engine.

- Secondary line ("12 +") above the main display, error shown in red.
- 4x5 keypad: AC, backspace, percent, sign toggle, four operators, equals.
- Keyboard input: digits, . + - * x / % Enter = Escape Backspace (numeric keypad too).
- History overlay listing this session's results; double-click recalls one.

All calculator behaviour lives in backend.engine.CalculatorEngine. This
module only maps events to engine actions and renders the snapshot.
"""

import logging
import sys
import tkinter as tk
from pathlib import Path
from typing import Optional

from backend.engine import Action, CalculatorEngine, Snapshot
from frontend.keys import KEYPAD, action_for_key, action_for_label

logger = logging.getLogger(__name__)


# -------------------------
# Visual theme / constants
# -------------------------
WINDOW_WIDTH = 340
WINDOW_HEIGHT = 500

BG = "#0f1113"          # main app background
PANEL_BG = "#17181A"    # panels / container background
BTN_BG = "#2b2d30"      # digit tiles
FUNC_BG = "#3a3d41"     # AC / backspace / percent / sign
OP_BG = "#d9822b"       # operator and equals tiles
FG = "#E6EEF3"          # foreground text (light)
SUBTLE_FG = "#8b949e"   # secondary line
ERROR_FG = "#EF4444"    # display colour while the error latch is set

TITLE_FONT = ("Segoe UI", 13, "bold")
SECONDARY_FONT = ("Consolas", 12)
DISPLAY_FONT = ("Consolas", 30, "bold")
KEY_FONT = ("Segoe UI", 15, "bold")

FUNC_LABELS = {"AC", "⌫", "%", "±"}
OP_LABELS = {"÷", "×", "−", "+", "="}


# -------------------------
# Main application class
# -------------------------
class CalculatorGUI(tk.Tk):
    def __init__(self, engine: Optional[CalculatorEngine] = None):
        super().__init__()

        # Window setup
        self.title("Calculator")
        self.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        self.minsize(300, 440)
        self.configure(bg=BG)

        # Optional window icon; assets/ sits at the project root
        if getattr(sys, "frozen", False):
            base_dir = Path(sys._MEIPASS)
        else:
            base_dir = Path(__file__).resolve().parent.parent
        icon_path = base_dir / "assets" / "app_icon.png"
        if icon_path.exists():
            # Keep a reference to the PhotoImage so it isn't garbage-collected
            self.icon = tk.PhotoImage(file=str(icon_path))
            self.iconphoto(True, self.icon)
        else:
            logger.debug("no window icon at %s", icon_path)

        # The engine is owned by this window (or passed in by the caller)
        self.engine = engine if engine is not None else CalculatorEngine()
        self.history_window: Optional[tk.Toplevel] = None

        self._build_header()
        self._build_display()
        self._build_keypad()
        self._render(self.engine.snapshot)

        # Keyboard: one handler for everything, focus kept on the root window
        self.bind("<Key>", self._on_key)
        self.focus_set()

    # -------------------------
    # Header
    # -------------------------
    def _build_header(self):
        """Top header with title and history button."""
        header = tk.Frame(self, bg=PANEL_BG, height=48)
        header.pack(fill="x", side="top")

        tk.Label(header, text="Calculator", bg=PANEL_BG, fg=FG, font=TITLE_FONT).pack(side="left", padx=10, pady=6)

        # Spacer to push the History button to the right
        tk.Frame(header, bg=PANEL_BG).pack(side="left", expand=True)

        self.history_btn = tk.Button(header, text="History", bg=PANEL_BG, fg=FG, relief="flat",
                                     takefocus=0, command=self.toggle_history)
        self.history_btn.pack(side="right", padx=8, pady=6)

    # -------------------------
    # Display (secondary line + main line)
    # -------------------------
    def _build_display(self):
        disp = tk.Frame(self, bg=PANEL_BG)
        disp.pack(fill="x", padx=8, pady=(8, 0))

        self.secondary_var = tk.StringVar()
        tk.Label(disp, textvariable=self.secondary_var, bg=PANEL_BG, fg=SUBTLE_FG,
                 anchor="e", font=SECONDARY_FONT).pack(fill="x", padx=8, pady=(8, 0))

        self.display_var = tk.StringVar()
        self.display_label = tk.Label(disp, textvariable=self.display_var, bg=PANEL_BG, fg=FG,
                                      anchor="e", font=DISPLAY_FONT)
        self.display_label.pack(fill="x", padx=8, pady=(0, 8))

    # -------------------------
    # Keypad
    # -------------------------
    def _build_keypad(self):
        """Grid of equal-sized tiles; each tile dispatches the action for its label."""
        tiles = tk.Frame(self, bg=PANEL_BG)
        tiles.pack(fill="both", expand=True, padx=8, pady=8)
        for r, row in enumerate(KEYPAD):
            for c, label in enumerate(row):
                if not label:
                    tk.Frame(tiles, bg=PANEL_BG).grid(row=r, column=c, sticky="nsew", padx=4, pady=4)
                else:
                    bg = OP_BG if label in OP_LABELS else FUNC_BG if label in FUNC_LABELS else BTN_BG
                    btn = tk.Button(tiles, text=label, bg=bg, fg=FG, relief="flat", font=KEY_FONT,
                                    activebackground=bg, takefocus=0,
                                    command=lambda l=label: self._on_label(l))
                    btn.grid(row=r, column=c, sticky="nsew", padx=4, pady=4)
                tiles.grid_columnconfigure(c, weight=1, uniform="keys")
            tiles.grid_rowconfigure(r, weight=1, uniform="keys")

    # -------------------------
    # Event -> action
    # -------------------------
    def _on_label(self, label: str):
        action = action_for_label(label)
        if action is not None:
            self._dispatch(action)

    def _on_key(self, event):
        """Keyboard handler; returns "break" for keys the calculator consumed."""
        action = action_for_key(event.keysym, event.char)
        if action is None:
            return None
        self._dispatch(action)
        return "break"

    def _dispatch(self, action: Action):
        snapshot = self.engine.dispatch(action)
        self._render(snapshot)

    def _render(self, snapshot: Snapshot):
        self.display_var.set(snapshot.display)
        self.secondary_var.set(snapshot.secondary_line)
        self.display_label.config(fg=ERROR_FG if snapshot.is_error else FG)

    # -------------------------
    # History overlay
    # -------------------------
    def toggle_history(self):
        """Open or close the history overlay window (bottom anchored)."""
        if self.history_window and tk.Toplevel.winfo_exists(self.history_window):
            self._close_history()
            return
        win = tk.Toplevel(self)
        win.title("History")
        win.geometry(f"{self.winfo_width()}x180+{self.winfo_rootx()}+{self.winfo_rooty() + self.winfo_height() - 180}")
        win.transient(self)
        self.history_window = win

        frm = tk.Frame(win, bg="#0e0f10")
        frm.pack(fill="both", expand=True)
        lb = tk.Listbox(frm, bg="#0e0f10", fg=FG)
        lb.pack(side="left", fill="both", expand=True, padx=6, pady=6)

        for expr, res in self.engine.history:
            lb.insert("end", f"{expr} = {res}")
        lb.see("end")

        # double-click to recall the result onto the display
        lb.bind("<Double-Button-1>", lambda e: self._on_history_double(e, listbox=lb))

        scrollbar = tk.Scrollbar(frm, command=lb.yview)
        lb.config(yscrollcommand=scrollbar.set)
        scrollbar.pack(side="right", fill="y")

        win.bind("<FocusOut>", lambda e: self._close_history())

    def _close_history(self):
        """Close the history window if open and give keyboard focus back."""
        if self.history_window:
            try:
                self.history_window.destroy()
            except tk.TclError:
                logger.debug("history window already gone")
            self.history_window = None
        self.focus_set()

    def _on_history_double(self, event, listbox):
        """Recall the result of the double-clicked history entry."""
        sel = listbox.curselection()
        if not sel:
            return
        _, result = self.engine.history[sel[0]]
        self._dispatch(Action("recall", float(result)))
        self._close_history()


# -------------------------
# Run the application
# -------------------------
def main():
    app = CalculatorGUI()
    app.mainloop()


if __name__ == "__main__":
    main()
