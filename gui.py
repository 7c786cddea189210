"""
GUI for SciCal Scientific Calculator
Tkinter window: readout, history line and keypad wired to the calculator
"""
import json
import tkinter as tk

import config
from calculator import Calculator


class SciCalGUI:
    # Keypad rows below the scientific block: (label, action, kind)
    KEYPAD = [
        [("C", "clear", "danger"), ("⌫", "delete", "normal"), ("/", "/", "operator"), ("*", "*", "operator")],
        [("7", "7", "normal"), ("8", "8", "normal"), ("9", "9", "normal"), ("-", "-", "operator")],
        [("4", "4", "normal"), ("5", "5", "normal"), ("6", "6", "normal"), ("+", "+", "operator")],
        [("1", "1", "normal"), ("2", "2", "normal"), ("3", "3", "normal"), ("=", "=", "equals")],
        [("0", "0", "normal"), (".", ".", "normal")],
    ]
    FUNCTION_COLUMNS = 5

    def __init__(self, root):
        self.root = root
        self.root.title(config.APP_NAME)
        self.root.geometry(f"{config.WINDOW_WIDTH}x{config.WINDOW_HEIGHT}")

        # Last texts sent by the calculator, shown again when widgets are rebuilt
        self.display_text = "0"
        self.history_text = ""

        self.calculator = Calculator(
            on_display_changed=self.update_display,
            on_history_changed=self.update_history,
            on_history_cleared=lambda: self.update_history(""),
        )

        # ── Theme state (load before any widget is created) ───────────────
        settings = self._load_settings()
        self.dark_mode: bool = settings.get("dark_mode", False)
        self.T: dict = config.get_theme(self.dark_mode)
        self.root.configure(bg=self.T["bg"])

        self.create_widgets()
        self.root.bind('<Key>', self.on_key_press)

    # ── Settings persistence ─────────────────────────────────────────────
    def _load_settings(self):
        try:
            with open(config.SETTINGS_FILE, "r") as f:
                return json.load(f)
        except (OSError, ValueError):
            return {}

    def _save_settings(self, data):
        existing = self._load_settings()
        existing.update(data)
        with open(config.SETTINGS_FILE, "w") as f:
            json.dump(existing, f, indent=2)

    def _toggle_dark_mode(self):
        """Persist dark_mode setting and rebuild the widgets in the new palette."""
        self.dark_mode = not self.dark_mode
        self._save_settings({"dark_mode": self.dark_mode})
        self.T = config.get_theme(self.dark_mode)
        self.root.configure(bg=self.T["bg"])
        for w in self.root.winfo_children():
            w.destroy()
        self.create_widgets()

    def _neu_btn(self, parent, text, command=None, kind="normal", **kw):
        """Create a neumorphic styled flat button."""
        T = self.T
        if kind == "equals":
            bg, fg = T["equals_bg"], T["equals_fg"]
        elif kind == "operator":
            bg, fg = T["btn_bg"], T["operator_fg"]
        elif kind == "function":
            bg, fg = T["bg_dark"], T["function_fg"]
        elif kind == "danger":
            bg, fg = T["danger"], "#FFFFFF"
        else:
            bg, fg = T["btn_bg"], T["btn_fg"]
        return tk.Button(
            parent, text=text, command=command,
            font=kw.pop("font", config.BUTTON_FONT),
            bg=bg, fg=fg,
            activebackground=T["bg_dark"], activeforeground=fg,
            relief=tk.FLAT, bd=0, cursor="hand2",
            highlightthickness=1,
            highlightbackground=T["shadow_dark"],
            highlightcolor=T["shadow_lite"],
            **kw
        )

    def create_widgets(self):
        T = self.T

        top = tk.Frame(self.root, bg=T["bg"])
        top.pack(fill=tk.X, padx=10, pady=(10, 0))
        self._neu_btn(top, "☾" if not self.dark_mode else "☀",
                      command=self._toggle_dark_mode, width=3).pack(side=tk.RIGHT)

        screen = tk.Frame(self.root, bg=T["display_bg"])
        screen.pack(fill=tk.X, padx=10, pady=10)
        self.history = tk.Label(screen, text="", anchor="e",
                                font=config.HISTORY_FONT,
                                bg=T["display_bg"], fg=T["history_fg"])
        self.history.pack(fill=tk.X, padx=8, pady=(6, 0))
        self.display = tk.Label(screen, text="0", anchor="e",
                                font=config.DISPLAY_FONT,
                                bg=T["display_bg"], fg=T["display_fg"])
        self.display.pack(fill=tk.X, padx=8, pady=(0, 6))

        functions = tk.Frame(self.root, bg=T["bg"])
        functions.pack(fill=tk.X, padx=10)
        for index, (name, label) in enumerate(config.FUNCTION_BUTTONS):
            row, col = divmod(index, self.FUNCTION_COLUMNS)
            btn = self._neu_btn(functions, label, kind="function",
                                command=lambda n=name: self.calculator.append_function(n))
            btn.grid(row=row, column=col, sticky="nsew", padx=2, pady=2)
        for col in range(self.FUNCTION_COLUMNS):
            functions.columnconfigure(col, weight=1)

        keypad = tk.Frame(self.root, bg=T["bg"])
        keypad.pack(fill=tk.BOTH, expand=True, padx=10, pady=10)
        for row, keys in enumerate(self.KEYPAD):
            column = 0
            for label, action, kind in keys:
                btn = self._neu_btn(keypad, label, kind=kind,
                                    command=lambda a=action: self.calculator_button_click(a))
                # 0 spans two columns, like a phone keypad
                span = 2 if label == "0" else 1
                btn.grid(row=row, column=column, columnspan=span, sticky="nsew", padx=2, pady=2)
                column += span
            keypad.rowconfigure(row, weight=1)
        for col in range(4):
            keypad.columnconfigure(col, weight=1)

        self._restore_screen()

    def _restore_screen(self):
        self.update_display(self.display_text)
        self.update_history(self.history_text)

    def calculator_button_click(self, action):
        """Handle calculator button clicks"""
        if action == "clear":
            self.calculator.clear()
        elif action == "delete":
            self.calculator.delete_last()
        else:
            self.calculator.handle_key(action)

    def on_key_press(self, event):
        """Handle keyboard input"""
        key = event.char if event.char and event.char.isprintable() else event.keysym
        self.calculator.handle_key(key)

    def update_display(self, text):
        """Update the display"""
        self.display_text = str(text)
        self.display.config(text=str(text),
                            font=(config.DISPLAY_FONT[0], config.display_font_size(str(text)), "bold"))

    def update_history(self, text):
        self.history_text = text
        self.history.config(text=text)
