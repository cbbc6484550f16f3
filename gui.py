"""
GUI for Royal Calculator
Tkinter front end: history line on top, live expression below, keypad underneath
"""
import tkinter as tk
from tkinter import ttk
import json
import config
from calculator import Calculator
from database import Database
from history_manager import HistoryManager

class RoyalCalcGUI:
    def __init__(self, root):
        self.root = root
        self.root.title(config.APP_NAME)
        self.root.geometry(f"{config.WINDOW_WIDTH}x{config.WINDOW_HEIGHT}")

        # Initialize components
        self.db = Database()
        self.history_manager = HistoryManager(self.db)
        self.calculator = Calculator(on_evaluate=self.history_manager.record)

        # ── Theme state (load before any widget is created) ───────────────
        settings = self._load_settings()
        self.dark_mode: bool = settings.get("dark_mode", False)
        self.T: dict = config.get_theme(self.dark_mode)
        self._apply_ttk_styles()
        self.root.configure(bg=self.T["bg"])

        self.current_mode = "calculator"

        # Create UI
        self.create_widgets()
        self.switch_mode("calculator")

    # ── Settings persistence ─────────────────────────────────────────────
    _SETTINGS_FILE = "settings.json"

    def _load_settings(self):
        try:
            with open(self._SETTINGS_FILE, "r") as f:
                return json.load(f)
        except (OSError, ValueError):
            return {}

    def _save_settings(self, data):
        existing = self._load_settings()
        existing.update(data)
        with open(self._SETTINGS_FILE, "w") as f:
            json.dump(existing, f, indent=2)

    # ── Theme helpers ──────────────────────────────────────────────────────────
    def _apply_ttk_styles(self):
        """Configure ttk widget styles for the active palette."""
        T = self.T
        style = ttk.Style()
        try:
            style.theme_use("clam")
        except tk.TclError:
            pass
        style.configure("Treeview", background=T["bg_dark"],
                        fieldbackground=T["bg_dark"], foreground=T["text"],
                        rowheight=22, font=config.LABEL_FONT)
        style.configure("Treeview.Heading", background=T["bg"],
                        foreground=T["operator_fg"],
                        font=(config.LABEL_FONT[0], config.LABEL_FONT[1], "bold"))

    def toggle_dark_mode(self):
        """Persist the dark_mode setting and rebuild the widgets"""
        self.dark_mode = not self.dark_mode
        self._save_settings({"dark_mode": self.dark_mode})
        self.T = config.get_theme(self.dark_mode)
        self._apply_ttk_styles()
        self.root.configure(bg=self.T["bg"])
        for w in self.root.winfo_children():
            w.destroy()
        self._history_bar = None
        self.create_widgets()
        self.switch_mode(self.current_mode)

    def _key_btn(self, parent, text, command, kind="normal"):
        T = self.T
        if kind == "equals":
            bg, fg = T["equals_bg"], T["equals_fg"]
        elif kind == "operator":
            bg, fg = T["btn_bg"], T["operator_fg"]
        elif kind == "danger":
            bg, fg = T["danger"], "#FFFFFF"
        else:
            bg, fg = T["btn_bg"], T["btn_fg"]
        return tk.Button(
            parent, text=text, command=command,
            font=config.BUTTON_FONT,
            bg=bg, fg=fg,
            activebackground=T["bg_dark"], activeforeground=fg,
            relief=tk.FLAT, bd=0, cursor="hand2",
            highlightthickness=1,
            highlightbackground=T["shadow_dark"],
        )

    def create_widgets(self):
        """Create main UI components"""
        T = self.T

        # Top bar
        top = tk.Frame(self.root, bg=T["bg"])
        top.pack(fill=tk.X, padx=4, pady=2)
        tk.Button(top, text="History", font=config.LABEL_FONT,
                  bg=T["bg"], fg=T["operator_fg"], relief=tk.FLAT, bd=0, cursor="hand2",
                  command=lambda: self.switch_mode("history")).pack(side=tk.LEFT)
        tk.Button(top, text="☾" if not self.dark_mode else "☀", font=config.LABEL_FONT,
                  bg=T["bg"], fg=T["operator_fg"], relief=tk.FLAT, bd=0, cursor="hand2",
                  command=self.toggle_dark_mode).pack(side=tk.RIGHT)

        # Display: history (small) above the live expression (big)
        self.display_frame = tk.Frame(self.root, bg=T["display_bg"])
        self.display_frame.pack(fill=tk.X, padx=6, pady=(2, 6))
        self.history_display = tk.Label(
            self.display_frame, text="", font=config.HISTORY_FONT,
            bg=T["display_bg"], fg=T["history_fg"], anchor=tk.E, padx=12
        )
        self.history_display.pack(side=tk.TOP, fill=tk.X)
        self.display = tk.Label(
            self.display_frame, text="0", font=config.DISPLAY_FONT,
            bg=T["display_bg"], fg=T["display_fg"], anchor=tk.E, padx=12, pady=6
        )
        self.display.pack(side=tk.TOP, fill=tk.X)

        # Content area (keypad or history list)
        self.content_frame = tk.Frame(self.root, bg=T["bg"])
        self.content_frame.pack(fill=tk.BOTH, expand=True, padx=5, pady=3)

    def clear_content_frame(self):
        """Clear the content frame"""
        for widget in self.content_frame.winfo_children():
            widget.destroy()

    def _close_history_bar(self):
        """Remove the history Back/Clear bar and its ESC binding, if shown"""
        bar = getattr(self, "_history_bar", None)
        if bar is not None:
            bar.destroy()
            self.root.unbind("<Escape>")
        self._history_bar = None

    def switch_mode(self, mode):
        """Switch between the keypad and the history list"""
        self.current_mode = mode
        self.clear_content_frame()
        self._close_history_bar()
        if mode == "history":
            self.show_history_mode()
        else:
            self.show_calculator_mode()

    def show_calculator_mode(self):
        """Show the keypad"""
        for r, row in enumerate(config.KEYPAD):
            for c, (label, action, param) in enumerate(row):
                if action == "equals":
                    kind = "equals"
                elif action == "clear":
                    kind = "danger"
                elif action in ("operator", "percent", "backspace"):
                    kind = "operator"
                else:
                    kind = "normal"
                btn = self._key_btn(self.content_frame, label,
                                    lambda a=action, p=param: self.on_action(a, p), kind)
                # "=" spans the last two columns of the bottom row
                span = 2 if action == "equals" else 1
                btn.grid(row=r, column=c, columnspan=span, sticky="nsew", padx=2, pady=2)
        for r in range(len(config.KEYPAD)):
            self.content_frame.grid_rowconfigure(r, weight=1)
        for c in range(4):
            self.content_frame.grid_columnconfigure(c, weight=1)

        self.update_display()
        self.root.bind('<Key>', self.on_key_press)

    def show_history_mode(self):
        """Show the calculation tape"""
        self.root.unbind('<Key>')

        cols = ("Date", "Calculation", "Result")
        tree = ttk.Treeview(self.content_frame, columns=cols, show="headings")
        for col, width in zip(cols, (130, 150, 80)):
            tree.heading(col, text=col)
            tree.column(col, width=width, anchor=tk.W)
        sb = ttk.Scrollbar(self.content_frame, orient=tk.VERTICAL, command=tree.yview)
        tree.configure(yscrollcommand=sb.set)
        tree.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        sb.pack(side=tk.RIGHT, fill=tk.Y)

        for expr, result, timestamp in self.history_manager.get_calculation_history():
            tree.insert("", tk.END, values=(timestamp, expr, result))

        # the bar sits on root, outside content_frame; switch_mode removes it
        bottom = tk.Frame(self.root, bg=self.T["bg"])
        bottom.place(relx=0, rely=1.0, relwidth=1.0, anchor="sw")
        self._history_bar = bottom

        def _close():
            self.switch_mode("calculator")

        def _clear():
            self.history_manager.clear_calculation_history()
            tree.delete(*tree.get_children())

        # ESC on the history list returns to the keypad
        self.root.bind("<Escape>", lambda e: _close())
        self._key_btn(bottom, "Back", _close).pack(side=tk.LEFT, fill=tk.X, expand=True, padx=2, pady=2)
        self._key_btn(bottom, "Clear tape", _clear, kind="danger").pack(side=tk.RIGHT, fill=tk.X, expand=True, padx=2, pady=2)

    def on_action(self, action, param=None):
        """Handle keypad button clicks"""
        self.calculator.dispatch(action, param)
        self.update_display()

    def on_key_press(self, event):
        """Handle keyboard input"""
        if self.current_mode != "calculator":
            return
        # keysym covers Return/BackSpace/Escape, char covers digits and symbols
        if self.calculator.press_key(event.keysym) or self.calculator.press_key(event.char):
            self.update_display()

    def update_display(self):
        """Render the two display lines"""
        self.history_display.config(text=self.calculator.history_expression)
        self.display.config(text=self.calculator.live_expression)
