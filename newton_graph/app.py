"""
Desktop front end: a form for f(x), x0 and the tolerance, a result panel, the
iteration table and a matplotlib canvas showing the Newton path.
"""

import logging
import tkinter as tk
from tkinter import messagebox, ttk

import matplotlib.pyplot as plt
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from ttkthemes import ThemedTk

from . import plotting, report
from .config import DEFAULT_SETTINGS, DEFAULTS
from .solver import solve

logger = logging.getLogger(__name__)

BG = '#181818'
CARD_BG = '#23272e'
ACCENT = '#00ff99'
ERROR_FG = '#ff6b6b'
BIG_INPUT_FONT = ("Segoe UI", 16, "bold")

INSTRUCTIONS = (
    "How to Use the Newton-Raphson Solver\n\n"
    "1. Enter a function of x, e.g. x^3 - x - 2, sin(x) - x/2, ln(x) - 1.\n"
    "   Equations work too: x^2 = 4, y = x^2 - 2, f(x) = cos(x) - x.\n"
    "2. Enter the initial guess x0 and the tolerance (a positive number).\n"
    "3. Press SOLVE. The panel shows whether |f(x0)*f''(x0)| < [f'(x0)]^2\n"
    "   holds at x0, then the root, f at the root and the iteration count.\n"
    "4. The graph shows f, the root in red and every iterate in orange,\n"
    "   joined in the order they were computed. The table lists each step.\n\n"
    "Tips:\n"
    "- ^ is a power, 2x means 2*x, ln is the natural log, √x and |x| work.\n"
    "- The iteration stops after 100 steps even without reaching the tolerance.\n"
    "- RESET clears the form, the graph and the table.\n"
)


class RootDisplay(tk.Frame):
    """Rounded card showing the latest root, or an error in red."""

    def __init__(self, master, width=520, height=80, **kwargs):
        super().__init__(master, bg=BG, **kwargs)
        self.width = width
        self.height = height
        self.canvas = tk.Canvas(self, width=width, height=height, bg=BG, highlightthickness=0)
        self.canvas.pack(fill='both', expand=True)
        self._draw_card()
        self.set_root_text("ROOT WILL BE DISPLAYED HERE")

    def _draw_card(self):
        x1, y1, x2, y2, r = 8, 8, self.width - 8, self.height - 8, 24
        points = [x1 + r, y1, x2 - r, y1, x2, y1, x2, y1 + r, x2, y2 - r, x2, y2,
                  x2 - r, y2, x1 + r, y2, x1, y2, x1, y2 - r, x1, y1 + r, x1, y1]
        self.canvas.create_polygon(points, smooth=True, fill=CARD_BG, outline=ACCENT, width=3)

    def set_root_text(self, text, fg="#fff"):
        self.canvas.delete("text")
        self.canvas.create_text(self.width // 2, self.height // 2, text=text, fill=fg,
                                font=("Segoe UI", 18, "bold"), tags="text")


class NewtonApp:
    def __init__(self, root, settings=DEFAULT_SETTINGS):
        self.root = root
        self.settings = settings
        self._last_marker_count = 0

        root.title("Newton-Raphson Solver")
        root.geometry("1400x950")
        root.configure(bg=BG)
        self._configure_style()

        main_frame = tk.Frame(root, bg=BG)
        main_frame.pack(fill='both', expand=True, padx=20, pady=10)

        self._build_form(main_frame)
        self.root_display = RootDisplay(main_frame)
        self.root_display.pack(pady=10)

        self.result_text = tk.Text(main_frame, height=9, bg=CARD_BG, fg='#fff',
                                   font=("Segoe UI", 12), relief='flat', wrap='word')
        self.result_text.tag_configure('good', foreground=ACCENT)
        self.result_text.tag_configure('bad', foreground=ERROR_FG)
        self.result_text.pack(fill='x', pady=10)
        self.result_text.configure(state='disabled')

        graph_table_frame = tk.Frame(main_frame, bg=BG)
        graph_table_frame.pack(fill='both', expand=True)
        self._build_graph(graph_table_frame)
        self._build_table(graph_table_frame)

    # --- Layout ---
    def _configure_style(self):
        style = ttk.Style()
        style.configure('Orange.TButton', font=("Segoe UI", 16, "bold"), padding=10,
                        background='#ff9800', foreground='#fff', borderwidth=0)
        style.map('Orange.TButton', background=[('active', '#ffa726')])
        style.configure('Red.TButton', font=("Segoe UI", 16, "bold"), padding=10,
                        background='#e53935', foreground='#fff', borderwidth=0)
        style.map('Red.TButton', background=[('active', '#ef5350')])
        style.configure('Green.TButton', font=("Segoe UI", 16, "bold"), padding=10,
                        background='#2e7d32', foreground='#fff', borderwidth=0)
        style.map('Green.TButton', background=[('active', '#43a047')])
        style.configure('Card.TEntry', fieldbackground=BG, foreground=ACCENT, borderwidth=0)
        style.configure('Treeview', font=("Segoe UI", 12), rowheight=28,
                        background='#222', fieldbackground='#222', foreground='#fff')
        style.configure('Treeview.Heading', font=("Segoe UI", 13, "bold"),
                        background='#333', foreground='#fff')

    def _build_form(self, parent):
        card = tk.Frame(parent, bg=CARD_BG, highlightbackground=ACCENT, highlightthickness=3)
        card.pack(fill='x', pady=10)
        card.grid_columnconfigure(1, weight=1)

        tk.Label(card, text='ƒ(x)', font=("Segoe UI", 28, "bold"), fg=ACCENT,
                 bg=CARD_BG).grid(row=0, column=0, rowspan=2, padx=(24, 18), pady=12, sticky='n')
        tk.Label(card, text="Enter a function of x or an equation", font=("Segoe UI", 18, "bold"),
                 fg="#fff", bg=CARD_BG, anchor='w').grid(row=0, column=1, sticky='w', pady=(12, 0))
        tk.Label(card, text="e.g. x^3 - x - 2, x^2 = 4, y = cos(x) - x", font=("Segoe UI", 12),
                 fg="#aaa", bg=CARD_BG, anchor='w').grid(row=1, column=1, sticky='w')

        self.function_entry = ttk.Entry(card, width=40, style='Card.TEntry', font=("Segoe UI", 20))
        self.function_entry.grid(row=2, column=0, columnspan=2, padx=24, pady=(6, 12),
                                 sticky='ew', ipady=8)

        fields = tk.Frame(card, bg=CARD_BG)
        fields.grid(row=3, column=0, columnspan=2, padx=24, pady=(0, 12), sticky='ew')
        tk.Label(fields, text="x₀:", font=BIG_INPUT_FONT, fg="#fff",
                 bg=CARD_BG).grid(row=0, column=0, padx=(0, 12), sticky='e')
        self.x0_entry = ttk.Entry(fields, width=12, style='Card.TEntry', font=BIG_INPUT_FONT)
        self.x0_entry.grid(row=0, column=1, padx=(0, 32), ipady=6)
        tk.Label(fields, text="ε:", font=BIG_INPUT_FONT, fg="#fff",
                 bg=CARD_BG).grid(row=0, column=2, padx=(0, 12), sticky='e')
        self.epsilon_entry = ttk.Entry(fields, width=12, style='Card.TEntry', font=BIG_INPUT_FONT)
        self.epsilon_entry.grid(row=0, column=3, padx=(0, 32), ipady=6)

        ttk.Button(fields, text="SOLVE", style='Green.TButton',
                   command=self.on_solve).grid(row=0, column=4, padx=8)
        ttk.Button(fields, text="RESET", style='Red.TButton',
                   command=self.on_reset).grid(row=0, column=5, padx=8)
        ttk.Button(fields, text="INSTRUCTIONS", style='Orange.TButton',
                   command=self.show_instructions).grid(row=0, column=6, padx=8)

        self._fill_defaults()
        self.root.bind('<Return>', lambda event: self.on_solve())

    def _build_graph(self, parent):
        self.fig, self.ax = plt.subplots(figsize=(7, 4))
        self.ax.set_facecolor(BG)
        self.fig.patch.set_facecolor(BG)
        self.ax.grid(True, linestyle='--', linewidth=0.7, color='gray')
        self.ax.tick_params(axis='both', colors='white', labelsize=11)
        self.canvas = FigureCanvasTkAgg(self.fig, master=parent)
        self.canvas.get_tk_widget().pack(side="left", fill="both", expand=True, padx=10, pady=10)
        self.surface = plotting.MatplotlibSurface(self.ax, samples=self.settings.curve_samples)

    def _build_table(self, parent):
        columns = ("n", "xₙ", "f(xₙ)", "|xₙ - xₙ₋₁|")
        table_frame = tk.Frame(parent, bg=BG)
        table_frame.pack(side="right", fill="both", padx=10, pady=10)
        scrollbar = ttk.Scrollbar(table_frame, orient="vertical")
        self.table = ttk.Treeview(table_frame, columns=columns, show="headings", height=14,
                                  yscrollcommand=scrollbar.set)
        scrollbar.config(command=self.table.yview)
        scrollbar.pack(side="right", fill="y")
        for col, width in zip(columns, (50, 170, 150, 130)):
            self.table.heading(col, text=col, anchor="center")
            self.table.column(col, width=width, anchor="center")
        self.table.tag_configure('evenrow', background=CARD_BG)
        self.table.tag_configure('oddrow', background=BG)
        self.table.pack(side="right", fill="both", expand=True)

    # --- Actions ---
    def on_solve(self):
        try:
            outcome = solve(self.function_entry.get(), self.x0_entry.get(),
                            self.epsilon_entry.get(), settings=self.settings)
            self._show_lines(outcome)
            if not outcome.ok:
                self.root_display.set_root_text("NO ROOT", fg=ERROR_FG)
                return
            result = outcome.result
            plot = plotting.build_plot(result, outcome.normalized, outcome.expression,
                                       settings=self.settings)
            plotting.render(self.surface, plot, previous_marker_count=self._last_marker_count,
                            settings=self.settings)
            self._last_marker_count = len(result.trace)
            self.ax.legend(loc="upper left", fontsize=10)
            self.canvas.draw()
            self._fill_table(result.trace)
            self.root_display.set_root_text(f"ROOT: x ≈ {result.root:.10f}", fg=ACCENT)
        except Exception as e:
            logger.exception("Unexpected failure while solving")
            messagebox.showerror("Error", f"Newton-Raphson Error: {e}")

    def on_reset(self):
        plotting.clear(self.surface, marker_count=self._last_marker_count, settings=self.settings)
        legend = self.ax.get_legend()
        if legend is not None:
            legend.remove()
        self.canvas.draw()
        for item in self.table.get_children():
            self.table.delete(item)
        self._set_text([])
        self.root_display.set_root_text("ROOT WILL BE DISPLAYED HERE")
        for entry in (self.function_entry, self.x0_entry, self.epsilon_entry):
            entry.delete(0, tk.END)

    def show_instructions(self):
        win = tk.Toplevel(self.root)
        win.title("Instructions")
        win.configure(bg="#f5f5f5")
        tk.Label(win, text=INSTRUCTIONS, font=("Segoe UI", 12, "bold"), justify="left",
                 bg="#f5f5f5", anchor="nw", wraplength=620).pack(padx=20, pady=20, fill="both",
                                                                  expand=True)
        tk.Button(win, text="OK", font=("Segoe UI", 12, "bold"), command=win.destroy,
                  bg="#ff9800", fg="#fff", relief="solid", borderwidth=0,
                  padx=20, pady=8).pack(pady=(0, 20))
        win.transient(self.root)
        win.grab_set()
        win.focus_set()

    # --- Helpers ---
    def _fill_defaults(self):
        for entry, key in ((self.function_entry, "function"), (self.x0_entry, "x0"),
                           (self.epsilon_entry, "epsilon")):
            entry.delete(0, tk.END)
            entry.insert(0, DEFAULTS[key])

    def _fill_table(self, trace):
        for item in self.table.get_children():
            self.table.delete(item)
        for i, row in enumerate(report.iteration_rows(trace)):
            self.table.insert("", "end", values=row, tags=('evenrow' if i % 2 == 0 else 'oddrow',))

    def _show_lines(self, outcome):
        tagged = []
        advisory = report.convergence_lines(outcome.convergence, outcome.x0)
        if advisory:
            tagged.append((advisory[0], 'good' if outcome.convergence.holds else 'bad'))
            tagged.extend((line, None) for line in advisory[1:])
        for line in report.outcome_lines(outcome)[len(advisory):]:
            tagged.append((line, 'bad' if line.startswith("Error:") else None))
        self._set_text(tagged)

    def _set_text(self, tagged_lines):
        self.result_text.configure(state='normal')
        self.result_text.delete("1.0", tk.END)
        for line, tag in tagged_lines:
            self.result_text.insert(tk.END, line + "\n", tag or ())
        self.result_text.configure(state='disabled')


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    root = ThemedTk(theme="black")
    NewtonApp(root)
    root.mainloop()


if __name__ == "__main__":
    main()
