from __future__ import annotations

import logging
import tkinter as tk
from tkinter import messagebox, ttk

from ._util import _fmt_header_date, _today
from .config import Settings, configure_logging, load_settings
from .controller import MoodJournal
from .models import INTENSITY_MAX, INTENSITY_MIN, MOODS, Mood
from .repository import EntryRepository
from .safety import assert_safe_data_path
from .storage import JsonFileStore
from .view import CHART_TYPES, MoodView, bar_layout, pie_slices

log = logging.getLogger(__name__)

SELECTED_BG = "#dbeafe"
IDLE_BG = "#f8fafc"


class MoodLoggerApp(tk.Tk):
    def __init__(self, settings: Settings):
        super().__init__()
        self.title("Mood Logger")
        self.geometry("980x640")
        self.settings = settings

        self._chart_redraw_job: str | None = None
        self._chart_tooltip: tk.Toplevel | None = None
        self._last_view: MoodView | None = None

        self.journal = MoodJournal(
            EntryRepository(JsonFileStore(settings.data_path)),
            confirm=lambda msg: messagebox.askyesno("Please confirm", msg),
            notify=lambda msg: messagebox.showwarning("Mood Logger", msg),
            on_render=self._apply_view,
            chart_type=settings.chart_type,
        )

        self._build_header()
        self._build_body()
        self.journal.refresh()

        self._tick_date()

    # -------- Crash guard --------

    def report_callback_exception(self, exc, val, tb):  # type: ignore[override]
        log.error("Unhandled GUI error", exc_info=(exc, val, tb))
        messagebox.showerror("Crash prevented", f"{exc.__name__}: {val}")

    def _safe_cmd(self, fn):
        def wrapped(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except Exception as e:
                log.exception("Command %s failed", getattr(fn, "__name__", fn))
                messagebox.showerror("Crash prevented", f"{type(e).__name__}: {e}")
                return None

        return wrapped

    # -------------------------
    # Header
    # -------------------------

    def _build_header(self) -> None:
        frm = ttk.Frame(self, padding=10)
        frm.pack(fill="x")

        ttk.Label(frm, text="Mood Logger", font=("TkDefaultFont", 16, "bold")).pack(side="left")

        self.date_var = tk.StringVar()
        ttk.Label(frm, textvariable=self.date_var, foreground="#444").pack(side="left", padx=12)

        self.path_var = tk.StringVar(value=str(self.settings.data_path))
        ttk.Label(frm, textvariable=self.path_var, foreground="#666").pack(side="right")

    def _tick_date(self) -> None:
        # cosmetic only; rolls over at midnight
        self.date_var.set(_fmt_header_date(_today()))
        self.after(60_000, self._tick_date)

    # -------------------------
    # Body
    # -------------------------

    def _build_body(self) -> None:
        left = ttk.Frame(self, padding=(10, 0))
        right = ttk.Frame(self, padding=(10, 0))
        left.pack(side="left", fill="y")
        right.pack(side="right", fill="both", expand=True)

        self._build_form(left)
        self._build_entries(left)
        self._build_chart(right)

    def _build_form(self, parent: ttk.Frame) -> None:
        ttk.Label(parent, text="How are you feeling?", font=("TkDefaultFont", 12, "bold")).pack(anchor="w")

        row = ttk.Frame(parent)
        row.pack(anchor="w", pady=6)

        self.mood_buttons: dict[Mood, tk.Button] = {}
        self.badge_vars: dict[Mood, tk.StringVar] = {}
        for m in MOODS:
            cell = ttk.Frame(row)
            cell.pack(side="left", padx=4)
            btn = tk.Button(
                cell,
                text=m.emoji,
                font=("TkDefaultFont", 20),
                bg=IDLE_BG,
                relief="flat",
                command=self._safe_cmd(lambda mood=m: self._keep_form(self.journal.select_mood, mood)),
            )
            btn.pack()
            self.mood_buttons[m] = btn
            var = tk.StringVar(value="0")
            ttk.Label(cell, textvariable=var).pack()
            self.badge_vars[m] = var

        self.motivation_var = tk.StringVar()
        ttk.Label(parent, textvariable=self.motivation_var, foreground="#2563eb", wraplength=380).pack(
            anchor="w", pady=(0, 6)
        )

        ttk.Label(parent, text="Note").pack(anchor="w")
        self.text_var = tk.StringVar()
        ttk.Entry(parent, textvariable=self.text_var, width=48).pack(anchor="w", pady=(0, 8))

        ttk.Label(parent, text=f"Intensity ({INTENSITY_MIN}–{INTENSITY_MAX})").pack(anchor="w")
        self.intensity_var = tk.IntVar()
        tk.Scale(
            parent,
            from_=INTENSITY_MIN,
            to=INTENSITY_MAX,
            orient="horizontal",
            variable=self.intensity_var,
            length=240,
        ).pack(anchor="w")

        btns = ttk.Frame(parent)
        btns.pack(anchor="w", pady=8)
        self.save_btn = ttk.Button(btns, command=self._safe_cmd(self._save))
        self.save_btn.pack(side="left")
        self.cancel_btn = ttk.Button(btns, text="Cancel", command=self._safe_cmd(self.journal.cancel))
        ttk.Button(btns, text="Reset All", command=self._safe_cmd(self.journal.reset)).pack(side="right", padx=(40, 0))

        totals = ttk.Frame(parent)
        totals.pack(anchor="w", pady=(4, 8))
        self.total_count_var = tk.StringVar(value="0")
        self.total_intensity_var = tk.StringVar(value="0")
        ttk.Label(totals, text="Total entries:").pack(side="left")
        ttk.Label(totals, textvariable=self.total_count_var, font=("TkDefaultFont", 10, "bold")).pack(side="left")
        ttk.Label(totals, text="   Total intensity:").pack(side="left")
        ttk.Label(totals, textvariable=self.total_intensity_var, font=("TkDefaultFont", 10, "bold")).pack(
            side="left"
        )

    def _sync_form(self) -> None:
        self.journal.set_text(self.text_var.get())
        self.journal.set_intensity(self.intensity_var.get())

    def _keep_form(self, action, *args):
        # every action re-renders the form from the journal, so push typed input first
        self._sync_form()
        return action(*args)

    def _save(self) -> None:
        self._sync_form()
        self.journal.save()

    def _build_entries(self, parent: ttk.Frame) -> None:
        ttk.Label(parent, text="Entries (newest first)", font=("TkDefaultFont", 12, "bold")).pack(anchor="w")

        outer = ttk.Frame(parent)
        outer.pack(fill="both", expand=True, pady=6)

        self.entries_canvas = tk.Canvas(outer, width=400, highlightthickness=0)
        scroll = ttk.Scrollbar(outer, orient="vertical", command=self.entries_canvas.yview)
        self.entries_canvas.configure(yscrollcommand=scroll.set)
        scroll.pack(side="right", fill="y")
        self.entries_canvas.pack(side="left", fill="both", expand=True)

        self.entries_frame = ttk.Frame(self.entries_canvas)
        self.entries_canvas.create_window((0, 0), window=self.entries_frame, anchor="nw")
        self.entries_frame.bind(
            "<Configure>",
            lambda _e: self.entries_canvas.configure(scrollregion=self.entries_canvas.bbox("all")),
        )

    def _build_chart(self, parent: ttk.Frame) -> None:
        controls = ttk.Frame(parent)
        controls.pack(fill="x")
        ttk.Label(controls, text="Mood intensity by mood", font=("TkDefaultFont", 12, "bold")).pack(side="left")

        self.chart_type_var = tk.StringVar(value=self.journal.chart_type)
        box = ttk.Combobox(
            controls,
            textvariable=self.chart_type_var,
            values=list(CHART_TYPES),
            width=8,
            state="readonly",
        )
        box.pack(side="right")
        box.bind(
            "<<ComboboxSelected>>",
            self._safe_cmd(lambda _e: self._keep_form(self.journal.set_chart_type, self.chart_type_var.get())),
        )
        ttk.Label(controls, text="Chart:").pack(side="right", padx=6)

        self.chart_canvas = tk.Canvas(
            parent,
            height=320,
            bg="white",
            highlightthickness=1,
            highlightbackground="#ccc",
        )
        self.chart_canvas.pack(fill="both", expand=True, pady=8)
        self.chart_canvas.bind("<Configure>", self._schedule_chart_redraw)

    # -------------------------
    # Painting
    # -------------------------

    def _apply_view(self, view: MoodView) -> None:
        self._last_view = view
        form = view.form

        for m, btn in self.mood_buttons.items():
            btn.configure(bg=SELECTED_BG if form.selected_mood == m else IDLE_BG)
        for m, var in self.badge_vars.items():
            var.set(str(view.badges.get(m, 0)))

        self.motivation_var.set(form.motivation)
        self.text_var.set(form.text)
        self.intensity_var.set(form.intensity)
        self.save_btn.configure(text=form.save_label)
        if form.cancel_visible:
            self.cancel_btn.pack(side="left", padx=6)
        else:
            self.cancel_btn.pack_forget()

        self.total_count_var.set(str(view.total_count))
        self.total_intensity_var.set(str(view.total_intensity))
        self.chart_type_var.set(view.chart.kind)

        self._paint_entries(view)
        self._draw_chart()

    def _paint_entries(self, view: MoodView) -> None:
        for child in self.entries_frame.winfo_children():
            child.destroy()

        if not view.rows:
            ttk.Label(self.entries_frame, text="No entries yet.", foreground="#666").pack(anchor="w")
            return

        for r in view.rows:
            row = ttk.Frame(self.entries_frame, padding=(0, 4))
            row.pack(fill="x", anchor="w")

            body = ttk.Frame(row)
            body.pack(side="left", fill="x", expand=True)
            ttk.Label(body, text=r.heading, font=("TkDefaultFont", 10, "bold")).pack(anchor="w")
            ttk.Label(body, text=r.text, wraplength=260).pack(anchor="w")
            meta = r.date if r.intensity is None else f"{r.date} · intensity {r.intensity}"
            ttk.Label(body, text=meta, foreground="#666").pack(anchor="w")

            actions = ttk.Frame(row)
            actions.pack(side="right")
            ttk.Button(
                actions,
                text="✏️ Edit",
                command=self._safe_cmd(lambda i=r.index: self.journal.edit(i)),
            ).pack(side="left")
            ttk.Button(
                actions,
                text="🗑️ Delete",
                command=self._safe_cmd(lambda i=r.index: self._keep_form(self.journal.delete, i)),
            ).pack(side="left", padx=(4, 0))

    def _schedule_chart_redraw(self, _evt=None) -> None:
        if self._chart_redraw_job is not None:
            self.after_cancel(self._chart_redraw_job)
        self._chart_redraw_job = self.after(120, self._draw_chart)

    def _chart_show_tooltip(self, _event, text: str) -> None:
        self._chart_hide_tooltip()

        tip = tk.Toplevel(self)
        tip.wm_overrideredirect(True)
        tk.Label(
            tip,
            text=text,
            justify="left",
            background="#ffffe0",
            relief="solid",
            borderwidth=1,
            font=("TkDefaultFont", 9),
            padx=6,
            pady=4,
        ).pack()
        tip.geometry(f"+{self.winfo_pointerx() + 12}+{max(0, self.winfo_pointery() - 10)}")
        self._chart_tooltip = tip

    def _chart_hide_tooltip(self, _event=None) -> None:
        if self._chart_tooltip is not None:
            self._chart_tooltip.destroy()
        self._chart_tooltip = None

    def _draw_chart(self) -> None:
        self._chart_redraw_job = None
        view = self._last_view
        canvas = self.chart_canvas
        canvas.delete("all")
        if view is None:
            return

        chart = view.chart
        w = max(1, canvas.winfo_width())
        h = max(1, canvas.winfo_height())

        if not any(chart.values):
            canvas.create_text(w // 2, h // 2, text="No mood data", fill="#666")
            return

        if chart.kind == "pie":
            self._draw_pie(w, h)
        else:
            self._draw_bars(w, h)

    def _draw_bars(self, w: int, h: int) -> None:
        chart = self._last_view.chart  # type: ignore[union-attr]
        canvas = self.chart_canvas
        bars = bar_layout(chart.values, w, h)

        base = bars[0].y1
        canvas.create_line(36, base, w - 12, base, fill="#444")
        canvas.create_text(30, 16, text=str(max(chart.values)), anchor="e", fill="#444")
        canvas.create_text(30, base, text="0", anchor="e", fill="#444")

        for bar, label, value, color in zip(bars, chart.labels, chart.values, chart.colors):
            item = canvas.create_rectangle(bar.x0, bar.y0, bar.x1, bar.y1, fill=color, outline="#666")
            cx = (bar.x0 + bar.x1) / 2
            canvas.create_text(cx, bar.y1 + 12, text=f"{Mood(label).emoji} {label}", fill="#444")
            if value:
                canvas.create_text(cx, bar.y0 - 8, text=str(value), fill="#333")
            tip = f"{label}\nIntensity sum: {value}\nEntries: {self._last_view.badges[Mood(label)]}"  # type: ignore[union-attr]
            canvas.tag_bind(item, "<Enter>", lambda e, t=tip: self._chart_show_tooltip(e, t))
            canvas.tag_bind(item, "<Leave>", self._chart_hide_tooltip)

    def _draw_pie(self, w: int, h: int) -> None:
        chart = self._last_view.chart  # type: ignore[union-attr]
        canvas = self.chart_canvas
        size = max(1, min(w - 160, h) - 24)
        x0, y0 = 12, (h - size) / 2

        total = sum(chart.values)
        slices = pie_slices(chart.values)
        for (start, extent), label, value, color in zip(slices, chart.labels, chart.values, chart.colors):
            if not value:
                continue
            # a lone full-circle arc renders as nothing; draw an oval instead
            if abs(extent) >= 359.999:
                canvas.create_oval(x0, y0, x0 + size, y0 + size, fill=color, outline="#fff")
            else:
                canvas.create_arc(
                    x0, y0, x0 + size, y0 + size, start=start, extent=extent, fill=color, outline="#fff"
                )

        lx = x0 + size + 20
        for i, (label, value, color) in enumerate(zip(chart.labels, chart.values, chart.colors)):
            ly = y0 + 10 + i * 22
            canvas.create_rectangle(lx, ly - 6, lx + 12, ly + 6, fill=color, outline="")
            pct = 100.0 * value / total if total else 0.0
            canvas.create_text(lx + 18, ly, text=f"{Mood(label).emoji} {label} {pct:.0f}%", anchor="w", fill="#444")


# -------------------------
# GUI Entrypoint
# -------------------------


def run_gui(settings: Settings | None = None, allow_repo_data_path: bool = False) -> None:
    if settings is None:
        settings = load_settings()
        configure_logging(settings)
    assert_safe_data_path(settings.data_path, allow_repo_data_path=allow_repo_data_path)
    app = MoodLoggerApp(settings)
    app.mainloop()


if __name__ == "__main__":
    run_gui()
