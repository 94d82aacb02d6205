"""
Pure rendering of journal state into a view model.

The GUI and CLI never read the store themselves: they call render() after
every mutation and paint what comes back, so the screen is always a full
rebuild from the stored entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from .aggregate import intensity_sums_by_mood, mood_share, total_count, total_intensity
from .models import MOODS, Mood, MoodEntry, ValidationError
from .state import EditorState, Editing, FormState

CHART_TYPES = ("bar", "pie")
CHART_TITLE = "Mood Intensity"

MOOD_COLORS: dict[Mood, str] = {
    Mood.HAPPY: "#ffcd56",
    Mood.SAD: "#36a2eb",
    Mood.ANGRY: "#ff6384",
    Mood.EXCITED: "#4bc0c0",
    Mood.CALM: "#9966ff",
}

SAVE_LABEL = "Log Entry"
UPDATE_LABEL = "Update Entry"


def check_chart_type(value: str) -> str:
    s = str(value or "").strip().lower()
    if s not in CHART_TYPES:
        raise ValidationError(f"Chart type must be one of {', '.join(CHART_TYPES)} (got {value!r})")
    return s


@dataclass(frozen=True)
class EntryRow:
    index: int
    heading: str
    text: str
    date: str
    intensity: int | None


@dataclass(frozen=True)
class ChartView:
    kind: str
    labels: tuple[str, ...]
    values: tuple[int, ...]
    colors: tuple[str, ...]
    title: str = CHART_TITLE


@dataclass(frozen=True)
class FormView:
    save_label: str
    cancel_visible: bool
    selected_mood: Mood | None
    text: str
    intensity: int
    motivation: str


@dataclass(frozen=True)
class MoodView:
    rows: tuple[EntryRow, ...]
    badges: dict[Mood, int]
    total_count: int
    total_intensity: int
    chart: ChartView
    form: FormView


def render(
    entries: Sequence[MoodEntry],
    counts: Mapping[Mood, int],
    state: EditorState,
    form: FormState,
    chart_type: str = "bar",
) -> MoodView:
    rows = tuple(
        EntryRow(index=i, heading=e.heading, text=e.text, date=e.date, intensity=e.intensity)
        for i, e in enumerate(entries)
    )
    sums = intensity_sums_by_mood(entries)
    chart = ChartView(
        kind=check_chart_type(chart_type),
        labels=tuple(m.value for m in MOODS),
        values=tuple(sums[m] for m in MOODS),
        colors=tuple(MOOD_COLORS[m] for m in MOODS),
    )
    editing = isinstance(state, Editing)
    form_view = FormView(
        save_label=UPDATE_LABEL if editing else SAVE_LABEL,
        cancel_visible=editing,
        selected_mood=form.selected_mood,
        text=form.text,
        intensity=form.intensity,
        motivation=form.motivation,
    )
    return MoodView(
        rows=rows,
        badges={m: int(counts.get(m, 0)) for m in MOODS},
        total_count=total_count(entries),
        total_intensity=total_intensity(entries),
        chart=chart,
        form=form_view,
    )


# -------------------------
# Chart geometry (canvas)
# -------------------------


@dataclass(frozen=True)
class Bar:
    x0: float
    y0: float
    x1: float
    y1: float


def bar_layout(
    values: Sequence[int],
    width: float,
    height: float,
    pad: tuple[float, float, float, float] = (36, 12, 16, 28),
    gap: float = 0.25,
) -> list[Bar]:
    """
    Bar rectangles for a canvas of width x height.
    pad is (left, right, top, bottom); the tallest bar fills the plot height.
    An all-zero series yields flat bars on the baseline.
    """
    pad_l, pad_r, pad_t, pad_b = pad
    n = len(values)
    if n == 0:
        return []

    plot_w = max(1.0, width - pad_l - pad_r)
    plot_h = max(1.0, height - pad_t - pad_b)
    slot = plot_w / n
    bar_w = slot * (1.0 - gap)
    base = pad_t + plot_h
    vmax = max(values)

    bars: list[Bar] = []
    for i, v in enumerate(values):
        x0 = pad_l + i * slot + (slot - bar_w) / 2
        h = (max(0, v) / vmax) * plot_h if vmax > 0 else 0.0
        bars.append(Bar(x0, base - h, x0 + bar_w, base))
    return bars


def pie_slices(values: Sequence[int], start: float = 90.0) -> list[tuple[float, float]]:
    """
    (start, extent) in degrees for each value, clockwise from 12 o'clock,
    in the convention of tkinter's create_arc. Zero values get extent 0.
    """
    total = sum(max(0, v) for v in values)
    out: list[tuple[float, float]] = []
    angle = start
    for v in values:
        extent = -360.0 * max(0, v) / total if total > 0 else 0.0
        out.append((angle, extent))
        angle += extent
    return out


# -------------------------
# Terminal rendering
# -------------------------


def ascii_chart(chart: ChartView, width: int = 30) -> list[str]:
    moods = [Mood(label) for label in chart.labels]
    if chart.kind == "pie":
        share = mood_share(dict(zip(moods, chart.values)))
        return [f"{m.value:<8} {m.emoji} {share[m]:5.1f}%  ({v})" for m, v in zip(moods, chart.values)]

    vmax = max(chart.values) if chart.values else 0
    lines = []
    for m, v in zip(moods, chart.values):
        n = int(round(width * v / vmax)) if vmax > 0 else 0
        lines.append(f"{m.value:<8} {m.emoji} {'█' * n}{' ' if n else ''}{v}")
    return lines


def render_text(view: MoodView, limit: int | None = None) -> str:
    lines = [f"Total entries: {view.total_count}   Total intensity: {view.total_intensity}"]
    lines.append("Counts: " + "  ".join(f"{m.emoji} {m.value} {n}" for m, n in view.badges.items()))
    lines.append("")
    lines.append(f"{view.chart.title} ({view.chart.kind})")
    lines.extend(ascii_chart(view.chart))

    rows = view.rows if limit is None else view.rows[:limit]
    if rows:
        lines.append("")
        for r in rows:
            lines.append(f"[{r.index}] {r.date} — {r.heading}: {r.text}")
    return "\n".join(lines)
