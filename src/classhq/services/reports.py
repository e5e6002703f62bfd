"""Chart rendering for the funds dashboard."""

from __future__ import annotations

from io import BytesIO
from typing import Mapping

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.figure import Figure  # noqa: E402

PALETTE = ["#6366f1", "#10b981", "#f59e0b", "#ef4444", "#8b5cf6", "#ec4899"]


def build_category_chart(categories: Mapping[str, float], *, currency_symbol: str = "") -> Figure:
    """Donut chart of expenses per category, in the order given."""

    labels = list(categories.keys())
    sizes = [float(v) for v in categories.values()]
    fig, ax = plt.subplots(figsize=(7, 5))

    if not sizes or sum(sizes) <= 0:
        ax.text(0.5, 0.5, "No expenses yet", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")
        return fig

    colors = [PALETTE[i % len(PALETTE)] for i in range(len(sizes))]
    wedges = ax.pie(
        sizes,
        labels=None,
        wedgeprops=dict(width=0.45, edgecolor="white", linewidth=1.5),
        startangle=90,
        colors=colors,
    )[0]
    total = sum(sizes)
    ax.text(0, 0, f"{currency_symbol}{total:,.2f}", ha="center", va="center", fontsize=14, weight="bold")
    ax.legend(
        wedges,
        [f"{label}: {currency_symbol}{size:,.2f}" for label, size in zip(labels, sizes)],
        loc="center left",
        bbox_to_anchor=(1, 0.5),
        frameon=False,
    )
    ax.set_aspect("equal")
    return fig


def category_chart_png(categories: Mapping[str, float], *, currency_symbol: str = "") -> bytes:
    fig = build_category_chart(categories, currency_symbol=currency_symbol)
    buffer = BytesIO()
    try:
        fig.savefig(buffer, format="png", bbox_inches="tight", dpi=100)
    finally:
        plt.close(fig)
    return buffer.getvalue()
