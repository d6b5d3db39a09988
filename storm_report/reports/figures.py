"""
Static bar charts for the storm impact report (PNG via matplotlib).
"""
from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from matplotlib.figure import Figure

from storm_report.excel.styles import FATALITY_COLOR, INJURY_COLOR, PROPERTY_COLOR, CROP_COLOR

FIG_DPI = 150
TITLE_FONTSIZE = 13
TICK_FONTSIZE = 9
LABEL_FONTSIZE = 10


def _hex(color: str) -> str:
    return f"#{color}"


def render_charts(data: dict, output: str | Path | BinaryIO) -> Path | BinaryIO:
    """Render fatalities, injuries and damage top-N charts side by side.

    ``data`` is the dict returned by impact_report.generate_json. ``output`` is
    a file path or an open binary buffer. The figure is built without pyplot,
    so concurrent calls share no global state.
    """
    if isinstance(output, (str, Path)):
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)
    top = data["top"]

    fig = Figure(figsize=(20, 7))
    axes = fig.subplots(1, 3)

    panels = [
        (axes[0], "a", data["by_fatalities"], "fatalities", "Fatalities", FATALITY_COLOR),
        (axes[1], "b", data["by_injuries"], "injuries", "Injuries", INJURY_COLOR),
    ]
    for ax, letter, rows, key, label, color in panels:
        names = [r["category"] for r in rows]
        ax.barh(names, [r[key] for r in rows], color=_hex(color))
        ax.set_title(f"{letter}) Top {top} by {label}", fontsize=TITLE_FONTSIZE)
        ax.set_xlabel(label, fontsize=LABEL_FONTSIZE)

    # Damage: property and crop stacked, in billions of USD
    ax = axes[2]
    rows = data["by_damage"]
    names = [r["category"] for r in rows]
    prop = [r["prop_damage_usd"] / 1e9 for r in rows]
    crop = [r["crop_damage_usd"] / 1e9 for r in rows]
    ax.barh(names, prop, color=_hex(PROPERTY_COLOR), label="Property")
    ax.barh(names, crop, left=prop, color=_hex(CROP_COLOR), label="Crop")
    ax.set_title(f"c) Top {top} by Economic Damage", fontsize=TITLE_FONTSIZE)
    ax.set_xlabel("Damage (billion USD)", fontsize=LABEL_FONTSIZE)
    ax.legend(fontsize=TICK_FONTSIZE)

    for ax in axes:
        ax.invert_yaxis()  # rank 1 on top
        ax.tick_params(axis="both", labelsize=TICK_FONTSIZE)

    fig.suptitle(
        f"U.S. Severe Weather Impact  |  {data['date_range']}  |  "
        f"{data['uncategorized_pct']:.2f}% of events uncategorized",
        fontsize=TITLE_FONTSIZE + 1,
    )
    fig.tight_layout()
    fig.savefig(output, format="png", dpi=FIG_DPI, bbox_inches="tight")
    return output
