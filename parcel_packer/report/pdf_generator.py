"""
PDF packing list generator using ReportLab.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import (
    Image,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from parcel_packer.core.solver import calculate_cost
from parcel_packer.core.utils_geometry import volume_utilization
from parcel_packer.models.solution import PackingSolution


def _dims(values: Sequence[float]) -> str:
    return " x ".join(f"{value:.1f}" for value in values)


def _build_table(data: Sequence[Sequence[str]], column_widths: Sequence[float]) -> Table:
    table = Table(data, colWidths=column_widths, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#F1F1F1")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.HexColor("#333333")),
                ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 10),
                ("BOTTOMPADDING", (0, 0), (-1, 0), 6),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.HexColor("#DDDDDD")),
            ]
        )
    )
    return table


def _summary_table(solution: PackingSolution) -> Table:
    item_volume = sum(packed_box.item_volume for packed_box in solution.boxes)
    rows = [
        ("Boxes", len(solution.boxes)),
        ("Packed Items", solution.packed_item_count),
        ("Unpacked Items", len(solution.unpacked_items)),
        ("Total Interior Volume (cm3)", f"{calculate_cost(solution):,.1f}"),
        ("Overall Volume Utilisation (%)", f"{volume_utilization(item_volume, solution.total_volume):.2f}"),
        ("Total Shipped Weight (kg)", f"{solution.total_weight:.3f}"),
    ]
    data = [["Metric", "Value"]] + [[str(left), str(right)] for left, right in rows]
    return _build_table(data, column_widths=[80 * mm, 100 * mm])


def _boxes_table(solution: PackingSolution) -> Table:
    data = [["#", "Destination", "Interior (cm)", "Outer (cm)", "Items", "Weight (kg)", "Utilisation (%)"]]
    for index, packed_box in enumerate(solution.boxes, start=1):
        data.append(
            [
                str(index),
                packed_box.destination,
                _dims(packed_box.dimensions),
                _dims(packed_box.outer_dimensions),
                str(len(packed_box.placements)),
                f"{packed_box.weight:.3f}",
                f"{packed_box.volume_utilisation_pct:.1f}",
            ]
        )
    return _build_table(
        data,
        column_widths=[12 * mm, 35 * mm, 45 * mm, 45 * mm, 20 * mm, 30 * mm, 35 * mm],
    )


def _unpacked_table(solution: PackingSolution) -> Table:
    data = [["Item", "Destination", "Dimensions (cm)", "Weight (kg)"]]
    for item in solution.unpacked_items:
        data.append([item.id, item.destination, _dims(item.dimensions), f"{item.weight:.3f}"])
    return _build_table(data, column_widths=[50 * mm, 45 * mm, 60 * mm, 35 * mm])


def generate_pdf_report(
    output_path: str | Path,
    solution: PackingSolution,
    layout_images: Iterable[str | Path] = (),
) -> Path:
    """
    Generate a packing list PDF report and return the output path.
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    doc = SimpleDocTemplate(
        str(output_path),
        pagesize=landscape(A4),
        leftMargin=20 * mm,
        rightMargin=20 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title="Parcel Packing Report",
    )

    styles = getSampleStyleSheet()
    subtitle_style = ParagraphStyle(
        "Subtitle",
        parent=styles["Heading2"],
        textColor=colors.HexColor("#2D5B88"),
    )

    story: list = [
        Paragraph("Parcel Packing Report", styles["Title"]),
        Spacer(1, 8 * mm),
        Paragraph("Summary", subtitle_style),
        Spacer(1, 4 * mm),
        _summary_table(solution),
    ]

    if solution.boxes:
        story.extend(
            [
                Spacer(1, 6 * mm),
                Paragraph("Boxes", subtitle_style),
                Spacer(1, 4 * mm),
                _boxes_table(solution),
            ]
        )

    if solution.unpacked_items:
        story.extend(
            [
                Spacer(1, 6 * mm),
                Paragraph("Unpacked Items", subtitle_style),
                Spacer(1, 4 * mm),
                _unpacked_table(solution),
            ]
        )

    for image_path in layout_images:
        image_path = Path(image_path)
        if image_path.exists():
            story.extend(
                [
                    Spacer(1, 6 * mm),
                    Paragraph(image_path.stem.replace("_", " ").title(), subtitle_style),
                    Spacer(1, 4 * mm),
                    Image(str(image_path), width=180 * mm, height=110 * mm),
                ]
            )

    doc.build(story)
    return output_path
