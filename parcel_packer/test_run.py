"""
Simple CLI script to execute the parcel packing pipeline end-to-end.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

# Add parent directory to path to allow imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from parcel_packer.core.solver import calculate_cost, pack_items
from parcel_packer.models.item import Item
from parcel_packer.report.pdf_generator import generate_pdf_report
from parcel_packer.visualization import layout_plot


def sample_order() -> list[Item]:
    items = [
        Item(id=f"AU-{index + 1}", destination="Australia", length=30, width=20, height=8, weight=0.68)
        for index in range(40)
    ]
    items += [
        Item(id=f"JP-{index + 1}", destination="Japan", length=55, width=20, height=12, weight=2.4)
        for index in range(6)
    ]
    items += [
        Item(id="UK-1", destination="UK", length=40, width=30, height=25, weight=6.0),
        Item(id="UK-2", destination="UK", length=35, width=25, height=20, weight=4.5),
        Item(id="UK-OVERSIZE", destination="UK", length=70, width=20, height=8, weight=1.0),
    ]
    return items


def main() -> None:
    output_dir = Path(__file__).resolve().parent / "artifacts"
    output_dir.mkdir(parents=True, exist_ok=True)

    solution = pack_items(sample_order())

    image_paths = []
    for index, packed_box in enumerate(solution.boxes, start=1):
        image_path = output_dir / f"box_{index}_{packed_box.destination.lower()}.png"
        layout_plot.save_figure_image(layout_plot.packed_box_figure(packed_box), image_path)
        image_paths.append(image_path)

    pdf_path = generate_pdf_report(output_dir / "packing_report.pdf", solution, layout_images=image_paths)
    (output_dir / "solution.json").write_text(json.dumps(solution.to_dict(), indent=2), encoding="utf-8")

    print("=== Parcel Packing Summary ===")
    for index, packed_box in enumerate(solution.boxes, start=1):
        print(
            f"Box {index} [{packed_box.destination}]: {len(packed_box.placements)} items, "
            f"{packed_box.length:.1f} x {packed_box.width:.1f} x {packed_box.height:.1f} cm, "
            f"{packed_box.weight:.2f} kg, {packed_box.volume_utilisation_pct:.1f}% full"
        )
    print(f"Unpacked Items: {', '.join(item.id for item in solution.unpacked_items) or 'none'}")
    print(f"Total Volume: {calculate_cost(solution):,.1f} cm3")
    print(f"Report saved to: {pdf_path}")


if __name__ == "__main__":
    main()
