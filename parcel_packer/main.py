"""
Streamlit entrypoint for the parcel packer.
"""

from __future__ import annotations

import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd
import streamlit as st

# Add parent directory to path to allow imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from parcel_packer.core.errors import PackingError
from parcel_packer.core.registry import DestinationRegistry, load_cardboard, load_registry
from parcel_packer.core.solver import calculate_cost, pack_items
from parcel_packer.core.utils_geometry import footprint_coverage
from parcel_packer.models.cardboard import CardboardSpec
from parcel_packer.models.item import Item
from parcel_packer.models.solution import PackingSolution
from parcel_packer.report.pdf_generator import generate_pdf_report
from parcel_packer.visualization import layout_plot

ITEM_COLUMNS = ["id", "destination", "length", "width", "height", "weight", "quantity"]


@st.cache_resource
def load_engine_config() -> tuple[DestinationRegistry, CardboardSpec]:
    return load_registry(), load_cardboard()


def default_rows(destinations: List[str]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {"id": "SKU-A", "destination": destinations[0], "length": 30.0, "width": 20.0,
             "height": 8.0, "weight": 0.68, "quantity": 12},
            {"id": "SKU-B", "destination": destinations[0], "length": 25.0, "width": 15.0,
             "height": 10.0, "weight": 0.45, "quantity": 6},
        ],
        columns=ITEM_COLUMNS,
    )


def _cell(row: Dict[str, Any], column: str) -> Any:
    value = row.get(column)
    return None if pd.isna(value) else value


def rows_to_items(rows: List[Dict[str, Any]]) -> List[Item]:
    """Expand edited table rows into individual items (``id-1``, ``id-2``, ...)."""
    items: List[Item] = []
    for index, row in enumerate(rows, start=1):
        if all(_cell(row, column) is None for column in ITEM_COLUMNS):
            continue
        quantity = _cell(row, "quantity")
        quantity = 1 if quantity is None else int(quantity)
        if quantity < 1:
            raise ValueError(f"row {index}: quantity must be at least 1")
        base_id = str(_cell(row, "id") or f"row{index}").strip()
        for copy in range(1, quantity + 1):
            try:
                items.append(
                    Item(
                        id=base_id if quantity == 1 else f"{base_id}-{copy}",
                        destination=_cell(row, "destination"),
                        length=_cell(row, "length"),
                        width=_cell(row, "width"),
                        height=_cell(row, "height"),
                        weight=_cell(row, "weight"),
                    )
                )
            except ValueError as exc:
                raise ValueError(f"row {index}: {exc}") from exc
    return items


def build_item_inputs(registry: DestinationRegistry) -> pd.DataFrame:
    st.markdown("**Items** (dimensions in cm, weight in kg)")
    return st.data_editor(
        default_rows(list(registry.destinations)),
        num_rows="dynamic",
        use_container_width=True,
        key="items_editor",
        column_config={
            "id": st.column_config.TextColumn("Item ID", required=True),
            "destination": st.column_config.SelectboxColumn(
                "Destination", options=list(registry.destinations), required=True
            ),
            "length": st.column_config.NumberColumn("Length (cm)", min_value=0.01, format="%.2f"),
            "width": st.column_config.NumberColumn("Width (cm)", min_value=0.01, format="%.2f"),
            "height": st.column_config.NumberColumn("Height (cm)", min_value=0.01, format="%.2f"),
            "weight": st.column_config.NumberColumn("Weight (kg)", min_value=0.001, format="%.3f"),
            "quantity": st.column_config.NumberColumn("Quantity", min_value=1, step=1),
        },
    )


def boxes_frame(solution: PackingSolution) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "box": index,
                "destination": packed_box.destination,
                "interior (cm)": " x ".join(f"{value:.1f}" for value in packed_box.dimensions),
                "outer (cm)": " x ".join(f"{value:.1f}" for value in packed_box.outer_dimensions),
                "items": len(packed_box.placements),
                "weight (kg)": round(packed_box.weight, 3),
                "volume util. (%)": round(packed_box.volume_utilisation_pct, 1),
                "floor coverage (%)": round(
                    footprint_coverage(packed_box.placements, packed_box.length, packed_box.width), 1
                ),
            }
            for index, packed_box in enumerate(solution.boxes, start=1)
        ]
    )


def placements_frame(solution: PackingSolution, box_number: int) -> pd.DataFrame:
    packed_box = solution.boxes[box_number - 1]
    return pd.DataFrame(
        [
            {
                "item": placement.item.id,
                "x": placement.x,
                "y": placement.y,
                "z": placement.z,
                "along length": placement.orientation[0],
                "along width": placement.orientation[1],
                "along height": placement.orientation[2],
                "weight (kg)": placement.item.weight,
            }
            for placement in packed_box.placements
        ]
    )


def render_results(solution: PackingSolution, pdf_bytes: bytes) -> None:
    st.divider()
    st.markdown("## Packing Results")

    summary_cols = st.columns(4)
    summary_cols[0].metric("Boxes", len(solution.boxes))
    summary_cols[1].metric("Packed Items", solution.packed_item_count)
    summary_cols[2].metric("Unpacked Items", len(solution.unpacked_items))
    summary_cols[3].metric("Total Volume (L)", f"{calculate_cost(solution) / 1000:.2f}")

    if solution.unpacked_items:
        with st.expander("Unpacked Items", expanded=True):
            st.warning("These items exceed the destination limits even in an empty box.")
            st.dataframe(
                pd.DataFrame([item.to_dict() for item in solution.unpacked_items]),
                use_container_width=True,
            )

    if solution.boxes:
        st.dataframe(boxes_frame(solution), use_container_width=True, hide_index=True)

        st.markdown("## Box Layout")
        box_number = st.selectbox(
            "Box",
            options=list(range(1, len(solution.boxes) + 1)),
            format_func=lambda number: f"Box {number} ({solution.boxes[number - 1].destination})",
        )
        st.plotly_chart(
            layout_plot.packed_box_figure(solution.boxes[box_number - 1]),
            use_container_width=True,
        )
        st.dataframe(placements_frame(solution, box_number), use_container_width=True, hide_index=True)

    st.divider()
    st.download_button(
        label="Download PDF Report",
        data=pdf_bytes,
        file_name="packing_report.pdf",
        mime="application/pdf",
        use_container_width=True,
    )


def main() -> None:
    st.set_page_config(page_title="Parcel Packer", layout="wide")
    st.title("Cross-border Parcel Packing")

    registry, cardboard = load_engine_config()
    st.caption(
        f"Cardboard: {cardboard.thickness_cm} cm walls, {cardboard.unit_weight_kg_per_m2} kg/m²"
    )

    with st.form("input_form"):
        edited = build_item_inputs(registry)
        col1, col2, col3 = st.columns([1, 2, 1])
        with col2:
            submitted = st.form_submit_button("Pack Items", type="primary", use_container_width=True)

    if submitted:
        # A new run always replaces the previous result.
        st.session_state.pop("results", None)
        try:
            items = rows_to_items(edited.to_dict(orient="records"))
            solution = pack_items(items, registry=registry, cardboard=cardboard)
            with tempfile.TemporaryDirectory() as tmpdir:
                pdf_path = generate_pdf_report(Path(tmpdir) / "packing_report.pdf", solution)
                pdf_bytes = pdf_path.read_bytes()
            st.session_state["results"] = {"solution": solution, "pdf_bytes": pdf_bytes}
            st.success("Packing completed.")
        except (PackingError, ValueError) as exc:
            st.error(f"Packing failed: {exc}")

    results = st.session_state.get("results")
    if results:
        render_results(results["solution"], results["pdf_bytes"])


if __name__ == "__main__":
    main()
