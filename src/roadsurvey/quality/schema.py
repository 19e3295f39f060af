from __future__ import annotations

# Header line (column order) of each generated CSV. Changing a name or the order
# changes the on-disk contract consumed by downstream spreadsheets.
OUTPUT_COLUMNS: dict[str, tuple[str, ...]] = {
    "geoposition": ("Meterage", "Lat", "Long"),
    "assay": (
        "Name",
        "StartKm",
        "EndKm",
        "StretchExtension",
        "VehiclePlate",
        "AssetType",
        "Driver",
        "StartPosition",
        "EndPosition",
        "Date",
        "StartTime",
        "EndTime",
    ),
}
