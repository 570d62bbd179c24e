from __future__ import annotations

from pathlib import Path

import pytest


HEADER = [
    "Luftqualitaet DEBE066 Berlin-Karlshorst",
    "Schadstoff: Stickstoffdioxid (NO2)",
    "Einheit: ug/m3",
    "Station,Name,Schadstoff,Zeitpunkt,Messwert,Typ",
]


def make_export(rows: list[str]) -> str:
    return "\n".join(HEADER + rows) + "\n"


@pytest.fixture
def readings_csv(tmp_path: Path) -> Path:
    rows = [
        "DEBE066,Karlshorst,NO2,01.01.2025 01:00,5,Stundenmittel",
        "DEBE066,Karlshorst,NO2,01.01.2025 02:00,25,Stundenmittel",
        "DEBE066,Karlshorst,NO2,01.01.2025 03:00,-,Stundenmittel",
        "DEBE066,Karlshorst,NO2,01.01.2025 04:00,18,Stundenmittel",
        "DEBE066,Karlshorst,NO2,01.01.2025 05:00,30,Stundenmittel",
        "DEBE066,Karlshorst,NO2,01.01.2025 06:00,-2,Stundenmittel",
    ]
    path = tmp_path / "no2.csv"
    path.write_text(make_export(rows), encoding="utf-8")
    return path
