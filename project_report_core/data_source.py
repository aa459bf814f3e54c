# project_report_core/data_source.py
"""
Report data types and the source the populators read them from.

The Excel and PDF populators never hold literal figures themselves; they ask a
`ReportDataSource` for the project, its cost summary and its substructures.
`MockReportDataSource` serves the fixed sample figures until a real project
store is wired in.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import List, Protocol


def per_area(total: int, area: int) -> int:
    """Integer division truncated toward zero (5000000 / 123456 -> 40)."""
    q = abs(total) // abs(area)
    return q if (total >= 0) == (area > 0) else -q


@dataclass(frozen=True)
class ProjectInfo:
    name: str
    code: str
    gross_area: int
    floor_count: int
    building_area: int


@dataclass(frozen=True)
class CostSummary:
    quantity: int
    unit: int
    material: int
    labor: int
    machine: int
    subcontract: int
    price: int
    total: int

    def per_area(self, area: int) -> "CostSummary":
        return CostSummary(
            **{f.name: per_area(getattr(self, f.name), area) for f in fields(self)}
        )


@dataclass(frozen=True)
class SubstructureRow:
    name: str
    quantity: int
    unit: int
    material: int
    labor: int
    machine: int
    subcontract: int
    price: int
    total: int


class ReportDataSource(Protocol):
    def project_info(self, project_id: str | None) -> ProjectInfo: ...

    def cost_summary(self, project_id: str | None) -> CostSummary: ...

    def substructures(self, project_id: str | None) -> List[SubstructureRow]: ...


class MockReportDataSource:
    """Fixed sample data; *project_id* is accepted and ignored."""

    def project_info(self, project_id: str | None = None) -> ProjectInfo:
        return ProjectInfo(
            name="AFRY Head Office",
            code="99435",
            gross_area=123456,
            floor_count=12,
            building_area=1234,
        )

    def cost_summary(self, project_id: str | None = None) -> CostSummary:
        return CostSummary(
            quantity=5000000,
            unit=0,
            material=3000000,
            labor=2000000,
            machine=1000000,
            subcontract=0,
            price=0,
            total=30000000,
        )

    def substructures(self, project_id: str | None = None) -> List[SubstructureRow]:
        return [
            SubstructureRow(name, 321, 0, 322, 323, 324, 0, 0, 1234)
            for name in ("Garage", "Basement", "Attic")
        ]


__all__ = [
    "per_area",
    "ProjectInfo",
    "CostSummary",
    "SubstructureRow",
    "ReportDataSource",
    "MockReportDataSource",
]
