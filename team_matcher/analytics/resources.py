"""Resource allocation across projects."""

from dataclasses import dataclass, field
from typing import Iterable

from team_matcher.models import Employee

SEVERITY_ORDER = {"high": 3, "medium": 2, "low": 1}


@dataclass
class EmployeeAllocation:
    """An employee and the projects it is assigned to."""

    employee: Employee
    projects: list[dict] = field(default_factory=list)

    @property
    def project_count(self) -> int:
        return len(self.projects)


def classify_conflict_severity(project_count: int) -> tuple[str, str]:
    """Map a project count to (severity, recommendation)."""
    if project_count >= 4:
        return (
            "high",
            f"Employee is assigned to {project_count} projects. "
            f"Consider reducing to 2-3 projects for better focus.",
        )
    if project_count == 3:
        return (
            "medium",
            f"Employee is assigned to {project_count} projects. "
            f"Monitor workload to ensure quality.",
        )
    return (
        "low",
        f"Employee is assigned to {project_count} projects. "
        f"This is manageable but watch for overload.",
    )


def find_resource_conflicts(allocations: Iterable[EmployeeAllocation]) -> list[dict]:
    """Employees on two or more projects, most severe first."""
    conflicts = []
    for allocation in allocations:
        count = allocation.project_count
        if count < 2:
            continue
        severity, recommendation = classify_conflict_severity(count)
        conflicts.append({
            "employeeId": allocation.employee.id,
            "employeeName": allocation.employee.full_name,
            "projectCount": count,
            "projects": list(allocation.projects),
            "severity": severity,
            "recommendation": recommendation,
        })

    # stable sort keeps roster order within a tier
    conflicts.sort(key=lambda c: SEVERITY_ORDER[c["severity"]], reverse=True)
    return conflicts


def build_resource_allocation(allocations: Iterable[EmployeeAllocation]) -> list[dict]:
    """Utilization summary for every employee.

    One project counts as 50%, capped at 150% (over-utilized).
    """
    return [
        {
            "employeeId": a.employee.id,
            "employeeName": a.employee.full_name,
            "seniority": a.employee.seniority,
            "totalProjects": a.project_count,
            "projects": [dict(p, role=a.employee.role) for p in a.projects],
            "utilization": min(150, a.project_count * 50),
        }
        for a in allocations
    ]


def find_unallocated(allocations: Iterable[EmployeeAllocation]) -> list[dict]:
    """Employees with no project assignments."""
    return [
        {
            "employeeId": a.employee.id,
            "employeeName": a.employee.full_name,
            "seniority": a.employee.seniority,
            "role": a.employee.role,
            "skills": a.employee.skill_names(),
        }
        for a in allocations
        if a.project_count == 0
    ]
