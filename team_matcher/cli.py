"""Team Matcher CLI."""

import json
import threading

import click
from rich.console import Console
from rich.table import Table
from pathlib import Path

console = Console()


def _parse_pairs(values, label: str, cast):
    """Parse NAME:VALUE options into (name, value) tuples."""
    pairs = []
    for raw in values:
        name, sep, value = raw.rpartition(":")
        if not sep or not name.strip():
            raise click.BadParameter(f"Expected NAME:VALUE, got {raw!r}", param_hint=label)
        try:
            pairs.append((name.strip(), cast(value)))
        except ValueError:
            raise click.BadParameter(f"Invalid value in {raw!r}", param_hint=label)
    return pairs


def _score_cell(score) -> str:
    if score is None:
        return "[dim]manual[/dim]"
    style = "green" if score >= 80 else "yellow" if score >= 50 else "red"
    return f"[{style}]{score:g}[/{style}]"


@click.group()
def main():
    """Team Matcher - AI-assisted project staffing."""
    pass


@main.command()
def version():
    """Show version."""
    from . import __version__
    console.print(f"team-matcher v{__version__}")


@main.command()
def init():
    """Initialize the database."""
    from .db.config import get_db_path
    from .db.migrations import run_migrations

    db_path = get_db_path()
    console.print(f"[blue]Initializing database at {db_path}[/blue]")

    run_migrations(db_path)

    console.print("[green]Database initialized successfully![/green]")


@main.command()
@click.argument("roster_file", type=click.Path(exists=True))
def seed(roster_file: str):
    """Load employees (and extra catalog skills) from a JSON roster file.

    The file is either a list of employees or an object with
    "employees" and optional "skills" keys.
    """
    from .db.config import get_db_path
    from .db.employees import EmployeeRepository
    from .db.migrations import run_migrations

    data = json.loads(Path(roster_file).read_text())
    if isinstance(data, list):
        data = {"employees": data}

    db_path = get_db_path()
    run_migrations(db_path)
    repo = EmployeeRepository(db_path)

    for skill in data.get("skills", []):
        repo.create_skill(skill)

    count = 0
    for emp in data.get("employees", []):
        repo.create(
            full_name=emp["full_name"],
            role=emp.get("role"),
            seniority=emp.get("seniority"),
            total_experience_years=emp.get("total_experience_years", 0),
            location=emp.get("location"),
            skills=emp.get("skills", {}),
            languages=emp.get("languages", []),
        )
        count += 1

    console.print(f"[green]Loaded {count} employees[/green]")


@main.command()
def projects():
    """List projects."""
    from .mcp_server import list_projects

    result = list_projects()
    if not result:
        console.print("[yellow]No projects[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim")
    table.add_column("Title")
    table.add_column("Skills")
    table.add_column("Devs", justify="right")
    table.add_column("Min Years", justify="right")

    for project in result:
        table.add_row(
            str(project["id"]),
            project["title"],
            ", ".join(project["skills"]) or "-",
            str(project["developersNeeded"]),
            f"{project['experienceYears']:g}",
        )

    console.print(table)


@main.command()
@click.option("--name", "-n", required=True, help="Project name")
@click.option("--description", "-d", default=None, help="Project description used for matching")
@click.option("--skill", "-s", "skills", multiple=True, help="Required skill as NAME:YEARS")
@click.option("--seniority", "-l", "seniority", multiple=True, help="Required seniority as LEVEL:COUNT")
@click.option("--no-wait", is_flag=True, help="Exit without waiting for background matching")
def create(name: str, description: str, skills: tuple, seniority: tuple, no_wait: bool):
    """Create a project and match employees to it."""
    from .mcp_server import create_project

    skill_reqs = [
        {"skill_name": n, "min_experience_years": y}
        for n, y in _parse_pairs(skills, "--skill", float)
    ]
    seniority_reqs = [
        {"level": n, "required_count": c}
        for n, c in _parse_pairs(seniority, "--seniority", int)
    ]

    result = create_project(name, description=description, skills=skill_reqs, seniority=seniority_reqs)
    if not result["success"]:
        console.print(f"[red]Failed: {result['error']}[/red]")
        raise SystemExit(1)

    project_id = result["id"]
    console.print(f"[green]Created project {project_id}[/green]")

    if no_wait:
        return

    # the matching thread is a daemon and dies with the process
    with console.status("Matching employees..."):
        for thread in threading.enumerate():
            if thread.name == f"match-project-{project_id}":
                thread.join()

    console.print(f"[dim]Run 'team-matcher show {project_id}' to see the team[/dim]")


@main.command()
@click.argument("project_id", type=int)
def show(project_id: int):
    """Show a project and its team."""
    from .mcp_server import get_project

    result = get_project(project_id)
    if "error" in result:
        console.print(f"[red]{result['error']}[/red]")
        raise SystemExit(1)

    project = result["project"]
    console.print(f"\n[bold]{project['title']}[/bold] (#{project['id']})")
    if project["description"]:
        console.print(f"  {project['description']}")
    for skill in project["skills"]:
        console.print(f"  Skill: [cyan]{skill['name']}[/cyan] ({skill['minExperienceYears']:g}+ years)")
    for level in project["seniority"]:
        console.print(f"  Seniority: {level['level']} x{level['requiredCount']}")
    console.print()

    if not result["team"]:
        console.print("[yellow]No team members yet[/yellow]")
        return

    table = Table(title="Team")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Role")
    table.add_column("Seniority")
    table.add_column("Score", justify="right")

    for member in result["team"]:
        emp = member["employee"]
        table.add_row(
            str(emp["id"]),
            emp["full_name"],
            emp["role"] or "-",
            emp["seniority"] or "-",
            _score_cell(member["score"]),
        )

    console.print(table)


@main.command()
@click.argument("project_id", type=int)
@click.confirmation_option(prompt="Delete this project and its team?")
def delete(project_id: int):
    """Delete a project."""
    from .mcp_server import delete_project

    result = delete_project(project_id)
    if result["success"]:
        console.print(f"[yellow]Deleted project {project_id}[/yellow]")
    else:
        console.print(f"[red]Failed: {result['error']}[/red]")
        raise SystemExit(1)


@main.command()
@click.argument("project_id", type=int)
def match(project_id: int):
    """Run AI matching for a project now and show the outcome."""
    from .mcp_server import rerun_matching

    with console.status("Matching employees..."):
        result = rerun_matching(project_id)

    if "error" in result and "status" not in result:
        console.print(f"[red]{result['error']}[/red]")
        raise SystemExit(1)

    status = result["status"]
    if status == "completed":
        console.print(
            f"[green]Matched: {result['candidates_found']} candidates, "
            f"{result['assignments_created']} added[/green]"
        )
        if result["discarded_ids"]:
            console.print(f"  [yellow]Unknown employee IDs ignored: {result['discarded_ids']}[/yellow]")
    elif status == "skipped":
        console.print(f"[yellow]Skipped: {result['error']}[/yellow]")
    else:
        console.print(f"[red]{status}: {result['error']}[/red]")
        raise SystemExit(1)


@main.command("save-team")
@click.argument("project_id", type=int)
@click.argument("employee_ids", type=int, nargs=-1, required=True)
def save_team(project_id: int, employee_ids: tuple):
    """Replace a project's team with the given employee IDs."""
    from .mcp_server import save_project_team

    result = save_project_team(project_id, list(employee_ids))
    if result["success"]:
        console.print(f"[green]Saved team of {result['count']}[/green]")
    else:
        console.print(f"[red]Failed: {result['error']}[/red]")
        raise SystemExit(1)


@main.command()
@click.argument("project_id", type=int)
def gaps(project_id: int):
    """Show skill gaps for a project's team."""
    from .mcp_server import get_skill_gaps

    result = get_skill_gaps(project_id)
    if "error" in result:
        console.print(f"[red]{result['error']}[/red]")
        raise SystemExit(1)

    for skill in result["missingSkills"]:
        console.print(f"[red]Missing[/red] {skill['skill']}: {skill['recommendation']}")
    for skill in result["weakSkills"]:
        console.print(f"[yellow]Weak[/yellow] {skill['skill']}: {skill['recommendation']}")
    for skill in result["coveredSkills"]:
        console.print(f"[green]Covered[/green] {skill['skill']} ({skill['maxExperience']:g} years)")

    if not any(result.values()):
        console.print("[yellow]Project has no required skills[/yellow]")


@main.command()
@click.argument("project_id", type=int)
def chemistry(project_id: int):
    """Show team chemistry for a project."""
    from .mcp_server import get_team_chemistry

    result = get_team_chemistry(project_id)
    if "error" in result:
        console.print(f"[red]{result['error']}[/red]")
        raise SystemExit(1)

    overall = result["overallScore"]
    style = "green" if overall >= 80 else "yellow" if overall >= 60 else "red"
    console.print(f"\n[bold]Team Chemistry:[/bold] [{style}]{overall}/100[/{style}]\n")

    table = Table()
    table.add_column("Factor")
    table.add_column("Score", justify="right")
    table.add_column("Note")
    for factor, detail in result["factors"].items():
        table.add_row(factor, f"{detail['score']:g}", detail["note"])
    console.print(table)

    for rec in result["recommendations"]:
        console.print(f"  - {rec}")


@main.command()
@click.argument("project_id", type=int)
@click.option("--weeks", "-w", default=12.0, type=float, help="Project duration in weeks")
def budget(project_id: int, weeks: float):
    """Estimate team cost and ROI."""
    from .mcp_server import get_team_budget

    result = get_team_budget(project_id, project_duration_weeks=weeks)
    if "error" in result:
        console.print(f"[red]{result['error']}[/red]")
        raise SystemExit(1)

    cost = result["cost"]
    roi = result["roi"]
    console.print(f"\n[bold]Budget ({weeks:g} weeks)[/bold]")
    console.print(f"  Total: ${cost['totalCost']:,.0f}")
    console.print(f"  Monthly: ${cost['monthlyCost']:,.0f}")
    console.print(f"  Weekly: ${cost['weeklyCost']:,.0f}")
    console.print(f"  Value score: [cyan]{roi['valueScore']}[/cyan]")
    console.print(f"  {roi['recommendation']}")


@main.command()
def conflicts():
    """List employees assigned to multiple projects."""
    from .mcp_server import get_resource_conflicts

    result = get_resource_conflicts()
    if not result:
        console.print("[green]No resource conflicts[/green]")
        return

    table = Table()
    table.add_column("Employee")
    table.add_column("Projects", justify="right")
    table.add_column("Severity")
    table.add_column("Recommendation")

    styles = {"high": "red", "medium": "yellow", "low": "dim"}
    for conflict in result:
        style = styles[conflict["severity"]]
        table.add_row(
            conflict["employeeName"],
            str(conflict["projectCount"]),
            f"[{style}]{conflict['severity']}[/{style}]",
            conflict["recommendation"],
        )

    console.print(table)


@main.command()
@click.argument("project_id", type=int)
@click.option("--last", default=20, help="Number of recent runs")
def runs(project_id: int, last: int):
    """Show recent matching runs for a project."""
    from .mcp_server import get_match_runs

    result = get_match_runs(project_id, limit=last)
    if not result:
        console.print("[yellow]No matching runs[/yellow]")
        return

    table = Table()
    table.add_column("Run", style="dim")
    table.add_column("Started")
    table.add_column("Provider")
    table.add_column("Status")
    table.add_column("Found", justify="right")
    table.add_column("Added", justify="right")
    table.add_column("Error")

    for run in result:
        status = run["status"]
        style = "green" if status == "completed" else "yellow" if status in ("skipped", "running") else "red"
        table.add_row(
            str(run["id"]),
            (run["started_at"] or "")[:19],
            f"{run['provider'] or '-'}/{run['model'] or '-'}",
            f"[{style}]{status}[/{style}]",
            str(run["candidates_found"] or 0),
            str(run["assignments_created"] or 0),
            (run["error_message"] or "")[:60],
        )

    console.print(table)


if __name__ == "__main__":
    main()
