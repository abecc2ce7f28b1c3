"""
Diagnostic dump of one decision: inputs, intermediate vectors and verdict.
Read-only; nothing here feeds back into the decision.
"""
from dataclasses import fields

from rich.console import Console
from rich.table import Table

from model import LicId


def _flag(value):
    return "[green]true[/green]" if value else "[red]false[/red]"


def _lic_header(table, first_column):
    table.add_column(first_column)
    for lic in LicId:
        table.add_column(str(int(lic)), justify="center")


def coordinates_table(points):
    table = Table(title="COORDINATES")
    table.add_column("#", justify="right")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    for index, (x, y) in enumerate(points):
        table.add_row(str(index), f"{x:f}", f"{y:f}")
    return table


def parameters_table(params):
    table = Table(title="PARAMETERS")
    table.add_column("Parameter")
    table.add_column("Value", justify="right")
    for field in fields(params):
        value = getattr(params, field.name)
        shown = f"{value:d}" if field.type is int else f"{value:f}"
        table.add_row(field.name.upper(), shown)
    return table


def lcm_table(lcm):
    table = Table(title="LCM")
    _lic_header(table, "LIC")
    for lic in LicId:
        table.add_row(str(int(lic)), *(cell.value for cell in lcm[lic]))
    return table


def vectors_table(puv, verdict):
    table = Table(title="PUV / CMV / FUV")
    _lic_header(table, "Vector")
    table.add_row("PUV", *(_flag(v) for v in puv))
    table.add_row("CMV", *(_flag(v) for v in verdict.cmv))
    table.add_row("FUV", *(_flag(v) for v in verdict.fuv))
    return table


def pum_table(pum):
    table = Table(title="PUM")
    _lic_header(table, "LIC")
    for lic in LicId:
        table.add_row(str(int(lic)), *(_flag(v) for v in pum[lic]))
    return table


def conditions_table(verdict):
    table = Table(title="CONDITIONS MET")
    table.add_column("LIC", justify="right")
    table.add_column("Condition")
    table.add_column("Met", justify="center")
    for lic in LicId:
        table.add_row(str(int(lic)), lic.name, _flag(verdict.cmv[lic]))
    return table


def render_report(points, params, lcm, puv, verdict, console=None):
    """Print the full decision snapshot, LAUNCH last."""
    console = console or Console()

    console.print(coordinates_table(points))
    console.print(parameters_table(params))
    console.print(lcm_table(lcm))
    console.print(conditions_table(verdict))
    console.print(vectors_table(puv, verdict))
    console.print(pum_table(verdict.pum))
    render_verdict(verdict, console)


def render_verdict(verdict, console=None):
    console = console or Console()
    if verdict.launch:
        console.print("[bold green]LAUNCH: true[/bold green]")
    else:
        console.print("[bold red]LAUNCH: false[/bold red]")
