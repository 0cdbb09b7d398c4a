"""
inlinejs bundle commands.

- build:   Extract inline scripts and write bundle files
- inspect: Show discovered scripts and their bundles without writing
- resolve: Show the path a script site would load at run time
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from inlinejs.build import build_project, collect_fragments, group_fragments
from inlinejs.core.errors import InlineJsError
from inlinejs.core.manifest import ProjectManifest, find_manifest
from inlinejs.core.naming import bundle_filename
from inlinejs.runtime.owner import OwnerInfo
from inlinejs.runtime.parameters import ScriptParameters
from inlinejs.runtime.resolver import ModuleResolver, RuntimeSettings

console = Console()


def _load_manifest(project_dir: Path) -> ProjectManifest:
    try:
        return find_manifest(project_dir)
    except InlineJsError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def build_command(
    project_dir: Path = typer.Option(
        Path("."), "--project", "-p", help="Project root containing inlinejs.toml"
    ),
    output_dir: Path | None = typer.Option(
        None, "--output", "-o", help="Override the bundle output directory"
    ),
    prune: bool = typer.Option(
        False, "--prune", help="Delete generated bundles not produced by this build"
    ),
) -> None:
    """Extract inline scripts and write one file per bundle."""
    project_dir = project_dir.resolve()
    manifest = _load_manifest(project_dir)
    if prune:
        manifest.build.prune = True

    try:
        result = build_project(project_dir, manifest=manifest, output_dir=output_dir)
    except OSError as e:
        console.print(f"[red]Build failed: {e}[/red]")
        raise typer.Exit(1)

    for path in result.skipped_files:
        console.print(f"[yellow]Skipped unreadable render file: {path}[/yellow]")

    if not result.written:
        console.print("[dim]No inline scripts found.[/dim]")
        return

    for path in result.written:
        console.print(f"[green]Wrote[/green] {path}")
    console.print(
        f"{len(result.fragments)} script(s) in {len(result.written)} bundle(s) -> {result.output_dir}"
    )


def inspect_command(
    project_dir: Path = typer.Option(
        Path("."), "--project", "-p", help="Project root containing inlinejs.toml"
    ),
) -> None:
    """List discovered inline scripts grouped by bundle."""
    project_dir = project_dir.resolve()
    manifest = _load_manifest(project_dir)
    fragments = collect_fragments(project_dir, manifest)

    if not fragments:
        console.print("[dim]No inline scripts found.[/dim]")
        return

    table = Table(title="Inline script bundles")
    table.add_column("Bundle file", style="cyan")
    table.add_column("Component")
    table.add_column("Global", justify="center")
    table.add_column("Lines", justify="right")

    for group in group_fragments(fragments):
        filename = bundle_filename(group.key, manifest.build.script_ext)
        for fragment in group.fragments:
            table.add_row(
                filename,
                fragment.owner_id,
                "yes" if fragment.global_bundle else "",
                str(len(fragment.body.splitlines())),
            )
    console.print(table)


def resolve_command(
    component: str = typer.Argument(..., help="Qualified name of the enclosing component"),
    global_bundle: bool = typer.Option(False, "--global", help="Use a global bundle"),
    bundle_name: str = typer.Option("index", "--bundle-name", "-b", help="Bundle name"),
    library: str | None = typer.Option(
        None, "--library", "-l", help="Package id when the component comes from a library"
    ),
    project_dir: Path = typer.Option(
        Path("."), "--project", "-p", help="Project root containing inlinejs.toml"
    ),
) -> None:
    """Print the script path a site nested in COMPONENT would load."""
    manifest = _load_manifest(project_dir.resolve())
    resolver = ModuleResolver(
        RuntimeSettings(
            output_dir=manifest.build.output_dir,
            script_ext=manifest.build.script_ext,
            content_root=manifest.runtime.content_root,
        )
    )
    owner = OwnerInfo(
        identity=component,
        package_id=library or manifest.name,
        is_from_lib=library is not None,
    )
    parameters = ScriptParameters.model_validate(
        {"GlobalBundle": global_bundle, "BundleName": bundle_name}
    )
    typer.echo(resolver.resolve(parameters, owner))
