"""
Commandes CLI de gestion des series (add-series, refresh, delete-episode).
"""

import asyncio
from typing import Annotated, Optional

import typer

from src.adapters.cli.helpers import close_catalog, console, suppress_loguru, with_container
from src.core.entities.media import Series
from src.core.ports.catalog import SeriesNotFoundError, SourceUnavailableError
from src.core.ports.repositories import StorageError
from src.services.episode_reconciler import ReconciliationSummary


def add_series(
    series_id: Annotated[int, typer.Argument(help="ID TVDB de la serie")],
    sync: Annotated[
        bool,
        typer.Option("--sync/--no-sync", help="Synchroniser les episodes apres l'ajout"),
    ] = True,
) -> None:
    """Ajoute une serie a suivre depuis TVDB."""
    asyncio.run(_add_series_async(series_id, sync))


@with_container()
async def _add_series_async(container, series_id: int, sync: bool) -> None:
    """Implementation async de la commande add-series."""
    service = container.series_service()
    try:
        series = await service.add_series(series_id)
        console.print(f"[green]Serie suivie:[/green] {series.title} ({series.id})")
        if sync:
            summary = await service.refresh_series(series_id)
            _print_summary(summary)
    except SeriesNotFoundError:
        console.print(f"[red]Serie {series_id} introuvable sur TVDB.[/red]")
        raise typer.Exit(code=1)
    except (SourceUnavailableError, StorageError) as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(code=1)
    finally:
        await close_catalog(container)


def refresh(
    series_id: Annotated[
        Optional[int],
        typer.Argument(help="ID TVDB de la serie (toutes les series avec --all)"),
    ] = None,
    all_series: Annotated[
        bool,
        typer.Option("--all", "-a", help="Synchroniser toutes les series suivies"),
    ] = False,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Ignorer le cache du catalogue"),
    ] = False,
) -> None:
    """Synchronise les saisons et episodes depuis TVDB."""
    if series_id is None and not all_series:
        console.print("[red]Indiquer un ID de serie ou --all.[/red]")
        raise typer.Exit(code=2)
    asyncio.run(_refresh_async(series_id, all_series, force))


@with_container()
async def _refresh_async(
    container, series_id: Optional[int], all_series: bool, force: bool = False
) -> None:
    """Implementation async de la commande refresh."""
    service = container.series_service()
    try:
        if all_series:
            def on_progress(series: Series, summary: Optional[ReconciliationSummary]) -> None:
                if summary is None:
                    console.print(f"  [red]✗[/red] {series.title} - catalogue indisponible")
                else:
                    console.print(
                        f"  [green]✓[/green] {series.title} - "
                        f"{summary.success_count} ok, {summary.failure_count} echec(s)"
                    )

            with suppress_loguru():
                summaries = await service.refresh_all(on_progress=on_progress, force=force)
            console.print(f"\n[bold]{len(summaries)} serie(s) synchronisee(s)[/bold]")
            return

        summary = await service.refresh_series(series_id, force=force)
        _print_summary(summary)
    except SeriesNotFoundError as e:
        console.print(f"[red]Serie {e.series_id} non suivie ou introuvable.[/red]")
        raise typer.Exit(code=1)
    except (SourceUnavailableError, StorageError) as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(code=1)
    finally:
        await close_catalog(container)


def delete_episode(
    episode_id: Annotated[int, typer.Argument(help="ID local de l'episode")],
) -> None:
    """Supprime un episode de la base locale."""
    _delete_episode(episode_id)


@with_container()
def _delete_episode(container, episode_id: int) -> None:
    service = container.episode_service()
    if service.get_episode(episode_id) is None:
        console.print(f"[yellow]Episode {episode_id} introuvable.[/yellow]")
        raise typer.Exit(code=1)
    service.delete_episode(episode_id)
    console.print(f"[green]Episode {episode_id} supprime.[/green]")


def _print_summary(summary: ReconciliationSummary) -> None:
    """Affiche le resume d'une synchronisation."""
    console.print(f"\n[bold]{summary.series_title}[/bold] ({summary.series_id})")
    console.print(f"  [green]{summary.new_count}[/green] nouveau(x)")
    console.print(f"  [cyan]{summary.updated_count}[/cyan] mis a jour")
    if summary.failure_count:
        console.print(f"  [red]{summary.failure_count}[/red] echec(s)")
        for failure in summary.failures:
            console.print(
                f"    [dim]S{failure.season_number}E{failure.episode_number}"
                f" ({failure.tvdb_episode_id}): {failure.error}[/dim]"
            )
