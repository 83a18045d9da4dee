"""
Commande CLI d'affichage des episodes manquants (missing).
"""

from typing import Annotated, Optional

import typer
from rich.table import Table

from src.adapters.cli.helpers import console, with_container
from src.core.value_objects.paging import PageRequest, SortDirection, SortKey


def missing(
    page: Annotated[int, typer.Option("--page", "-p", help="Numero de page")] = 1,
    page_size: Annotated[
        Optional[int],
        typer.Option("--page-size", "-n", help="Episodes par page (defaut: config)"),
    ] = None,
    sort_key: Annotated[
        str,
        typer.Option(
            "--sort-key", "-s",
            help="Champ de tri: airDate, seriesTitle, seasonNumber, episodeNumber, title",
        ),
    ] = SortKey.AIR_DATE.value,
    sort_dir: Annotated[
        str,
        typer.Option("--sort-dir", "-d", help="Sens de tri: asc ou desc"),
    ] = SortDirection.DESC.value,
    include_specials: Annotated[
        Optional[bool],
        typer.Option("--include-specials/--no-specials", help="Inclure la saison 0"),
    ] = None,
) -> None:
    """Liste les episodes diffuses sans fichier associe."""
    try:
        key = SortKey.from_wire(sort_key)
        direction = SortDirection.from_wire(sort_dir)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)
    _missing(page, page_size, key, direction, include_specials)


@with_container()
def _missing(
    container,
    page: int,
    page_size: Optional[int],
    sort_key: SortKey,
    sort_direction: SortDirection,
    include_specials: Optional[bool],
) -> None:
    settings = container.config()
    request = PageRequest(
        page=page,
        page_size=page_size or settings.missing_page_size,
        sort_key=sort_key,
        sort_direction=sort_direction,
        include_specials=settings.include_specials if include_specials is None else include_specials,
    )
    result = container.missing_episodes_query().get_missing_page(request)

    if result.total_records == 0:
        console.print("[green]Aucun episode manquant.[/green]")
        return

    table = Table(title=f"Episodes manquants - page {result.page}/{result.total_pages}")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Serie")
    table.add_column("Episode")
    table.add_column("Titre")
    table.add_column("Diffusion")
    for item in result.records:
        episode = item.episode
        table.add_row(
            str(episode.id),
            item.series_title,
            f"S{episode.season_number:02d}E{episode.episode_number:02d}",
            episode.title,
            episode.air_date.isoformat() if episode.air_date else "",
        )
    console.print(table)
    console.print(f"[bold]Total: {result.total_records} episode(s) manquant(s)[/bold]")
