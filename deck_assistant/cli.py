"""CLI interface for MTG Deck Assistant."""

import logging
from typing import Optional

import typer
from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table

from deck_assistant import __version__
from deck_assistant.analysis.curve_analyzer import CurveAnalyzer
from deck_assistant.analysis.mana_bridge import (
    attach_mana_base,
    build_deck_from_analysis,
    detect_format_from_deck,
    determine_land_count,
)
from deck_assistant.calculator.algorithms import calculate_mana_base, calculator_name
from deck_assistant.calculator.pip_analyzer import analyze_pip_intensity
from deck_assistant.config import DEFAULT_CONFIG_PATH, Settings
from deck_assistant.data.cache import CacheManager
from deck_assistant.data.fallback import ApiProvider, create_client
from deck_assistant.data.hydrate import hydrate_decklist
from deck_assistant.errors import DeckAssistantError
from deck_assistant.llm.factory import create_llm_client
from deck_assistant.llm.result import LLMProvider
from deck_assistant.models.curve import CurveAnalysis
from deck_assistant.models.deck import Algorithm, Color, Deck, DualLand, Format, ManaBase
from deck_assistant.models.decklist import DeckList
from deck_assistant.models.synergy import SynergyMatrix
from deck_assistant.parsers import load_decklist
from deck_assistant.report.json_export import export_json
from deck_assistant.report.markdown_gen import MarkdownReportGenerator
from deck_assistant.synergy.detector import SynergyDetector

app = typer.Typer(
    name="deck-assistant",
    help="MTG Deck Assistant - mana bases, mana curves and synergy analysis",
)
console = Console()

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _fail(message: str) -> typer.Exit:
    console.print(f"\n[red]Error:[/red] {message}")
    return typer.Exit(code=1)


def parse_color_counts(value: Optional[str]) -> dict[Color, float]:
    """Parse "W=10,U=8.5" into a color mapping."""
    counts: dict[Color, float] = {}
    if not value:
        return counts
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        if "=" not in part:
            raise typer.BadParameter(f"Expected COLOR=COUNT, got {part!r}")
        color, count = part.split("=", 1)
        try:
            counts[Color.from_string(color)] = float(count)
        except ValueError as e:
            raise typer.BadParameter(str(e)) from e
    return counts


def parse_dual_land(value: str) -> DualLand:
    """Parse "Watery Grave:UB:4" into a DualLand."""
    parts = value.split(":")
    if len(parts) != 3:
        raise typer.BadParameter(f"Expected NAME:COLORS:COUNT, got {value!r}")
    name, colors, count = parts
    try:
        return DualLand(
            name=name.strip(),
            colors=[Color.from_string(c) for c in colors.strip()],
            count=int(count),
        )
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _parse_algorithm(value: str) -> Algorithm:
    try:
        return Algorithm.from_string(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _parse_provider(value: str) -> ApiProvider:
    try:
        return ApiProvider.from_string(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def _parse_format(value: Optional[str]) -> Optional[Format]:
    if value is None:
        return None
    try:
        return Format.from_string(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def load_and_hydrate(
    source: str,
    settings: Settings,
    provider: str,
    fallback: bool,
    excludes_lands: bool = False,
) -> DeckList:
    """Load a decklist and fetch its cards with a progress bar."""
    deck_list = load_decklist(source)
    deck_list.excludes_lands = excludes_lands

    cache = CacheManager(settings.cache_dir, settings.cache_ttl_hours)
    client = create_client(
        _parse_provider(provider),
        fallback and settings.enable_fallback,
        cache,
        settings,
    )

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        console=console,
    ) as progress:
        task = progress.add_task(f"Fetching cards from {client.name}...", total=None)

        def progress_callback(done: int, total: int):
            progress.update(task, completed=done, total=total)

        missing = hydrate_decklist(deck_list, client, progress_callback)

    if missing:
        console.print(
            f"[yellow]Warning:[/yellow] {len(missing)} cards not found: {', '.join(missing)}"
        )
    return deck_list


def prompt_for_deck(fmt: Optional[Format]) -> Deck:
    """Build a Deck interactively."""
    console.print("\n[bold]Interactive mana base builder[/bold]\n")
    if fmt is None:
        choice = Prompt.ask(
            "Format",
            choices=[f.value for f in Format],
            default=Format.STANDARD.value,
        )
        fmt = Format.from_string(choice)

    deck = Deck.for_format(fmt)
    low, high = fmt.recommended_land_range
    deck.total_cards = IntPrompt.ask("Total cards", default=fmt.default_total_cards)
    deck.target_lands = IntPrompt.ask(
        f"Target lands (recommended {low}-{high})", default=fmt.default_lands
    )

    for color in Color.all_colors():
        pips = FloatPrompt.ask(f"{color.display_name} mana symbols", default=0.0)
        if pips <= 0:
            continue
        deck.colors.append(color)
        deck.mana_symbols[color] = pips
        deck.pip_intensity[color] = IntPrompt.ask(
            f"  Cards with {{{color.symbol}}}{{{color.symbol}}} or more", default=0
        )

    while Confirm.ask("Add a dual land group?", default=False):
        entry = Prompt.ask("  NAME:COLORS:COUNT (e.g. Watery Grave:UB:4)")
        try:
            deck.dual_lands.append(parse_dual_land(entry))
        except typer.BadParameter as e:
            console.print(f"  [red]{e}[/red]")

    return deck


def display_mana_base(deck: Deck, mana_base: ManaBase, algorithm: Algorithm) -> None:
    if mana_base.is_empty():
        console.print("[yellow]No colored mana symbols; nothing to calculate.[/yellow]")
        return

    table = Table(title=f"Mana Base ({calculator_name(algorithm)})")
    table.add_column("Color", style="cyan")
    table.add_column("Share", justify="right")
    table.add_column("Basic Land", style="green")
    table.add_column("Count", justify="right")

    for color in sorted(mana_base.color_percentages):
        table.add_row(
            color.display_name,
            f"{mana_base.color_percentages[color] * 100:.1f}%",
            color.basic_land,
            str(mana_base.basics.get(color, 0)),
        )
    console.print(table)

    for dual in mana_base.dual_lands:
        colors = "/".join(c.symbol for c in dual.colors)
        console.print(f"  • {dual.count}x {dual.name} ({colors})")
    console.print(
        f"\n[bold]Total lands:[/bold] {mana_base.total_lands()} "
        f"(target {deck.target_lands})"
    )

    for rec in mana_base.recommendations:
        console.print(f"[yellow]→[/yellow] {rec}")
    for result in analyze_pip_intensity(deck):
        if result.warning:
            console.print(f"[yellow]⚠[/yellow] {result.warning}")


def display_curve(analysis: CurveAnalysis) -> None:
    stats = analysis.stats
    table = Table(title=f"Mana Curve: {analysis.deck_name}")
    table.add_column("CMC", style="cyan", justify="right")
    table.add_column("Cards", justify="right")
    table.add_column("Creatures", justify="right")
    table.add_column("Other", justify="right")
    table.add_column("")

    for bucket in analysis.buckets:
        width = round(bucket.total_count / stats.max_bucket_count * 30) if stats.max_bucket_count else 0
        table.add_row(
            str(bucket.cmc),
            str(bucket.total_count),
            str(bucket.creature_count),
            str(bucket.non_creature_count),
            "[green]" + "█" * width + "[/green]",
        )
    console.print(table)
    console.print(
        f"Non-land: {stats.total_non_land}  Mean: {stats.mean_cmc:.2f}  "
        f"Median: {stats.median_cmc}  Mode: {stats.mode_cmc}"
    )

    pips = analysis.pip_breakdown.to_mana_symbols()
    if pips:
        console.print(
            "Pips: " + "  ".join(f"{c.symbol}={n:g}" for c, n in sorted(pips.items()))
        )


def display_synergy(matrix: SynergyMatrix) -> None:
    if matrix.detected_themes:
        table = Table(title=f"Themes: {matrix.deck_name}")
        table.add_column("Theme", style="cyan")
        table.add_column("Cards", justify="right")
        table.add_column("Share", justify="right")
        table.add_column("Enablers", justify="right")
        table.add_column("Payoffs", justify="right")

        for t in matrix.detected_themes:
            table.add_row(
                t.theme.display_name,
                str(t.card_count),
                f"{t.percentage * 100:.0f}%",
                str(len(t.enablers)),
                str(len(t.payoffs)),
            )
        console.print(table)
    else:
        console.print("[yellow]No significant themes detected.[/yellow]")

    stats = matrix.stats
    console.print(
        f"\nSynergies: {stats.total_synergies}  "
        f"Density: {stats.synergy_density * 100:.1f}%  "
        f"Coverage: {stats.theme_coverage * 100:.0f}%"
    )
    if stats.hub_cards:
        console.print("\n[bold green]Hub Cards:[/bold green]")
        for name, count in matrix.hub_edge_counts():
            console.print(f"  • {name} ({count} synergies)")

    if matrix.observations:
        console.print("\n[bold]Observations:[/bold]")
        for obs in matrix.observations:
            console.print(f"  • {obs}")


@app.command()
def mana(
    deck_source: Optional[str] = typer.Argument(
        None, help="Decklist file or Moxfield URL (omit for manual input)"
    ),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help="Deck format"),
    lands: Optional[int] = typer.Option(None, "--lands", "-l", help="Target land count"),
    cards: Optional[int] = typer.Option(None, "--cards", help="Total cards in deck"),
    pips: Optional[str] = typer.Option(None, "--pips", help="Pips per color, e.g. W=10,U=8"),
    intensity: Optional[str] = typer.Option(
        None, "--intensity", help="Double-pip cards per color, e.g. W=3"
    ),
    duals: Optional[list[str]] = typer.Option(
        None, "--dual", help="Dual land group NAME:COLORS:COUNT (repeatable)"
    ),
    algorithm: Optional[str] = typer.Option(
        None, "--algorithm", "-a", help="simple, cmc or hypergeo"
    ),
    provider: str = typer.Option("scryfall", "--provider", help="Card data provider"),
    fallback: bool = typer.Option(True, "--fallback/--no-fallback"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Markdown report path"),
    json_path: Optional[str] = typer.Option(None, "--json", help="JSON export path"),
    config: str = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="Settings file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """
    Calculate a recommended mana base.

    Example:
        deck-assistant mana --format standard --pips W=12,U=8 --dual "Hallowed Fountain:WU:4"
    """
    setup_logging(verbose)
    settings = Settings.from_config(config)
    chosen = _parse_algorithm(algorithm or settings.algorithm)
    fmt_override = _parse_format(fmt)

    try:
        if deck_source:
            deck_list = load_and_hydrate(deck_source, settings, provider, fallback)
            analysis = CurveAnalyzer().analyze(deck_list)
            deck_fmt = fmt_override or detect_format_from_deck(deck_list)
            target, source = determine_land_count(deck_list, lands, deck_fmt)
            deck = build_deck_from_analysis(deck_list, analysis.pip_breakdown, deck_fmt, target)
            console.print(f"Target lands: {target} ({source.describe()})")
        elif pips:
            deck = Deck.for_format(fmt_override or Format.STANDARD)
            deck.mana_symbols = parse_color_counts(pips)
            deck.colors = sorted(c for c, n in deck.mana_symbols.items() if n > 0)
            deck.pip_intensity = {
                c: int(n) for c, n in parse_color_counts(intensity).items()
            }
            deck.dual_lands = [parse_dual_land(d) for d in duals or []]
            if lands is not None:
                deck.target_lands = lands
            if cards is not None:
                deck.total_cards = cards
        else:
            deck = prompt_for_deck(fmt_override)
    except DeckAssistantError as e:
        raise _fail(e.message)

    mana_base = calculate_mana_base(deck, chosen)
    display_mana_base(deck, mana_base, chosen)

    if output:
        report = MarkdownReportGenerator().generate_mana_report(
            deck, mana_base, calculator_name(chosen)
        )
        path = MarkdownReportGenerator().save_report(report, output)
        console.print(f"  📄 Markdown: [cyan]{path}[/cyan]")
    if json_path:
        path = export_json(mana_base, json_path)
        console.print(f"  📊 JSON: [cyan]{path}[/cyan]")


@app.command()
def curve(
    deck_source: str = typer.Argument(..., help="Decklist file or Moxfield URL"),
    lands: Optional[int] = typer.Option(None, "--lands", "-l", help="Target land count"),
    with_mana: bool = typer.Option(
        True, "--mana/--no-mana", help="Also calculate a mana base"
    ),
    fmt: Optional[str] = typer.Option(None, "--format", "-f", help="Deck format"),
    algorithm: Optional[str] = typer.Option(None, "--algorithm", "-a"),
    excludes_lands: bool = typer.Option(
        False, "--excludes-lands", help="Decklist omits basic lands on purpose"
    ),
    provider: str = typer.Option("scryfall", "--provider"),
    fallback: bool = typer.Option(True, "--fallback/--no-fallback"),
    output: Optional[str] = typer.Option(None, "--output", "-o"),
    json_path: Optional[str] = typer.Option(None, "--json"),
    config: str = typer.Option(DEFAULT_CONFIG_PATH, "--config"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """
    Analyze a decklist's mana curve.

    Example:
        deck-assistant curve decks/elves.txt --lands 36
    """
    setup_logging(verbose)
    settings = Settings.from_config(config)

    try:
        deck_list = load_and_hydrate(deck_source, settings, provider, fallback, excludes_lands)
    except DeckAssistantError as e:
        raise _fail(e.message)

    analysis = CurveAnalyzer().analyze(deck_list)
    if with_mana:
        attach_mana_base(
            analysis,
            deck_list,
            user_lands=lands,
            algorithm=_parse_algorithm(algorithm or settings.algorithm),
            fmt=_parse_format(fmt),
        )

    display_curve(analysis)
    if analysis.mana_base is not None:
        console.print(
            f"\n[bold]Suggested lands[/bold] ({analysis.land_source.describe()}):"
        )
        for color, count in sorted(analysis.mana_base.basics.items()):
            console.print(f"  • {count}x {color.basic_land}")
        for dual in analysis.mana_base.dual_lands:
            console.print(f"  • {dual.count}x {dual.name}")

    if output:
        generator = MarkdownReportGenerator()
        path = generator.save_report(generator.generate_curve_report(analysis), output)
        console.print(f"  📄 Markdown: [cyan]{path}[/cyan]")
    if json_path:
        path = export_json(analysis, json_path)
        console.print(f"  📊 JSON: [cyan]{path}[/cyan]")


@app.command()
def synergy(
    deck_source: str = typer.Argument(..., help="Decklist file or Moxfield URL"),
    min_theme_cards: Optional[int] = typer.Option(
        None, "--min-theme-cards", help="Minimum cards for a theme to count"
    ),
    include_llm: bool = typer.Option(
        False, "--llm/--no-llm", help="Add an LLM review of the analysis"
    ),
    llm_provider: Optional[str] = typer.Option(
        None, "--llm-provider", help="gemini, anthropic, openai or ollama"
    ),
    model: Optional[str] = typer.Option(None, "--model", help="LLM model override"),
    excludes_lands: bool = typer.Option(False, "--excludes-lands"),
    provider: str = typer.Option("scryfall", "--provider"),
    fallback: bool = typer.Option(True, "--fallback/--no-fallback"),
    output: Optional[str] = typer.Option(None, "--output", "-o"),
    json_path: Optional[str] = typer.Option(None, "--json"),
    config: str = typer.Option(DEFAULT_CONFIG_PATH, "--config"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """
    Detect themes and card synergies in a decklist.

    Example:
        deck-assistant synergy https://www.moxfield.com/decks/abc123 --llm
    """
    setup_logging(verbose)
    settings = Settings.from_config(config)

    try:
        deck_list = load_and_hydrate(deck_source, settings, provider, fallback, excludes_lands)
        llm_client = None
        if include_llm:
            try:
                chosen = LLMProvider.from_string(llm_provider or settings.llm_provider)
            except ValueError as e:
                raise typer.BadParameter(str(e)) from e
            llm_client = create_llm_client(chosen, settings, model)
    except DeckAssistantError as e:
        raise _fail(e.message)

    detector = SynergyDetector(min_theme_cards or settings.min_theme_cards)
    matrix = detector.analyze(deck_list)
    display_synergy(matrix)

    generator = MarkdownReportGenerator()
    report = generator.generate_synergy_report(matrix)

    llm_result = None
    if llm_client is not None:
        with console.status("Asking the LLM for a review..."):
            llm_result = llm_client.analyze_synergies(deck_list, matrix, report)
        if llm_result:
            console.print("\n[bold blue]AI Analysis[/bold blue]\n")
            console.print(llm_result.full_response)
            console.print(
                f"\n[dim]{llm_result.input_tokens} input + "
                f"{llm_result.output_tokens} output tokens[/dim]"
            )
            report = generator.generate_synergy_report(matrix, llm_result)
        else:
            console.print("[yellow]LLM analysis unavailable (see log for details).[/yellow]")

    if output:
        path = generator.save_report(report, output)
        console.print(f"  📄 Markdown: [cyan]{path}[/cyan]")
    if json_path:
        extra = {"llm_analysis": llm_result.to_dict()} if llm_result else None
        path = export_json(matrix, json_path, extra=extra)
        console.print(f"  📊 JSON: [cyan]{path}[/cyan]")


@app.command()
def card(
    name: str = typer.Argument(..., help="Card name"),
    fuzzy: bool = typer.Option(False, "--fuzzy", help="Fuzzy name matching"),
    provider: str = typer.Option("scryfall", "--provider"),
    fallback: bool = typer.Option(True, "--fallback/--no-fallback"),
    config: str = typer.Option(DEFAULT_CONFIG_PATH, "--config"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """
    Look up a single card.

    Example:
        deck-assistant card "Lightning Bolt"
    """
    setup_logging(verbose)
    settings = Settings.from_config(config)
    cache = CacheManager(settings.cache_dir, settings.cache_ttl_hours)
    client = create_client(
        _parse_provider(provider),
        fallback and settings.enable_fallback,
        cache,
        settings,
    )

    try:
        found = client.get_card_by_name(name, fuzzy=fuzzy)
    except DeckAssistantError as e:
        raise _fail(e.message)

    console.print(f"\n[bold blue]{found.name}[/bold blue] {found.mana_cost or ''}")
    console.print(f"[green]{found.type_line}[/green]")
    faces = found.card_faces or [found]
    for face in faces:
        if found.card_faces:
            console.print(f"\n[bold]{face.name}[/bold] {face.mana_cost or ''}")
            console.print(f"[green]{face.type_line or ''}[/green]")
        if face.oracle_text:
            console.print(face.oracle_text)
        if face.power is not None:
            console.print(f"{face.power}/{face.toughness}")
    console.print(f"\nMana value: {found.cmc:g}  Set: {found.set_code.upper()}  {found.rarity}")


@app.command()
def cache_stats(
    config: str = typer.Option(DEFAULT_CONFIG_PATH, "--config"),
):
    """Show cache statistics."""
    settings = Settings.from_config(config)
    stats = CacheManager(settings.cache_dir, settings.cache_ttl_hours).get_stats()

    console.print("\n[bold]Cache Statistics[/bold]\n")
    console.print(f"Location: {stats['cache_dir']}")
    console.print(f"Total entries: {stats['total_entries']}")
    console.print(f"Valid entries: {stats['valid_entries']}")
    console.print(f"Expired entries: {stats['expired_entries']}")
    for namespace, count in sorted(stats["namespaces"].items()):
        console.print(f"  {namespace}: {count}")
    console.print(f"Total size: {stats['total_size_mb']:.2f} MB")


@app.command()
def cache_clear(
    config: str = typer.Option(DEFAULT_CONFIG_PATH, "--config"),
):
    """Clear all cached data."""
    settings = Settings.from_config(config)
    count = CacheManager(settings.cache_dir, settings.cache_ttl_hours).clear_all()
    console.print(f"Cleared {count} cache entries.")


@app.command()
def version():
    """Show version information."""
    console.print(f"MTG Deck Assistant v{__version__}")


if __name__ == "__main__":
    app()
