"""fretshapes CLI entry point."""

import logging
import sys

import click

from fretshapes import __version__
from fretshapes.caged import DEFAULT_CAGED_FRETS, caged_scale_notes
from fretshapes.fretboard_map import scale_notes
from fretshapes.pitch import primary_name
from fretshapes.qualities import TRIAD_INTERVALS
from fretshapes.settings import GuitarSettings
from fretshapes.shape_catalog import STRING_GROUPS
from fretshapes.shape_models import OUT_OF_RANGE, FretNote
from fretshapes.shape_resolver import ShapeResolver
from fretshapes.tuning import AVAILABLE_TUNINGS, LEFT_HANDED, RIGHT_HANDED

STRING_NAMES = ("E", "A", "D", "G", "B", "e")


def _parse_strings(value: str) -> tuple[int, ...]:
    """Accept a named group ("DGB") or comma-separated string indices ("2,3,4")."""
    named = STRING_GROUPS.get(value.upper())
    if named is not None:
        return named
    try:
        return tuple(int(part) for part in value.split(",") if part.strip())
    except ValueError:
        raise click.BadParameter(
            f"'{value}' is neither a string group ({', '.join(STRING_GROUPS)}) "
            "nor a comma-separated list of string indices."
        ) from None


def _format_note(note: FretNote) -> str:
    name = primary_name(note.pitch_class)
    return f"{STRING_NAMES[note.string_index]}:{note.fret} {note.interval_label}({name})"


# ── CLI group ──────────────────────────────────────────────────────────────────

@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="fretshapes")
@click.option("--verbose", "-v", is_flag=True, help="Log resolution details to stderr.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """fretshapes: movable triad shapes, scale maps and CAGED boxes for guitar."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# ── triads subcommand ──────────────────────────────────────────────────────────

@main.command()
@click.argument("root")
@click.argument("quality", type=click.Choice(list(TRIAD_INTERVALS), case_sensitive=True))
@click.option(
    "--variant",
    default="All",
    show_default=True,
    help="Inversion to show: Root, 1st, 2nd, or All.",
)
@click.option(
    "--strings",
    default="DGB",
    show_default=True,
    metavar="GROUP",
    help=f"String group ({', '.join(STRING_GROUPS)}) or indices such as 2,3,4 (0 = low E).",
)
@click.option(
    "--fret-limit",
    type=click.IntRange(min=0),
    default=GuitarSettings.DEFAULT_FRET_LIMIT,
    show_default=True,
    help="Highest fret searched.",
)
@click.option(
    "--tuning",
    type=click.Choice(list(AVAILABLE_TUNINGS)),
    default="Standard",
    show_default=True,
)
@click.option("--left-handed", is_flag=True, help="Mirror diagram coordinates.")
@click.pass_context
def triads(
    ctx: click.Context,
    root: str,
    quality: str,
    variant: str,
    strings: str,
    fret_limit: int,
    tuning: str,
    left_handed: bool,
) -> None:
    """
    List every placement of a triad on one string group.

    ROOT is a note name such as C, F# or Bb.

    \b
    Examples:
      fretshapes triads C Major
      fretshapes triads F# Minor --strings EAD --variant 1st
      fretshapes triads Bb Diminished --strings 3,4,5 --fret-limit 12 --left-handed
    """
    settings = GuitarSettings(
        handedness=LEFT_HANDED if left_handed else RIGHT_HANDED,
        tuning_name=tuning,
        fret_limit=fret_limit,
    )
    string_group = _parse_strings(strings)
    resolver = ShapeResolver(layout=settings.layout)

    try:
        resolution = resolver.resolve(
            root, quality, variant, settings.tuning, string_group, settings.fret_limit
        )
    except ValueError as exc:
        click.echo(f"  ERROR: {exc}", err=True)
        sys.exit(1)

    group_names = "".join(STRING_NAMES[s] for s in string_group)
    click.echo(f"{root} {quality} triads on {group_names} ({settings.tuning_name}, frets 0-{fret_limit})")

    verbose = ctx.obj.get("verbose", False)
    for diagnostic in resolution.diagnostics:
        if diagnostic.kind != OUT_OF_RANGE:
            click.echo(f"  WARNING: {diagnostic.message}", err=True)
        elif verbose:
            click.echo(f"  INFO: {diagnostic.message}", err=True)

    if not resolution.instances:
        click.echo("  No shapes found.")
        return

    for instance in resolution.instances:
        notes = "  ".join(_format_note(note) for note in instance.notes)
        click.echo(f"  [{instance.display_group_id}] {instance.variant:<4}  {notes}")
        for connector in instance.connectors:
            click.echo(
                f"        ({connector.from_note.x:.1f}, {connector.from_note.y:.1f})"
                f" -> ({connector.to_note.x:.1f}, {connector.to_note.y:.1f})"
            )


# ── scale subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("root")
@click.argument("scale_name", metavar="SCALE")
@click.option(
    "--frets",
    type=click.IntRange(min=0),
    default=18,
    show_default=True,
    help="Number of frets to map.",
)
@click.option(
    "--tuning",
    type=click.Choice(list(AVAILABLE_TUNINGS)),
    default="Standard",
    show_default=True,
)
def scale(root: str, scale_name: str, frets: int, tuning: str) -> None:
    """
    Print every fret of a scale, string by string.

    \b
    Examples:
      fretshapes scale A "Minor Pentatonic"
      fretshapes scale G Mixolydian --frets 12 --tuning "Drop D"
    """
    settings = GuitarSettings(tuning_name=tuning)
    try:
        notes = scale_notes(root, scale_name, settings.tuning, frets, settings.layout)
    except ValueError as exc:
        click.echo(f"  ERROR: {exc}", err=True)
        sys.exit(1)

    click.echo(f"{root} {scale_name} ({settings.tuning_name}, frets 0-{frets})")
    for string_index in reversed(range(len(STRING_NAMES))):
        on_string = [note for note in notes if note.string_index == string_index]
        cells = " ".join(f"{note.fret}:{note.interval_label}" for note in on_string)
        click.echo(f"  {STRING_NAMES[string_index]} | {cells}")


# ── caged subcommand ───────────────────────────────────────────────────────────

@main.command()
@click.argument("root")
@click.argument("scale_name", metavar="SCALE")
@click.option(
    "--frets",
    type=click.IntRange(min=0),
    default=DEFAULT_CAGED_FRETS,
    show_default=True,
    help="Number of frets to map.",
)
@click.option(
    "--tuning",
    type=click.Choice(list(AVAILABLE_TUNINGS)),
    default="Standard",
    show_default=True,
)
def caged(root: str, scale_name: str, frets: int, tuning: str) -> None:
    """
    Print a scale with the CAGED shapes each note belongs to.

    \b
    Examples:
      fretshapes caged A Major
      fretshapes caged E "Minor Pentatonic" --frets 15
    """
    settings = GuitarSettings(tuning_name=tuning)
    try:
        notes = caged_scale_notes(root, scale_name, settings.tuning, frets, settings.layout)
    except ValueError as exc:
        click.echo(f"  ERROR: {exc}", err=True)
        sys.exit(1)

    click.echo(f"{root} {scale_name} CAGED shapes ({settings.tuning_name}, frets 0-{frets})")
    for string_index in reversed(range(len(STRING_NAMES))):
        cells = " ".join(
            f"{n.note.fret}:{n.note.interval_label}" + (f"[{''.join(n.shapes)}]" if n.shapes else "")
            for n in notes
            if n.note.string_index == string_index
        )
        click.echo(f"  {STRING_NAMES[string_index]} | {cells}")
