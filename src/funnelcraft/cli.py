"""Funnelcraft CLI - build email funnel timelines."""

import json
import logging
import sys

import click

from .adapters.errors import CatalogError, FunnelStoreError
from .config import Config, load_config
from .core.composer import (
    FUNNEL_COLORS,
    ComposerState,
    FunnelComposer,
    ValidationFailure,
    resolve_color,
)
from .core.drag import TIMELINE_DROP_ZONE, DropAction
from .core.items import Item
from .core.pool import FilterCriteria
from .workflows import (
    discard_session,
    edit_funnel,
    list_funnels,
    new_composer,
    open_composer,
    save_composer,
    submit_funnel,
)


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Funnelcraft - compose competitor email funnels."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _open() -> tuple[Config, FunnelComposer]:
    config = load_config()
    try:
        return config, open_composer(config)
    except CatalogError as e:
        _fail(str(e))


def _serialize_item(item: Item) -> dict:
    return {
        "id": item.id,
        "subject": item.subject,
        "sender_email": item.sender_email,
        "sender_name": item.sender_name,
        "category": item.category,
        "timestamp": item.timestamp.isoformat(),
    }


def _item_line(item: Item) -> str:
    category = f" [{item.category}]" if item.category else ""
    return f"{item.id}  {item.timestamp.strftime('%Y-%m-%d %H:%M')}  {item.display_name}: {item.subject}{category}"


def _show_state(composer: FunnelComposer, state: ComposerState, as_json: bool = False) -> None:
    """Shared timeline display logic."""
    if as_json:
        stats = state.stats
        click.echo(
            json.dumps(
                {
                    "funnel_id": composer.funnel_id,
                    "name": composer.name,
                    "color": composer.color,
                    "selected_ids": state.selected_ids,
                    "timeline": [
                        {
                            **_serialize_item(entry.item),
                            "position": entry.position,
                            "day_offset": entry.day_offset,
                            "hours_since_previous": entry.hours_since_previous,
                        }
                        for entry in state.timeline
                    ],
                    "stats": {
                        "total_duration_days": stats.total_duration_days,
                        "average_gap_hours": stats.average_gap_hours,
                        "min_gap_hours": stats.min_gap_hours,
                        "max_gap_hours": stats.max_gap_hours,
                    }
                    if stats
                    else None,
                    "available": len(state.available_items),
                },
                indent=2,
            )
        )
        return

    title = composer.name or "(unnamed funnel)"
    click.echo(f"{title}  {composer.color}  ({len(state.selected_ids)} emails)")
    if not state.selected_ids:
        click.echo("Timeline is empty. Add emails with 'funnelcraft add' or 'funnelcraft drag'.")
        return

    if state.stats:
        click.echo(
            f"Duration: {state.stats.total_duration_days} days  "
            f"Average interval: {state.stats.average_gap_hours}h"
        )
    click.echo()
    for entry in state.timeline:
        if entry.hours_since_previous is not None:
            click.echo(f"        {entry.hours_since_previous:+d}h")
        click.echo(f"  {entry.position + 1:2}. D+{entry.day_offset:<3} {_item_line(entry.item)}")

    missing = len(state.selected_ids) - len(state.selected_items)
    if missing:
        click.echo(f"\n({missing} email(s) not in the current catalog)")


@main.command()
def new():
    """Start a new funnel, discarding the current session."""
    config = load_config()
    try:
        composer = new_composer(config)
    except CatalogError as e:
        _fail(str(e))
    discard_session(config)
    save_composer(config, composer)
    click.echo(f"New funnel started ({len(composer.catalog)} emails in catalog).")


@main.command()
@click.argument("funnel_id")
def edit(funnel_id: str):
    """Open a saved funnel for editing."""
    config = load_config()
    try:
        composer = edit_funnel(config, funnel_id)
    except (CatalogError, FunnelStoreError) as e:
        _fail(str(e))
    _show_state(composer, composer.get_state())


@main.command()
@click.option("--name", default=None, help="Funnel name")
@click.option("--description", default=None, help="Funnel description")
@click.option("--color", default=None, help="Display color (#rrggbb, or a palette number from 'colors')")
def details(name: str | None, description: str | None, color: str | None):
    """Set the funnel's name, description and color."""
    if color is not None:
        try:
            color = resolve_color(color)
        except ValueError as e:
            _fail(str(e))
    config, composer = _open()
    composer.set_details(name=name, description=description, color=color)
    save_composer(config, composer)
    click.echo(f"{composer.name or '(unnamed funnel)'}  {composer.color}")


@main.command()
def colors():
    """List the palette for details --color."""
    for number, color in enumerate(FUNNEL_COLORS, start=1):
        click.echo(f"{number}  {color}")


@main.command()
@click.option("--search", "-s", default=None, help="Match subject, sender email or name")
@click.option("--sender", default=None, help="Sender email, or 'all'")
@click.option("--category", default=None, help="Category, or 'all'")
@click.option("--reset", is_flag=True, help="Clear all filters")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def pool(search: str | None, sender: str | None, category: str | None, reset: bool, as_json: bool):
    """List emails available to add to the timeline."""
    config, composer = _open()
    current = FilterCriteria() if reset else composer.criteria
    criteria = FilterCriteria(
        text=current.text if search is None else search,
        sender_email=current.sender_email if sender is None else sender,
        category=current.category if category is None else category,
    )
    state = composer.set_filter_criteria(criteria)
    save_composer(config, composer)

    if as_json:
        click.echo(json.dumps([_serialize_item(i) for i in state.available_items], indent=2))
        return

    if not state.available_items:
        if criteria.is_active:
            click.echo("No emails match the current filters.")
        else:
            click.echo("Every email is already on the timeline.")
        return

    click.echo(f"{len(state.available_items)} available emails")
    for item in state.available_items:
        click.echo(f"  {_item_line(item)}")


@main.command()
def senders():
    """List senders for the --sender filter."""
    _, composer = _open()
    for sender in composer.get_state().senders:
        click.echo(f"{sender.email:40} {sender.name}")


@main.command()
def categories():
    """List categories for the --category filter."""
    _, composer = _open()
    found = composer.get_state().categories
    if not found:
        click.echo("No categorized emails.")
        return
    for category in found:
        click.echo(category)


@main.command()
@click.argument("item_id")
def add(item_id: str):
    """Append an email to the end of the timeline."""
    config, composer = _open()
    state = composer.append(item_id)
    save_composer(config, composer)
    _show_state(composer, state)


@main.command()
@click.argument("item_id")
def remove(item_id: str):
    """Remove an email from the timeline."""
    config, composer = _open()
    state = composer.remove(item_id)
    save_composer(config, composer)
    _show_state(composer, state)


@main.command()
@click.argument("item_id")
@click.argument("position", type=int)
def move(item_id: str, position: int):
    """Move a timeline email to POSITION (1-based)."""
    config, composer = _open()
    state = composer.move(item_id, position - 1)
    save_composer(config, composer)
    _show_state(composer, state)


@main.command()
@click.argument("item_id")
@click.option("--onto", "target", required=True,
              help="Timeline email id to drop onto, or 'timeline' for the empty surface")
def drag(item_id: str, target: str):
    """Drag an email and drop it onto a target."""
    config, composer = _open()
    target_id = TIMELINE_DROP_ZONE if target == "timeline" else target

    composer.start_drag(item_id)
    action = composer.drag_over(target_id)
    if action is DropAction.NONE:
        composer.cancel_drag()
        click.echo(f"Nothing to do: {item_id} cannot be dropped onto {target}.", err=True)
        return

    state = composer.drop(target_id)
    save_composer(config, composer)
    _show_state(composer, state)


@main.command()
def clear():
    """Remove every email from the timeline."""
    config, composer = _open()
    composer.clear()
    save_composer(config, composer)
    click.echo("Timeline cleared.")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(as_json: bool):
    """Show the timeline with cadence statistics."""
    _, composer = _open()
    _show_state(composer, composer.get_state(), as_json)


@main.command()
def submit():
    """Save the funnel."""
    config, composer = _open()
    try:
        funnel_id = submit_funnel(config, composer)
    except ValidationFailure as e:
        for error in e.errors:
            click.echo(f"Error: {error}", err=True)
        sys.exit(1)
    except FunnelStoreError as e:
        _fail(str(e))
    click.echo(f"Saved funnel {funnel_id}")



@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_cmd(as_json: bool):
    """List saved funnels."""
    config = load_config()
    try:
        drafts = list_funnels(config)
    except FunnelStoreError as e:
        _fail(str(e))

    if as_json:
        click.echo(json.dumps([{"id": d.funnel_id, **d.to_record()} for d in drafts], indent=2))
        return

    if not drafts:
        click.echo("No saved funnels.")
        return

    for draft in drafts:
        click.echo(f"{draft.funnel_id}  {draft.color}  {draft.name} ({draft.total_emails} emails, {draft.sender_email})")

if __name__ == "__main__":
    main()
