"""breachwatch subscriber CLI: operator commands over the subscriber store.

Each command runs in its own unit of work against ``BREACHWATCH_DB_URL`` and
commits only on success. The breach notifier used here only logs the
subscription; wiring in the real breach-provider client is left to the
hosting service.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import timedelta
from typing import TYPE_CHECKING

import click
import click_extra as clickx

from breachwatch import config
from breachwatch.adapters.breach_notifiers import LoggingBreachNotifier
from breachwatch.adapters.db.engine import make_engine
from breachwatch.adapters.unit_of_work import SqlAlchemyUnitOfWork
from breachwatch.interfaces.subscriber_store import SubscriberStoreError

from .db import get_checked_db_url
from .helpers import success, warn

if TYPE_CHECKING:
    from collections.abc import Iterator

    from breachwatch.domain.records import Subscriber

logger = logging.getLogger(__name__)


@contextmanager
def _unit_of_work() -> Iterator[SqlAlchemyUnitOfWork]:
    """Open a unit of work and translate store errors into ClickExceptions."""
    engine = make_engine(get_checked_db_url())
    try:
        with SqlAlchemyUnitOfWork(engine, LoggingBreachNotifier()) as uow:
            yield uow
    except SubscriberStoreError as e:
        raise click.ClickException(str(e)) from e
    finally:
        engine.dispose()


def _echo_subscriber(subscriber: Subscriber) -> None:
    click.echo(f"id        : {subscriber.id}")
    click.echo(f"email     : {subscriber.primary_email}")
    click.echo(f"sha1      : {subscriber.primary_sha1}")
    click.echo(f"verified  : {'yes' if subscriber.primary_verified else 'no'}")
    click.echo(f"updated   : {subscriber.updated_at.isoformat()}")


@click.group(cls=clickx.ExtraGroup)
def subscribers() -> None:
    """Subscriber management commands."""


@subscribers.command()
@click.argument("email")
def add(email: str) -> None:
    """Add (or refresh) a verified subscriber for EMAIL."""
    with _unit_of_work() as uow:
        subscriber = uow.subscribers.add_subscriber(email)
        uow.commit()
    _echo_subscriber(subscriber)
    success("Subscriber added.")


@subscribers.command()
@click.argument("email")
def show(email: str) -> None:
    """Show the subscriber for EMAIL and its secondary addresses."""
    with _unit_of_work() as uow:
        if (subscriber := uow.subscribers.get_subscriber_by_email(email)) is None:
            raise click.ClickException(f"No subscriber for {email}.")
        secondaries = uow.subscribers.get_email_addresses_by_subscriber(subscriber)
    _echo_subscriber(subscriber)
    for email_address in secondaries:
        state = "verified" if email_address.verified else "pending"
        click.echo(f"  - {email_address.email} ({state})")


@subscribers.command("add-email")
@click.argument("primary_email")
@click.argument("email")
def add_email(primary_email: str, email: str) -> None:
    """Attach unverified EMAIL to the subscriber PRIMARY_EMAIL.

    Prints the verification token on stdout.
    """
    with _unit_of_work() as uow:
        if (subscriber := uow.subscribers.get_subscriber_by_email(primary_email)) is None:
            raise click.ClickException(f"No subscriber for {primary_email}.")
        email_address = uow.subscribers.add_subscriber_unverified_email_hash(
            subscriber, email
        )
        uow.commit()
    click.echo(email_address.verification_token)


@subscribers.command("verify-email")
@click.argument("token")
def verify_email(token: str) -> None:
    """Verify the secondary address carrying TOKEN."""
    with _unit_of_work() as uow:
        email_address = uow.subscribers.verify_email_hash(token)
        uow.commit()
    success(f"Verified {email_address.email}.")


@subscribers.command()
@click.argument("email")
@click.option("--force", is_flag=True, help="Remove without confirmation.")
def remove(email: str, force: bool) -> None:
    """Remove the subscriber EMAIL and all of its secondary addresses."""
    if not force:
        click.confirm(f"Remove subscriber {email}?", abort=True)
    with _unit_of_work() as uow:
        uow.subscribers.remove_subscriber_by_email(email)
        uow.commit()
    success("Subscriber removed.")


@subscribers.command("purge-unverified")
@click.option(
    "--days",
    type=click.IntRange(min=0),
    default=config.DELETE_UNVERIFIED_SUBSCRIBERS_DAYS,
    show_default=True,
    help="Delete unverified subscribers created more than this many days ago.",
)
def purge_unverified(days: int) -> None:
    """Delete stale unverified subscribers."""
    with _unit_of_work() as uow:
        deleted = uow.subscribers.delete_unverified_subscribers(timedelta(days=days))
        uow.commit()
    if deleted:
        success(f"Deleted {deleted} unverified subscriber(s).")
    else:
        warn("No unverified subscribers to delete.")
