# casetrack/cli.py
import logging
import os
import sys

import click
from flask import current_app

from .core.errors import APIError
from .extensions import broker, db

logger = logging.getLogger(__name__)


CLI_OPTIONS_WITH_VALUE = ("--app", "-A", "--env-file", "-e")


def current_cli_command():
    """Name of the ``flask`` subcommand being run, None when not under the CLI"""
    if os.environ.get("FLASK_RUN_FROM_CLI") != "true":
        return None
    args = iter(sys.argv[1:])
    for arg in args:
        if arg in CLI_OPTIONS_WITH_VALUE:
            next(args, None)
        elif not arg.startswith("-"):
            return arg
    return None


def serves_requests() -> bool:
    """False for one-off commands such as ``flask consume-users`` or ``flask db``"""
    return current_cli_command() in (None, "run")


@click.command("provision-tenant")
@click.argument("subdomain")
@click.option("--name", default=None, help="Display name, defaults to 'Tenant <subdomain>'")
def provision_tenant_command(subdomain, name):
    """Create a tenant and its default roles unless the subdomain exists."""
    resolver = current_app.extensions["tenant_resolver"]
    existed = resolver.find(subdomain) is not None
    try:
        tenant = resolver.provision(subdomain, name=name)
    except APIError as e:
        raise click.ClickException(e.message)
    if existed:
        click.echo(f"Tenant {tenant.subdomain} already exists ({tenant.id})")
    else:
        click.echo(f"Provisioned tenant {tenant.subdomain} ({tenant.id})")


@click.command("seed-lookups")
def seed_lookups_command():
    """Insert the default provinces that are not present yet."""
    from .models import Province
    from .models.province import DEFAULT_PROVINCES

    existing = {name for (name,) in db.session.query(Province.name).all()}
    missing = [
        Province(name=name, postal_code=postal_code)
        for name, postal_code in DEFAULT_PROVINCES
        if name not in existing
    ]
    db.session.add_all(missing)
    db.session.commit()
    click.echo(f"Seeded {len(missing)} provinces")


@click.command("consume-users")
def consume_users_command():
    """Consume user lifecycle events in the foreground until interrupted."""
    if not broker.enabled:
        raise click.ClickException("RabbitMQ is disabled (RABBITMQ_ENABLED=False)")

    consumer = broker.create_consumer()
    click.echo("Waiting for user events. Press CTRL+C to exit")
    try:
        consumer.start()
    except KeyboardInterrupt:
        logger.info("Consumer interrupted")


def register_commands(app):
    app.cli.add_command(provision_tenant_command)
    app.cli.add_command(seed_lookups_command)
    app.cli.add_command(consume_users_command)
