#!/usr/bin/env python3
"""
Script to create admin accounts for the bus depot
Run with: python create_admin.py USERNAME PASSWORD
"""
import click

from app import app
from console import open_store
from models import UserAccount


def create_admin_user(store, username, password):
    """Create a new admin account, or promote an existing one and reset its password"""
    existing_user = store.get_account(username)

    if existing_user:
        click.echo(f"User with username {username} already exists. Updating to admin...")
        account = store.update_account(username, password=password, is_admin=True)
    else:
        click.echo(f"Creating new admin user: {username}")
        account = store.add_account(UserAccount(username, password, is_admin=True))

    if store.accounts_unsaved:
        click.echo(f"Warning: admin user '{username}' could not be saved to disk.")
    else:
        click.echo(f"✓ Admin user '{username}' created/updated successfully!")
    return account


@app.cli.command('create-admin')
@click.argument('username')
@click.argument('password')
def create_admin_command(username, password):
    """Create or promote an administrator account."""
    create_admin_user(open_store(), username, password)


if __name__ == "__main__":
    with app.app_context():
        create_admin_command.main(prog_name='create_admin.py')
