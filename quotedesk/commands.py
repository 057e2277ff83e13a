"""Flask CLI commands."""
import click

from quotedesk import db
from quotedesk.models import User


def register_commands(app):
    @app.cli.command('create-admin')
    @click.option('--username', default='admin', show_default=True)
    @click.option('--email', required=True)
    @click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
    @click.option('--full-name', default=None)
    def create_admin(username, email, password, full_name):
        """Create an admin account, or promote an existing user."""
        user = User.query.filter_by(username=username).first()
        if user is None:
            user = User(username=username, email=email, full_name=full_name, role='admin')
            db.session.add(user)
            action = 'Created'
        else:
            user.role = 'admin'
            user.is_active = True
            action = 'Promoted'
        user.set_password(password)
        db.session.commit()
        click.echo(f'{action} admin {user.username}.')
