import click

from blood_donation.extensions import db


def register_commands(app):

    @app.cli.command('init-db')
    def init_db():
        """Create all tables without running migrations."""
        db.create_all()
        click.echo('Database tables created.')

    @app.cli.command('refresh-eligibility')
    def refresh_eligibility_command():
        """Recompute donor eligibility flags from their last donation dates."""
        from blood_donation.services.donor_service import refresh_eligibility

        changed = refresh_eligibility()
        click.echo(f'{changed} donor profiles updated.')
