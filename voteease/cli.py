import click

from voteease.errors import VoteEaseError
from voteease.services.roll import create_admin
from voteease.services.tally import check_integrity


def register_cli(app):
    @app.cli.command("create-admin")
    @click.argument("name")
    @click.argument("email")
    @click.password_option()
    def create_admin_command(name, email, password):
        """Create an administrator account."""
        try:
            admin = create_admin(name, email, password)
        except VoteEaseError as error:
            raise click.ClickException(error.message)
        click.echo(f"Admin account {admin.email} created.")

    @app.cli.command("verify-tally")
    def verify_tally_command():
        """Check that the vote counts match the voters marked as voted."""
        check = check_integrity()
        click.echo(f"Votes counted: {check.total_votes}")
        click.echo(f"Voters marked as voted: {check.voted_count}")
        if not check.consistent:
            raise click.ClickException("Tally does not match the voter roll.")
        click.echo("Tally is consistent.")
