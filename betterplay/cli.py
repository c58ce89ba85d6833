import click
from werkzeug.security import generate_password_hash

from betterplay.extensions import db
from betterplay.models import User, Venue, Space
from betterplay.services.reminder_service import ReminderService


def register_commands(app):

    @app.cli.command('send-reminders')
    @click.option('--lead-minutes', type=int, default=None,
                  help='Remind bookings starting within this many minutes.')
    def send_reminders(lead_minutes):
        """Notify users about bookings that are about to start."""
        sent = ReminderService.send_due_reminders(lead_minutes=lead_minutes)
        click.echo(f"{sent} reminder(s) sent.")

    @app.cli.command('seed')
    def seed():
        """Create the tables, an admin account and a demo venue."""
        db.create_all()

        if not User.query.filter_by(username='admin').first():
            admin = User(
                username='admin',
                email='admin@betterplay.app',
                password_hash=generate_password_hash('password', method='pbkdf2:sha256'),
                role='admin'
            )
            db.session.add(admin)
            click.echo("Admin created (admin/password)")

        if not Venue.query.filter_by(name='Riverside Sports Center').first():
            weekday = {'open': '08:00', 'close': '22:00'}
            venue = Venue(
                name='Riverside Sports Center',
                type='sports_complex',
                street='12 River Road',
                city='Springfield',
                state='IL',
                zip_code='62701',
                country='US',
                latitude=39.7817,
                longitude=-89.6501,
                amenities=['parking', 'showers'],
                operating_hours={
                    'monday': weekday,
                    'tuesday': weekday,
                    'wednesday': weekday,
                    'thursday': weekday,
                    'friday': weekday,
                    'saturday': {'open': '9:00 AM', 'close': '6:00 PM'},
                    'sunday': None
                }
            )
            venue.spaces = [
                Space(id='court-1', name='Court 1', type='basketball', capacity=20),
                Space(id='court-2', name='Court 2', type='basketball', capacity=20),
                Space(id='hall', name='Main Hall', type='multipurpose', capacity=150),
            ]
            db.session.add(venue)
            click.echo(f"Venue {venue.name} created.")

        db.session.commit()
        click.echo("Database seeded successfully.")
