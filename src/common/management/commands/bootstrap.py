"""Bootstrap the application by creating a platform admin and sample events."""

import typing as t

from decouple import config
from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.core.management.base import BaseCommand

from events.models import Event
from events.service import backoffice_service


class Command(BaseCommand):
    help = "Bootstrap the application by creating a platform admin and sample events."

    def add_arguments(self, parser: t.Any) -> None:
        """Add command arguments."""
        parser.add_argument("--skip-migrate", action="store_true", help="Do not run migrations first.")

    def handle(self, *args: t.Any, **options: t.Any) -> None:
        """Create the platform admin and, on an empty database, the sample events."""
        if not options["skip_migrate"]:
            call_command("migrate")
        User = get_user_model()
        default_username, default_password, default_email = "admin", "password", "admin@eventhub.local"
        username = config("DEFAULT_SUPERUSER_USERNAME", default=default_username)
        password = config("DEFAULT_SUPERUSER_PASSWORD", default=default_password)
        email = config("DEFAULT_SUPERUSER_EMAIL", default=default_email)

        admin = User.objects.filter(username=username).first()
        if admin:
            self.stdout.write(self.style.WARNING(f"Superuser '{username}' already exists."))
        else:
            admin = User.objects.create_superuser(
                username=username, password=password, email=email, is_admin=True, email_verified=True
            )
            self.stdout.write(self.style.SUCCESS(f"Superuser '{username}' created successfully."))

            if password == default_password:
                self.stdout.write(
                    self.style.WARNING("The default password is being used. Please change it immediately.")
                )

        if Event.objects.exists():
            self.stdout.write("Events already exist, skipping sample events.")
            return
        events = backoffice_service.create_sample_events(admin)
        self.stdout.write(self.style.SUCCESS(f"Created {len(events)} sample events."))
