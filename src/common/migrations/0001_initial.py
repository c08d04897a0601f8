import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
import simple_history.models
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="EmailLog",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("updated_at", models.DateTimeField(auto_now=True, db_index=True)),
                ("to", models.EmailField(db_index=True, max_length=254)),
                ("subject", models.TextField(db_index=True)),
                ("sent_at", models.DateTimeField(auto_now_add=True, db_index=True)),
                ("test_only", models.BooleanField(db_index=True, default=False)),
                ("compressed_body", models.BinaryField(blank=True, null=True)),
                ("compressed_html", models.BinaryField(blank=True, null=True)),
            ],
            options={
                "indexes": [models.Index(fields=["to", "sent_at"], name="ix_emaillog_to_sentat")],
            },
        ),
        migrations.CreateModel(
            name="SiteSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("live_emails", models.BooleanField(default=False, help_text="Live-emails enabled")),
                ("frontend_base_url", models.URLField(default="http://localhost:5173")),
                (
                    "internal_catchall_email",
                    models.EmailField(
                        default="internal@example.com",
                        help_text="The catchall email address for internal use.",
                        max_length=254,
                        verbose_name="Internal Catchall Email",
                    ),
                ),
                (
                    "paystack_live_mode",
                    models.BooleanField(
                        default=False, help_text="Use the live Paystack keys instead of the test keys."
                    ),
                ),
                (
                    "platform_fee_percent",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("15.00"),
                        help_text="Share of every completed ticket credited to the platform admin.",
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0")),
                            django.core.validators.MaxValueValidator(Decimal("100")),
                        ],
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Site Settings",
                "verbose_name_plural": "Site Settings",
            },
        ),
        migrations.CreateModel(
            name="HistoricalSiteSettings",
            fields=[
                ("id", models.BigIntegerField(auto_created=True, blank=True, db_index=True, verbose_name="ID")),
                ("live_emails", models.BooleanField(default=False, help_text="Live-emails enabled")),
                ("frontend_base_url", models.URLField(default="http://localhost:5173")),
                (
                    "internal_catchall_email",
                    models.EmailField(
                        default="internal@example.com",
                        help_text="The catchall email address for internal use.",
                        max_length=254,
                        verbose_name="Internal Catchall Email",
                    ),
                ),
                (
                    "paystack_live_mode",
                    models.BooleanField(
                        default=False, help_text="Use the live Paystack keys instead of the test keys."
                    ),
                ),
                (
                    "platform_fee_percent",
                    models.DecimalField(
                        decimal_places=2,
                        default=Decimal("15.00"),
                        help_text="Share of every completed ticket credited to the platform admin.",
                        max_digits=5,
                        validators=[
                            django.core.validators.MinValueValidator(Decimal("0")),
                            django.core.validators.MaxValueValidator(Decimal("100")),
                        ],
                    ),
                ),
                ("created_at", models.DateTimeField(blank=True, editable=False)),
                ("updated_at", models.DateTimeField(blank=True, editable=False)),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("history_date", models.DateTimeField(db_index=True)),
                ("history_change_reason", models.CharField(max_length=100, null=True)),
                (
                    "history_type",
                    models.CharField(
                        choices=[("+", "Created"), ("~", "Changed"), ("-", "Deleted")], max_length=1
                    ),
                ),
                (
                    "history_user",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="+",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "historical Site Settings",
                "verbose_name_plural": "historical Site Settings",
                "ordering": ("-history_date", "-history_id"),
                "get_latest_by": ("history_date", "history_id"),
            },
            bases=(simple_history.models.HistoricalChanges, models.Model),
        ),
    ]
