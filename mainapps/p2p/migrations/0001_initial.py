import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("marketplace", "0001_initial"),
        ("orders", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="P2pTransfer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("transfer_code", models.CharField(blank=True, max_length=64, unique=True)),
                ("partner_address", models.CharField(max_length=255)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12)),
                ("sender_address", models.CharField(blank=True, max_length=255)),
                ("network", models.CharField(max_length=100)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("payment_completed", "Payment Completed"), ("released", "Released"), ("appealed", "Appealed"), ("cancelled", "Cancelled"), ("appeal_approved", "Appeal Approved"), ("appeal_rejected", "Appeal Rejected")], db_index=True, default="pending", max_length=30)),
                ("payment_completed_at", models.DateTimeField(blank=True, null=True)),
                ("release_timer_started_at", models.DateTimeField(blank=True, null=True)),
                ("auto_release_at", models.DateTimeField(blank=True, null=True)),
                ("appeal_reason", models.TextField(blank=True, null=True)),
                ("appealed_at", models.DateTimeField(blank=True, null=True)),
                ("resolved_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("order", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="p2p_transfers", to="orders.order")),
                ("partner_payment_method", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="p2p_transfers", to="marketplace.paymentmethod")),
                ("resolved_by", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="resolved_p2p_transfers", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "p2p_transfer",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["status", "created_at"], name="p2p_transf_status_8d1a2f_idx"),
                    models.Index(fields=["status", "auto_release_at"], name="p2p_transf_status_4e7b90_idx"),
                    models.Index(fields=["appealed_at"], name="p2p_transf_appeale_3c5d6e_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status__in", ["appealed", "payment_completed", "pending"])),
                        fields=("order",),
                        name="p2p_one_open_transfer_per_order",
                    ),
                ],
            },
        ),
    ]
