from decimal import Decimal

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("marketplace", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order_number", models.CharField(blank=True, max_length=50, unique=True)),
                ("total_price", models.DecimalField(decimal_places=2, max_digits=15)),
                ("quantity", models.DecimalField(decimal_places=2, default=Decimal("1"), max_digits=10)),
                ("payment_method", models.CharField(choices=[("crypto", "Crypto"), ("card", "Card"), ("p2p", "P2P")], default="crypto", max_length=20)),
                ("transaction_id", models.CharField(blank=True, max_length=255, null=True)),
                ("sender_address", models.CharField(blank=True, max_length=255, null=True)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("processing", "Processing"), ("completed", "Completed"), ("cancelled", "Cancelled"), ("failed", "Failed"), ("sent", "Sent"), ("appealed", "Appealed"), ("appeal_approved", "Appeal Approved"), ("appeal_rejected", "Appeal Rejected"), ("pending_sent", "Pending Sent"), ("sent_rejected", "Sent Rejected")], db_index=True, default="pending", max_length=20)),
                ("notes", models.TextField(blank=True)),
                ("stock_deducted", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("nft", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="orders", to="marketplace.nft")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="orders", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "db_table": "orders_order",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["user", "status"], name="orders_orde_user_id_5a9f3c_idx"),
                    models.Index(fields=["payment_method"], name="orders_orde_payment_1c2e4b_idx"),
                ],
            },
        ),
    ]
