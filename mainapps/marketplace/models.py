from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import F
from django.utils.text import slugify


class Category(models.Model):
    name = models.CharField(max_length=100, unique=True)
    slug = models.SlugField(max_length=120, unique=True, blank=True)
    description = models.TextField(blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'marketplace_category'
        ordering = ['name']
        verbose_name_plural = 'Categories'

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)


class Nft(models.Model):
    """A catalog item that buyers place orders against."""

    class Status(models.TextChoices):
        DRAFT = 'draft', 'Draft'
        ACTIVE = 'active', 'Active'
        SOLD = 'sold', 'Sold Out'
        INACTIVE = 'inactive', 'Inactive'

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    image_path = models.CharField(max_length=500, blank=True)
    price = models.DecimalField(max_digits=15, decimal_places=2)
    quantity = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('1'))
    blockchain = models.CharField(max_length=100, blank=True)
    contract_address = models.CharField(max_length=255, blank=True)
    token_id = models.CharField(max_length=255, blank=True)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.ACTIVE)
    category = models.ForeignKey(
        Category,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='nfts'
    )
    creator = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='created_nfts'
    )
    views = models.PositiveIntegerField(default=0)
    likes = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'marketplace_nft'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['status'], name='marketplace_status_2b7c1e_idx'),
        ]

    def __str__(self):
        return self.name

    def record_view(self):
        Nft.objects.filter(pk=self.pk).update(views=F('views') + 1)
        self.refresh_from_db(fields=['views'])


class PaymentMethod(models.Model):
    """Off-chain payment rail a P2P partner pays through (bank, wallet app...)."""

    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    icon = models.CharField(max_length=100, blank=True)
    logo_path = models.CharField(max_length=500, blank=True)
    wallet_address = models.CharField(max_length=255, blank=True)
    qr_code = models.CharField(max_length=500, blank=True)
    is_active = models.BooleanField(default=True)
    sort_order = models.PositiveIntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'marketplace_payment_method'
        ordering = ['sort_order', 'name']

    def __str__(self):
        return self.name


class P2pNetwork(models.Model):
    name = models.CharField(max_length=100, unique=True)
    currency_symbol = models.CharField(max_length=20)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'marketplace_p2p_network'
        ordering = ['name']
        verbose_name = 'P2P Network'

    def __str__(self):
        return f"{self.name} ({self.currency_symbol})"


class Setting(models.Model):
    """Process-wide key/value configuration, edited by admins."""

    key = models.CharField(max_length=100, unique=True)
    value = models.TextField(blank=True)
    description = models.CharField(max_length=255, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'marketplace_setting'
        ordering = ['key']

    def __str__(self):
        return f"{self.key}={self.value}"

    @classmethod
    def get_value(cls, key, default=None):
        value = cls.objects.filter(key=key).values_list('value', flat=True).first()
        return default if value is None else value

    @classmethod
    def set_value(cls, key, value):
        setting, _ = cls.objects.update_or_create(key=key, defaults={'value': str(value)})
        return setting
