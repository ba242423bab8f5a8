from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Property",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("address", models.CharField(blank=True, max_length=500)),
                (
                    "property_type",
                    models.CharField(
                        choices=[
                            ("apartment", "Квартира"),
                            ("house", "Дом"),
                            ("room", "Комната"),
                            ("villa", "Вилла"),
                            ("studio", "Студия"),
                        ],
                        default="apartment",
                        max_length=20,
                    ),
                ),
                (
                    "max_guests",
                    models.PositiveSmallIntegerField(
                        default=2,
                        validators=[django.core.validators.MinValueValidator(1)],
                    ),
                ),
                ("bedrooms", models.PositiveSmallIntegerField(default=1)),
                ("bathrooms", models.PositiveSmallIntegerField(default=1)),
                (
                    "square_meters",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=10,
                        null=True,
                        validators=[django.core.validators.MinValueValidator(Decimal("1.00"))],
                    ),
                ),
                ("currency", models.CharField(default="RUB", max_length=3)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Объект недвижимости",
                "verbose_name_plural": "Объекты недвижимости",
                "ordering": ["name"],
                "indexes": [
                    models.Index(fields=["is_active"], name="properties__is_acti_5a0c1e_idx"),
                    models.Index(fields=["property_type"], name="properties__propert_0b8f2d_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Guest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("first_name", models.CharField(max_length=100)),
                ("last_name", models.CharField(max_length=100)),
                ("middle_name", models.CharField(blank=True, max_length=100)),
                ("email", models.EmailField(max_length=255)),
                ("phone", models.CharField(max_length=50)),
                ("notes", models.TextField(blank=True)),
                ("is_blacklisted", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Гость",
                "verbose_name_plural": "Гости",
                "ordering": ["last_name", "first_name"],
                "indexes": [
                    models.Index(fields=["email"], name="properties__email_3c9a41_idx"),
                    models.Index(fields=["phone"], name="properties__phone_7d2e90_idx"),
                    models.Index(fields=["is_blacklisted"], name="properties__is_blac_e41f6b_idx"),
                ],
            },
        ),
    ]
