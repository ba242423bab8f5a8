import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("properties", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="BookingRestriction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("restriction_name", models.CharField(max_length=255)),
                (
                    "restriction_type",
                    models.CharField(
                        choices=[
                            ("min_stay", "Минимальный срок проживания"),
                            ("max_stay", "Максимальный срок проживания"),
                            ("blackout", "Закрытые даты"),
                            ("max_guests", "Максимум гостей"),
                            ("advance_booking", "Бронирование заранее"),
                            ("check_in_days", "Дни заезда"),
                            ("check_out_days", "Дни выезда"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "int_value",
                    models.IntegerField(
                        blank=True,
                        help_text="Ночи, гости или дни — в зависимости от типа ограничения.",
                        null=True,
                    ),
                ),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                (
                    "days_of_week",
                    models.JSONField(
                        blank=True,
                        default=list,
                        help_text="Дни недели на английском в нижнем регистре, например ['friday', 'saturday'].",
                    ),
                ),
                ("notes", models.TextField(blank=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "property",
                    models.ForeignKey(
                        blank=True,
                        help_text="Пусто — ограничение действует для всех объектов.",
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="restrictions",
                        to="properties.property",
                    ),
                ),
            ],
            options={
                "verbose_name": "Ограничение бронирования",
                "verbose_name_plural": "Ограничения бронирования",
                "ordering": ["id"],
                "indexes": [
                    models.Index(fields=["property", "is_active"], name="restriction_propert_1d7e52_idx"),
                    models.Index(fields=["restriction_type"], name="restriction_restric_8b3f10_idx"),
                    models.Index(fields=["start_date", "end_date"], name="restriction_start_d_c62a9e_idx"),
                ],
            },
        ),
    ]
