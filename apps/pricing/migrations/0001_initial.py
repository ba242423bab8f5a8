import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("properties", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PricingRule",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("rule_name", models.CharField(max_length=255)),
                (
                    "rule_type",
                    models.CharField(
                        choices=[
                            ("base", "Базовая цена"),
                            ("weekend", "Выходные"),
                            ("seasonal", "Сезонная корректировка"),
                            ("length_of_stay", "Скидка за длительность"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "priority",
                    models.IntegerField(
                        default=0,
                        help_text="Из нескольких подходящих правил применяется правило с наибольшим приоритетом.",
                    ),
                ),
                ("price_per_night", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                (
                    "adjustment_type",
                    models.CharField(
                        choices=[
                            ("fixed", "Фиксированная сумма"),
                            ("percentage", "Процент"),
                            ("multiplier", "Множитель"),
                        ],
                        default="fixed",
                        max_length=20,
                    ),
                ),
                ("adjustment_value", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("min_stay_nights", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "property",
                    models.ForeignKey(
                        blank=True,
                        help_text="Пусто — правило действует для всех объектов.",
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="pricing_rules",
                        to="properties.property",
                    ),
                ),
            ],
            options={
                "verbose_name": "Правило ценообразования",
                "verbose_name_plural": "Правила ценообразования",
                "ordering": ["-priority", "id"],
                "indexes": [
                    models.Index(fields=["property", "is_active"], name="pricing_pri_propert_9a71c3_idx"),
                    models.Index(fields=["rule_type", "priority"], name="pricing_pri_rule_ty_4f02be_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=~models.Q(rule_type="base") | models.Q(price_per_night__isnull=False),
                        name="pricing_rule_base_has_price",
                    ),
                    models.CheckConstraint(
                        condition=(
                            models.Q(start_date__isnull=True)
                            | models.Q(end_date__isnull=True)
                            | models.Q(end_date__gte=models.F("start_date"))
                        ),
                        name="pricing_rule_valid_date_range",
                    ),
                ],
            },
        ),
    ]
