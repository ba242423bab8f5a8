"""Audit log of booking changes."""

from __future__ import annotations

from django.conf import settings  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class BookingAuditLog(models.Model):
    """Журнал изменений бронирований."""

    class Action(models.TextChoices):
        CREATE = "create", _("Создание")
        UPDATE = "update", _("Изменение")
        STATUS_CHANGE = "status_change", _("Смена статуса")
        PAYMENT = "payment", _("Оплата")
        CHECK_IN = "check_in", _("Заселение")
        CHECK_OUT = "check_out", _("Выезд")
        CANCEL = "cancel", _("Отмена")

    booking = models.ForeignKey(
        "bookings.Booking",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="audit_logs",
    )
    action = models.CharField(max_length=20, choices=Action.choices)
    entity_type = models.CharField(max_length=50)
    entity_id = models.BigIntegerField(null=True, blank=True)
    old_values = models.JSONField(null=True, blank=True)
    new_values = models.JSONField(null=True, blank=True)
    changed_fields = models.JSONField(default=list, blank=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="booking_audit_logs",
    )
    notes = models.TextField(blank=True)
    timestamp = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Запись аудита")
        verbose_name_plural = _("Журнал аудита")
        ordering = ["-timestamp", "-id"]
        indexes = [
            models.Index(fields=["booking", "timestamp"], name="audit_booki_booking_7f1c2e_idx"),
            models.Index(fields=["action", "timestamp"], name="audit_booki_action_3a9d54_idx"),
            models.Index(fields=["entity_type", "entity_id"], name="audit_booki_entity__c08b71_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.action} {self.entity_type}#{self.entity_id} at {self.timestamp}"

    @classmethod
    def log(
        cls,
        booking_id,
        action,
        entity_type="bookings",
        entity_id=None,
        old_values=None,
        new_values=None,
        changed_fields=None,
        user_id=None,
        notes="",
    ):
        """Удобный метод для записи события аудита."""
        return cls.objects.create(
            booking_id=booking_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id if entity_id is not None else booking_id,
            old_values=old_values,
            new_values=new_values,
            changed_fields=changed_fields or [],
            user_id=user_id,
            notes=notes,
        )
