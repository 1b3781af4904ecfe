"""Django ORM models (persistence layer).

Only the event catalog lives in the database. Registration, attendance and
session state go through the key-value stores in eventease/stores/.
"""

from django.db import models


class Event(models.Model):
    """Persistence model for catalog events."""

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=100, blank=True)
    location = models.CharField(max_length=255, blank=True)
    organizer = models.CharField(max_length=255, blank=True)
    date = models.DateTimeField(blank=True, null=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    capacity = models.PositiveIntegerField()
    image_url = models.URLField(max_length=500, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["date", "id"]
        indexes = [
            models.Index(fields=["category"]),
            models.Index(fields=["date"]),
        ]

    def __str__(self) -> str:
        return self.name
