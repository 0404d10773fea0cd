from django.db import models


class BaseModel(models.Model):
    """Creation/update timestamps and an active flag shared by every table."""

    created_at = models.DateTimeField(auto_now_add=True, editable=False)
    updated_at = models.DateTimeField(auto_now=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        abstract = True
        ordering = ["-created_at"]

    def set_active(self, active: bool):
        """Flip `is_active` and persist only that flag; returns the new value."""
        if self.is_active != active:
            self.is_active = active
            self.save(update_fields=["is_active", "updated_at"])
        return self.is_active
