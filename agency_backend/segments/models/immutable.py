# segments/models/immutable.py

from django.core.exceptions import ValidationError
from django.db import models


class ImmutableModel(models.Model):
    """Rows are written once when the period is saved and never changed."""

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if self.pk:
            raise ValidationError(
                f"{self.__class__.__name__} records are immutable and cannot be modified"
            )
        self.full_clean()
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError(
            f"{self.__class__.__name__} records are immutable and cannot be deleted"
        )
