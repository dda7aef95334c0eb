from django.db import models


class SystemSetting(models.Model):
    """
    Simple key/value settings store, editable from the admin console.
    Recognized keys:
      - BUSINESS_OPEN  (e.g., '08:00')
      - BUSINESS_CLOSE (e.g., '23:55')
    Rows override settings.BUSINESS_HOURS without a redeploy.
    """
    BUSINESS_OPEN = "BUSINESS_OPEN"
    BUSINESS_CLOSE = "BUSINESS_CLOSE"

    key = models.CharField(max_length=100, unique=True)
    value = models.CharField(max_length=200)

    def __str__(self):
        return f"{self.key}={self.value}"

    @classmethod
    def get_value(cls, key, default=None):
        row = cls.objects.filter(key=key).first()
        return row.value if row else default
