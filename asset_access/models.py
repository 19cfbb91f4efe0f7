from django.db import models


class MinterControl(models.Model):
    """Timelocked pointer to the identity allowed to mint and burn the token - singleton model"""
    owner = models.CharField(max_length=58, help_text="Administrative principal allowed to swap the minter")
    token = models.CharField(max_length=58, help_text="Identifier of the gated token")
    current_minter = models.CharField(max_length=58, null=True, blank=True)

    # Pending update; end_grace_period stays 0 until the first launch
    new_minter = models.CharField(max_length=58, null=True, blank=True)
    end_grace_period = models.BigIntegerField(default=0, help_text="Unix time after which the update may execute")
    has_to_be_executed = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Minter Control"
        verbose_name_plural = "Minter Control"

    def __str__(self):
        minter = self.current_minter or 'unset'
        return f"Minter of {self.token[:8]}...: {minter}"
