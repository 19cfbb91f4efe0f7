from django.contrib import admin

from .models import MinterControl


@admin.register(MinterControl)
class MinterControlAdmin(admin.ModelAdmin):
    list_display = ['token', 'current_minter', 'new_minter', 'end_grace_period', 'has_to_be_executed']
    readonly_fields = [field.name for field in MinterControl._meta.fields]

    def has_add_permission(self, request):
        # Minter changes must go through the timelock
        return False

    def has_delete_permission(self, request, obj=None):
        return False
