"""Django admin configuration for store settings and shipping zones."""

from django.contrib import admin

from .models import ShippingBlock, StoreSettings


@admin.register(StoreSettings)
class StoreSettingsAdmin(admin.ModelAdmin):
    """Admin configuration for the store settings singleton."""

    list_display = ('store_name', 'contact_email', 'whatsapp', 'allow_pickup', 'allow_address_not_listed', 'updated_at')
    fieldsets = (
        ('Store', {'fields': ('store_name', 'tagline', 'logo_url', 'announcement', 'theme')}),
        ('Contact', {'fields': ('contact_email', 'whatsapp')}),
        ('Bank transfer', {'fields': ('bank_account_name', 'bank_account_number', 'bank_name')}),
        ('Shipping', {'fields': ('allow_pickup', 'allow_address_not_listed')}),
    )

    def has_add_permission(self, request):
        # Single row only.
        return not StoreSettings.objects.exists()

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(ShippingBlock)
class ShippingBlockAdmin(admin.ModelAdmin):
    """Admin configuration for delivery zones."""

    list_display = ('title', 'code', 'fee', 'position')
    list_editable = ('fee', 'position')
    search_fields = ('title', 'code')
