"""Django admin configuration for product catalog models."""

import csv
from django.contrib import admin
from django.utils.html import format_html
from django.http import HttpResponse
from .models import Collection, Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin configuration for products and their stock."""

    list_display = ('name', 'price', 'original_cost', 'colored_stock', 'created_at')
    search_fields = ('name', 'description')
    list_filter = (('collections', admin.RelatedOnlyFieldListFilter),)
    filter_horizontal = ('collections',)

    actions = ['export_to_csv']

    def export_to_csv(self, request, queryset):
        """Export selected products as a CSV inventory report."""
        response = HttpResponse(content_type='text/csv; charset=utf-8-sig')
        response['Content-Disposition'] = 'attachment; filename="inventory_report.csv"'

        writer = csv.writer(response)
        writer.writerow(['ID', 'Product', 'Price', 'Cost', 'Stock'])

        for product in queryset:
            writer.writerow([product.pk, product.name, product.price, product.original_cost, product.stock])

        return response
    export_to_csv.short_description = "Export selected products to CSV"

    def colored_stock(self, obj):
        """Render stock in color to highlight low inventory."""
        stock = obj.stock
        if stock <= 3:
            color = 'red'
        elif stock <= 10:
            color = 'orange'
        else:
            color = 'green'
        return format_html('<b style="color: {};">{}</b>', color, stock)

    colored_stock.short_description = 'Stock'
    colored_stock.admin_order_field = 'stock'


@admin.register(Collection)
class CollectionAdmin(admin.ModelAdmin):
    """Admin configuration for collections."""

    list_display = ('name',)
    search_fields = ('name',)
