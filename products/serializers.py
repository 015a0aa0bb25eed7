"""Serializers for the product catalog."""

import re

from rest_framework import serializers

from .models import Collection, Product


class StringListField(serializers.ListField):
    """List of non-empty strings.

    Also accepts a single string split on newlines or commas, which is how the
    admin form submits colors and sizes.
    """

    child = serializers.CharField(max_length=100)

    def to_internal_value(self, data):
        if isinstance(data, str):
            data = re.split(r'[\n,]', data)
        cleaned = [str(v).strip() for v in (data or []) if str(v).strip()]
        return super().to_internal_value(cleaned)

    def get_value(self, dictionary):
        # Multipart payloads: a single value is a delimited string, several are a list.
        if hasattr(dictionary, 'getlist') and self.field_name in dictionary:
            values = dictionary.getlist(self.field_name)
            return values[0] if len(values) == 1 else values
        return super().get_value(dictionary)


class CollectionSerializer(serializers.ModelSerializer):
    """Collection (browsing tag) serializer."""

    class Meta:
        model = Collection
        fields = ['id', 'name']

    def validate_name(self, value):
        value = (value or '').strip()
        if not value:
            raise serializers.ValidationError('Collection name required.')
        return value


class ProductSerializer(serializers.ModelSerializer):
    """Public product representation (no cost data)."""

    collection_names = serializers.SlugRelatedField(
        source='collections',
        many=True,
        slug_field='name',
        queryset=Collection.objects.all(),
        required=False,
    )
    in_stock = serializers.BooleanField(read_only=True)
    colors = StringListField(required=False)
    sizes = StringListField(required=False)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'price', 'stock', 'in_stock', 'description',
            'colors', 'sizes', 'images', 'collection_names', 'created_at',
        ]
        read_only_fields = ['images', 'created_at']


class AdminProductSerializer(ProductSerializer):
    """Admin product serializer.

    Adds ``original_cost`` and accepts new image files (``image_files``),
    which the view uploads and appends to ``images``.
    """

    image_files = serializers.ListField(
        child=serializers.ImageField(),
        write_only=True,
        required=False,
    )

    class Meta(ProductSerializer.Meta):
        fields = ProductSerializer.Meta.fields + ['original_cost', 'image_files', 'updated_at']
        read_only_fields = ['images', 'created_at', 'updated_at']

    def create(self, validated_data):
        validated_data.pop('image_files', None)
        return super().create(validated_data)

    def update(self, instance, validated_data):
        validated_data.pop('image_files', None)
        return super().update(instance, validated_data)
