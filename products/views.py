"""Products API views.

Public, read-only catalog browsing plus admin CRUD for products and
collections. Search/filter/pagination are provided for list endpoints.
"""

import django_filters
from rest_framework import filters, status, viewsets
from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response

from accounts.permissions import IsStoreAdminOrReadOnly
from integrations.cloudinary_upload import UploadError, upload_image

from .models import Collection, Product
from .serializers import AdminProductSerializer, CollectionSerializer, ProductSerializer


class StandardResultsSetPagination(PageNumberPagination):
    """Default pagination used by most API endpoints."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ProductSearchFilter(filters.SearchFilter):
    """Free-text search over name/description via ``?q=``."""
    search_param = 'q'


class ProductFilter(django_filters.FilterSet):
    collection = django_filters.CharFilter(field_name='collections__name', method='filter_collection')
    in_stock = django_filters.BooleanFilter(method='filter_in_stock')

    class Meta:
        model = Product
        fields = ['collection', 'in_stock']

    def filter_collection(self, queryset, name, value):
        value = (value or '').strip()
        if not value:
            return queryset
        return queryset.filter(collections__name=value).distinct()

    def filter_in_stock(self, queryset, name, value):
        if value is None:
            return queryset
        return queryset.filter(stock__gt=0) if value else queryset.filter(stock=0)


class ProductViewSet(viewsets.ModelViewSet):
    """Products CRUD.

    - Public users: read the catalog (cost data hidden).
    - Admins: create/update/delete; uploaded ``image_files`` are sent to the
      image host and appended to the product's ``images``.
    """

    queryset = Product.objects.prefetch_related('collections')
    pagination_class = StandardResultsSetPagination
    permission_classes = [IsStoreAdminOrReadOnly]

    filter_backends = [django_filters.rest_framework.DjangoFilterBackend, ProductSearchFilter, filters.OrderingFilter]
    filterset_class = ProductFilter
    search_fields = ['name', 'description']
    ordering_fields = ['created_at', 'name', 'price']
    ordering = ['-created_at']

    def get_serializer_class(self):
        user = self.request.user
        if user.is_authenticated and user.is_staff:
            return AdminProductSerializer
        return ProductSerializer

    def _upload_files(self, serializer):
        files = serializer.validated_data.get('image_files') or []
        return [upload_image(f, folder='products') for f in files]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            urls = self._upload_files(serializer)
        except UploadError:
            return Response({'detail': 'Image upload failed.'}, status=status.HTTP_502_BAD_GATEWAY)

        serializer.save(images=urls)
        headers = self.get_success_headers(serializer.data)
        return Response(serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()
        serializer = self.get_serializer(instance, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        try:
            urls = self._upload_files(serializer)
        except UploadError:
            return Response({'detail': 'Image upload failed.'}, status=status.HTTP_502_BAD_GATEWAY)

        # New uploads are appended; existing images are kept.
        serializer.save(images=list(instance.images or []) + urls)
        return Response(serializer.data)


class CollectionViewSet(viewsets.ModelViewSet):
    """Collections: public list, admin create/rename/delete."""

    queryset = Collection.objects.order_by('name')
    serializer_class = CollectionSerializer
    permission_classes = [IsStoreAdminOrReadOnly]
    pagination_class = None
