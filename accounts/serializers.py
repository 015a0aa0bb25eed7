"""Serializers for the accounts app (admin sign-in and profile)."""

from django.contrib.auth import get_user_model
from rest_framework import exceptions, serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer


User = get_user_model()


class EmailTokenObtainPairSerializer(TokenObtainPairSerializer):
    """JWT pair for ``{email, password}``; only staff accounts get tokens."""

    username_field = 'email'

    default_error_messages = {
        'no_active_account': 'Invalid email or password.',
        'not_admin': 'This account cannot access the admin panel.',
    }

    def validate(self, attrs):
        data = super().validate(attrs)
        if not getattr(self.user, 'is_staff', False):
            raise exceptions.AuthenticationFailed(self.error_messages['not_admin'], 'not_admin')
        return data


class AdminProfileSerializer(serializers.ModelSerializer):
    """Read-only view of the signed-in admin."""

    class Meta:
        model = User
        fields = ['id', 'username', 'email', 'first_name', 'last_name', 'is_staff', 'last_login']
        read_only_fields = fields
