"""Authentication backend for email + password sign-in."""

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend


class EmailBackend(ModelBackend):
    """Authenticate with the account's email address instead of its username.

    Falls through (returns None) when no single account matches, letting the
    default ``ModelBackend`` try the value as a username.
    """

    def authenticate(self, request, username=None, password=None, email=None, **kwargs):
        identifier = (email or username or '').strip()
        if not identifier or password is None:
            return None

        User = get_user_model()
        matches = list(User._default_manager.filter(email__iexact=identifier)[:2])
        if len(matches) != 1:
            # Run the hasher anyway to keep timing similar for unknown emails.
            User().set_password(password)
            return None

        user = matches[0]
        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
