"""Accounts app views.

Contains:
- The admin sign-in HTML page (Django session login)
- JWT sign-in that also establishes a session
- Logout and "who am I" endpoints for the back-office
"""

from django.contrib.auth import authenticate, login, logout
from django.shortcuts import redirect, render
from django.utils.http import url_has_allowed_host_and_scheme

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from rest_framework_simplejwt.views import TokenObtainPairView

from .permissions import IsStoreAdmin
from .serializers import AdminProfileSerializer, EmailTokenObtainPairSerializer


def login_page(request):
    """Render the admin login form and handle session sign-in.

    Bad credentials re-render the form with an inline error; no session is
    created. API clients should use the JWT endpoint instead.
    """
    if request.method == 'POST':
        email = (request.POST.get('email') or '').strip()
        password = request.POST.get('password') or ''
        user = authenticate(request, email=email, password=password)
        if user is not None and user.is_staff:
            login(request, user)
            next_url = request.GET.get('next') or ''
            if not url_has_allowed_host_and_scheme(next_url, allowed_hosts={request.get_host()}):
                next_url = '/admin/'
            return redirect(next_url)
        return render(
            request,
            'accounts/login.html',
            {'login_error': 'Invalid email or password.', 'email': email},
            status=401,
        )
    return render(request, 'accounts/login.html')


class SessionTokenObtainPairView(TokenObtainPairView):
    """JWT login that also establishes a Django session.

    The browsable back-office and Django admin rely on session auth, which
    SimpleJWT's default ``TokenObtainPairView`` does not create.
    """

    serializer_class = EmailTokenObtainPairSerializer

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = getattr(serializer, 'user', None)
        if user is not None and getattr(user, 'is_active', True):
            # DRF wraps the underlying Django HttpRequest at request._request.
            login(request._request, user)

        return Response(serializer.validated_data, status=status.HTTP_200_OK)


@api_view(['POST'])
@permission_classes([AllowAny])
def logout_view(request):
    """End the session (JWTs simply expire)."""
    logout(request._request)
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['GET'])
@permission_classes([IsStoreAdmin])
def me(request):
    """Return the signed-in admin."""
    return Response(AdminProfileSerializer(request.user).data)
