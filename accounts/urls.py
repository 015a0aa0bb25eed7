"""URL routes for admin sign-in (HTML form + JWT)."""

from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from .views import SessionTokenObtainPairView, login_page, logout_view, me

urlpatterns = [
    # HTML form (session)
    path('login-view/', login_page, name='login_html'),
    # JWT; also creates a session
    path('login/', SessionTokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),
    path('logout/', logout_view, name='logout'),
    path('me/', me, name='admin_me'),
]
